# speed_equity/dashboard/dashboard_router.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from speed_equity.auth.auth_context import AuthContext, get_auth_context
from speed_equity.dashboard.dashboard_service import (
    build_member_dashboard,
    build_project_dashboard,
    hours_series,
)
from speed_equity.database import get_db
from speed_equity.project.access import get_membership, require_member
from speed_equity.schemas.dashboard_schema import HoursPoint, MemberDashboard, ProjectDashboard

router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
)


@router.get("/projects/{project_id}", response_model=ProjectDashboard)
def project_dashboard(
    project_id: int,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    project = require_member(db, project_id, ctx.user_id)
    return build_project_dashboard(db, project)


@router.get("/projects/{project_id}/me", response_model=MemberDashboard)
def my_dashboard(
    project_id: int,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    project = require_member(db, project_id, ctx.user_id)

    member = get_membership(db, project_id, ctx.user_id)
    if not member:
        raise HTTPException(404, "No membership row for this project")
    return build_member_dashboard(db, project, member)


@router.get("/projects/{project_id}/hours", response_model=list[HoursPoint])
def hours(
    project_id: int,
    days: int = 7,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    require_member(db, project_id, ctx.user_id)
    return hours_series(db, project_id, ctx.user_id, days=days)
