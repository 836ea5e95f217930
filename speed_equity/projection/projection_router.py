# speed_equity/projection/projection_router.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from speed_equity.auth.auth_context import AuthContext, get_auth_context
from speed_equity.database import get_db
from speed_equity.project.access import require_member, require_owner
from speed_equity.projection.projection_service import (
    get_active_member_projections,
    get_active_projection,
    list_projections,
    set_active_projection,
    set_member_projection,
)
from speed_equity.schemas.projection_schema import (
    ActiveProjectionRead,
    MemberProjectionCreate,
    MemberProjectionRead,
    ProjectionCreate,
    ProjectionRead,
)
from speed_equity.valuation.engine import resolve_implied_hour_value

router = APIRouter(
    prefix="/projects/{project_id}",
    tags=["projections"],
)


@router.get("/projections", response_model=list[ProjectionRead])
def get_projections(
    project_id: int,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    require_member(db, project_id, ctx.user_id)
    return list_projections(db, project_id)


@router.get("/projections/active", response_model=ActiveProjectionRead)
def get_active(
    project_id: int,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    require_member(db, project_id, ctx.user_id)

    projection = get_active_projection(db, project_id)
    if not projection:
        raise HTTPException(404, "Project has no projection yet")

    return ActiveProjectionRead(
        **ProjectionRead.model_validate(projection).model_dump(),
        implied_hour_value=resolve_implied_hour_value(projection),
    )


@router.post("/projections", response_model=ProjectionRead, status_code=201)
def create_projection(
    project_id: int,
    data: ProjectionCreate,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    require_owner(db, project_id, ctx.user_id)
    return set_active_projection(
        db,
        project_id=project_id,
        valuation=data.valuation,
        work_hours_until_completion=data.work_hours_until_completion,
        effective_from=data.effective_from,
    )


@router.get("/member-projections", response_model=list[MemberProjectionRead])
def get_member_projections(
    project_id: int,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    require_member(db, project_id, ctx.user_id)
    active = get_active_member_projections(db, project_id)
    return sorted(active.values(), key=lambda row: row.user_id)


@router.post("/member-projections", response_model=MemberProjectionRead, status_code=201)
def create_member_projection(
    project_id: int,
    data: MemberProjectionCreate,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    # members plan their own hours only
    require_member(db, project_id, ctx.user_id)
    return set_member_projection(
        db,
        project_id=project_id,
        user_id=ctx.user_id,
        planned_hours_per_week=data.planned_hours_per_week,
        effective_from=data.effective_from,
    )
