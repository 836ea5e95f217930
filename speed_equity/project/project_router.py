# speed_equity/project/project_router.py

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from speed_equity.auth.auth_context import AuthContext, get_auth_context
from speed_equity.database import get_db
from speed_equity.models.project import Project, ProjectMember
from speed_equity.models.user import User, utcnow
from speed_equity.project.access import (
    fetch_user_projects,
    get_membership,
    require_member,
    require_owner,
)
from speed_equity.projection.projection_service import set_active_projection
from speed_equity.schemas.project_schema import (
    MemberCreate,
    MemberRead,
    MemberUpdate,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
)

logger = logging.getLogger("speed_equity.project")

router = APIRouter(
    prefix="/projects",
    tags=["projects"],
)


# ==========================
#  CREATE PROJECT
# ==========================
@router.post("/", response_model=ProjectRead, status_code=201)
def create_project(
    data: ProjectCreate,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    project = Project(
        name=data.name.strip(),
        logo_url=data.logo_url,
        owner_id=ctx.user_id,
    )
    db.add(project)
    db.flush()

    # the owner is always a member
    db.add(
        ProjectMember(
            project_id=project.id,
            user_id=ctx.user_id,
            email=ctx.email,
            join_date=utcnow(),
        )
    )
    db.commit()
    db.refresh(project)

    if data.initial_valuation is not None or data.work_hours_remaining is not None:
        set_active_projection(
            db,
            project_id=project.id,
            valuation=data.initial_valuation or 0,
            work_hours_until_completion=data.work_hours_remaining or 0,
        )
        db.refresh(project)

    logger.info("project_created", extra={"project_id": project.id, "owner_id": ctx.user_id})
    return project


# ==========================
#  GET MY PROJECTS
# ==========================
@router.get("/", response_model=list[ProjectRead])
def get_my_projects(
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    return fetch_user_projects(db, ctx.user_id)


# ==========================
#  GET PROJECT BY ID
# ==========================
@router.get("/{project_id}", response_model=ProjectRead)
def get_project(
    project_id: int,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    return require_member(db, project_id, ctx.user_id)


# ==========================
#  UPDATE PROJECT (PATCH)
# ==========================
@router.patch("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: int,
    data: ProjectUpdate,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    project = require_owner(db, project_id, ctx.user_id)

    if data.name is not None:
        project.name = data.name.strip()
    if data.logo_url is not None:
        project.logo_url = data.logo_url
    if data.owner_id is not None and data.owner_id != project.owner_id:
        # ownership only moves to someone already on the team
        if get_membership(db, project.id, data.owner_id) is None:
            raise HTTPException(400, "New owner must be a project member")
        logger.info(
            "project_ownership_transferred",
            extra={"project_id": project.id, "from_user": project.owner_id, "to_user": data.owner_id},
        )
        project.owner_id = data.owner_id

    db.commit()
    db.refresh(project)
    return project


# ==========================
#  DELETE PROJECT
# ==========================
@router.delete("/{project_id}", status_code=204)
def delete_project(
    project_id: int,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    project = require_owner(db, project_id, ctx.user_id)

    db.delete(project)
    db.commit()
    return


# ==========================
#  MEMBERS
# ==========================
@router.get("/{project_id}/members", response_model=list[MemberRead])
def list_members(
    project_id: int,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    require_member(db, project_id, ctx.user_id)
    return (
        db.query(ProjectMember)
        .filter(ProjectMember.project_id == project_id)
        .order_by(ProjectMember.email.asc())
        .all()
    )


@router.post("/{project_id}/members", response_model=MemberRead, status_code=201)
def add_member(
    project_id: int,
    data: MemberCreate,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    require_owner(db, project_id, ctx.user_id)

    user = db.query(User).filter(User.email == data.email).first()
    if not user:
        raise HTTPException(404, "No registered user with that email")

    # upsert on (project_id, user_id)
    member = get_membership(db, project_id, user.id)
    if member is None:
        member = ProjectMember(project_id=project_id, user_id=user.id, email=user.email, join_date=utcnow())
        db.add(member)
    member.equity = data.equity

    db.commit()
    db.refresh(member)
    return member


@router.patch("/{project_id}/members/{user_id}", response_model=MemberRead)
def update_member(
    project_id: int,
    user_id: int,
    data: MemberUpdate,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    require_owner(db, project_id, ctx.user_id)

    member = get_membership(db, project_id, user_id)
    if not member:
        raise HTTPException(404, "Member not found")

    member.equity = data.equity
    db.commit()
    db.refresh(member)
    return member


@router.delete("/{project_id}/members/{user_id}", status_code=204)
def remove_member(
    project_id: int,
    user_id: int,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    project = require_owner(db, project_id, ctx.user_id)
    if user_id == project.owner_id:
        raise HTTPException(400, "The owner cannot be removed; transfer ownership first")

    member = get_membership(db, project_id, user_id)
    if not member:
        raise HTTPException(404, "Member not found")

    db.delete(member)
    db.commit()
    return
