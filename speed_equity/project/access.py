# speed_equity/project/access.py
from __future__ import annotations

from fastapi import HTTPException
from sqlalchemy.orm import Session

from speed_equity.models.project import Project, ProjectMember


def require_project(db: Session, project_id: int) -> Project:
    project = db.get(Project, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


def get_membership(db: Session, project_id: int, user_id: int) -> ProjectMember | None:
    return (
        db.query(ProjectMember)
        .filter(ProjectMember.project_id == project_id, ProjectMember.user_id == user_id)
        .first()
    )


def is_member(db: Session, project: Project, user_id: int) -> bool:
    return project.owner_id == user_id or get_membership(db, project.id, user_id) is not None


def require_member(db: Session, project_id: int, user_id: int) -> Project:
    project = require_project(db, project_id)
    if not is_member(db, project, user_id):
        raise HTTPException(status_code=403, detail="Not a member of this project")
    return project


def require_owner(db: Session, project_id: int, user_id: int) -> Project:
    project = require_project(db, project_id)
    if project.owner_id != user_id:
        raise HTTPException(status_code=403, detail="Only the project owner can do this")
    return project


def fetch_user_projects(db: Session, user_id: int) -> list[Project]:
    """Projects the user owns or belongs to, without duplicates."""
    owned = db.query(Project).filter(Project.owner_id == user_id).all()
    member_of = (
        db.query(Project)
        .join(ProjectMember, ProjectMember.project_id == Project.id)
        .filter(ProjectMember.user_id == user_id)
        .all()
    )

    unique: dict[int, Project] = {}
    for project in [*owned, *member_of]:
        unique.setdefault(project.id, project)
    return sorted(unique.values(), key=lambda p: p.id)
