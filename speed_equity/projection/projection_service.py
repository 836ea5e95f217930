# speed_equity/projection/projection_service.py
from __future__ import annotations

from datetime import date, datetime, timezone
import logging

from sqlalchemy.orm import Session

from speed_equity.models.project import Project, ProjectMember
from speed_equity.models.projection import MemberProjection, Projection

logger = logging.getLogger("speed_equity.projection")


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def get_active_projection(db: Session, project_id: int) -> Projection | None:
    # latest effective_from wins; on equal dates the last inserted row wins
    return (
        db.query(Projection)
        .filter(Projection.project_id == project_id)
        .order_by(Projection.effective_from.desc(), Projection.id.desc())
        .first()
    )


def list_projections(db: Session, project_id: int) -> list[Projection]:
    return (
        db.query(Projection)
        .filter(Projection.project_id == project_id)
        .order_by(Projection.effective_from.desc(), Projection.id.desc())
        .all()
    )


def set_active_projection(
    db: Session,
    *,
    project_id: int,
    valuation: float,
    work_hours_until_completion: float,
    effective_from: date | None = None,
) -> Projection:
    projection = Projection(
        project_id=project_id,
        valuation=valuation,
        work_hours_until_completion=work_hours_until_completion,
        effective_from=effective_from or utc_today(),
    )
    db.add(projection)
    db.commit()
    db.refresh(projection)

    logger.info(
        "projection_set",
        extra={"project_id": project_id, "projection_id": projection.id, "effective_from": str(projection.effective_from)},
    )
    return projection


def get_active_member_projections(db: Session, project_id: int) -> dict[int, MemberProjection]:
    """Active planned-hours row per member, keyed by user id.

    Rows left behind by removed members are ignored; the owner always counts.
    """
    current = {user_id for (user_id,) in db.query(ProjectMember.user_id).filter(ProjectMember.project_id == project_id)}
    project = db.get(Project, project_id)
    if project is not None:
        current.add(project.owner_id)

    rows = (
        db.query(MemberProjection)
        .filter(MemberProjection.project_id == project_id)
        .order_by(MemberProjection.effective_from.desc(), MemberProjection.id.desc())
        .all()
    )
    active: dict[int, MemberProjection] = {}
    for row in rows:
        if row.user_id in current:
            active.setdefault(row.user_id, row)
    return active


def set_member_projection(
    db: Session,
    *,
    project_id: int,
    user_id: int,
    planned_hours_per_week: float,
    effective_from: date | None = None,
) -> MemberProjection:
    row = MemberProjection(
        project_id=project_id,
        user_id=user_id,
        planned_hours_per_week=planned_hours_per_week,
        effective_from=effective_from or utc_today(),
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row
