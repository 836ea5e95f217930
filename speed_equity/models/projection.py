# speed_equity/models/projection.py
from __future__ import annotations

from sqlalchemy import Column, Date, Float, ForeignKey, Integer
from speed_equity.database import Base


class Projection(Base):
    """Snapshot of a project's target valuation and remaining work-hours.

    Rows are only ever appended; the active projection is the one with the
    latest ``effective_from`` (highest id on equal dates).
    """

    __tablename__ = "project_projections"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)

    valuation = Column(Float, nullable=False)
    work_hours_until_completion = Column(Float, nullable=False)

    effective_from = Column(Date, nullable=False, index=True)


class MemberProjection(Base):
    __tablename__ = "member_projections"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    planned_hours_per_week = Column(Float, nullable=False)

    effective_from = Column(Date, nullable=False, index=True)
