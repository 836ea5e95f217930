# speed_equity/models/project.py
from __future__ import annotations

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from speed_equity.database import Base
from speed_equity.models.user import utcnow


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)

    # exactly one owner at any time; transferable, never NULL
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    name = Column(String, nullable=False)
    logo_url = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    members = relationship(
        "ProjectMember",
        back_populates="project",
        cascade="all, delete-orphan",
    )
    projections = relationship("Projection", cascade="all, delete-orphan")
    member_projections = relationship("MemberProjection", cascade="all, delete-orphan")
    entries = relationship("DailyEntry", cascade="all, delete-orphan")


class ProjectMember(Base):
    __tablename__ = "project_members"
    __table_args__ = (UniqueConstraint("project_id", "user_id", name="uq_project_members_project_user"),)

    id = Column(Integer, primary_key=True, index=True)

    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    email = Column(String, nullable=False)

    # percent of the company; set by the owner, never derived from hours
    equity = Column(Float, default=0, nullable=False)

    invite_date = Column(DateTime(timezone=True), default=utcnow, nullable=True)
    join_date = Column(DateTime(timezone=True), nullable=True)

    project = relationship("Project", back_populates="members")


# registered in metadata before the relationships above are configured
from speed_equity.models.projection import MemberProjection, Projection  # noqa: E402,F401
from speed_equity.models.daily_entry import DailyEntry  # noqa: E402,F401
