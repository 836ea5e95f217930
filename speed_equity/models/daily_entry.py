# speed_equity/models/daily_entry.py
from __future__ import annotations

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String
from speed_equity.database import Base
from speed_equity.models.user import utcnow


class DailyEntry(Base):
    __tablename__ = "daily_entries"

    id = Column(Integer, primary_key=True, index=True)

    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # the day the work happened, not when it was logged
    entry_date = Column(Date, nullable=False, index=True)

    hours_worked = Column(Float, default=0, nullable=False)
    hours_wasted = Column(Float, default=0, nullable=False)

    completed = Column(String, nullable=True)
    plan_to_complete = Column(String, nullable=True)

    # cooldown is measured from this instant
    inserted_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
