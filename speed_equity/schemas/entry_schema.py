# speed_equity/schemas/entry_schema.py
from __future__ import annotations

from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field


# --------- CREATE ----------
class EntryCreate(BaseModel):
    project_id: int
    # defaults to yesterday (UTC) in the router
    entry_date: date | None = None
    hours_worked: float = Field(ge=0, allow_inf_nan=False)
    hours_wasted: float = Field(default=0, ge=0, allow_inf_nan=False)
    completed: str | None = None
    plan_to_complete: str | None = None


# --------- UPDATE (PATCH) ----------
class EntryUpdate(BaseModel):
    hours_worked: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    hours_wasted: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    completed: str | None = None
    plan_to_complete: str | None = None


# --------- READ ----------
class EntryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    created_by: int
    entry_date: date
    hours_worked: float
    hours_wasted: float
    completed: str | None = None
    plan_to_complete: str | None = None
    inserted_at: datetime


class EntryListItem(EntryRead):
    editable: bool = False


class EntryPage(BaseModel):
    items: list[EntryListItem]
    page: int
    has_more: bool


class EarningsBreakdown(BaseModel):
    """What the check-in was worth, shown right after submission."""

    implied_hour_value: float
    money_made: float
    money_lost: float


class CheckInResult(BaseModel):
    entry: EntryRead
    earnings: EarningsBreakdown


class CheckInStatus(BaseModel):
    project_id: int
    has_recent_check_in: bool
    last_inserted_at: datetime | None = None
    next_check_in_at: datetime | None = None
