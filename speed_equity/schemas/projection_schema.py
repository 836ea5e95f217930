# speed_equity/schemas/projection_schema.py
from __future__ import annotations

from datetime import date
from pydantic import BaseModel, ConfigDict, Field


class ProjectionCreate(BaseModel):
    valuation: float = Field(ge=0, allow_inf_nan=False)
    work_hours_until_completion: float = Field(ge=0, allow_inf_nan=False)
    effective_from: date | None = None


class ProjectionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    valuation: float
    work_hours_until_completion: float
    effective_from: date


class ActiveProjectionRead(ProjectionRead):
    implied_hour_value: float


class MemberProjectionCreate(BaseModel):
    planned_hours_per_week: float = Field(ge=0, allow_inf_nan=False)
    effective_from: date | None = None


class MemberProjectionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    user_id: int
    planned_hours_per_week: float
    effective_from: date
