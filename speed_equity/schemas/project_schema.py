# speed_equity/schemas/project_schema.py

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional
from datetime import datetime


# --------- Base schema (common fields) ---------
class ProjectBase(BaseModel):
    name: str = Field(min_length=1)
    logo_url: Optional[str] = None


# --------- For creating a project (POST) ---------
class ProjectCreate(ProjectBase):
    # optional initial projection; a missing one of the two defaults to 0
    initial_valuation: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    work_hours_remaining: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)


# --------- For updating a project (PATCH) ---------
class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    logo_url: Optional[str] = None
    owner_id: Optional[int] = None


# --------- For reading a project (GET responses) ---------
class ProjectRead(ProjectBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    created_at: datetime


# --------- Members ---------
class MemberCreate(BaseModel):
    email: EmailStr
    equity: float = Field(default=0, ge=0, le=100, allow_inf_nan=False)


class MemberUpdate(BaseModel):
    equity: float = Field(ge=0, le=100, allow_inf_nan=False)


class MemberRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    user_id: int
    email: str
    equity: float
    invite_date: Optional[datetime] = None
    join_date: Optional[datetime] = None
