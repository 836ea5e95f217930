# speed_equity/schemas/dashboard_schema.py
from __future__ import annotations

import datetime as dt
from pydantic import BaseModel


class ProjectDashboard(BaseModel):
    project_id: int
    name: str
    active_valuation: float | None = None
    active_work_hours_until_completion: float | None = None
    implied_hour_value: float | None = None
    total_hours_worked: float
    total_hours_wasted: float
    sweat_equity_earned: float
    money_lost: float
    active_planned_hours_per_week: float
    active_weeks_to_goal: float | None = None
    project_progress: float


class MemberDashboard(BaseModel):
    project_id: int
    name: str
    user_id: int
    member_email: str
    equity: float
    implied_hour_value: float | None = None
    member_hours_worked: float
    member_hours_wasted: float
    member_money_made: float
    member_money_lost: float
    member_sweat_equity_earned_weighted: float
    potential_equity_value: float
    contribution_pct: float
    team_hours_worked: float
    member_planned_hours_per_week: float | None = None


class HoursPoint(BaseModel):
    date: dt.date
    my: float
    team: float
