"""Per-project and per-member rollups.

Money figures are summed entry by entry with ``compute_daily_outcome`` so
the dashboard reports exactly what each check-in showed when it was
submitted.
"""
from __future__ import annotations

from sqlalchemy.orm import Session

from speed_equity.models.daily_entry import DailyEntry
from speed_equity.models.project import Project, ProjectMember
from speed_equity.projection.projection_service import (
    get_active_member_projections,
    get_active_projection,
)
from speed_equity.schemas.dashboard_schema import HoursPoint, MemberDashboard, ProjectDashboard
from speed_equity.valuation import engine


def _entries(db: Session, project_id: int) -> list[DailyEntry]:
    return db.query(DailyEntry).filter(DailyEntry.project_id == project_id).all()


def _money(entries: list[DailyEntry], rate: float | None) -> tuple[float, float]:
    made = 0.0
    lost = 0.0
    for entry in entries:
        outcome = engine.compute_daily_outcome(entry.hours_worked, entry.hours_wasted, rate)
        made += outcome.money_made
        lost += outcome.money_lost
    return made, lost


def build_project_dashboard(db: Session, project: Project) -> ProjectDashboard:
    projection = get_active_projection(db, project.id)
    rate = engine.resolve_implied_hour_value(projection)

    entries = _entries(db, project.id)
    hours_worked = sum(e.hours_worked for e in entries)
    hours_wasted = sum(e.hours_wasted for e in entries)
    made, lost = _money(entries, rate)

    planned = sum(row.planned_hours_per_week for row in get_active_member_projections(db, project.id).values())
    remaining = projection.work_hours_until_completion if projection else None

    return ProjectDashboard(
        project_id=project.id,
        name=project.name,
        active_valuation=projection.valuation if projection else None,
        active_work_hours_until_completion=remaining,
        implied_hour_value=rate,
        total_hours_worked=hours_worked,
        total_hours_wasted=hours_wasted,
        sweat_equity_earned=made,
        money_lost=lost,
        active_planned_hours_per_week=planned,
        active_weeks_to_goal=engine.weeks_to_goal(remaining, planned),
        project_progress=engine.project_progress(hours_worked, remaining),
    )


def build_member_dashboard(db: Session, project: Project, member: ProjectMember) -> MemberDashboard:
    projection = get_active_projection(db, project.id)
    rate = engine.resolve_implied_hour_value(projection)

    team_entries = _entries(db, project.id)
    mine = [e for e in team_entries if e.created_by == member.user_id]

    hours_worked = sum(e.hours_worked for e in mine)
    team_hours = sum(e.hours_worked for e in team_entries)
    made, lost = _money(mine, rate)

    planned = get_active_member_projections(db, project.id).get(member.user_id)

    return MemberDashboard(
        project_id=project.id,
        name=project.name,
        user_id=member.user_id,
        member_email=member.email,
        equity=member.equity,
        implied_hour_value=rate,
        member_hours_worked=hours_worked,
        member_hours_wasted=sum(e.hours_wasted for e in mine),
        member_money_made=made,
        member_money_lost=lost,
        member_sweat_equity_earned_weighted=engine.sweat_equity_value(hours_worked, rate, member.equity),
        potential_equity_value=engine.potential_equity_value(projection.valuation if projection else None, member.equity),
        contribution_pct=engine.contribution_pct(hours_worked, team_hours),
        team_hours_worked=team_hours,
        member_planned_hours_per_week=planned.planned_hours_per_week if planned else None,
    )


def hours_series(db: Session, project_id: int, user_id: int, days: int = 7) -> list[HoursPoint]:
    """Hours worked on the most recent ``days`` distinct entry dates, oldest first."""
    buckets: dict = {}
    rows = (
        db.query(DailyEntry)
        .filter(DailyEntry.project_id == project_id)
        .order_by(DailyEntry.entry_date.asc())
        .all()
    )
    for row in rows:
        bucket = buckets.setdefault(row.entry_date, {"my": 0.0, "team": 0.0})
        bucket["team"] += row.hours_worked
        if row.created_by == user_id:
            bucket["my"] += row.hours_worked

    recent = list(buckets.items())[-days:] if days > 0 else []
    return [HoursPoint(date=d, my=v["my"], team=v["team"]) for d, v in recent]
