"""
Sweat-equity valuation engine.

Converts logged hours into money and progress figures using a project's
active projection. Every function here is pure: no I/O, no session, no
logging. Inputs are expected to be validated by the schemas layer
(non-negative, finite); the only guard applied here is the zero-hours
division guard.
"""

import os
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()

CHECKIN_COOLDOWN_HOURS = float(os.getenv("CHECKIN_COOLDOWN_HOURS", "10"))
EDIT_WINDOW_DAYS = int(os.getenv("EDIT_WINDOW_DAYS", "14"))


@dataclass(frozen=True)
class DailyOutcome:
    money_made: float
    money_lost: float

    def to_dict(self) -> dict:
        return {"money_made": self.money_made, "money_lost": self.money_lost}


def _field(source: Any, name: str) -> Any:
    # ORM rows, pydantic models and plain dicts all reach the engine
    if isinstance(source, dict):
        return source.get(name)
    return getattr(source, name, None)


def resolve_implied_hour_value(projection: Any) -> Optional[float]:
    """Dollar value of one hour of work for the given active projection.

    Returns ``None`` when there is no projection at all. A precomputed
    ``implied_hour_value`` wins over the valuation / hours division; zero
    remaining hours yields a rate of 0.
    """
    if projection is None:
        return None

    precomputed = _field(projection, "implied_hour_value")
    if precomputed is not None:
        return float(precomputed)

    valuation = _field(projection, "valuation") or 0
    hours = _field(projection, "work_hours_until_completion") or 0
    if hours > 0:
        return valuation / hours
    return 0.0


def compute_daily_outcome(
    hours_worked: float,
    hours_wasted: float,
    implied_hour_value: Optional[float],
) -> DailyOutcome:
    """Money made and lost for a single check-in. Unrounded."""
    rate = implied_hour_value or 0.0
    return DailyOutcome(
        money_made=hours_worked * rate,
        money_lost=hours_wasted * rate,
    )


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def is_within_edit_window(entry_date: date, today: date, window_days: int = EDIT_WINDOW_DAYS) -> bool:
    """True while the entry is at most ``window_days`` whole days old."""
    age = _as_date(today) - _as_date(entry_date)
    return age.days <= window_days


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything we store is UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def has_recent_check_in(
    last_entry_timestamp: Optional[datetime],
    now: datetime,
    cooldown_hours: float = CHECKIN_COOLDOWN_HOURS,
) -> bool:
    """Rolling cooldown from the last submission instant, not a calendar day."""
    if last_entry_timestamp is None:
        return False
    elapsed = _as_utc(now) - _as_utc(last_entry_timestamp)
    return elapsed < timedelta(hours=cooldown_hours)


def next_check_in_at(
    last_entry_timestamp: Optional[datetime],
    cooldown_hours: float = CHECKIN_COOLDOWN_HOURS,
) -> Optional[datetime]:
    if last_entry_timestamp is None:
        return None
    return _as_utc(last_entry_timestamp) + timedelta(hours=cooldown_hours)


# -------------------------
# Dashboard figures
# -------------------------

def sweat_equity_value(hours_worked: float, implied_hour_value: Optional[float], equity_pct: Optional[float]) -> float:
    return hours_worked * (implied_hour_value or 0.0) * ((equity_pct or 0.0) / 100)


def potential_equity_value(valuation: Optional[float], equity_pct: Optional[float]) -> float:
    return (valuation or 0.0) * ((equity_pct or 0.0) / 100)


def contribution_pct(user_hours: float, team_hours: float) -> float:
    if team_hours > 0:
        return 100 * user_hours / team_hours
    return 0.0


def weeks_to_goal(work_hours_until_completion: Optional[float], planned_hours_per_week: Optional[float]) -> Optional[float]:
    if not planned_hours_per_week or planned_hours_per_week <= 0:
        return None
    return (work_hours_until_completion or 0.0) / planned_hours_per_week


def project_progress(hours_worked: float, work_hours_until_completion: Optional[float]) -> float:
    """Share of total effort done: worked / (worked + still remaining)."""
    total = hours_worked + (work_hours_until_completion or 0.0)
    if total > 0:
        return hours_worked / total
    return 0.0
