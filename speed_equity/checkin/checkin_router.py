# speed_equity/checkin/checkin_router.py

from datetime import datetime, timedelta, timezone
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from speed_equity.auth.auth_context import AuthContext, get_auth_context
from speed_equity.database import get_db
from speed_equity.models.daily_entry import DailyEntry
from speed_equity.project.access import require_member
from speed_equity.projection.projection_service import get_active_projection
from speed_equity.schemas.entry_schema import (
    CheckInResult,
    CheckInStatus,
    EarningsBreakdown,
    EntryCreate,
    EntryListItem,
    EntryPage,
    EntryRead,
    EntryUpdate,
)
from speed_equity.valuation.engine import (
    compute_daily_outcome,
    has_recent_check_in,
    is_within_edit_window,
    next_check_in_at,
    resolve_implied_hour_value,
)

logger = logging.getLogger("speed_equity.checkin")

PAGE_SIZE = 10

router = APIRouter(
    prefix="/checkins",
    tags=["checkins"],
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _last_inserted_at(db: Session, project_id: int, user_id: int) -> datetime | None:
    last = (
        db.query(DailyEntry.inserted_at)
        .filter(DailyEntry.project_id == project_id, DailyEntry.created_by == user_id)
        .order_by(DailyEntry.inserted_at.desc())
        .first()
    )
    return last[0] if last else None


def _get_own_entry(db: Session, entry_id: int, user_id: int) -> DailyEntry:
    entry = db.get(DailyEntry, entry_id)
    if not entry:
        raise HTTPException(404, "Check-in not found")
    if entry.created_by != user_id:
        raise HTTPException(403, "Only the author can change this check-in")
    return entry


# ==========================
#  SUBMIT CHECK-IN
# ==========================
@router.post("/", response_model=CheckInResult, status_code=201)
def submit_checkin(
    data: EntryCreate,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    require_member(db, data.project_id, ctx.user_id)

    now = _now()
    today = now.date()
    entry_date = data.entry_date or (today - timedelta(days=1))
    if entry_date > today:
        raise HTTPException(400, "Check-ins cannot be logged for future dates")

    last = _last_inserted_at(db, data.project_id, ctx.user_id)
    if has_recent_check_in(last, now):
        logger.info("checkin_cooldown_blocked", extra={"project_id": data.project_id, "user_id": ctx.user_id})
        raise HTTPException(409, "You already checked in recently")

    entry = DailyEntry(
        project_id=data.project_id,
        created_by=ctx.user_id,
        entry_date=entry_date,
        hours_worked=data.hours_worked,
        hours_wasted=data.hours_wasted,
        completed=data.completed,
        plan_to_complete=data.plan_to_complete,
        inserted_at=now,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)

    # a project without a projection yet still accepts check-ins, worth 0
    rate = resolve_implied_hour_value(get_active_projection(db, data.project_id)) or 0.0
    outcome = compute_daily_outcome(entry.hours_worked, entry.hours_wasted, rate)

    logger.info("checkin_recorded", extra={"project_id": entry.project_id, "entry_id": entry.id, "user_id": ctx.user_id})
    return CheckInResult(
        entry=EntryRead.model_validate(entry),
        earnings=EarningsBreakdown(implied_hour_value=rate, **outcome.to_dict()),
    )


# ==========================
#  COOLDOWN STATUS
# ==========================
@router.get("/status", response_model=CheckInStatus)
def checkin_status(
    project_id: int,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    require_member(db, project_id, ctx.user_id)

    last = _last_inserted_at(db, project_id, ctx.user_id)
    return CheckInStatus(
        project_id=project_id,
        has_recent_check_in=has_recent_check_in(last, _now()),
        last_inserted_at=last,
        next_check_in_at=next_check_in_at(last),
    )


# ==========================
#  HISTORY
# ==========================
@router.get("/", response_model=EntryPage)
def list_checkins(
    project_id: int,
    member: str = "all",
    page: int = 0,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    """Paged history; ``member`` is ``all``, ``mine`` or a user id."""
    require_member(db, project_id, ctx.user_id)
    if page < 0:
        raise HTTPException(400, "page must be >= 0")

    q = db.query(DailyEntry).filter(DailyEntry.project_id == project_id)
    if member == "mine":
        q = q.filter(DailyEntry.created_by == ctx.user_id)
    elif member != "all":
        try:
            target = int(member)
        except ValueError:
            raise HTTPException(400, "member must be 'all', 'mine' or a user id")
        q = q.filter(DailyEntry.created_by == target)

    rows = (
        q.order_by(DailyEntry.entry_date.desc(), DailyEntry.inserted_at.desc())
        .offset(page * PAGE_SIZE)
        .limit(PAGE_SIZE)
        .all()
    )

    today = _now().date()
    items = [
        EntryListItem(
            **EntryRead.model_validate(row).model_dump(),
            editable=row.created_by == ctx.user_id and is_within_edit_window(row.entry_date, today),
        )
        for row in rows
    ]
    return EntryPage(items=items, page=page, has_more=len(rows) == PAGE_SIZE)


# ==========================
#  EDIT CHECK-IN (PATCH)
# ==========================
@router.patch("/{entry_id}", response_model=EntryRead)
def update_checkin(
    entry_id: int,
    data: EntryUpdate,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    entry = _get_own_entry(db, entry_id, ctx.user_id)
    if not is_within_edit_window(entry.entry_date, _now().date()):
        raise HTTPException(403, "Check-ins can only be edited within the edit window")

    if data.hours_worked is not None:
        entry.hours_worked = data.hours_worked
    if data.hours_wasted is not None:
        entry.hours_wasted = data.hours_wasted
    if data.completed is not None:
        entry.completed = data.completed or None
    if data.plan_to_complete is not None:
        entry.plan_to_complete = data.plan_to_complete or None

    db.commit()
    db.refresh(entry)
    return entry


# ==========================
#  DELETE CHECK-IN
# ==========================
@router.delete("/{entry_id}", status_code=204)
def delete_checkin(
    entry_id: int,
    ctx: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    entry = _get_own_entry(db, entry_id, ctx.user_id)

    db.delete(entry)
    db.commit()
    return
