"""
History service: load a user's task records and aggregate them by week.

Rules:
- Reads from: user_tasks, task_definitions.
- Writes to: user_tasks only (instantiate_week, update_task).
- Summaries are recomputed on every call; nothing is cached or persisted.
- db.commit() only at the root function.

Public API
----------
resolve_track(track)                              -> str
load_records(db, user_id, track)                  -> list[TaskRecord]
get_history(db, user_id, track, complete)         -> History
get_period_tasks(db, user_id, track, period)      -> list[PeriodTask]
instantiate_week(db, user_id, track, day, period) -> WeekAssignment
update_task(db, record_id, status, score_awarded) -> PeriodTask
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import (
    InvalidPeriodError,
    InvalidScoreError,
    NoActiveTasksError,
    TaskRecordNotFoundError,
    UnknownTrackError,
)
from app.models.task_definition import TaskDefinition, Track
from app.models.user_task import TaskStatus, UserTask
from app.services.periods import (
    COMPLETE_SETS,
    NO_PERIOD,
    HistoryTotals,
    PeriodSummary,
    TaskRecord,
    completion_predicate,
    parse_period,
    period_for_date,
    summarize,
    summarize_totals,
    week_bounds,
    week_label,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class LabelledSummary:
    summary: PeriodSummary
    label: str


@dataclass
class History:
    user_id: str
    track: str
    complete: str            # name of the status set used
    periods: list[LabelledSummary]
    totals: HistoryTotals


@dataclass
class PeriodTask:
    id: int
    task_id: int
    title: str
    description: Optional[str]
    period: Optional[str]
    status: str
    score_awarded: int
    points_base: int
    due_at: Optional[datetime]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


@dataclass
class WeekAssignment:
    user_id: str
    track: str
    period: str
    week_start: date
    week_end: date
    created: int
    existing: int
    tasks: list[PeriodTask]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _today() -> date:
    return datetime.now(tz=timezone.utc).date()


def _ev(v) -> str:
    """Return bare string value from a str-enum or plain str."""
    return v.value if hasattr(v, "value") else str(v)


def resolve_track(track: str) -> str:
    """Validate a track name from the URL; raises UnknownTrackError."""
    try:
        return Track(track.lower()).value
    except ValueError:
        raise UnknownTrackError(track, [t.value for t in Track]) from None


def _query(db: Session, user_id: str, track: str):
    return (
        db.query(UserTask, TaskDefinition)
        .join(TaskDefinition, UserTask.task_id == TaskDefinition.id)
        .filter(UserTask.user_id == user_id, TaskDefinition.track == Track(track))
    )


def _to_period_task(ut: UserTask, td: TaskDefinition) -> PeriodTask:
    return PeriodTask(
        id=ut.id,
        task_id=td.id,
        title=td.title,
        description=td.description,
        period=ut.period,
        status=_ev(ut.status),
        score_awarded=ut.score_awarded or 0,
        points_base=td.points_base or 0,
        due_at=ut.due_at,
        created_at=ut.created_at,
        updated_at=ut.updated_at,
    )


def _due_at(monday: date, display_order: int) -> datetime:
    """
    Tasks assigned to day N (1 = Monday) are due the next evening;
    Sunday tasks (7) are due Sunday evening.
    """
    offset = 6 if display_order >= 7 else max(display_order, 1)
    return datetime.combine(monday + timedelta(days=offset), time(23, 59, 59), tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def load_records(db: Session, user_id: str, track: str) -> list[TaskRecord]:
    rows = _query(db, user_id, track).all()
    return [
        TaskRecord(
            id=ut.id,
            period=ut.period,
            status=_ev(ut.status),
            score_awarded=ut.score_awarded or 0,
            points_base=td.points_base or 0,
        )
        for ut, td in rows
    ]


def get_history(
    db: Session,
    user_id: str,
    track: str,
    complete: Optional[str] = None,
) -> History:
    """
    Per-week summaries for one user on one track, newest week first,
    plus overall totals across all weeks.
    """
    complete = complete or settings.DEFAULT_COMPLETE_SET
    records = load_records(db, user_id, track)
    summaries = summarize(records, completion_predicate(COMPLETE_SETS[complete]))
    logger.debug(
        "history user=%s track=%s records=%d periods=%d",
        user_id, track, len(records), len(summaries),
    )
    return History(
        user_id=user_id,
        track=track,
        complete=complete,
        periods=[LabelledSummary(summary=s, label=week_label(s.period)) for s in summaries],
        totals=summarize_totals(summaries),
    )


def get_period_tasks(
    db: Session,
    user_id: str,
    track: str,
    period: str,
) -> list[PeriodTask]:
    """Tasks of a single week (or the NO_PERIOD bucket), newest first."""
    q = _query(db, user_id, track)
    if period == NO_PERIOD:
        q = q.filter(or_(UserTask.period.is_(None), UserTask.period == ""))
    else:
        q = q.filter(UserTask.period == period)
    rows = q.order_by(UserTask.created_at.desc(), UserTask.id.desc()).all()
    return [_to_period_task(ut, td) for ut, td in rows]


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def instantiate_week(
    db: Session,
    user_id: str,
    track: str,
    day: Optional[date] = None,
    period: Optional[str] = None,
) -> WeekAssignment:
    """
    Assign every active definition of `track` to the user for one week.

    The week is `period` when given, otherwise the one containing `day`
    (default: today UTC). Existing (user, task, period) rows are left as-is.
    """
    if period is None:
        period = period_for_date(day or _today())
    else:
        parsed = parse_period(period)
        if parsed is None:
            raise InvalidPeriodError(period)
        # Stored spelling is always zero-padded "YYYY-WW"
        normalised = f"{parsed[0]}-{parsed[1]:02d}"
        bounds = week_bounds(normalised)
        # A week number past the year's last week names another year's week
        if bounds is None or period_for_date(bounds[0]) != normalised:
            raise InvalidPeriodError(period)
        period = normalised
    bounds = week_bounds(period)
    if bounds is None:
        raise InvalidPeriodError(period)
    monday, sunday = bounds

    definitions = (
        db.query(TaskDefinition)
        .filter(TaskDefinition.track == Track(track), TaskDefinition.active == True)  # noqa
        .order_by(TaskDefinition.display_order, TaskDefinition.id)
        .all()
    )
    if not definitions:
        raise NoActiveTasksError(track)

    existing_ids = {
        row.task_id
        for row in db.query(UserTask.task_id).filter(
            UserTask.user_id == user_id,
            UserTask.period == period,
            UserTask.task_id.in_([d.id for d in definitions]),
        ).all()
    }

    created = 0
    for td in definitions:
        if td.id in existing_ids:
            continue
        db.add(UserTask(
            user_id=user_id,
            task_id=td.id,
            period=period,
            status=TaskStatus.NOT_STARTED,
            score_awarded=0,
            due_at=_due_at(monday, td.display_order),
        ))
        created += 1
    db.commit()

    logger.info(
        "instantiated week user=%s track=%s period=%s created=%d existing=%d",
        user_id, track, period, created, len(existing_ids),
    )
    tasks = get_period_tasks(db, user_id, track, period)
    return WeekAssignment(
        user_id=user_id,
        track=track,
        period=period,
        week_start=monday,
        week_end=sunday,
        created=created,
        existing=len(existing_ids),
        tasks=sorted(tasks, key=lambda t: t.task_id),
    )


def update_task(
    db: Session,
    record_id: int,
    status: TaskStatus,
    score_awarded: Optional[int] = None,
) -> PeriodTask:
    """Record a verification outcome for one assigned task."""
    row = (
        db.query(UserTask, TaskDefinition)
        .join(TaskDefinition, UserTask.task_id == TaskDefinition.id)
        .filter(UserTask.id == record_id)
        .first()
    )
    if row is None:
        raise TaskRecordNotFoundError(record_id)
    ut, td = row

    if score_awarded is not None:
        if score_awarded < 0 or score_awarded > (td.points_base or 0):
            raise InvalidScoreError(score_awarded, td.points_base or 0)
        ut.score_awarded = score_awarded
    ut.status = status
    db.commit()
    db.refresh(ut)

    logger.info("task %d -> %s (score=%d)", ut.id, _ev(ut.status), ut.score_awarded)
    return _to_period_task(ut, td)
