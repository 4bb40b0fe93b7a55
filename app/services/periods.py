"""
Period bucketing and weekly summaries.

A period is a string "<year>-<week>" ("2025-34", "2025-07"). The career
assignment track spells it "2025-W34"; both forms are accepted.

Week convention
---------------
Week 1 of year Y starts on the first Monday on or after January 1 of Y.
Week N starts (N-1)*7 days later and ends on the following Sunday.
Days before the first Monday of a year belong to the previous year's last week.

Pure functions only: no I/O, no DB, nothing cached. Callers recompute on
every request.

Public API
----------
parse_period(period)                -> (year, week) | None
week_bounds(period)                 -> (monday, sunday) | None
week_label(period)                  -> "MMM dd - MMM dd, yyyy" (or period unchanged)
period_for_date(day)                -> "YYYY-WW"
summarize(records, is_complete)     -> list[PeriodSummary]
summarize_totals(summaries)         -> HistoryTotals
completion_predicate(statuses)      -> Callable[[str], bool]
"""
from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Iterable, Optional

from app.models.user_task import TaskStatus


NO_PERIOD = "No Period"

_PERIOD_RE = re.compile(r"^\s*(\d+)-[Ww]?(\d+)\s*$")


# ---------------------------------------------------------------------------
# Types (plain dataclasses — no ORM, no Pydantic)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TaskRecord:
    id: int
    period: Optional[str]
    status: str
    score_awarded: float = 0
    points_base: float = 0


@dataclass(frozen=True)
class PeriodSummary:
    period: str
    total_tasks: int
    completed_tasks: int
    total_points: float
    max_points: float
    completion_rate: float   # 0 – 100


@dataclass(frozen=True)
class HistoryTotals:
    total_points: float
    completed_tasks: int
    total_tasks: int
    weeks: int
    average_completion_rate: float


# ---------------------------------------------------------------------------
# "Complete" predicates
# ---------------------------------------------------------------------------

VERIFIED_ONLY = frozenset({TaskStatus.VERIFIED.value})
SUBMITTED_OR_BETTER = frozenset({
    TaskStatus.VERIFIED.value,
    TaskStatus.SUBMITTED.value,
    TaskStatus.PARTIALLY_VERIFIED.value,
})

COMPLETE_SETS = {
    "verified": VERIFIED_ONLY,
    "submitted": SUBMITTED_OR_BETTER,
}


def completion_predicate(statuses: Iterable[str]) -> Callable[[str], bool]:
    allowed = frozenset(statuses)
    return lambda status: status in allowed


is_verified = completion_predicate(VERIFIED_ONLY)


# ---------------------------------------------------------------------------
# Week arithmetic
# ---------------------------------------------------------------------------

def parse_period(period: Optional[str]) -> Optional[tuple[int, int]]:
    """Return (year, week) when both parts are positive integers, else None."""
    if not period:
        return None
    m = _PERIOD_RE.match(period)
    if m is None:
        return None
    year, week = int(m.group(1)), int(m.group(2))
    if year <= 0 or week <= 0:
        return None
    return year, week


def _first_monday(year: int) -> date:
    jan1 = date(year, 1, 1)
    return jan1 + timedelta(days=(7 - jan1.weekday()) % 7)


def week_bounds(period: Optional[str]) -> Optional[tuple[date, date]]:
    parsed = parse_period(period)
    if parsed is None:
        return None
    year, week = parsed
    try:
        monday = _first_monday(year) + timedelta(weeks=week - 1)
        return monday, monday + timedelta(days=6)
    except (ValueError, OverflowError):
        # year beyond date.max
        return None


def week_label(period: Optional[str]) -> str:
    """
    Human-readable range for a period, e.g. "Jan 06 - Jan 12, 2025".
    Anything that is not a valid period is returned unchanged.
    """
    bounds = week_bounds(period)
    if bounds is None:
        return period or ""
    monday, sunday = bounds
    return f"{monday.strftime('%b %d')} - {sunday.strftime('%b %d, %Y')}"


def period_for_date(day: date) -> str:
    """Zero-padded period containing `day` (inverse of week_bounds)."""
    year = day.year
    start = _first_monday(year)
    if day < start:
        year -= 1
        start = _first_monday(year)
    week = (day - start).days // 7 + 1
    return f"{year}-{week:02d}"


def period_sort_key(period: str) -> tuple[int, int, int]:
    """Sort key putting parsed periods first, newest week first."""
    parsed = parse_period(period)
    if parsed is None:
        return (1, 0, 0)
    year, week = parsed
    return (0, -year, -week)


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def summarize(
    records: Iterable[TaskRecord],
    is_complete: Callable[[str], bool] = is_verified,
) -> list[PeriodSummary]:
    """
    Group records by period and compute one PeriodSummary per distinct key.

    Records with no period land in the NO_PERIOD bucket. Result is sorted
    newest week first by (year, week); unparseable keys come last.
    """
    grouped: dict[str, list[TaskRecord]] = defaultdict(list)
    for r in records:
        grouped[r.period or NO_PERIOD].append(r)

    summaries = []
    for period, tasks in grouped.items():
        total = len(tasks)
        completed = sum(1 for t in tasks if is_complete(t.status))
        summaries.append(PeriodSummary(
            period=period,
            total_tasks=total,
            completed_tasks=completed,
            total_points=sum(t.score_awarded or 0 for t in tasks),
            max_points=sum(t.points_base or 0 for t in tasks),
            completion_rate=(completed / total * 100) if total else 0.0,
        ))

    # Two stable passes: key string descending, then period order.
    summaries.sort(key=lambda s: s.period, reverse=True)
    summaries.sort(key=lambda s: period_sort_key(s.period))
    return summaries


def summarize_totals(summaries: list[PeriodSummary]) -> HistoryTotals:
    weeks = len(summaries)
    return HistoryTotals(
        total_points=sum(s.total_points for s in summaries),
        completed_tasks=sum(s.completed_tasks for s in summaries),
        total_tasks=sum(s.total_tasks for s in summaries),
        weeks=weeks,
        average_completion_rate=(
            sum(s.completion_rate for s in summaries) / weeks if weeks else 0.0
        ),
    )
