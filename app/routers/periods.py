"""
Periods router — week arithmetic helpers for clients.

GET /periods/current   — period containing a day (default today)
GET /periods/label     — human-readable range for a period string
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, Query

from app.core.errors import InvalidPeriodError
from app.schemas.common import ErrorResponse
from app.schemas.periods import CurrentPeriodResponse, PeriodLabelResponse
from app.services.periods import period_for_date, week_bounds, week_label

router = APIRouter(prefix="/periods", tags=["periods"])


@router.get(
    "/current",
    response_model=CurrentPeriodResponse,
    summary="Period containing a given day",
    responses={
        422: {"model": ErrorResponse, "description": "Invalid date, or a week that ends past the last representable date."},
    },
)
def current_period(
    day: Optional[date] = Query(
        default=None,
        description="ISO date (YYYY-MM-DD). Defaults to today UTC.",
        examples=["2025-08-20"],
    ),
):
    """
    Weeks start on Monday. Week 1 of a year begins on the first Monday on or
    after January 1; earlier days belong to the previous year's last week.
    """
    target = day or datetime.now(tz=timezone.utc).date()
    period = period_for_date(target)
    bounds = week_bounds(period)
    if bounds is None:
        # week runs past date.max
        raise InvalidPeriodError(period)
    monday, sunday = bounds
    return CurrentPeriodResponse(
        period=period,
        label=week_label(period),
        week_start=str(monday),
        week_end=str(sunday),
    )


@router.get(
    "/label",
    response_model=PeriodLabelResponse,
    summary="Date range label for a period",
)
def period_label(
    period: str = Query(description='"<year>-<week>"', examples=["2025-34"]),
):
    """Never fails: an unparseable period is echoed back as its own label."""
    return PeriodLabelResponse(period=period, label=week_label(period))
