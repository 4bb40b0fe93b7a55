"""
History router.

GET /history/{track}                   — per-week summaries + totals
GET /history/{track}/periods/{period}  — tasks of one week
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.schemas.common import ErrorResponse
from app.schemas.history import (
    HistoryResponse,
    HistoryTotalsResponse,
    PeriodSummaryResponse,
    PeriodTaskResponse,
    PeriodTasksResponse,
)
from app.services.history import (
    History,
    PeriodTask,
    get_history,
    get_period_tasks,
    resolve_track,
)
from app.services.periods import week_label

router = APIRouter(prefix="/history", tags=["history"])


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def task_to_response(t: PeriodTask) -> PeriodTaskResponse:
    return PeriodTaskResponse(
        id=t.id,
        task_id=t.task_id,
        title=t.title,
        description=t.description,
        period=t.period,
        status=t.status,
        score_awarded=t.score_awarded,
        points_base=t.points_base,
        due_at=t.due_at.isoformat() if t.due_at else None,
        created_at=t.created_at.isoformat() if t.created_at else None,
        updated_at=t.updated_at.isoformat() if t.updated_at else None,
    )


def _history_to_response(h: History) -> HistoryResponse:
    return HistoryResponse(
        track=h.track,
        user_id=h.user_id,
        complete=h.complete,
        periods=[
            PeriodSummaryResponse(
                period=p.summary.period,
                label=p.label,
                total_tasks=p.summary.total_tasks,
                completed_tasks=p.summary.completed_tasks,
                total_points=p.summary.total_points,
                max_points=p.summary.max_points,
                completion_rate=p.summary.completion_rate,
            )
            for p in h.periods
        ],
        totals=HistoryTotalsResponse(
            total_points=h.totals.total_points,
            completed_tasks=h.totals.completed_tasks,
            total_tasks=h.totals.total_tasks,
            weeks=h.totals.weeks,
            average_completion_rate=h.totals.average_completion_rate,
        ),
    )


# ---------------------------------------------------------------------------
# GET /history/{track}
# ---------------------------------------------------------------------------

@router.get(
    "/{track}",
    response_model=HistoryResponse,
    summary="Weekly history for one user on one track",
    responses={
        200: {"description": "Per-week summaries, newest week first."},
        404: {"model": ErrorResponse, "description": "Unknown track."},
    },
)
def history(
    track: str,
    user_id: str = Query(min_length=1, max_length=64, description="Owner of the tasks."),
    complete: Optional[str] = Query(
        default=None,
        pattern="^(verified|submitted)$",
        description=(
            '"verified": only VERIFIED counts as complete. '
            '"submitted": SUBMITTED, PARTIALLY_VERIFIED and VERIFIED count. '
            "Defaults to the server setting."
        ),
    ),
    db: Session = Depends(get_db),
):
    """
    Group the user's tasks by week and report for each week:

    | Field | Meaning |
    |---|---|
    | `total_tasks` | tasks assigned that week |
    | `completed_tasks` | tasks whose status counts as complete |
    | `total_points` | sum of `score_awarded` |
    | `max_points` | sum of the tasks' `points_base` |
    | `completion_rate` | `completed / total * 100` (0 for an empty week) |

    Tasks without a period are grouped under `"No Period"`, listed last.
    """
    result = get_history(db=db, user_id=user_id, track=resolve_track(track), complete=complete)
    return _history_to_response(result)


# ---------------------------------------------------------------------------
# GET /history/{track}/periods/{period}
# ---------------------------------------------------------------------------

@router.get(
    "/{track}/periods/{period}",
    response_model=PeriodTasksResponse,
    summary="Tasks of a single week",
    responses={
        200: {"description": "Tasks for the week, newest first (empty list if none)."},
        404: {"model": ErrorResponse, "description": "Unknown track."},
    },
)
def period_tasks(
    track: str,
    period: str,
    user_id: str = Query(min_length=1, max_length=64),
    db: Session = Depends(get_db),
):
    """Drill-down for one week row of `GET /history/{track}`."""
    items = get_period_tasks(db=db, user_id=user_id, track=resolve_track(track), period=period)
    return PeriodTasksResponse(
        track=track.lower(),
        user_id=user_id,
        period=period,
        label=week_label(period),
        total=len(items),
        items=[task_to_response(t) for t in items],
    )
