"""
Tasks router.

POST  /tracks/{track}/weeks  — assign a week's tasks to a user
PATCH /tasks/{task_id}       — record a verification outcome
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.schemas.common import ErrorResponse
from app.routers.history import task_to_response
from app.schemas.history import PeriodTaskResponse
from app.schemas.tasks import (
    InstantiateWeekRequest,
    UpdateTaskRequest,
    WeekAssignmentResponse,
)
from app.services.history import instantiate_week, resolve_track, update_task
from app.services.periods import week_label

router = APIRouter(tags=["tasks"])


@router.post(
    "/tracks/{track}/weeks",
    response_model=WeekAssignmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Assign the week's tasks to a user",
    responses={
        201: {"description": "Week instantiated (or already present)."},
        404: {"model": ErrorResponse, "description": "Unknown track."},
        409: {"model": ErrorResponse, "description": "Track has no active task definitions."},
        422: {"model": ErrorResponse, "description": "Validation error or invalid period."},
    },
)
def create_week(track: str, payload: InstantiateWeekRequest, db: Session = Depends(get_db)):
    """
    Create one task per active definition of the track for the chosen week.
    Each task is due the evening after its assigned weekday; Sunday tasks
    are due Sunday evening.

    **Idempotent**: tasks already assigned for that week are kept untouched and
    counted in `existing`.
    """
    result = instantiate_week(
        db=db,
        user_id=payload.user_id,
        track=resolve_track(track),
        day=payload.day,
        period=payload.period,
    )
    return WeekAssignmentResponse(
        track=result.track,
        user_id=result.user_id,
        period=result.period,
        label=week_label(result.period),
        week_start=str(result.week_start),
        week_end=str(result.week_end),
        created=result.created,
        existing=result.existing,
        tasks=[task_to_response(t) for t in result.tasks],
    )


@router.patch(
    "/tasks/{task_id}",
    response_model=PeriodTaskResponse,
    summary="Update status and score of an assigned task",
    responses={
        200: {"description": "Task updated."},
        404: {"model": ErrorResponse, "description": "Task not found."},
        422: {"model": ErrorResponse, "description": "Invalid status or score."},
    },
)
def patch_task(task_id: int, payload: UpdateTaskRequest, db: Session = Depends(get_db)):
    """Score must lie between 0 and the task's `points_base`."""
    result = update_task(
        db=db,
        record_id=task_id,
        status=payload.status,
        score_awarded=payload.score_awarded,
    )
    return task_to_response(result)
