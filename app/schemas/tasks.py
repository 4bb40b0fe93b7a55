"""
Task assignment schemas.

POST  /tracks/{track}/weeks → InstantiateWeekRequest → WeekAssignmentResponse
PATCH /tasks/{id}           → UpdateTaskRequest      → PeriodTaskResponse
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.models.user_task import TaskStatus
from app.schemas.history import PeriodTaskResponse


class InstantiateWeekRequest(BaseModel):
    user_id: str = Field(min_length=1, max_length=64)
    day: Optional[date] = Field(
        default=None,
        description="Any day inside the target week. Defaults to today (UTC).",
        examples=["2025-08-20"],
    )
    period: Optional[str] = Field(
        default=None,
        description='Explicit "<year>-<week>"; takes precedence over `day`.',
        examples=["2025-34"],
    )

    @field_validator("user_id")
    @classmethod
    def user_id_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("user_id must not be blank")
        return v


class WeekAssignmentResponse(BaseModel):
    track: str
    user_id: str
    period: str
    label: str
    week_start: str
    week_end: str
    created: int = Field(description="Rows created by this call.")
    existing: int = Field(description="Rows that were already assigned.")
    tasks: list[PeriodTaskResponse]


class UpdateTaskRequest(BaseModel):
    status: TaskStatus
    score_awarded: Optional[int] = Field(
        default=None,
        description="Points earned; must be between 0 and the task's points_base.",
    )
