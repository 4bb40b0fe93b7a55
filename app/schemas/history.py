"""
History schemas.

GET /history/{track}                   → HistoryResponse
GET /history/{track}/periods/{period}  → PeriodTasksResponse
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class PeriodTaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    task_id: int
    title: str
    description: Optional[str] = None
    period: Optional[str] = None
    status: str = Field(
        description='"NOT_STARTED" | "STARTED" | "SUBMITTED" | "PARTIALLY_VERIFIED" | "VERIFIED"'
    )
    score_awarded: int
    points_base: int
    due_at: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class PeriodSummaryResponse(BaseModel):
    """Aggregated numbers for one week."""
    model_config = ConfigDict(from_attributes=True)

    period: str
    label: str = Field(description="Human-readable date range for the week.")
    total_tasks: int
    completed_tasks: int
    total_points: float
    max_points: float
    completion_rate: float = Field(
        description="completed_tasks / total_tasks * 100; 0 when there are no tasks.",
        examples=[50.0],
    )


class HistoryTotalsResponse(BaseModel):
    total_points: float
    completed_tasks: int
    total_tasks: int
    weeks: int
    average_completion_rate: float = Field(
        description="Mean of the per-week completion rates."
    )


class HistoryResponse(BaseModel):
    track: str
    user_id: str
    complete: str = Field(description='Status set counted as complete: "verified" or "submitted".')
    periods: list[PeriodSummaryResponse] = Field(description="Newest week first.")
    totals: HistoryTotalsResponse


class PeriodTasksResponse(BaseModel):
    track: str
    user_id: str
    period: str
    label: str
    total: int
    items: list[PeriodTaskResponse]
