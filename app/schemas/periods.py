"""
Period helper schemas.

GET /periods/current → CurrentPeriodResponse
GET /periods/label   → PeriodLabelResponse
"""
from pydantic import BaseModel, Field


class PeriodLabelResponse(BaseModel):
    period: str
    label: str = Field(
        description='"MMM dd - MMM dd, yyyy"; the period itself when it cannot be parsed.',
        examples=["Jan 06 - Jan 12, 2025"],
    )


class CurrentPeriodResponse(BaseModel):
    period: str = Field(description='"<year>-<week>", zero-padded week.', examples=["2025-34"])
    label: str
    week_start: str = Field(description="Monday of the week (ISO date).")
    week_end: str = Field(description="Sunday of the week (ISO date).")
