"""
Custom exception hierarchy for the Weekly Progress API.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class ProgressAPIException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class UnknownTrackError(ProgressAPIException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "UNKNOWN_TRACK"

    def __init__(self, track: str, allowed: list[str]):
        super().__init__(
            message=f"Unknown track '{track}'.",
            details={"track": track, "allowed": allowed},
        )


class InvalidPeriodError(ProgressAPIException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_PERIOD"

    def __init__(self, period: str):
        super().__init__(
            message=f"'{period}' is not a valid period. Expected '<year>-<week>'.",
            details={"period": period},
        )


class TaskRecordNotFoundError(ProgressAPIException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "TASK_NOT_FOUND"

    def __init__(self, record_id: int):
        super().__init__(
            message=f"Task {record_id} not found.",
            details={"id": record_id},
        )


class InvalidScoreError(ProgressAPIException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_SCORE"

    def __init__(self, score: int, points_base: int):
        super().__init__(
            message=f"Score {score} is outside 0..{points_base}.",
            details={"score": score, "points_base": points_base},
        )


class NoActiveTasksError(ProgressAPIException):
    http_status = status.HTTP_409_CONFLICT
    code = "NO_ACTIVE_TASKS"

    def __init__(self, track: str):
        super().__init__(
            message=f"Track '{track}' has no active task definitions. Run migrations to seed defaults.",
            details={"track": track},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def progress_exception_handler(
    request: Request, exc: ProgressAPIException
) -> JSONResponse:
    logger.info("%s %s -> %s %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
