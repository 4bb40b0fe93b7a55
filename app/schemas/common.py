"""
Error envelope documented on every router's non-2xx responses.
"""
from typing import Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """`{code, message, details}` returned for all 4xx/5xx responses."""
    code: str = Field(examples=["UNKNOWN_TRACK"])
    message: str
    details: Optional[dict[str, Any]] = Field(
        default=None,
        description='Error-specific context; for VALIDATION_ERROR, `{"errors": [{field, message, type}]}`.',
    )
