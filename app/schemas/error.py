"""
Pydantic schemas for error responses.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standard error response format.

    Examples:
        400: {"error": "validation_failed", "message": "..."}
        400: {"error": "already_exists", "message": "Email already exists", "details": {"field": "email"}}
        401: {"error": "unauthorized", "message": "Unauthorized user"}
        404: {"error": "not_found", "message": "User doesn't exist"}
    """

    error: str = Field(
        ...,
        description="Error code string",
        examples=["validation_failed", "unauthorized", "already_exists", "not_found"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] | list[Any] | None = Field(
        default=None,
        description="Additional error context",
    )
