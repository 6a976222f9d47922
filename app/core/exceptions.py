"""
Custom exceptions for the Asset Warehouse API.
Every exception renders as {"error": ..., "message": ..., "details": ...}.
"""

from typing import Any


class WarehouseAPIException(Exception):
    """Base exception for all Asset Warehouse API errors."""

    def __init__(
        self,
        error: str,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.error = error
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to response dictionary."""
        response = {
            "error": self.error,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


class ValidationException(WarehouseAPIException):
    """400 - Malformed request (missing fields, invalid parameters)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            error="validation_failed",
            message=message,
            status_code=400,
            details=details,
        )


class UniqueViolationException(WarehouseAPIException):
    """400 - A unique column (username or email) already holds this value."""

    def __init__(self, field: str | None):
        if field == "username":
            message = "Username already exists"
        elif field == "email":
            message = "Email already exists"
        else:
            message = "Unknown error"
        super().__init__(
            error="already_exists",
            message=message,
            status_code=400,
            details={"field": field} if field else None,
        )


class SessionExpiredException(WarehouseAPIException):
    """400 - Session cookie present but no longer resolves to a user."""

    def __init__(self, message: str = "Session expired"):
        super().__init__(
            error="session_expired",
            message=message,
            status_code=400,
        )


class UnauthorizedException(WarehouseAPIException):
    """401 - Missing, invalid or expired session, or not the resource owner."""

    def __init__(self, message: str = "Unauthorized user (session expired or invalid session)"):
        super().__init__(
            error="unauthorized",
            message=message,
            status_code=401,
        )


class InvalidCredentialsException(WarehouseAPIException):
    """401 - Known user, wrong password."""

    def __init__(self, message: str = "Wrong password"):
        super().__init__(
            error="invalid_credentials",
            message=message,
            status_code=401,
        )


class UserNotFoundException(WarehouseAPIException):
    """404 - No account for the supplied email."""

    def __init__(self, message: str = "User doesn't exist"):
        super().__init__(
            error="not_found",
            message=message,
            status_code=404,
        )


class AssetNotFoundException(WarehouseAPIException):
    """404 - Asset not found."""

    def __init__(self, asset_id: int):
        super().__init__(
            error="not_found",
            message=f"Asset with ID '{asset_id}' not found",
            status_code=404,
        )


class StorageException(WarehouseAPIException):
    """500 - Storage backend error."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            error="storage_error",
            message=message,
            status_code=500,
            details=details,
        )
