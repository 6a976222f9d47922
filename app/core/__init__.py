"""Core utilities and exceptions for the Asset Warehouse API."""

from app.core.exceptions import (
    WarehouseAPIException,
    AssetNotFoundException,
    InvalidCredentialsException,
    SessionExpiredException,
    StorageException,
    UniqueViolationException,
    UnauthorizedException,
    UserNotFoundException,
    ValidationException,
)

__all__ = [
    "WarehouseAPIException",
    "AssetNotFoundException",
    "InvalidCredentialsException",
    "SessionExpiredException",
    "StorageException",
    "UniqueViolationException",
    "UnauthorizedException",
    "UserNotFoundException",
    "ValidationException",
]
