"""
Pydantic schemas for request/response validation.
"""

from app.schemas.asset import (
    AssetResponse,
    AssetUpdate,
    AssetUpdateResponse,
    AssetUploadRequest,
    PopularAssetResponse,
    UploadURLsResponse,
)
from app.schemas.error import ErrorResponse
from app.schemas.user import LoginRequest, SignupRequest, UserResponse

__all__ = [
    "AssetResponse",
    "AssetUpdate",
    "AssetUpdateResponse",
    "AssetUploadRequest",
    "PopularAssetResponse",
    "UploadURLsResponse",
    "ErrorResponse",
    "LoginRequest",
    "SignupRequest",
    "UserResponse",
]
