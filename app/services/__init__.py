"""
Business logic services for the Asset Warehouse API.
Services handle core operations separate from API endpoints.
"""

from app.services.asset_service import AssetService
from app.services.user_service import UserService

__all__ = [
    "AssetService",
    "UserService",
]
