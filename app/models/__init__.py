"""
SQLAlchemy ORM models for the Asset Warehouse API.
"""

from app.models.asset import Asset
from app.models.user import User, UserSession

__all__ = [
    "Asset",
    "User",
    "UserSession",
]
