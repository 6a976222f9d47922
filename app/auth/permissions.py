"""
Asset-level permission checking.
Only the owner (``created_by``) may modify an asset.
"""

from app.core.exceptions import UnauthorizedException
from app.models.user import User


def can_modify_asset(owner_id: int, user: User | None) -> bool:
    """
    Check if a user can modify an asset (rename, change description).

    Args:
        owner_id: The asset's ``created_by``
        user: Authenticated user, or None

    Returns:
        True if user is the owner
    """
    return user is not None and user.id == owner_id


def ensure_asset_owner(owner_id: int, user: User | None) -> None:
    """
    Raise unless ``user`` owns the asset.

    Raises:
        UnauthorizedException: If user is not the owner
    """
    if not can_modify_asset(owner_id, user):
        raise UnauthorizedException("Unauthorized user")
