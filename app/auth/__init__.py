"""
Authentication and authorization module for the Asset Warehouse API.
Cookie sessions backed by the sessions table, bcrypt password hashes.
"""

from app.auth.passwords import hash_password, verify_password
from app.auth.permissions import can_modify_asset, ensure_asset_owner
from app.auth.sessions import create_session, get_user_by_session_id
from app.auth.dependencies import (
    get_current_user,
    get_optional_user,
    get_session_token,
    set_session_cookie,
    CurrentUser,
    OptionalUser,
    SessionToken,
)

__all__ = [
    # Password functions
    "hash_password",
    "verify_password",
    # Session functions
    "create_session",
    "get_user_by_session_id",
    # Permission functions
    "can_modify_asset",
    "ensure_asset_owner",
    # Dependencies
    "get_current_user",
    "get_optional_user",
    "get_session_token",
    "set_session_cookie",
    # Type aliases
    "CurrentUser",
    "OptionalUser",
    "SessionToken",
]
