"""
Session authenticator.

Resolves an opaque session token to a user. Every failure cause (missing
token, unknown token, expired session, database error) collapses into
``None``; callers cannot tell them apart.
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.models.user import User, UserSession

logger = logging.getLogger(__name__)
settings = get_settings()


async def create_session(db: AsyncSession, user_id: int) -> UserSession:
    """
    Mint and persist a new session for a user.

    Existing sessions of the same user are left untouched.

    Args:
        db: Database session
        user_id: Owner of the new session

    Returns:
        The flushed UserSession; its ``id`` is the cookie value
    """
    session = UserSession(
        id=str(uuid4()),
        user_id=user_id,
        expiration=datetime.now(timezone.utc) + timedelta(days=settings.SESSION_LIFETIME_DAYS),
    )
    db.add(session)
    await db.flush()
    return session


async def get_user_by_session_id(db: AsyncSession, session_id: str | None) -> User | None:
    """
    Look up the user behind a session token.

    Args:
        db: Database session
        session_id: Cookie value, possibly missing or empty

    Returns:
        The User, or None when unauthenticated for any reason
    """
    if not session_id:
        return None

    try:
        session = await db.get(UserSession, session_id)
        if session is None:
            return None

        if session.is_expired():
            logger.info(f"Expired session for user {session.user_id}")
            return None

        return await db.get(User, session.user_id)

    except SQLAlchemyError:
        logger.exception("Session lookup failed")
        return None
