"""
Authentication dependencies for FastAPI.
The session token travels in a cookie named SESSION_COOKIE_NAME.
"""

from typing import Annotated

from fastapi import Depends, Request, Response

from app.auth.sessions import get_user_by_session_id
from app.config import get_settings
from app.core.exceptions import UnauthorizedException
from app.dependencies import DbSession
from app.models.user import User, UserSession

settings = get_settings()


def get_session_token(request: Request) -> str | None:
    """Read the session token from the request cookies."""
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


SessionToken = Annotated[str | None, Depends(get_session_token)]


async def get_optional_user(db: DbSession, session_id: SessionToken) -> User | None:
    """
    Dependency to optionally get the current user.
    Returns None if the cookie is missing, unknown or expired.

    Handlers that must validate their input before revealing anything
    about authorization use this and raise themselves.
    """
    return await get_user_by_session_id(db, session_id)


async def get_current_user(db: DbSession, session_id: SessionToken) -> User:
    """
    Dependency to get the current authenticated user.

    Raises:
        UnauthorizedException: If no valid session is presented
    """
    user = await get_user_by_session_id(db, session_id)
    if user is None:
        raise UnauthorizedException()
    return user


def set_session_cookie(response: Response, session: UserSession) -> None:
    """Attach the session cookie (httpOnly, secure, cross-site)."""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session.id,
        max_age=settings.SESSION_LIFETIME_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=True,
        samesite="none",
    )


# Type aliases for dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[User | None, Depends(get_optional_user)]
