"""
User service - Business logic for signup and login.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.passwords import hash_password, verify_password
from app.auth.sessions import create_session
from app.core.exceptions import (
    InvalidCredentialsException,
    UniqueViolationException,
    UserNotFoundException,
)
from app.models.user import User, UserSession
from app.schemas.user import SignupRequest

logger = logging.getLogger(__name__)

# Constraint names as declared on User, with the column each one guards.
# SQLite reports the column ("users.email"), PostgreSQL the constraint name.
_UNIQUE_FIELDS = {
    "username": ("unique_username", "users.username"),
    "email": ("unique_email", "users.email"),
}


def unique_violation_field(error: IntegrityError) -> str | None:
    """
    Name the column behind a unique-constraint violation.

    Returns:
        "username", "email", or None when the error is something else
    """
    message = str(error.orig)
    for field, markers in _UNIQUE_FIELDS.items():
        if any(marker in message for marker in markers):
            return field
    return None


class UserService:
    """Service class for account operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> User | None:
        query = select(User).where(User.email == email)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def register(self, data: SignupRequest) -> tuple[User, UserSession]:
        """
        Create a user and log them in.

        Args:
            data: Signup payload

        Returns:
            Tuple of (new user, new session)

        Raises:
            UniqueViolationException: If username or email is taken
        """
        password_hash = await hash_password(data.password)

        user = User(
            username=data.username,
            email=data.email,
            password_hash=password_hash,
        )
        self.db.add(user)

        try:
            await self.db.flush()
        except IntegrityError as e:
            await self.db.rollback()
            field = unique_violation_field(e)
            logger.warning(f"Signup rejected, duplicate {field or 'value'}")
            raise UniqueViolationException(field)

        await self.db.refresh(user)
        session = await create_session(self.db, user.id)

        logger.info(f"Registered user {user.id}")
        return user, session

    async def authenticate(self, email: str, password: str) -> tuple[User, UserSession]:
        """
        Verify credentials and open a new session.

        Args:
            email: Login email
            password: Plain-text password

        Returns:
            Tuple of (user, new session)

        Raises:
            UserNotFoundException: If no user has this email
            InvalidCredentialsException: If the password does not match
        """
        user = await self.get_by_email(email)
        if user is None:
            raise UserNotFoundException()

        if not await verify_password(password, user.password_hash):
            raise InvalidCredentialsException()

        session = await create_session(self.db, user.id)
        return user, session
