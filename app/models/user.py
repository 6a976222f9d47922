"""
User and UserSession SQLAlchemy models.
Credential store and session store share the same database.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

if TYPE_CHECKING:
    from app.models.asset import Asset


class User(Base):
    """
    Account entity.

    Username and email carry named unique constraints so that a violation
    can be attributed to the colliding field.
    """
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("username", name="unique_username"),
        UniqueConstraint("email", name="unique_email"),
    )

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    username: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Public display name (unique)",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Login identifier (unique)",
    )
    password_hash: Mapped[str] = mapped_column(
        String(60),
        nullable=False,
        comment="bcrypt hash including salt and work factor",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    sessions: Mapped[list["UserSession"]] = relationship(
        "UserSession",
        back_populates="user",
        lazy="noload",
    )
    assets: Mapped[list["Asset"]] = relationship(
        "Asset",
        back_populates="owner",
        lazy="noload",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"


class UserSession(Base):
    """
    Opaque session token bound to a user until ``expiration``.

    Expired rows are left in place; nothing purges them.
    """
    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Opaque session token (cookie value)",
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    expiration: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="Absolute expiry timestamp",
    )

    user: Mapped["User"] = relationship("User", back_populates="sessions")

    def is_expired(self, now: datetime | None = None) -> bool:
        """True once the current time is strictly past ``expiration``."""
        now = now or datetime.now(timezone.utc)
        expiration = self.expiration
        # SQLite hands back naive datetimes; they are stored as UTC
        if expiration.tzinfo is None:
            expiration = expiration.replace(tzinfo=timezone.utc)
        return expiration < now

    def __repr__(self) -> str:
        return f"<UserSession(user_id={self.user_id}, expiration={self.expiration})>"
