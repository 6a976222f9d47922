"""
Asset SQLAlchemy model.
One row per uploaded model + thumbnail pair.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    JSON,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

if TYPE_CHECKING:
    from app.models.user import User


class Asset(Base):
    """
    3D asset catalog entry.

    The object bytes live in the bucket; the row only records where.
    ``views`` and ``downloads`` are read here but incremented elsewhere.
    """
    __tablename__ = "assets"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="Human-readable asset name",
    )
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )
    file_url: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        comment="Public URL of the model object",
    )
    thumbnail_url: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        comment="Public URL of the thumbnail object",
    )
    created_by: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owner user id",
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
        onupdate=func.now(),
    )
    tags: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )
    is_public: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True,
    )
    downloads: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    views: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        index=True,
    )

    owner: Mapped["User"] = relationship("User", back_populates="assets")

    def __repr__(self) -> str:
        return f"<Asset(id={self.id}, name={self.name}, created_by={self.created_by})>"
