"""
Database engine and session management for async SQLAlchemy.
PostgreSQL is the default, with a SQLite fallback for dev.

The engine is built during the application lifespan and stored on
``app.state``; requests obtain their session through ``get_db``.
"""

import logging
import ssl
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.config import Settings

logger = logging.getLogger(__name__)


def resolve_database_url(settings: Settings) -> str:
    """
    Pick the database URL: explicit DATABASE_URL, otherwise the SQLite
    fallback when it is enabled.
    """
    if settings.DATABASE_URL:
        return settings.DATABASE_URL
    if settings.USE_SQLITE_FALLBACK:
        logger.warning(f"[DEV] DATABASE_URL not set, using SQLite fallback {settings.SQLITE_FALLBACK_URL}")
        return settings.SQLITE_FALLBACK_URL
    raise RuntimeError("DATABASE_URL is not set and the SQLite fallback is disabled")


def build_ssl_context(settings: Settings) -> ssl.SSLContext | None:
    """Build a verifying TLS context from the configured CA bundle, if any."""
    if settings.DATABASE_SSL_CA:
        return ssl.create_default_context(cadata=settings.DATABASE_SSL_CA)
    if settings.DATABASE_SSL_CA_FILE:
        return ssl.create_default_context(cafile=settings.DATABASE_SSL_CA_FILE)
    return None


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine with a bounded connection pool."""
    database_url = resolve_database_url(settings)

    if database_url.startswith("sqlite"):
        engine = create_async_engine(
            database_url,
            echo=settings.DEBUG,
            connect_args={"check_same_thread": False},
        )

        # SQLite does NOT enforce foreign keys by default.
        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    connect_args = {}
    ssl_context = build_ssl_context(settings)
    if ssl_context is not None:
        connect_args["ssl"] = ssl_context

    return create_async_engine(
        database_url,
        echo=settings.DEBUG,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the given engine."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.
    Commits on success, rolls back on any error.

    Usage:
        @app.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    session_factory = request.app.state.sessionmaker
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
