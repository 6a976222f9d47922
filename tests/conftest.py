"""
Pytest configuration and fixtures for Asset Warehouse API tests.
"""

import os

# Cheap hashes and deterministic storage settings, before app modules load settings
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SPACES_BUCKET_NAME", "test-bucket")

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from app.auth.passwords import hash_password
from app.config import get_settings
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models import Asset, User, UserSession
from app.storage import S3StorageBackend, get_storage

SESSION_COOKIE = get_settings().SESSION_COOKIE_NAME
DEFAULT_PASSWORD = "correct horse battery staple"


@pytest_asyncio.fixture(scope="function")
async def db_engine(tmp_path):
    """Create a throwaway SQLite database engine."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def test_storage() -> S3StorageBackend:
    """S3 gateway with dummy credentials; presigning never leaves the process."""
    return S3StorageBackend(
        endpoint_url="https://nyc3.digitaloceanspaces.com",
        access_key="test-access-key",
        secret_key="test-secret-key",
        bucket_name="test-bucket",
        region="us-east-1",
    )


@pytest_asyncio.fixture(scope="function")
async def client(db_session, test_storage) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""

    async def override_get_db():
        yield db_session
        await db_session.commit()

    def override_get_storage():
        return test_storage

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = override_get_storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def user_factory(db_session) -> Callable[..., Awaitable[User]]:
    """Insert users directly, bypassing the signup endpoint."""

    async def _create(
        username: str | None = None,
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
    ) -> User:
        suffix = uuid4().hex[:8]
        user = User(
            username=username or f"user_{suffix}",
            email=email or f"user_{suffix}@example.com",
            password_hash=await hash_password(password),
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _create


@pytest_asyncio.fixture
async def session_factory(db_session) -> Callable[..., Awaitable[str]]:
    """Insert a session row and return its token."""

    async def _create(user_id: int, expires_in: timedelta = timedelta(days=7)) -> str:
        token = str(uuid4())
        db_session.add(
            UserSession(
                id=token,
                user_id=user_id,
                expiration=datetime.now(timezone.utc) + expires_in,
            )
        )
        await db_session.commit()
        return token

    return _create


@pytest_asyncio.fixture
async def asset_factory(db_session) -> Callable[..., Awaitable[int]]:
    """Insert a catalog row and return its id."""

    async def _create(
        created_by: int,
        name: str = "teapot",
        description: str = "A wonderful teapot",
        views: int = 0,
        is_public: bool = True,
        tags: list[str] | None = None,
    ) -> int:
        asset = Asset(
            name=name,
            description=description,
            file_url=f"https://test-bucket.example.com/assets/{created_by}/{name}.obj",
            thumbnail_url=f"https://test-bucket.example.com/thumbnails/{created_by}/{name}.jpg",
            created_by=created_by,
            tags=tags or [],
            is_public=is_public,
            downloads=0,
            views=views,
        )
        db_session.add(asset)
        await db_session.commit()
        return asset.id

    return _create


@pytest_asyncio.fixture
async def auth_headers(session_factory) -> Callable[..., Awaitable[dict[str, str]]]:
    """
    Open a session for a user and return the Cookie header carrying it.

    The cookie is marked secure, so the client would not replay it over
    http://test on its own.
    """

    async def _headers(user_id: int, expires_in: timedelta = timedelta(days=7)) -> dict[str, str]:
        token = await session_factory(user_id, expires_in)
        return {"Cookie": f"{SESSION_COOKIE}={token}"}

    return _headers
