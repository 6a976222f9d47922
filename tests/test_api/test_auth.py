"""
Tests for signup and login endpoints.
"""

import re
from datetime import timedelta

import pytest
from httpx import AsyncClient, Response
from sqlalchemy import func, select

from app.config import get_settings
from app.models import User, UserSession

SESSION_COOKIE = get_settings().SESSION_COOKIE_NAME


def session_token_from(response: Response) -> str | None:
    """Pull the session token out of the Set-Cookie header."""
    match = re.search(rf"{SESSION_COOKIE}=([^;]+)", response.headers.get("set-cookie", ""))
    return match.group(1) if match else None


async def count_rows(db_session, column) -> int:
    result = await db_session.execute(select(func.count(column)))
    return result.scalar_one()


@pytest.fixture
def signup_data() -> dict[str, str]:
    return {
        "username": "suzanne",
        "email": "suzanne@example.com",
        "password": "monkey-head-42",
    }


@pytest.mark.asyncio
async def test_signup_returns_user_and_session_cookie(
    client: AsyncClient,
    db_session,
    signup_data: dict,
):
    """Signup creates the user, a session row, and sets the cookie."""
    response = await client.post("/signup", json=signup_data)

    assert response.status_code == 200
    data = response.json()
    assert data["username"] == "suzanne"
    assert data["email"] == "suzanne@example.com"
    assert isinstance(data["id"], int)
    assert "password" not in data and "password_hash" not in data

    token = session_token_from(response)
    assert token
    session = await db_session.get(UserSession, token)
    assert session is not None
    assert session.user_id == data["id"]


@pytest.mark.asyncio
async def test_signup_cookie_attributes(client: AsyncClient, signup_data: dict):
    """Session cookie is httpOnly, secure, cross-site and lives 7 days."""
    response = await client.post("/signup", json=signup_data)

    set_cookie = response.headers["set-cookie"].lower()
    assert "httponly" in set_cookie
    assert "secure" in set_cookie
    assert "samesite=none" in set_cookie
    assert f"max-age={7 * 24 * 60 * 60}" in set_cookie


@pytest.mark.asyncio
async def test_signup_stores_bcrypt_hash(client: AsyncClient, db_session, signup_data: dict):
    """The plain password is never persisted."""
    await client.post("/signup", json=signup_data)

    result = await db_session.execute(select(User.password_hash).where(User.email == signup_data["email"]))
    password_hash = result.scalar_one()
    assert password_hash != signup_data["password"]
    assert password_hash.startswith("$2")


@pytest.mark.asyncio
async def test_signup_duplicate_email(client: AsyncClient, db_session, signup_data: dict):
    """Second signup with the same email fails and names the email field."""
    first = await client.post("/signup", json=signup_data)
    assert first.status_code == 200

    duplicate = {**signup_data, "username": "another_name"}
    response = await client.post("/signup", json=duplicate)

    assert response.status_code == 400
    data = response.json()
    assert data["message"] == "Email already exists"
    assert data["details"]["field"] == "email"
    assert session_token_from(response) is None
    assert await count_rows(db_session, User.id) == 1


@pytest.mark.asyncio
async def test_signup_duplicate_username(client: AsyncClient, db_session, signup_data: dict):
    """Second signup with the same username fails and names the username field."""
    await client.post("/signup", json=signup_data)

    duplicate = {**signup_data, "email": "other@example.com"}
    response = await client.post("/signup", json=duplicate)

    assert response.status_code == 400
    data = response.json()
    assert data["message"] == "Username already exists"
    assert data["details"]["field"] == "username"
    assert await count_rows(db_session, User.id) == 1


@pytest.mark.asyncio
async def test_signup_missing_field(client: AsyncClient):
    """Missing fields are a validation error (400)."""
    response = await client.post("/signup", json={"username": "nobody"})

    assert response.status_code == 400
    assert response.json()["error"] == "validation_failed"


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["foo@..com", "not-an-email", "a@b", "@example.com"])
async def test_signup_rejects_malformed_email(client: AsyncClient, db_session, signup_data: dict, email: str):
    response = await client.post("/signup", json={**signup_data, "email": email})

    assert response.status_code == 400
    assert response.json()["error"] == "validation_failed"
    assert session_token_from(response) is None
    assert await count_rows(db_session, User.id) == 0


@pytest.mark.asyncio
async def test_signup_password_too_long(client: AsyncClient, signup_data: dict):
    """bcrypt input limit is enforced instead of silently truncated."""
    response = await client.post("/signup", json={**signup_data, "password": "x" * 73})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_login_with_credentials(client: AsyncClient, db_session, user_factory):
    """Correct email + password returns the user and a fresh session."""
    user = await user_factory(email="login@example.com", password="s3cret-pass")
    user_id = user.id

    response = await client.post(
        "/login",
        json={"email": "login@example.com", "password": "s3cret-pass"},
    )

    assert response.status_code == 200
    assert response.json()["id"] == user_id
    token = session_token_from(response)
    assert token
    assert await db_session.get(UserSession, token) is not None


@pytest.mark.asyncio
async def test_login_accumulates_sessions(client: AsyncClient, db_session, user_factory):
    """Every login mints a new session; earlier ones are kept."""
    await user_factory(email="repeat@example.com", password="s3cret-pass")
    credentials = {"email": "repeat@example.com", "password": "s3cret-pass"}

    first = await client.post("/login", json=credentials)
    second = await client.post("/login", json=credentials)

    assert session_token_from(first) != session_token_from(second)
    assert await count_rows(db_session, UserSession.id) == 2


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, db_session, user_factory):
    """Wrong password is 401 and writes no session row."""
    await user_factory(email="login@example.com", password="s3cret-pass")

    response = await client.post(
        "/login",
        json={"email": "login@example.com", "password": "not-it"},
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Wrong password"
    assert session_token_from(response) is None
    assert await count_rows(db_session, UserSession.id) == 0


@pytest.mark.asyncio
async def test_login_unknown_user(client: AsyncClient):
    """Unknown email is 404, distinguishable from a wrong password."""
    response = await client.post(
        "/login",
        json={"email": "ghost@example.com", "password": "whatever"},
    )

    assert response.status_code == 404
    assert response.json()["message"] == "User doesn't exist"


@pytest.mark.asyncio
async def test_login_with_session_cookie(client: AsyncClient, user_factory, auth_headers):
    """Without credentials, a valid cookie resolves to the user."""
    user = await user_factory(username="cookie_user")
    user_id = user.id
    headers = await auth_headers(user_id)

    response = await client.post("/login", headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == user_id
    assert data["username"] == "cookie_user"


@pytest.mark.asyncio
async def test_login_with_expired_session_cookie(client: AsyncClient, user_factory, auth_headers):
    """An expired cookie reports the session as expired."""
    user = await user_factory()
    headers = await auth_headers(user.id, expires_in=timedelta(minutes=-1))

    response = await client.post("/login", headers=headers)

    assert response.status_code == 400
    assert response.json()["error"] == "session_expired"


@pytest.mark.asyncio
async def test_login_without_anything(client: AsyncClient):
    """Neither credentials nor cookie is a 400."""
    response = await client.post("/login")

    assert response.status_code == 400
    assert response.json()["message"] == "No username and password or session provided"


@pytest.mark.asyncio
async def test_signup_then_login_with_cookie(client: AsyncClient, signup_data: dict):
    """The cookie handed out at signup is accepted by login."""
    signup = await client.post("/signup", json=signup_data)
    token = session_token_from(signup)

    response = await client.post("/login", headers={"Cookie": f"{SESSION_COOKIE}={token}"})

    assert response.status_code == 200
    assert response.json()["email"] == signup_data["email"]
