"""
Tests for bcrypt password hashing.
"""

import pytest

from app.auth.passwords import hash_password, verify_password
from app.core.exceptions import ValidationException


@pytest.mark.asyncio
async def test_hash_and_verify():
    password_hash = await hash_password("hunter2", rounds=4)

    assert password_hash.startswith("$2b$04$")
    assert len(password_hash) == 60
    assert await verify_password("hunter2", password_hash) is True
    assert await verify_password("hunter3", password_hash) is False


@pytest.mark.asyncio
async def test_hashes_are_salted():
    first = await hash_password("same", rounds=4)
    second = await hash_password("same", rounds=4)

    assert first != second


@pytest.mark.asyncio
async def test_hash_rejects_long_password():
    with pytest.raises(ValidationException):
        await hash_password("x" * 73, rounds=4)


@pytest.mark.asyncio
async def test_verify_long_password_is_false():
    password_hash = await hash_password("x" * 72, rounds=4)

    assert await verify_password("x" * 73, password_hash) is False
