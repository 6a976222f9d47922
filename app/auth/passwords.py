"""
bcrypt password hashing.
Hashing is CPU bound, so both helpers run in the threadpool.
"""

import bcrypt
from starlette.concurrency import run_in_threadpool

from app.config import get_settings
from app.core.exceptions import ValidationException

settings = get_settings()

# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationException(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
            details={"field": "password"},
        )
    return encoded


async def hash_password(password: str, rounds: int | None = None) -> str:
    """
    Hash a password with a fresh salt.

    Args:
        password: Plain-text password
        rounds: bcrypt work factor, defaults to BCRYPT_ROUNDS

    Returns:
        The bcrypt hash as text ("$2b$10$...")
    """
    encoded = _encode(password)
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    hashed = await run_in_threadpool(bcrypt.hashpw, encoded, salt)
    return hashed.decode("utf-8")


async def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a password against a stored hash.

    Uses bcrypt's own comparison, which is constant time.
    """
    try:
        encoded = _encode(password)
    except ValidationException:
        return False
    return await run_in_threadpool(bcrypt.checkpw, encoded, password_hash.encode("utf-8"))
