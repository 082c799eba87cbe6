"""Password hashing helpers.

bcrypt salts every hash individually and embeds the cost factor in it, so
verification needs nothing but the stored hash.
"""

import asyncio
import logging

import bcrypt

from organiza.core.config import settings


logger = logging.getLogger(__name__)


def hash_password(raw_password: str, *, rounds: int | None = None) -> str:
    """Hash a plaintext password using bcrypt."""
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(raw_password.encode("utf-8"), salt).decode("utf-8")


def verify_password(raw_password: str, hashed_password: str) -> bool:
    """Verify that a raw password matches its hashed stored version."""
    try:
        return bcrypt.checkpw(raw_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError as e:
        # Malformed hash or password beyond bcrypt's 72-byte input limit
        logger.warning("password_verify_rejected", extra={"error": str(e)})
        return False


async def hash_password_async(raw_password: str, *, rounds: int | None = None) -> str:
    """Hash in a worker thread so the event loop keeps serving requests."""
    return await asyncio.to_thread(hash_password, raw_password, rounds=rounds)


async def verify_password_async(raw_password: str, hashed_password: str) -> bool:
    """Verify in a worker thread; same result as ``verify_password``."""
    return await asyncio.to_thread(verify_password, raw_password, hashed_password)
