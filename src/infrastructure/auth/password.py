"""Password hashing utilities using bcrypt directly."""

import bcrypt

from core.config import settings


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password with a fresh bcrypt salt."""
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8"),
        )
    except ValueError:
        return False
