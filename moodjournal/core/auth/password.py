"""Password hashing helpers (bcrypt via Flask-Bcrypt)."""

from __future__ import annotations

from typing import Optional

from moodjournal.extensions import bcrypt


def hash_password(plain_password: str) -> str:
    return bcrypt.generate_password_hash(plain_password).decode("utf-8")


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Constant-time comparison of a plaintext password against a stored hash.

    Rows with an empty or malformed hash never authenticate.
    """
    if not hashed_password:
        return False
    try:
        return bcrypt.check_password_hash(hashed_password, plain_password)
    except ValueError:
        return False
