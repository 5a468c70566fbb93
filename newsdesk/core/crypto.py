"""Utilities for password hashing and verification."""

from __future__ import annotations

import bcrypt

DEFAULT_ROUNDS = 12


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash plain text password using bcrypt with a fresh salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a plain text password against a stored bcrypt hash.

    Returns ``False`` instead of raising when no hash is stored or the stored
    value is not a bcrypt hash.
    """
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


__all__ = ["DEFAULT_ROUNDS", "hash_password", "verify_password"]
