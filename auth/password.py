"""
bcrypt helpers for stored user passwords.

The work factor comes from ``config.bcrypt_rounds`` (``BCRYPT_ROUNDS``).
"""

from __future__ import annotations

import bcrypt

from config.settings import config


def hash_password(password: str) -> str:
    """Return the bcrypt hash saved as ``User.password_hash``."""
    salt = bcrypt.gensalt(rounds=config.bcrypt_rounds)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """True if ``password`` matches; a malformed stored hash never matches."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError):
        return False
