"""Models used by authentication code: the stored ``User`` and the token claims."""

from __future__ import annotations

from pydantic import BaseModel

from database.models import User  # noqa: F401


class TokenClaims(BaseModel):
    userId: str
    full_name: str
    username: str
    email: str
    exp: int = 0

    @classmethod
    def for_user(cls, user: User) -> "TokenClaims":
        return cls(
            userId=user.id or "",
            full_name=user.full_name,
            username=user.username,
            email=user.email,
        )


__all__ = ["TokenClaims", "User"]
