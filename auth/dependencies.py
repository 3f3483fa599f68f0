"""
FastAPI dependencies for authentication.

Provides ``get_current_user``, used by every protected route.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Header

from api.errors import AuthError
from auth.jwt import verify_token
from auth.models import TokenClaims


async def get_current_user(
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> TokenClaims:
    """
    Extract and verify the token from the Authorization header and return
    the identity claims it carries.  The ``Bearer `` prefix is optional.
    """
    if not authorization:
        raise AuthError("Access denied. No token provided.")
    token = authorization[7:] if authorization.startswith("Bearer ") else authorization
    payload = verify_token(token.strip())
    try:
        return TokenClaims.model_validate(payload)
    except ValueError as exc:
        raise AuthError() from exc
