"""
JWT-style token creation and verification.

Tokens are base64-encoded JSON payloads signed with HMAC-SHA256.
Secret key is loaded from ``config.jwt_secret`` (env var: ``JWT_SECRET``),
lifetime from ``config.jwt_expiry_seconds`` (one hour by default).
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from base64 import b64decode, b64encode
from typing import Any, Dict, Optional

from api.errors import AuthError
from config.settings import config


def _sign(raw: bytes) -> str:
    return hmac.new(config.jwt_secret.encode(), raw, hashlib.sha256).hexdigest()


def create_token(claims: Dict[str, Any], issued_at: Optional[float] = None) -> str:
    """Create a signed token carrying ``claims`` and an ``exp`` timestamp."""
    now = time.time() if issued_at is None else issued_at
    payload = dict(claims)
    payload["exp"] = int(now) + config.jwt_expiry_seconds
    raw = json.dumps(payload).encode()
    return b64encode(raw).decode() + "." + _sign(raw)


def verify_token(token: str) -> Dict[str, Any]:
    """
    Verify token and return its claims (``exp`` included).

    Raises ``AuthError`` (401) on malformed, tampered or expired tokens.
    """
    try:
        encoded, sig = token.split(".", 1)
        raw = b64decode(encoded, validate=True)
    except ValueError as exc:
        raise AuthError() from exc
    if not hmac.compare_digest(sig.encode(), _sign(raw).encode()):
        raise AuthError()
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise AuthError() from exc
    if not isinstance(payload, dict) or payload.get("exp", 0) < time.time():
        raise AuthError()
    return payload
