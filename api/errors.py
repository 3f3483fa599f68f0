"""
Application error taxonomy.

Every error carries the HTTP status and the message returned to the client
as ``{"message": ...}``.  Handlers in ``api.middleware`` do the conversion.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict


class AppError(Exception):
    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
    message: str = "Internal Server Error"

    def __init__(self, message: str | None = None, *, status: HTTPStatus | None = None) -> None:
        if message is not None:
            self.message = message
        if status is not None:
            self.status = status
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message}


class ValidationError(AppError):
    """Missing or malformed input."""

    status = HTTPStatus.BAD_REQUEST
    message = "Missing required fields"


class ConflictError(AppError):
    """A user with the same email or username already exists."""

    status = HTTPStatus.BAD_REQUEST
    message = "Email or username already in use"


class AuthError(AppError):
    """Missing, invalid or expired token, or bad login credentials."""

    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid or expired token"


class DependencyError(AppError):
    """The database is unreachable or an operation on it failed."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR
    message = "Internal Server Error"
