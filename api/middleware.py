"""
Request timing and the JSON error responses shared by every route.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.errors import AppError, DependencyError, ValidationError

logger = logging.getLogger(__name__)

# Message for a body that fails schema parsing, keyed by route path.
_BODY_ERROR_MESSAGES = {
    "/register": "All fields are required",
    "/login": "Username and password are required",
    "/cars": "Missing required fields",
}


def register_middleware(app: FastAPI) -> None:
    """Stamp each response with its handling time."""

    @app.middleware("http")
    async def process_time_header(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - started
        response.headers["X-Process-Time"] = f"{duration:.4f}"
        logger.debug("%s %s -> %d in %.3fs", request.method, request.url.path, response.status_code, duration)
        return response


def register_exception_handlers(app: FastAPI) -> None:
    """Turn application errors into ``{"message": ...}`` JSON responses."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if isinstance(exc, DependencyError):
            logger.error(
                "Database error on %s %s: %s",
                request.method,
                request.url.path,
                exc.__cause__ or exc,
            )
        return JSONResponse(status_code=int(exc.status), content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        error = ValidationError(_BODY_ERROR_MESSAGES.get(request.url.path, "Invalid request body"))
        return JSONResponse(status_code=int(error.status), content=error.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        error = DependencyError()
        return JSONResponse(status_code=int(error.status), content=error.to_dict())
