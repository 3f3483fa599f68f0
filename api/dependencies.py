"""
FastAPI dependencies (shared across routes).
"""

from __future__ import annotations

from fastapi import Request

from database.store import CarRentalStore


def get_store(request: Request) -> CarRentalStore:
    """Return the persistence service attached to the app at creation time."""
    return request.app.state.store
