"""
Shared fixtures: an in-memory store and a TestClient built around it.
"""

from __future__ import annotations

import itertools
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from api.errors import ConflictError, DependencyError
from config.settings import config
from database.models import Car, User
from database.store import CarRentalStore
from main import create_app


class InMemoryStore(CarRentalStore):
    """Dict-backed store with the same uniqueness rules as the Mongo indexes."""

    def __init__(self) -> None:
        self.users: Dict[str, User] = {}
        self.cars: Dict[str, Car] = {}
        self.available = True
        self._ids = itertools.count(1)

    def _check(self) -> None:
        if not self.available:
            raise DependencyError("Database not connected")

    def _next_id(self) -> str:
        return f"{next(self._ids):024x}"

    async def insert_user(self, user: User) -> str:
        self._check()
        for existing in self.users.values():
            if existing.email == user.email or existing.username == user.username:
                raise ConflictError()
        user_id = self._next_id()
        self.users[user_id] = user.model_copy(update={"id": user_id})
        return user_id

    async def find_user_by_username(self, username: str) -> Optional[User]:
        self._check()
        return next((u for u in self.users.values() if u.username == username), None)

    async def find_user_by_email_or_username(self, email: str, username: str) -> Optional[User]:
        self._check()
        return next(
            (u for u in self.users.values() if u.email == email or u.username == username),
            None,
        )

    async def insert_car(self, car: Car) -> str:
        self._check()
        car_id = self._next_id()
        self.cars[car_id] = car.model_copy(update={"id": car_id})
        return car_id

    async def list_cars(self, filters: Dict[str, Any]) -> List[Car]:
        self._check()
        matches = [
            car for car in self.cars.values()
            if all(getattr(car, key) == value for key, value in filters.items())
        ]
        return sorted(matches, key=lambda car: car.price_per_day)


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    monkeypatch.setattr(config, "bcrypt_rounds", 4)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def client(store):
    with TestClient(create_app(store=store)) as test_client:
        yield test_client


@pytest.fixture
def alice() -> Dict[str, Any]:
    return {
        "full_name": "Alice Smith",
        "email": "alice@example.com",
        "username": "alice",
        "password": "s3cret-pass",
    }


@pytest.fixture
def civic() -> Dict[str, Any]:
    return {
        "name": "Civic",
        "price_per_day": 40,
        "year": 2022,
        "color": "red",
        "steering_type": "left",
        "number_of_seats": 5,
    }
