"""
Persistence service for users and rental cars.

``CarRentalStore`` is the interface the route handlers depend on.
``MongoStore`` implements it over a Motor (async MongoDB) database handle;
one instance is created per app and shared by every request.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError, OperationFailure, PyMongoError

from api.errors import ConflictError, DependencyError
from database.models import Car, User

logger = logging.getLogger(__name__)

USERS = "users"
CARS = "cars"


class CarRentalStore(ABC):
    """Storage operations used by the HTTP handlers."""

    async def connect(self) -> None:
        """Open connections and prepare collections."""

    async def close(self) -> None:
        """Release connections."""

    @abstractmethod
    async def insert_user(self, user: User) -> str:
        """Persist ``user`` and return its new id.

        Raises ``ConflictError`` if the email or username is taken.
        """

    @abstractmethod
    async def find_user_by_username(self, username: str) -> Optional[User]:
        ...

    @abstractmethod
    async def find_user_by_email_or_username(self, email: str, username: str) -> Optional[User]:
        ...

    @abstractmethod
    async def insert_car(self, car: Car) -> str:
        ...

    @abstractmethod
    async def list_cars(self, filters: Dict[str, Any]) -> List[Car]:
        """Return cars matching every key in ``filters`` exactly, cheapest first."""


class MongoStore(CarRentalStore):
    def __init__(
        self,
        uri: str,
        db_name: str,
        *,
        timeout_ms: int = 5000,
        client: Optional[AsyncIOMotorClient] = None,
    ) -> None:
        self._uri = uri
        self._db_name = db_name
        self._timeout_ms = timeout_ms
        self._client = client
        self._db = client[db_name] if client is not None else None

    @property
    def connected(self) -> bool:
        return self._db is not None

    async def connect(self) -> None:
        if self._client is None:
            self._client = AsyncIOMotorClient(self._uri, serverSelectionTimeoutMS=self._timeout_ms)
        try:
            await self._client.admin.command("ping")
        except PyMongoError:
            # Requests will answer 500 "Database not connected" until restart.
            logger.exception("MongoDB connection error")
            self._db = None
            return
        db = self._client[self._db_name]
        try:
            await db[USERS].create_index([("email", ASCENDING)], unique=True)
            await db[USERS].create_index([("username", ASCENDING)], unique=True)
        except OperationFailure:
            # Fails when the collection already holds duplicate emails or usernames.
            logger.exception("Could not build unique indexes on %r", USERS)
        self._db = db
        logger.info("Connected to MongoDB database %r", self._db_name)

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()
        self._client = None
        self._db = None

    def _collection(self, name: str):
        if self._db is None:
            raise DependencyError("Database not connected")
        return self._db[name]

    async def insert_user(self, user: User) -> str:
        users = self._collection(USERS)
        try:
            result = await users.insert_one(user.to_document())
        except DuplicateKeyError as exc:
            raise ConflictError() from exc
        except PyMongoError as exc:
            raise DependencyError() from exc
        return str(result.inserted_id)

    async def find_user_by_username(self, username: str) -> Optional[User]:
        return await self._find_user({"username": username})

    async def find_user_by_email_or_username(self, email: str, username: str) -> Optional[User]:
        return await self._find_user({"$or": [{"email": email}, {"username": username}]})

    async def _find_user(self, query: Dict[str, Any]) -> Optional[User]:
        users = self._collection(USERS)
        try:
            doc = await users.find_one(query)
        except PyMongoError as exc:
            raise DependencyError() from exc
        return User.from_document(doc) if doc else None

    async def insert_car(self, car: Car) -> str:
        cars = self._collection(CARS)
        try:
            result = await cars.insert_one(car.to_document())
        except PyMongoError as exc:
            raise DependencyError() from exc
        return str(result.inserted_id)

    async def list_cars(self, filters: Dict[str, Any]) -> List[Car]:
        cars = self._collection(CARS)
        try:
            cursor = cars.find(dict(filters)).sort("price_per_day", ASCENDING)
            docs = await cursor.to_list(length=None)
        except PyMongoError as exc:
            raise DependencyError() from exc
        return [Car.from_document(doc) for doc in docs]
