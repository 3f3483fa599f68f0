"""
Document models for the ``users`` and ``cars`` collections.

MongoDB keys documents by ``_id`` (an ObjectId); the models expose it as a
plain string ``id`` and leave it out when writing.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel


class _Document(BaseModel):
    id: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]):
        data = dict(doc)
        if "_id" in data:
            data["id"] = str(data.pop("_id"))
        return cls.model_validate(data)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"id"})


class User(_Document):
    full_name: str
    email: str
    username: str
    password_hash: str


class Car(_Document):
    name: str
    price_per_day: Union[int, float]
    year: int
    color: str
    steering_type: str
    number_of_seats: int
