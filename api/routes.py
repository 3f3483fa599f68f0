"""
Rental car routes: create and list.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from api.dependencies import get_store
from api.errors import ValidationError
from database.models import Car
from database.store import CarRentalStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["cars"])


class CarRequest(BaseModel):
    name: Optional[str] = None
    price_per_day: Optional[Union[int, float]] = None
    year: Optional[int] = None
    color: Optional[str] = None
    steering_type: Optional[str] = None
    number_of_seats: Optional[int] = None


class CarCreatedResponse(BaseModel):
    message: str
    carId: str


def build_car_filter(
    year: Optional[int] = None,
    color: Optional[str] = None,
    steering_type: Optional[str] = None,
    number_of_seats: Optional[int] = None,
) -> Dict[str, Any]:
    """Match criteria for the given query values; empty ones are left out."""
    candidates = {
        "year": year,
        "color": color,
        "steering_type": steering_type,
        "number_of_seats": number_of_seats,
    }
    return {key: value for key, value in candidates.items() if value}


def _parse_int(name: str, value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"Invalid {name}") from None


@router.post("/cars", response_model=CarCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_car(
    req: CarRequest,
    store: CarRentalStore = Depends(get_store),
) -> Dict[str, Any]:
    """Add a car to the rental fleet."""
    fields = req.model_dump()
    # Zero is rejected along with absent values.
    if not all(fields.values()):
        raise ValidationError("Missing required fields")

    car_id = await store.insert_car(Car(**fields))
    logger.info("Added car %s (%s)", req.name, car_id)
    return {"message": "Car added successfully", "carId": car_id}


@router.get("/rental-cars", response_model=List[Car])
async def list_rental_cars(
    year: Optional[str] = Query(None),
    color: Optional[str] = Query(None),
    steering_type: Optional[str] = Query(None),
    number_of_seats: Optional[str] = Query(None),
    store: CarRentalStore = Depends(get_store),
) -> List[Car]:
    """List cars, cheapest first, optionally filtered."""
    filters = build_car_filter(
        _parse_int("year", year),
        color,
        steering_type,
        _parse_int("number_of_seats", number_of_seats),
    )
    return await store.list_cars(filters)
