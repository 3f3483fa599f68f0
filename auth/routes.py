"""
Auth API routes — register, login, my-profile.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from api.dependencies import get_store
from api.errors import AuthError, ConflictError, ValidationError
from auth.dependencies import get_current_user
from auth.jwt import create_token
from auth.models import TokenClaims, User
from auth.password import hash_password, verify_password
from database.store import CarRentalStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Request / response schemas ─────────────────────────────────────────


class RegisterRequest(BaseModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None


class RegisterResponse(BaseModel):
    message: str
    userId: str


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    message: str
    token: str


class ProfileResponse(BaseModel):
    full_name: str
    username: str
    email: str


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    store: CarRentalStore = Depends(get_store),
) -> Dict[str, Any]:
    """Register a new user."""
    if not (req.full_name and req.email and req.username and req.password):
        raise ValidationError("All fields are required")

    # The unique indexes catch whatever slips past this check.
    if await store.find_user_by_email_or_username(req.email, req.username) is not None:
        raise ConflictError()

    user = User(
        full_name=req.full_name,
        email=req.email,
        username=req.username,
        password_hash=hash_password(req.password),
    )
    user_id = await store.insert_user(user)
    logger.info("Registered user %s (%s)", req.username, user_id)

    return {"message": "User registered successfully", "userId": user_id}


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    store: CarRentalStore = Depends(get_store),
) -> Dict[str, Any]:
    """Login with username + password."""
    if not (req.username and req.password):
        raise ValidationError("Username and password are required")

    user = await store.find_user_by_username(req.username)
    if user is None:
        raise AuthError("Invalid username", status=HTTPStatus.BAD_REQUEST)
    if not verify_password(req.password, user.password_hash):
        raise AuthError("Invalid password", status=HTTPStatus.BAD_REQUEST)

    token = create_token(TokenClaims.for_user(user).model_dump(exclude={"exp"}))
    logger.info("Login: %s (%s)", user.username, user.id)

    return {"message": "Login successful", "token": token}


@router.get("/my-profile", response_model=ProfileResponse)
async def my_profile(claims: TokenClaims = Depends(get_current_user)) -> Dict[str, Any]:
    """Echo the identity carried by the caller's token."""
    return {
        "full_name": claims.full_name,
        "username": claims.username,
        "email": claims.email,
    }
