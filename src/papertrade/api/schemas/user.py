"""Pydantic schemas for user and session endpoints."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class UserCreateRequest(BaseModel):
    """Request schema for registering a user."""

    username: str = Field(..., min_length=1, max_length=64, description="Unique handle")
    first_name: str = Field(..., min_length=1, max_length=64)
    last_name: str = Field(..., min_length=1, max_length=64)
    email: str = Field(..., min_length=1, max_length=254, description="Unique email address")


class UserResponse(BaseModel):
    """Response schema for a single user."""

    model_config = {"from_attributes": True}

    user_id: str
    username: str
    first_name: str
    last_name: str
    email: str
    cash_balance: Decimal
    created_at: datetime


class UserCreateResponse(BaseModel):
    """Registered user plus the bearer token to act as them."""

    user: UserResponse
    token: str


class LoginRequest(BaseModel):
    """Request schema for issuing a new token to an existing user."""

    username: str = Field(..., min_length=1, max_length=64)
    email: str = Field(..., min_length=1, max_length=254)


class LoginResponse(BaseModel):
    """Freshly issued bearer token."""

    user_id: str
    token: str


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
