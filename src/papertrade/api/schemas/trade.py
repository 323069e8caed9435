"""Pydantic schemas for trade endpoints."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from papertrade.domain.models import OrderSide


class TradeRequest(BaseModel):
    """
    Request schema for placing a market order.

    Side and quantity are range-checked by the executor so that bad orders
    get the same INVALID_ORDER error whichever surface they come from.
    """

    symbol: str = Field(..., max_length=20, description="Stock symbol")
    quantity: int = Field(..., description="Whole number of shares")
    side: str = Field(..., max_length=10, description="'buy' or 'sell'")
    rationale: str = Field(default="", max_length=2000, description="Shown on the feed post")

    @field_validator("symbol")
    @classmethod
    def uppercase_symbol(cls, v: str) -> str:
        return v.strip().upper()


class TradeResultResponse(BaseModel):
    """Response schema for an executed order."""

    model_config = {"from_attributes": True}

    new_balance: Decimal
    trade_id: str
    post_id: str
    symbol: str
    quantity: int
    side: OrderSide
    price: Decimal
    executed_at: datetime


class TradeResponse(BaseModel):
    """Response schema for a trade log entry."""

    model_config = {"from_attributes": True}

    trade_id: str
    symbol: str
    quantity: int
    price: Decimal
    side: OrderSide
    executed_at: datetime


class TradeListResponse(BaseModel):
    """Response schema for listing a user's trades."""

    trades: list[TradeResponse]
    count: int
