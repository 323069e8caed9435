"""Pydantic schemas for portfolio and leaderboard endpoints."""

from decimal import Decimal

from pydantic import BaseModel


class PositionResponse(BaseModel):
    """Response schema for a single valued position."""

    model_config = {"from_attributes": True}

    symbol: str
    quantity: int
    average_cost: Decimal
    last_price: Decimal
    market_value: Decimal
    unrealized_pnl: Decimal
    priced: bool


class PortfolioResponse(BaseModel):
    """Response schema for a user's portfolio value."""

    model_config = {"from_attributes": True}

    user_id: str
    balance: Decimal
    positions: list[PositionResponse]
    total_value: Decimal


class LeaderboardEntryResponse(BaseModel):
    model_config = {"from_attributes": True}

    rank: int
    user_id: str
    username: str
    total_value: Decimal
    gain_loss: Decimal


class LeaderboardResponse(BaseModel):
    """Response schema for the leaderboard."""

    entries: list[LeaderboardEntryResponse]
    count: int
