"""Pydantic schemas for feed endpoints."""

from datetime import datetime

from pydantic import BaseModel

from papertrade.domain.models import OrderSide


class FeedItemResponse(BaseModel):
    """Response schema for one post in the feed."""

    model_config = {"from_attributes": True}

    post_id: str
    user_id: str
    username: str
    symbol: str
    quantity: int
    side: OrderSide
    rationale: str
    created_at: datetime
    like_count: int
    liked_by_viewer: bool


class FeedResponse(BaseModel):
    """Response schema for the feed listing."""

    posts: list[FeedItemResponse]
    count: int


class LikeResponse(BaseModel):
    """Like state after a toggle."""

    model_config = {"from_attributes": True}

    post_id: str
    like_count: int
    liked: bool
