"""Pydantic schemas for API request/response."""

from papertrade.api.schemas.user import (
    UserCreateRequest,
    UserResponse,
    UserCreateResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
)
from papertrade.api.schemas.trade import (
    TradeRequest,
    TradeResultResponse,
    TradeResponse,
    TradeListResponse,
)
from papertrade.api.schemas.portfolio import (
    PositionResponse,
    PortfolioResponse,
    LeaderboardEntryResponse,
    LeaderboardResponse,
)
from papertrade.api.schemas.feed import (
    FeedItemResponse,
    FeedResponse,
    LikeResponse,
)

__all__ = [
    "UserCreateRequest",
    "UserResponse",
    "UserCreateResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "TradeRequest",
    "TradeResultResponse",
    "TradeResponse",
    "TradeListResponse",
    "PositionResponse",
    "PortfolioResponse",
    "LeaderboardEntryResponse",
    "LeaderboardResponse",
    "FeedItemResponse",
    "FeedResponse",
    "LikeResponse",
]
