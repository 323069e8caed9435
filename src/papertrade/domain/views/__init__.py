"""View models for service outputs."""

from papertrade.domain.views.portfolio import (
    Quote,
    FillResult,
    TradeResult,
    PositionView,
    PortfolioValueView,
    LeaderboardEntry,
    LikeResult,
    FeedItem,
)

__all__ = [
    "Quote",
    "FillResult",
    "TradeResult",
    "PositionView",
    "PortfolioValueView",
    "LeaderboardEntry",
    "LikeResult",
    "FeedItem",
]
