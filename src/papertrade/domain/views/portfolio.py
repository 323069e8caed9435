"""View models for service outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from papertrade.domain.models import OrderSide, Position, Trade


@dataclass
class Quote:
    """Market quote data for a symbol."""

    symbol: str
    last_price: Decimal
    as_of: datetime
    prev_close: Optional[Decimal] = None


@dataclass
class FillResult:
    """State of the ledger after recording one fill."""

    new_balance: Decimal
    new_position: Optional[Position]
    trade: Trade


@dataclass
class TradeResult:
    """Outcome of an executed order, returned to the caller."""

    new_balance: Decimal
    trade_id: str
    post_id: str
    symbol: str
    quantity: int
    side: OrderSide
    price: Decimal
    executed_at: datetime


@dataclass
class PositionView:
    """View model for a single holding valued at market."""

    symbol: str
    quantity: int
    average_cost: Decimal
    last_price: Decimal
    market_value: Decimal
    unrealized_pnl: Decimal
    priced: bool = True


@dataclass
class PortfolioValueView:
    """Cash, holdings and total account value for one user."""

    user_id: str
    balance: Decimal
    positions: list[PositionView] = field(default_factory=list)
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class LeaderboardEntry:
    """One ranked row of the leaderboard."""

    rank: int
    user_id: str
    username: str
    total_value: Decimal
    gain_loss: Decimal


@dataclass
class LikeResult:
    """Like state of a post after a toggle."""

    post_id: str
    like_count: int
    liked: bool


@dataclass
class FeedItem:
    """A post as seen by a feed reader."""

    post_id: str
    user_id: str
    username: str
    symbol: str
    quantity: int
    side: OrderSide
    rationale: str
    created_at: datetime
    like_count: int = 0
    liked_by_viewer: bool = False
