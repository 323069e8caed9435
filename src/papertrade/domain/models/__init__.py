"""Domain models package."""

from papertrade.domain.models.enums import OrderSide
from papertrade.domain.models.user import User
from papertrade.domain.models.position import Position
from papertrade.domain.models.trade import Order, Fill, Trade
from papertrade.domain.models.post import Post, Like

__all__ = [
    "OrderSide",
    "User",
    "Position",
    "Order",
    "Fill",
    "Trade",
    "Post",
    "Like",
]
