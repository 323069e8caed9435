"""Domain layer - pure business models with no external dependencies."""

from papertrade.domain.models import (
    OrderSide,
    User,
    Position,
    Order,
    Fill,
    Trade,
    Post,
    Like,
)

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
