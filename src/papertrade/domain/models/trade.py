"""Order, Fill and Trade domain models."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from papertrade.domain.models.enums import OrderSide


@dataclass(frozen=True)
class Order:
    """A user's request to buy or sell, before it is priced."""

    symbol: str
    quantity: int
    side: OrderSide
    rationale: str = ""


@dataclass(frozen=True)
class Fill:
    """The executed price/quantity pair resulting from one trade."""

    symbol: str
    quantity: int
    price: Decimal
    side: OrderSide

    @property
    def notional(self) -> Decimal:
        """Cash value of the fill (quantity x price)."""
        return self.price * self.quantity


@dataclass(frozen=True)
class Trade:
    """
    Immutable trade log entry.

    Trades are append-only: never updated or deleted.
    """

    trade_id: str
    user_id: str
    symbol: str
    quantity: int
    price: Decimal
    side: OrderSide
    executed_at: datetime

    def __post_init__(self) -> None:
        if isinstance(self.side, str):
            object.__setattr__(self, "side", OrderSide(self.side))
