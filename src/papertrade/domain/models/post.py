"""Social feed domain models."""

from dataclasses import dataclass
from datetime import datetime

from papertrade.domain.models.enums import OrderSide


@dataclass(frozen=True)
class Post:
    """A feed entry derived from a trade, carrying the trader's rationale."""

    post_id: str
    user_id: str
    trade_id: str
    symbol: str
    quantity: int
    side: OrderSide
    rationale: str
    created_at: datetime

    def __post_init__(self) -> None:
        if isinstance(self.side, str):
            object.__setattr__(self, "side", OrderSide(self.side))


@dataclass(frozen=True)
class Like:
    """A (user, post) like; at most one per pair."""

    user_id: str
    post_id: str
    liked_at: datetime
