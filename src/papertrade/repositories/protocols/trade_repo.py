"""Trade log repository protocol."""

from typing import Protocol, Optional

from papertrade.domain.models import Trade


class TradeRepository(Protocol):
    """Interface for the append-only trade log."""

    def append(self, trade: Trade) -> Trade:
        """Append a trade. There is no update or delete."""
        ...

    def list_for_user(self, user_id: str, limit: Optional[int] = None) -> list[Trade]:
        """List a user's trades, oldest first."""
        ...

    def count_for_user(self, user_id: str) -> int:
        """Number of trades recorded for a user."""
        ...
