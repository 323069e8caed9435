"""Position repository protocol."""

from typing import Protocol, Optional

from papertrade.domain.models import Position


class PositionRepository(Protocol):
    """Interface for per-user-per-symbol holdings."""

    def get(self, user_id: str, symbol: str, for_update: bool = False) -> Optional[Position]:
        """Get the position for a symbol, if any."""
        ...

    def list_for_user(self, user_id: str) -> list[Position]:
        """List a user's positions ordered by symbol."""
        ...

    def list_all(self) -> list[Position]:
        """List every stored position."""
        ...

    def save(self, position: Position) -> Position:
        """Insert or update a position."""
        ...

    def delete(self, user_id: str, symbol: str) -> None:
        """Remove a position (no-op when absent)."""
        ...
