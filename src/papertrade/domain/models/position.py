"""Position domain model."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Position:
    """
    A user's current holding in one symbol.

    Quantity is always positive for a stored position; a flat holding is
    represented by the absence of a Position, never by a zero row.
    """

    user_id: str
    symbol: str
    quantity: int
    average_cost: Decimal

    @property
    def cost_basis(self) -> Decimal:
        """Total amount paid for the shares still held."""
        return self.average_cost * self.quantity
