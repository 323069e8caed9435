"""Position accounting: weighted-average cost on buys, unchanged cost on sells."""

from decimal import Decimal
from typing import Optional

from papertrade.core.exceptions import InsufficientHoldingsError, InvalidOrderError
from papertrade.domain.models import Fill, OrderSide, Position

# Average cost is stored with 10 decimal places; quantize here so the value
# computed is exactly the value persisted.
AVERAGE_COST_QUANTUM = Decimal("1E-10")


class PositionAccountant:
    """
    Pure computation of the next position state for a fill.

    Holds no state: identical inputs always give identical outputs.
    """

    def apply(
        self,
        user_id: str,
        existing: Optional[Position],
        fill: Fill,
    ) -> Optional[Position]:
        """
        Return the position after applying a fill.

        Buy: quantity grows and average cost becomes the quantity-weighted
        mean of the old cost basis and the fill price.
        Sell: quantity shrinks and average cost is unchanged.
        Returns None when the resulting quantity is zero (delete the row).

        Raises:
            InsufficientHoldingsError: selling more than is held.
        """
        if fill.quantity <= 0:
            raise InvalidOrderError(f"Fill quantity must be positive, got {fill.quantity}")

        held_quantity = existing.quantity if existing else 0
        held_cost = existing.average_cost if existing else Decimal("0")

        if fill.side == OrderSide.BUY:
            new_quantity = held_quantity + fill.quantity
            if existing is None:
                new_average_cost = fill.price
            else:
                total_cost = held_cost * held_quantity + fill.price * fill.quantity
                new_average_cost = total_cost / new_quantity
        else:
            new_quantity = held_quantity - fill.quantity
            if new_quantity < 0:
                raise InsufficientHoldingsError(fill.symbol, fill.quantity, held_quantity)
            new_average_cost = held_cost

        if new_quantity == 0:
            return None

        return Position(
            user_id=user_id,
            symbol=fill.symbol,
            quantity=new_quantity,
            average_cost=new_average_cost.quantize(AVERAGE_COST_QUANTUM),
        )

    def realized_pnl(self, existing: Optional[Position], fill: Fill) -> Decimal:
        """
        Profit or loss realized by a sell: quantity x (fill price - average cost).

        Buys realize nothing. Derived on demand, never persisted.
        """
        if fill.side == OrderSide.BUY or existing is None:
            return Decimal("0")
        return (fill.price - existing.average_cost) * fill.quantity
