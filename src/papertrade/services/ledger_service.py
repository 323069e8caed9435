"""Ledger service: cash balances, positions and the trade log."""

import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from papertrade.core.timezone import now_eastern
from papertrade.core.exceptions import (
    InsufficientFundsError,
    InvalidOrderError,
    UserNotFoundError,
)
from papertrade.domain.models import Fill, OrderSide, Position, Trade
from papertrade.domain.views import FillResult
from papertrade.repositories.protocols import UnitOfWork
from papertrade.services.position_accountant import PositionAccountant

logger = logging.getLogger(__name__)


class LedgerService:
    """
    Service owning user cash balances, positions and the trade log.

    The only mutation is record_fill, which updates all three inside one
    unit of work. Reads go through their own short-lived units.
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        accountant: Optional[PositionAccountant] = None,
        clock: Callable[[], datetime] = now_eastern,
    ):
        self._uow_factory = uow_factory
        self._accountant = accountant or PositionAccountant()
        self._clock = clock

    def record_fill(
        self,
        user_id: str,
        fill: Fill,
        uow: Optional[UnitOfWork] = None,
    ) -> FillResult:
        """
        Apply a priced fill to the user's balance, position and trade log.

        When ``uow`` is given the caller owns the transaction and must commit;
        this lets other writes (the feed post) join the same atomic unit.
        Otherwise a unit is opened and committed here.

        Raises:
            UserNotFoundError: user does not exist.
            InsufficientFundsError: buy costs more than the balance.
            InsufficientHoldingsError: sell exceeds the held quantity.
        """
        if uow is not None:
            return self._record_fill(uow, user_id, fill)

        with self._uow_factory() as own_uow:
            result = self._record_fill(own_uow, user_id, fill)
            own_uow.commit()
        return result

    def _record_fill(self, uow: UnitOfWork, user_id: str, fill: Fill) -> FillResult:
        if fill.quantity <= 0 or fill.price <= 0:
            raise InvalidOrderError("Fill requires positive quantity and price")

        # 1. Lock the user row for the rest of the unit
        user = uow.users.get(user_id, for_update=True)
        if user is None:
            raise UserNotFoundError(user_id)

        # 2-4. Cash check and new balance
        total_cost = fill.notional
        if fill.side == OrderSide.BUY:
            if user.cash_balance < total_cost:
                raise InsufficientFundsError(str(total_cost), str(user.cash_balance))
            new_balance = user.cash_balance - total_cost
        else:
            new_balance = user.cash_balance + total_cost

        # 5-6. Position math; raises before anything is written
        existing = uow.positions.get(user_id, fill.symbol, for_update=True)
        new_position = self._accountant.apply(user_id, existing, fill)

        # 7. Persist all three in the unit
        uow.users.update_balance(user_id, new_balance)
        if new_position is None:
            uow.positions.delete(user_id, fill.symbol)
        else:
            uow.positions.save(new_position)

        trade = uow.trades.append(
            Trade(
                trade_id=str(uuid.uuid4()),
                user_id=user_id,
                symbol=fill.symbol,
                quantity=fill.quantity,
                price=fill.price,
                side=fill.side,
                executed_at=self._clock(),
            )
        )

        if fill.side == OrderSide.SELL:
            logger.debug(
                "Realized P&L for %s on %s: %s",
                user_id,
                fill.symbol,
                self._accountant.realized_pnl(existing, fill),
            )

        return FillResult(new_balance=new_balance, new_position=new_position, trade=trade)

    def get_balance(self, user_id: str) -> Decimal:
        """Current cash balance of a user."""
        with self._uow_factory() as uow:
            user = uow.users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user.cash_balance

    def get_position(self, user_id: str, symbol: str) -> Optional[Position]:
        """Current position for a symbol, or None when flat."""
        with self._uow_factory() as uow:
            return uow.positions.get(user_id, symbol.strip().upper())

    def list_positions(self, user_id: str) -> list[Position]:
        """All open positions of a user."""
        with self._uow_factory() as uow:
            return uow.positions.list_for_user(user_id)

    def list_trades(self, user_id: str, limit: Optional[int] = None) -> list[Trade]:
        """The user's trade history, oldest first."""
        with self._uow_factory() as uow:
            return uow.trades.list_for_user(user_id, limit=limit)
