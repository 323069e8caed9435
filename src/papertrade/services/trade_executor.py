"""Trade executor: prices an order and records it atomically with its feed post."""

import logging
from typing import Callable

from papertrade.core.exceptions import (
    AppError,
    InvalidOrderError,
    StorageFailureError,
)
from papertrade.domain.models import Fill, Order, OrderSide
from papertrade.domain.views import TradeResult
from papertrade.repositories.protocols import UnitOfWork
from papertrade.services.feed_service import FeedService
from papertrade.services.ledger_service import LedgerService
from papertrade.services.market_data_service import MarketDataService

logger = logging.getLogger(__name__)

MAX_SYMBOL_LENGTH = 20
MAX_RATIONALE_LENGTH = 2000


class TradeExecutor:
    """
    Orchestrates one trade end-to-end.

    Order validation and pricing happen before any storage access. The
    ledger update (balance, position, trade log) and the feed post are then
    written in a single unit of work: either all of them commit or none do.
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        market_data: MarketDataService,
        ledger: LedgerService,
        feed: FeedService,
    ):
        self._uow_factory = uow_factory
        self._market_data = market_data
        self._ledger = ledger
        self._feed = feed

    def execute(self, user_id: str, order: Order) -> TradeResult:
        """
        Execute a market order for a user at the current price.

        Raises:
            InvalidOrderError: malformed order; nothing was looked up.
            PriceUnavailableError: no price in time; nothing was written.
            InsufficientFundsError / InsufficientHoldingsError: rejected, nothing written.
            UserNotFoundError: the acting user does not exist.
            StorageConflictError: lost a race with a concurrent write; retryable.
            StorageFailureError: persistence failed; the unit was rolled back.
        """
        symbol, side = self._validate(order)

        price = self._market_data.get_price(symbol)
        fill = Fill(symbol=symbol, quantity=order.quantity, price=price, side=side)

        try:
            with self._uow_factory() as uow:
                fill_result = self._ledger.record_fill(user_id, fill, uow=uow)
                post = self._feed.publish_trade_post(uow, fill_result.trade, order.rationale)
                uow.commit()
        except AppError:
            raise
        except Exception as exc:
            logger.exception("Trade for user %s on %s failed and was rolled back", user_id, symbol)
            raise StorageFailureError() from exc

        trade = fill_result.trade
        logger.info(
            "Executed %s %d %s @ %s for user %s (balance %s)",
            trade.side.value,
            trade.quantity,
            trade.symbol,
            trade.price,
            user_id,
            fill_result.new_balance,
        )
        return TradeResult(
            new_balance=fill_result.new_balance,
            trade_id=trade.trade_id,
            post_id=post.post_id,
            symbol=trade.symbol,
            quantity=trade.quantity,
            side=trade.side,
            price=trade.price,
            executed_at=trade.executed_at,
        )

    @staticmethod
    def _validate(order: Order) -> tuple[str, OrderSide]:
        """Reject malformed orders before any lookup; returns normalized symbol and side."""
        if isinstance(order.quantity, bool) or not isinstance(order.quantity, int):
            raise InvalidOrderError("Quantity must be a whole number of shares")
        if order.quantity <= 0:
            raise InvalidOrderError(f"Quantity must be positive, got {order.quantity}")

        if isinstance(order.side, OrderSide):
            side = order.side
        else:
            try:
                side = OrderSide(str(order.side).strip().lower())
            except ValueError:
                raise InvalidOrderError(f"Unknown order side: {order.side}") from None

        symbol = (order.symbol or "").strip().upper()
        if not symbol or len(symbol) > MAX_SYMBOL_LENGTH:
            raise InvalidOrderError(f"Invalid symbol: {order.symbol!r}")
        if order.rationale and len(order.rationale) > MAX_RATIONALE_LENGTH:
            raise InvalidOrderError(f"Rationale longer than {MAX_RATIONALE_LENGTH} characters")

        return symbol, side
