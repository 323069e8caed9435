"""
Unit tests for TradeExecutor.

Tests cover:
- The buy/buy/oversell/sell-all scenario end to end
- Order validation before any lookup
- Price failures leaving state untouched
- Rejected orders leaving state untouched
- Trade and feed post committing atomically
"""

import pytest
from decimal import Decimal

from papertrade.services import FeedService, LedgerService, TradeExecutor
from papertrade.domain.models import Order, OrderSide, User
from papertrade.core.exceptions import (
    InsufficientFundsError,
    InsufficientHoldingsError,
    InvalidOrderError,
    PriceUnavailableError,
    StorageFailureError,
    UserNotFoundError,
)

from tests.conftest import DeterministicMarketProvider


def _order(symbol: str, quantity, side=OrderSide.BUY, rationale: str = "") -> Order:
    return Order(symbol=symbol, quantity=quantity, side=side, rationale=rationale)


# =============================================================================
# SCENARIO TESTS
# =============================================================================


class TestTradeScenario:
    """Full lifecycle of one position."""

    def test_buy_buy_oversell_sell_all(
        self,
        trade_executor: TradeExecutor,
        ledger_service: LedgerService,
        deterministic_provider: DeterministicMarketProvider,
        sample_user: User,
    ):
        """
        GIVEN a user with 10000 cash
        WHEN they buy 10 ACME @ 100, buy 10 @ 200, try to sell 25, then sell 20 @ 150
        THEN balances are 9000, 7000, unchanged, 10000; the position ends deleted
        AND exactly three trades are logged
        """
        user_id = sample_user.user_id

        result = trade_executor.execute(user_id, _order("ACME", 10))
        assert result.new_balance == Decimal("9000")
        position = ledger_service.get_position(user_id, "ACME")
        assert (position.quantity, position.average_cost) == (10, Decimal("100"))

        deterministic_provider.set_price("ACME", Decimal("200"))
        result = trade_executor.execute(user_id, _order("ACME", 10))
        assert result.new_balance == Decimal("7000")
        position = ledger_service.get_position(user_id, "ACME")
        assert (position.quantity, position.average_cost) == (20, Decimal("150"))

        deterministic_provider.set_price("ACME", Decimal("150"))
        with pytest.raises(InsufficientHoldingsError):
            trade_executor.execute(user_id, _order("ACME", 25, OrderSide.SELL))
        assert ledger_service.get_balance(user_id) == Decimal("7000")
        assert ledger_service.get_position(user_id, "ACME").quantity == 20

        result = trade_executor.execute(user_id, _order("ACME", 20, OrderSide.SELL))
        assert result.new_balance == Decimal("10000")
        assert ledger_service.get_position(user_id, "ACME") is None

        trades = ledger_service.list_trades(user_id)
        assert [(t.side, t.quantity, t.price) for t in trades] == [
            (OrderSide.BUY, 10, Decimal("100")),
            (OrderSide.BUY, 10, Decimal("200")),
            (OrderSide.SELL, 20, Decimal("150")),
        ]

    def test_result_describes_trade_and_post(
        self,
        trade_executor: TradeExecutor,
        feed_service: FeedService,
        sample_user: User,
    ):
        """
        GIVEN a funded user
        WHEN they buy 2 AAPL with a rationale
        THEN the result carries the executed price and a post with that rationale exists
        """
        result = trade_executor.execute(sample_user.user_id, _order(" aapl ", 2, rationale="earnings"))

        assert result.symbol == "AAPL"
        assert result.quantity == 2
        assert result.side == OrderSide.BUY
        assert result.price == Decimal("185.5000")
        assert result.new_balance == Decimal("10000") - Decimal("371.00")

        post = feed_service.get_post(result.post_id)
        assert post.trade_id == result.trade_id
        assert post.rationale == "earnings"
        assert post.symbol == "AAPL"

    def test_side_given_as_string(self, trade_executor: TradeExecutor, sample_user: User):
        result = trade_executor.execute(sample_user.user_id, _order("ACME", 1, side="BUY"))

        assert result.side == OrderSide.BUY


# =============================================================================
# VALIDATION TESTS
# =============================================================================


class TestOrderValidation:
    """Malformed orders are rejected before any price lookup."""

    @pytest.mark.parametrize(
        "order",
        [
            _order("ACME", 0),
            _order("ACME", -3),
            _order("ACME", 1.5),
            _order("ACME", True),
            _order("ACME", "10"),
            _order("ACME", 1, side="hold"),
            _order("", 1),
            _order("   ", 1),
            _order("X" * 21, 1),
            _order("ACME", 1, rationale="r" * 2001),
        ],
    )
    def test_invalid_order_rejected(
        self,
        trade_executor: TradeExecutor,
        deterministic_provider: DeterministicMarketProvider,
        sample_user: User,
        order: Order,
    ):
        with pytest.raises(InvalidOrderError) as exc_info:
            trade_executor.execute(sample_user.user_id, order)

        assert exc_info.value.code == "INVALID_ORDER"
        assert deterministic_provider.calls == []


# =============================================================================
# FAILURE ISOLATION TESTS
# =============================================================================


class TestNoMutationOnFailure:
    """Failed trades leave balance, positions, trades and posts unchanged."""

    def test_price_unavailable_mutates_nothing(
        self,
        trade_executor: TradeExecutor,
        ledger_service: LedgerService,
        feed_service: FeedService,
        sample_user: User,
    ):
        """
        GIVEN no price source for ZZZZ
        WHEN the user buys ZZZZ
        THEN PriceUnavailableError is raised and nothing is written
        """
        with pytest.raises(PriceUnavailableError):
            trade_executor.execute(sample_user.user_id, _order("ZZZZ", 1))

        assert ledger_service.get_balance(sample_user.user_id) == Decimal("10000")
        assert ledger_service.list_trades(sample_user.user_id) == []
        assert feed_service.list_feed() == []

    def test_repeated_insufficient_funds_is_idempotent(
        self,
        trade_executor: TradeExecutor,
        ledger_service: LedgerService,
        sample_user: User,
    ):
        """
        GIVEN a user with 10000 cash
        WHEN they try three times to buy 101 ACME @ 100
        THEN each attempt fails and the balance stays 10000
        """
        for _ in range(3):
            with pytest.raises(InsufficientFundsError):
                trade_executor.execute(sample_user.user_id, _order("ACME", 101))

        assert ledger_service.get_balance(sample_user.user_id) == Decimal("10000")
        assert ledger_service.list_positions(sample_user.user_id) == []
        assert ledger_service.list_trades(sample_user.user_id) == []

    def test_exact_balance_buy_allowed(
        self,
        trade_executor: TradeExecutor,
        sample_user: User,
    ):
        result = trade_executor.execute(sample_user.user_id, _order("ACME", 100))

        assert result.new_balance == Decimal("0")

    def test_unknown_user_rejected(self, trade_executor: TradeExecutor):
        with pytest.raises(UserNotFoundError) as exc_info:
            trade_executor.execute("no-such-user", _order("ACME", 1))

        assert exc_info.value.message == "Unknown user"

    def test_post_failure_rolls_back_trade(
        self,
        uow_factory,
        market_data_service,
        ledger_service: LedgerService,
        feed_service: FeedService,
        sample_user: User,
    ):
        """
        GIVEN a feed that fails while writing the post
        WHEN the user buys ACME
        THEN StorageFailureError is raised and the ledger is unchanged
        """

        class BrokenFeed(FeedService):
            def publish_trade_post(self, uow, trade, rationale):
                raise RuntimeError("disk full")

        executor = TradeExecutor(
            uow_factory=uow_factory,
            market_data=market_data_service,
            ledger=ledger_service,
            feed=BrokenFeed(uow_factory=uow_factory),
        )

        with pytest.raises(StorageFailureError):
            executor.execute(sample_user.user_id, _order("ACME", 10))

        assert ledger_service.get_balance(sample_user.user_id) == Decimal("10000")
        assert ledger_service.get_position(sample_user.user_id, "ACME") is None
        assert ledger_service.list_trades(sample_user.user_id) == []
        assert feed_service.list_feed() == []
