"""
Pytest configuration and fixtures for paper trading backend tests.

This module provides:
- In-memory SQLite database fixtures
- Deterministic, failing and slow market data providers
- Service fixtures wired the way AppContext wires them
- Factory helpers for users and trades
- FastAPI test client bound to a test AppContext
"""

import threading
import uuid
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient

from papertrade.main import app
from papertrade.api.deps import get_context
from papertrade.app_context import AppContext, set_app_context
from papertrade.config.settings import Settings, reset_settings
from papertrade.core.timezone import EASTERN_TZ
from papertrade.domain.models import Order, OrderSide, User
from papertrade.domain.views import Quote
from papertrade.providers import TokenAuthProvider
from papertrade.repositories.sqlalchemy import (
    SqlAlchemyUnitOfWorkFactory,
    create_db_engine,
    create_session_factory,
    create_tables,
)
from papertrade.services import (
    FeedService,
    LedgerService,
    MarketDataService,
    PortfolioService,
    PositionAccountant,
    TradeExecutor,
    UserService,
)


INITIAL_BALANCE = Decimal("10000")


def profile_for(username: str) -> dict:
    """Registration profile fields derived from a username."""
    return {
        "first_name": username.strip().title() or "Test",
        "last_name": "Trader",
        "email": f"{username.strip()}@example.com",
    }


# =============================================================================
# TIMEZONE HELPERS
# =============================================================================


def eastern_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in US/Eastern timezone."""
    return EASTERN_TZ.localize(datetime(year, month, day, hour, minute, second))


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return eastern_datetime(2024, 6, 15, 14, 30, 0)


class TickingClock:
    """Clock returning start, start+1s, start+2s, ... so write order is observable."""

    def __init__(self, start: datetime):
        self._next = start
        self._lock = threading.Lock()

    def __call__(self) -> datetime:
        with self._lock:
            now = self._next
            self._next = now + timedelta(seconds=1)
        return now


@pytest.fixture
def trade_clock(fixed_now) -> TickingClock:
    """Clock stamping each trade one second after the previous one."""
    return TickingClock(fixed_now)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_db_engine("sqlite:///:memory:")
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def uow_factory(test_engine) -> SqlAlchemyUnitOfWorkFactory:
    """Provide a unit of work factory over the test database."""
    return SqlAlchemyUnitOfWorkFactory(create_session_factory(test_engine))


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class DeterministicMarketProvider:
    """
    Deterministic market data provider for testing.

    Provides fixed quotes with no randomness. Prices can be changed between
    calls with set_price; every batch requested is recorded in calls.
    """

    FIXED_QUOTES = {
        "AAPL": (Decimal("185.50"), Decimal("184.25")),
        "GOOGL": (Decimal("142.75"), Decimal("141.50")),
        "MSFT": (Decimal("378.25"), Decimal("376.80")),
        "TSLA": (Decimal("248.75"), Decimal("250.10")),
        "ACME": (Decimal("100.00"), Decimal("99.00")),
    }

    def __init__(self, as_of: Optional[datetime] = None):
        self._as_of = as_of or eastern_datetime(2024, 6, 15, 16, 0, 0)
        self._prices = {sym: last for sym, (last, _) in self.FIXED_QUOTES.items()}
        self.calls: list[list[str]] = []

    def set_price(self, symbol: str, price: Decimal) -> None:
        self._prices[symbol.upper()] = Decimal(price)

    def remove(self, symbol: str) -> None:
        self._prices.pop(symbol.upper(), None)

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        """Return deterministic quotes for requested symbols."""
        self.calls.append(list(symbols))
        result = {}
        for symbol in symbols:
            upper_symbol = symbol.upper()
            if upper_symbol in self._prices:
                result[upper_symbol] = Quote(
                    symbol=upper_symbol,
                    last_price=self._prices[upper_symbol],
                    as_of=self._as_of,
                )
        return result


class FailingMarketProvider:
    """Market provider that always raises an exception."""

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        raise ConnectionError("Network unavailable")


class SlowMarketProvider:
    """
    Market provider that blocks until released.

    Used to exercise fetch timeouts and single-flight refreshes.
    """

    def __init__(self, price: Decimal = Decimal("50.00")):
        self._price = price
        self.release = threading.Event()
        self.started = threading.Event()
        self.call_count = 0
        self._lock = threading.Lock()

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        with self._lock:
            self.call_count += 1
        self.started.set()
        self.release.wait(timeout=5)
        return {
            s.upper(): Quote(symbol=s.upper(), last_price=self._price, as_of=eastern_datetime(2024, 6, 15))
            for s in symbols
        }


@pytest.fixture
def deterministic_provider(fixed_now) -> DeterministicMarketProvider:
    """Provide deterministic market data provider."""
    return DeterministicMarketProvider(as_of=fixed_now)


@pytest.fixture
def failing_provider() -> FailingMarketProvider:
    """Provide a market provider that always fails."""
    return FailingMarketProvider()


@pytest.fixture
def slow_provider():
    """Provide a market provider that blocks until its release event is set."""
    provider = SlowMarketProvider()
    yield provider
    provider.release.set()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def market_data_service(deterministic_provider):
    """MarketDataService that always refetches so price changes apply immediately."""
    service = MarketDataService(
        provider=deterministic_provider,
        freshness_seconds=0,
        fetch_timeout_seconds=2,
    )
    yield service
    service.close()


@pytest.fixture
def ledger_service(uow_factory, trade_clock) -> LedgerService:
    """Provide test LedgerService."""
    return LedgerService(
        uow_factory=uow_factory,
        accountant=PositionAccountant(),
        clock=trade_clock,
    )


@pytest.fixture
def feed_service(uow_factory, fixed_now) -> FeedService:
    """Provide test FeedService."""
    return FeedService(uow_factory=uow_factory, clock=lambda: fixed_now)


@pytest.fixture
def trade_executor(uow_factory, market_data_service, ledger_service, feed_service) -> TradeExecutor:
    """Provide test TradeExecutor."""
    return TradeExecutor(
        uow_factory=uow_factory,
        market_data=market_data_service,
        ledger=ledger_service,
        feed=feed_service,
    )


@pytest.fixture
def portfolio_service(uow_factory, market_data_service) -> PortfolioService:
    """Provide test PortfolioService."""
    return PortfolioService(
        uow_factory=uow_factory,
        market_data=market_data_service,
        initial_balance=INITIAL_BALANCE,
    )


@pytest.fixture
def user_service(uow_factory, fixed_now) -> UserService:
    """Provide test UserService."""
    return UserService(
        uow_factory=uow_factory,
        initial_balance=INITIAL_BALANCE,
        clock=lambda: fixed_now,
    )


@pytest.fixture
def auth_provider() -> TokenAuthProvider:
    """Provide a fresh in-memory token store."""
    return TokenAuthProvider()


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def user_factory(user_service) -> Callable[..., User]:
    """Factory for creating funded test users."""

    def _create_user(username: Optional[str] = None) -> User:
        if username is None:
            username = f"trader_{uuid.uuid4().hex[:8]}"
        return user_service.register(username, **profile_for(username))

    return _create_user


@pytest.fixture
def trade_factory(trade_executor) -> Callable:
    """Factory for executing orders at the provider's current price."""

    def _trade(
        user_id: str,
        symbol: str,
        quantity: int,
        side: OrderSide = OrderSide.BUY,
        rationale: str = "",
    ):
        return trade_executor.execute(
            user_id,
            Order(symbol=symbol, quantity=quantity, side=side, rationale=rationale),
        )

    return _trade


# =============================================================================
# PRESET DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_user(user_factory) -> User:
    """Create a sample user with the initial balance."""
    return user_factory("alice")


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def app_context(test_engine, deterministic_provider) -> AppContext:
    """AppContext on the test database and deterministic prices."""
    settings = Settings(
        database_url="sqlite:///:memory:",
        initial_balance=INITIAL_BALANCE,
        price_freshness_seconds=0,
        price_fetch_timeout_seconds=2,
    )
    return AppContext(
        settings=settings,
        engine=test_engine,
        market_data_provider=deterministic_provider,
    )


@pytest.fixture
def client(app_context) -> TestClient:
    """Provide FastAPI test client bound to the test AppContext."""
    set_app_context(app_context)
    app.dependency_overrides[get_context] = lambda: app_context
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    set_app_context(None)


@pytest.fixture
def register(client) -> Callable[[str], tuple[str, dict]]:
    """Register a user over HTTP; returns (user_id, auth headers)."""

    def _register(username: str) -> tuple[str, dict]:
        response = client.post("/users", json={"username": username, **profile_for(username)})
        assert response.status_code == 201, response.text
        data = response.json()
        return data["user"]["user_id"], {"Authorization": f"Bearer {data['token']}"}

    return _register


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.0001"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    actual = Decimal(str(actual))
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
