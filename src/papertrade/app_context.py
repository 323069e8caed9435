"""Application context for in-process service management.

Owns the process-wide pieces that must be shared across requests (engine,
price cache, auth tokens) and builds the services on top of them. The HTTP
layer reads everything from here; tests install their own context.
"""

from typing import Optional

from sqlalchemy import Engine

from papertrade.config.settings import Settings, get_settings
from papertrade.providers import (
    MarketDataProvider,
    StubMarketDataProvider,
    TokenAuthProvider,
    YahooFinanceProvider,
)
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


def build_market_data_provider(settings: Settings) -> MarketDataProvider:
    """Select the price source named in settings."""
    if settings.market_data_provider == "yahoo":
        return YahooFinanceProvider()
    return StubMarketDataProvider()


class AppContext:
    """
    Application context providing in-process access to all services.

    Services are created lazily and cached; each service call opens its own
    unit of work, so one context is safe to share between request threads.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        engine: Optional[Engine] = None,
        market_data_provider: Optional[MarketDataProvider] = None,
    ):
        """
        Initialize application context.

        Args:
            settings: Settings to use. Defaults to the global settings.
            engine: Optional pre-built engine (tests pass an in-memory one).
            market_data_provider: Optional price source overriding settings.
        """
        self._settings = settings or get_settings()
        self._engine = engine
        self._provider = market_data_provider
        self._uow_factory: Optional[SqlAlchemyUnitOfWorkFactory] = None

        # Service instances (lazy initialized)
        self._market_data_service: Optional[MarketDataService] = None
        self._auth_provider: Optional[TokenAuthProvider] = None
        self._ledger_service: Optional[LedgerService] = None
        self._feed_service: Optional[FeedService] = None
        self._trade_executor: Optional[TradeExecutor] = None
        self._portfolio_service: Optional[PortfolioService] = None
        self._user_service: Optional[UserService] = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def engine(self) -> Engine:
        """Get or create the database engine."""
        if self._engine is None:
            self._engine = create_db_engine(self._settings.get_database_url())
        return self._engine

    def initialize(self) -> None:
        """Create the schema if it does not exist."""
        create_tables(self.engine)

    @property
    def uow_factory(self) -> SqlAlchemyUnitOfWorkFactory:
        """Factory producing one unit of work per atomic operation."""
        if self._uow_factory is None:
            self._uow_factory = SqlAlchemyUnitOfWorkFactory(create_session_factory(self.engine))
        return self._uow_factory

    @property
    def market_data(self) -> MarketDataService:
        """Get the shared MarketDataService (owns the price cache)."""
        if self._market_data_service is None:
            provider = self._provider or build_market_data_provider(self._settings)
            self._market_data_service = MarketDataService(
                provider=provider,
                freshness_seconds=self._settings.price_freshness_seconds,
                fetch_timeout_seconds=self._settings.price_fetch_timeout_seconds,
                max_workers=self._settings.price_fetch_workers,
            )
        return self._market_data_service

    @property
    def auth(self) -> TokenAuthProvider:
        """Get the shared auth provider."""
        if self._auth_provider is None:
            self._auth_provider = TokenAuthProvider()
        return self._auth_provider

    @property
    def ledger(self) -> LedgerService:
        """Get the LedgerService instance."""
        if self._ledger_service is None:
            self._ledger_service = LedgerService(
                uow_factory=self.uow_factory,
                accountant=PositionAccountant(),
            )
        return self._ledger_service

    @property
    def feed(self) -> FeedService:
        """Get the FeedService instance."""
        if self._feed_service is None:
            self._feed_service = FeedService(uow_factory=self.uow_factory)
        return self._feed_service

    @property
    def trades(self) -> TradeExecutor:
        """Get the TradeExecutor instance."""
        if self._trade_executor is None:
            self._trade_executor = TradeExecutor(
                uow_factory=self.uow_factory,
                market_data=self.market_data,
                ledger=self.ledger,
                feed=self.feed,
            )
        return self._trade_executor

    @property
    def portfolio(self) -> PortfolioService:
        """Get the PortfolioService instance."""
        if self._portfolio_service is None:
            self._portfolio_service = PortfolioService(
                uow_factory=self.uow_factory,
                market_data=self.market_data,
                initial_balance=self._settings.initial_balance,
            )
        return self._portfolio_service

    @property
    def users(self) -> UserService:
        """Get the UserService instance."""
        if self._user_service is None:
            self._user_service = UserService(
                uow_factory=self.uow_factory,
                initial_balance=self._settings.initial_balance,
            )
        return self._user_service

    def close(self) -> None:
        """Clean up resources."""
        if self._market_data_service is not None:
            self._market_data_service.close()
            self._market_data_service = None
            self._trade_executor = None
            self._portfolio_service = None
        if self._engine is not None:
            self._engine.dispose()


# Global application context (one per process)
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set (or clear) the global application context."""
    global _app_context
    _app_context = context
