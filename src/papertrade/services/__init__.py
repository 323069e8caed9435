"""Service layer - business logic orchestration."""

from papertrade.services.position_accountant import PositionAccountant
from papertrade.services.ledger_service import LedgerService
from papertrade.services.market_data_service import MarketDataService
from papertrade.services.feed_service import FeedService
from papertrade.services.trade_executor import TradeExecutor
from papertrade.services.portfolio_service import PortfolioService
from papertrade.services.user_service import UserService

__all__ = [
    "PositionAccountant",
    "LedgerService",
    "MarketDataService",
    "FeedService",
    "TradeExecutor",
    "PortfolioService",
    "UserService",
]
