"""Providers: market data (price oracle) and authentication."""

from papertrade.providers.market_data_provider import MarketDataProvider
from papertrade.providers.stub_provider import StubMarketDataProvider
from papertrade.providers.yahoo_provider import YahooFinanceProvider
from papertrade.providers.auth_provider import AuthProvider, TokenAuthProvider

__all__ = [
    "MarketDataProvider",
    "StubMarketDataProvider",
    "YahooFinanceProvider",
    "AuthProvider",
    "TokenAuthProvider",
]
