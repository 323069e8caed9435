"""Market data provider protocol and base types."""

from typing import Protocol

from papertrade.domain.views import Quote


class MarketDataProvider(Protocol):
    """
    Protocol for market data providers (the price oracle).

    Implementations fetch current quotes for symbols. A symbol that cannot be
    priced is omitted from the result; a provider-wide failure raises.
    """

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        """
        Fetch quotes for multiple symbols.

        Returns dict mapping symbol -> Quote with last_price and as_of.
        Missing symbols are omitted from result.
        """
        ...
