"""
Yahoo Finance market data provider via yfinance.

yfinance is imported lazily so the package imports (and tests run) without
network access; tests patch ``_get_yf``.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

from papertrade.core.timezone import now_eastern
from papertrade.domain.views import Quote

logger = logging.getLogger(__name__)


def _get_yf():
    import yfinance as yf
    return yf


def _to_decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return None


def _safe_price_for_symbol(symbol: str, tickers_obj) -> tuple[Optional[Decimal], Optional[Decimal]]:
    """
    Get (last_price, previous_close) for one symbol from a yfinance Tickers object.

    Returns (None, None) when the symbol is unknown or its info cannot be read.
    """
    ticker = tickers_obj.tickers.get(symbol)
    if ticker is None:
        return (None, None)
    try:
        info = ticker.info
    except Exception:
        logger.warning("Failed to read quote info for %s", symbol, exc_info=True)
        return (None, None)
    if not isinstance(info, dict):
        return (None, None)
    # currentPrice preferred, then regularMarketPrice
    price = _to_decimal(info.get("currentPrice"))
    if price is None:
        price = _to_decimal(info.get("regularMarketPrice"))
    prev_close = _to_decimal(info.get("previousClose") or info.get("regularMarketPreviousClose"))
    return (price, prev_close)


class YahooFinanceProvider:
    """Fetches live-ish quotes from Yahoo Finance. No caching here; see MarketDataService."""

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        """Return quotes for the symbols yfinance could price."""
        if not symbols:
            return {}
        yf = _get_yf()
        tickers = yf.Tickers(" ".join(symbols))
        as_of = now_eastern()
        result: dict[str, Quote] = {}
        for sym in symbols:
            price, prev_close = _safe_price_for_symbol(sym, tickers)
            if price is None:
                continue
            result[sym] = Quote(symbol=sym, last_price=price, prev_close=prev_close, as_of=as_of)
        return result
