"""Market data service: the price oracle seen by the core, with a freshness cache."""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from decimal import Decimal
from typing import Callable, Optional

from papertrade.core.exceptions import PriceUnavailableError
from papertrade.domain.views import Quote
from papertrade.providers.market_data_provider import MarketDataProvider

logger = logging.getLogger(__name__)

DEFAULT_FRESHNESS_SECONDS = 300
DEFAULT_FETCH_TIMEOUT_SECONDS = 10
PRICE_QUANTUM = Decimal("0.0001")


class MarketDataService:
    """
    Wraps a provider with a per-symbol price cache and a bounded fetch time.

    - A cached price younger than the freshness window is served as is.
    - Refreshes of one symbol are single-flight: concurrent callers wait on
      that symbol's lock and then read what the first caller fetched.
    - Provider calls run on a worker pool and are abandoned after the fetch
      timeout; the caller gets PriceUnavailableError and can retry.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        freshness_seconds: float = DEFAULT_FRESHNESS_SECONDS,
        fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        max_workers: int = 4,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._provider = provider
        self._freshness = freshness_seconds
        self._fetch_timeout = fetch_timeout_seconds
        self._clock = clock
        # symbol -> (price, fetched_at on self._clock)
        self._cache: dict[str, tuple[Decimal, float]] = {}
        self._cache_lock = threading.Lock()
        self._symbol_locks: dict[str, threading.Lock] = {}
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="price-fetch",
        )

    def get_price(self, symbol: str) -> Decimal:
        """
        Return a positive price for the symbol, fetching it when stale.

        Raises:
            PriceUnavailableError: provider failed, timed out or has no quote.
        """
        key = self._normalize(symbol)
        if not key:
            raise PriceUnavailableError(symbol, "empty symbol")

        cached = self._fresh_price(key)
        if cached is not None:
            return cached

        lock = self._symbol_lock(key)
        if not lock.acquire(timeout=self._fetch_timeout):
            raise PriceUnavailableError(key, "timed out waiting for price refresh")
        try:
            # Another caller may have refreshed while we waited
            cached = self._fresh_price(key)
            if cached is not None:
                return cached

            try:
                quotes = self._fetch([key])
            except FuturesTimeoutError as exc:
                logger.warning("Price fetch for %s timed out after %ss", key, self._fetch_timeout)
                raise PriceUnavailableError(key, "price source timed out") from exc
            except Exception as exc:
                logger.warning("Price fetch for %s failed: %s", key, exc)
                raise PriceUnavailableError(key, "price source failed") from exc

            price = self._store(quotes.get(key))
            if price is None:
                raise PriceUnavailableError(key)
            return price
        finally:
            lock.release()

    def get_prices(self, symbols: list[str]) -> dict[str, Decimal]:
        """
        Best-effort prices for valuation.

        Fresh cache entries are reused; the rest are fetched in one batch.
        Symbols the provider cannot price are omitted, even when an expired
        cache entry exists. Never raises.
        """
        keys = sorted({self._normalize(s) for s in symbols if s and s.strip()})
        result: dict[str, Decimal] = {}
        missing: list[str] = []
        for key in keys:
            cached = self._fresh_price(key)
            if cached is not None:
                result[key] = cached
            else:
                missing.append(key)

        if missing:
            try:
                quotes = self._fetch(missing)
            except Exception as exc:
                logger.warning("Batch price fetch failed: %s", exc)
                quotes = {}
            for key in missing:
                price = self._store(quotes.get(key))
                if price is not None:
                    result[key] = price

        return result

    def invalidate(self, symbol: Optional[str] = None) -> None:
        """Drop one symbol (or every symbol) from the cache."""
        with self._cache_lock:
            if symbol is None:
                self._cache.clear()
            else:
                self._cache.pop(self._normalize(symbol), None)

    def close(self) -> None:
        """Stop the fetch workers without waiting for hung provider calls."""
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _fetch(self, symbols: list[str]) -> dict[str, Quote]:
        future = self._executor.submit(self._provider.get_quotes, symbols)
        return future.result(timeout=self._fetch_timeout)

    def _store(self, quote: Optional[Quote]) -> Optional[Decimal]:
        """Validate and cache a quote; returns the cached price or None if unusable."""
        if quote is None or quote.last_price is None:
            return None
        price = Decimal(quote.last_price).quantize(PRICE_QUANTUM)
        if price <= 0:
            logger.warning("Ignoring non-positive price %s for %s", price, quote.symbol)
            return None
        with self._cache_lock:
            # Last writer wins
            self._cache[quote.symbol.upper()] = (price, self._clock())
        return price

    def _fresh_price(self, key: str) -> Optional[Decimal]:
        with self._cache_lock:
            entry = self._cache.get(key)
        if entry is None:
            return None
        price, fetched_at = entry
        if self._clock() - fetched_at < self._freshness:
            return price
        return None

    def _symbol_lock(self, key: str) -> threading.Lock:
        with self._cache_lock:
            lock = self._symbol_locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._symbol_locks[key] = lock
            return lock

    @staticmethod
    def _normalize(symbol: str) -> str:
        return (symbol or "").strip().upper()
