"""Market data service for quotes."""

import logging
from dataclasses import replace
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from stockscope.core.exceptions import AppError, FeedUnavailableError
from stockscope.core.timezone import now_eastern
from stockscope.core.validation import normalize_symbol
from stockscope.domain.views import Quote
from stockscope.providers.market_data_provider import PriceFeed

logger = logging.getLogger(__name__)


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if value is None or isinstance(value, bool):
        raise TypeError(f"expected a number, got {value!r}")
    return Decimal(str(value))


class MarketDataService:
    """
    Service for fetching quotes from a PriceFeed.

    Wraps the feed with a per-symbol TTL cache and graceful degradation for
    display purposes. Alert evaluation bypasses the cache so every tick
    sees a fresh price.
    """

    def __init__(
        self,
        provider: PriceFeed,
        cache_ttl_seconds: int = 60,
    ):
        self._provider = provider
        self._cache_ttl = cache_ttl_seconds
        self._quote_cache: dict[str, tuple[Quote, datetime]] = {}

    async def get_quote(self, symbol: str, use_cache: bool = True) -> Quote:
        """
        Fetch one quote.

        Raises FeedUnavailableError when the feed fails; any provider
        exception is wrapped so callers handle a single error type.
        """
        symbol = normalize_symbol(symbol)

        if use_cache:
            cached = self._cached(symbol)
            if cached is not None:
                return cached

        try:
            quote = await self._provider.get_quote(symbol)
        except FeedUnavailableError:
            raise
        except AppError as e:
            raise FeedUnavailableError(symbol, e.message) from e
        except Exception as e:
            raise FeedUnavailableError(symbol, str(e) or type(e).__name__) from e

        quote = self._normalize(symbol, quote)
        self._quote_cache[symbol] = (quote, now_eastern())
        return quote

    async def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        """
        Fetch quotes for symbols with caching.

        Returns dict mapping symbol -> Quote. Symbols the feed cannot serve
        fall back to the last cached quote, or are omitted.
        """
        result: dict[str, Quote] = {}
        for raw_symbol in symbols:
            symbol = normalize_symbol(raw_symbol)
            if symbol in result:
                continue
            try:
                result[symbol] = await self.get_quote(symbol)
            except FeedUnavailableError as e:
                logger.warning("%s", e.message)
                stale = self._quote_cache.get(symbol)
                if stale is not None:
                    result[symbol] = stale[0]
        return result

    @staticmethod
    def _normalize(symbol: str, quote: Quote) -> Quote:
        """Coerce feed numbers to Decimal/int; an unusable price is a feed failure."""
        try:
            price = _to_decimal(quote.price)
            if not price.is_finite() or price <= 0:
                raise ValueError(f"price {quote.price!r} is not a positive number")
            return replace(
                quote,
                price=price,
                change=_to_decimal(quote.change),
                change_percent=_to_decimal(quote.change_percent),
                volume=int(quote.volume or 0),
                market_cap=int(quote.market_cap or 0),
            )
        except (InvalidOperation, AttributeError, TypeError, ValueError, OverflowError) as e:
            raise FeedUnavailableError(symbol, f"unusable quote: {e}") from e

    def clear_cache(self) -> None:
        self._quote_cache.clear()

    def _cached(self, symbol: str) -> Optional[Quote]:
        """Return the cached quote if within TTL."""
        entry = self._quote_cache.get(symbol)
        if entry is None:
            return None
        quote, fetched_at = entry
        elapsed = (now_eastern() - fetched_at).total_seconds()
        return quote if elapsed < self._cache_ttl else None
