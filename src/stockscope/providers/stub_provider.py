"""Stub price feed for offline/testing use."""

import random
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from stockscope.core.exceptions import FeedUnavailableError
from stockscope.core.timezone import now_eastern
from stockscope.domain.views import Quote


# Reference prices for common symbols
_STUB_PRICES: dict[str, Decimal] = {
    "AAPL": Decimal("185.50"),
    "GOOGL": Decimal("142.75"),
    "MSFT": Decimal("378.25"),
    "AMZN": Decimal("178.50"),
    "TSLA": Decimal("248.75"),
    "NVDA": Decimal("485.25"),
    "META": Decimal("505.50"),
    "SPY": Decimal("485.25"),
    "QQQ": Decimal("418.75"),
    "VTI": Decimal("252.30"),
}

_CENT = Decimal("0.01")


class StubPriceFeed:
    """
    Stub feed generating a fresh random daily move on every call.

    Known symbols move around their reference price; unknown symbols get a
    base price between 50 and 250 drawn once from the seeded generator.
    """

    def __init__(
        self,
        seed: Optional[int] = 42,
        unavailable: Iterable[str] = (),
        reference_prices: Optional[Mapping[str, Decimal]] = None,
    ):
        """Initialize with optional random seed for reproducibility."""
        self._rng = random.Random(seed)
        self._base_prices: dict[str, Decimal] = dict(_STUB_PRICES)
        if reference_prices:
            self._base_prices.update({s.upper(): Decimal(p) for s, p in reference_prices.items()})
        self._unavailable = {s.upper() for s in unavailable}

    def set_unavailable(self, symbols: Iterable[str]) -> None:
        """Make get_quote fail for the given symbols."""
        self._unavailable = {s.upper() for s in symbols}

    async def get_quote(self, symbol: str) -> Quote:
        """Return a stub quote for the requested symbol."""
        upper_symbol = symbol.upper()
        if upper_symbol in self._unavailable:
            raise FeedUnavailableError(upper_symbol, "symbol not served by stub feed")

        base_price = self._base_prices.get(upper_symbol)
        if base_price is None:
            base_price = Decimal(str(50 + self._rng.random() * 200)).quantize(_CENT)
            self._base_prices[upper_symbol] = base_price

        # The reference price is the previous close
        move = Decimal(str((self._rng.random() - 0.5) * 10)).quantize(_CENT)
        price = max(base_price + move, _CENT)
        change = price - base_price
        change_percent = (change / base_price * 100).quantize(_CENT)
        volume = int(self._rng.random() * 10_000_000)
        market_cap = int(price * Decimal(str(self._rng.random() * 1_000_000)))

        return Quote(
            symbol=upper_symbol,
            price=price,
            change=change,
            change_percent=change_percent,
            volume=volume,
            market_cap=market_cap,
            as_of=now_eastern(),
            name=f"{upper_symbol} Corp",
        )
