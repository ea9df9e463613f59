"""View models for market data."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Quote:
    """
    Point-in-time market reading for a symbol.

    Quotes are ephemeral: two requests for the same symbol may differ.
    """

    symbol: str
    price: Decimal
    change: Decimal = field(default_factory=lambda: Decimal("0"))
    change_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    volume: int = 0
    market_cap: int = 0
    as_of: Optional[datetime] = None
    name: Optional[str] = None


@dataclass
class ComparisonView:
    """Side-by-side comparison of two quotes; ties go to the left symbol."""

    left: Quote
    right: Quote
    price_winner: str
    change_percent_winner: str
    volume_winner: str
    market_cap_winner: str
