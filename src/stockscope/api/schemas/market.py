"""Pydantic schemas for market data endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from stockscope.domain.views import Quote


class QuoteResponse(BaseModel):
    """Response schema for a market quote."""

    symbol: str
    name: Optional[str] = None
    price: Decimal
    change: Decimal
    change_percent: Decimal
    volume: int
    market_cap: int
    as_of: Optional[datetime] = None

    @classmethod
    def from_view(cls, quote: Quote) -> "QuoteResponse":
        return cls(
            symbol=quote.symbol,
            name=quote.name,
            price=quote.price,
            change=quote.change,
            change_percent=quote.change_percent,
            volume=quote.volume,
            market_cap=quote.market_cap,
            as_of=quote.as_of,
        )


class ComparisonResponse(BaseModel):
    """Response schema for a two-symbol comparison."""

    left: QuoteResponse
    right: QuoteResponse
    price_winner: str
    change_percent_winner: str
    volume_winner: str
    market_cap_winner: str
