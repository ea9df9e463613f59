"""Pydantic schemas for watchlist endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from stockscope.domain.models import WatchlistItem


class WatchlistCreateRequest(BaseModel):
    """Request schema for watching a symbol."""

    symbol: str


class WatchlistItemResponse(BaseModel):
    """Response schema for a watchlist item."""

    item_id: str
    symbol: str
    date_added: Optional[datetime] = None

    @classmethod
    def from_domain(cls, item: WatchlistItem) -> "WatchlistItemResponse":
        return cls(item_id=item.item_id, symbol=item.symbol, date_added=item.date_added)


class WatchlistMutationResponse(BaseModel):
    """A watchlist change; added is False when the symbol was already watched."""

    item: WatchlistItemResponse
    added: bool = True
    saved: bool
    save_error: Optional[str] = None
