"""Watchlist domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class WatchlistItem:
    """A tracked symbol with no associated position."""

    item_id: str
    symbol: str
    date_added: Optional[datetime] = field(default=None)
