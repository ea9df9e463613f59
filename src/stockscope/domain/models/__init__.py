"""Domain models package."""

from stockscope.domain.models.enums import AlertStatus, SnapshotKind
from stockscope.domain.models.holding import Holding
from stockscope.domain.models.alert import Alert
from stockscope.domain.models.watchlist import WatchlistItem

__all__ = [
    "AlertStatus",
    "SnapshotKind",
    "Holding",
    "Alert",
    "WatchlistItem",
]
