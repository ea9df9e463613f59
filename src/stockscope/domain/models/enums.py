"""Enumerations for domain models."""

from enum import Enum


class AlertStatus(str, Enum):
    """Lifecycle states of a price alert."""

    PENDING = "PENDING"
    TRIGGERED = "TRIGGERED"


class SnapshotKind(str, Enum):
    """Persisted collections; the value is the primary storage key."""

    PORTFOLIO = "portfolio"
    ALERTS = "alerts"
    WATCHLIST = "watchlist"

    @property
    def backup_key(self) -> str:
        return f"{self.value}Backup"
