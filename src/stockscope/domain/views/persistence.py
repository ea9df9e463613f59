"""View models for persistence outcomes."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass
class SaveResult:
    """
    Outcome of a persistence write.

    A failed save never raises: in-memory state keeps the change and the
    caller is told that it may be lost on restart.
    """

    ok: bool = True
    keys: list[str] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def failed(cls, error: str, keys: Optional[list[str]] = None) -> "SaveResult":
        return cls(ok=False, keys=keys or [], error=error)

    def merge(self, other: "SaveResult") -> "SaveResult":
        errors = [e for e in (self.error, other.error) if e]
        return SaveResult(
            ok=self.ok and other.ok,
            keys=self.keys + other.keys,
            error="; ".join(errors) or None,
        )


@dataclass
class CompactResult:
    """Outcome of a compaction pass."""

    ok: bool = True
    compact_bytes: int = 0
    pruned_backups: list[str] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class StorageUsage:
    """Byte size per storage key plus the aggregate."""

    sizes: dict[str, int] = field(default_factory=dict)

    @property
    def total_bytes(self) -> int:
        return sum(self.sizes.values())


@dataclass
class ImportSummary:
    """Summary of a snapshot import."""

    holdings_imported: Optional[int] = None
    alerts_imported: Optional[int] = None
    watchlist_imported: Optional[int] = None
    version: Optional[str] = None
    saved: SaveResult = field(default_factory=SaveResult)
    imported_at: Optional[datetime] = None

    @property
    def replaced(self) -> list[str]:
        names = []
        if self.holdings_imported is not None:
            names.append("portfolio")
        if self.alerts_imported is not None:
            names.append("alerts")
        if self.watchlist_imported is not None:
            names.append("watchlist")
        return names


@dataclass
class MutationResult:
    """A user mutation's result value and whether it reached storage."""

    value: Any
    saved: SaveResult = field(default_factory=SaveResult)
