"""Pydantic schemas for storage and snapshot endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ImportSummaryResponse(BaseModel):
    """Response schema for a snapshot import."""

    replaced: list[str]
    holdings_imported: Optional[int] = None
    alerts_imported: Optional[int] = None
    watchlist_imported: Optional[int] = None
    version: Optional[str] = None
    imported_at: Optional[datetime] = None
    saved: bool
    save_error: Optional[str] = None


class CompactResponse(BaseModel):
    """Response schema for compaction."""

    ok: bool
    compact_bytes: int
    pruned_backups: list[str]
    error: Optional[str] = None


class StorageUsageResponse(BaseModel):
    """Byte size per storage key."""

    sizes: dict[str, int]
    total_bytes: int
