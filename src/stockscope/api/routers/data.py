"""Snapshot import/export and storage API router."""

from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from stockscope.api.deps import get_persistence_service
from stockscope.api.schemas.data import (
    CompactResponse,
    ImportSummaryResponse,
    StorageUsageResponse,
)
from stockscope.core.timezone import now_eastern
from stockscope.services import PersistenceService

router = APIRouter(prefix="/data", tags=["data"])


@router.get("/export")
async def export_snapshot(
    persistence: PersistenceService = Depends(get_persistence_service),
):
    """Full snapshot as a JSON download."""
    filename = f"stockscope-export-{now_eastern().strftime('%Y-%m-%d')}.json"
    return JSONResponse(
        content=persistence.export_all(),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import", response_model=ImportSummaryResponse)
async def import_snapshot(
    document: Any = Body(...),
    persistence: PersistenceService = Depends(get_persistence_service),
):
    """Replace the collections present in the posted snapshot."""
    summary = await persistence.import_all_async(document)
    return ImportSummaryResponse(
        replaced=summary.replaced,
        holdings_imported=summary.holdings_imported,
        alerts_imported=summary.alerts_imported,
        watchlist_imported=summary.watchlist_imported,
        version=summary.version,
        imported_at=summary.imported_at,
        saved=summary.saved.ok,
        save_error=summary.saved.error,
    )


@router.post("/compact", response_model=CompactResponse)
async def compact_storage(
    persistence: PersistenceService = Depends(get_persistence_service),
):
    """Rewrite the compact copy and prune stale backups."""
    result = await persistence.compact_async()
    return CompactResponse(
        ok=result.ok,
        compact_bytes=result.compact_bytes,
        pruned_backups=result.pruned_backups,
        error=result.error,
    )


@router.get("/storage", response_model=StorageUsageResponse)
async def storage_usage(
    persistence: PersistenceService = Depends(get_persistence_service),
):
    """Stored bytes per key."""
    usage = await persistence.storage_usage_async()
    return StorageUsageResponse(sizes=usage.sizes, total_bytes=usage.total_bytes)
