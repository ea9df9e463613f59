"""Watchlist API router."""

from fastapi import APIRouter, Depends

from stockscope.api.deps import get_store, get_tracker
from stockscope.api.schemas.watchlist import (
    WatchlistCreateRequest,
    WatchlistItemResponse,
    WatchlistMutationResponse,
)
from stockscope.services import StockTracker
from stockscope.services.domain_store import DomainStore

router = APIRouter(prefix="/watchlist", tags=["watchlist"])


@router.get("", response_model=list[WatchlistItemResponse])
async def list_watchlist(store: DomainStore = Depends(get_store)):
    """Watched symbols in insertion order."""
    return [WatchlistItemResponse.from_domain(item) for item in store.watchlist]


@router.post("", response_model=WatchlistMutationResponse, status_code=201)
async def add_to_watchlist(
    data: WatchlistCreateRequest,
    tracker: StockTracker = Depends(get_tracker),
):
    """Watch a symbol; an already watched symbol is returned unchanged."""
    result = await tracker.add_watchlist_item(data.symbol)
    addition = result.value
    return WatchlistMutationResponse(
        item=WatchlistItemResponse.from_domain(addition.item),
        added=addition.added,
        saved=result.saved.ok,
        save_error=result.saved.error,
    )


@router.delete("/{item_id}", response_model=WatchlistMutationResponse)
async def remove_from_watchlist(
    item_id: str,
    tracker: StockTracker = Depends(get_tracker),
):
    """Stop watching a symbol."""
    result = await tracker.remove_watchlist_item(item_id)
    return WatchlistMutationResponse(
        item=WatchlistItemResponse.from_domain(result.value),
        added=False,
        saved=result.saved.ok,
        save_error=result.saved.error,
    )
