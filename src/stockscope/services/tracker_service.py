"""User-facing mutations with write-through persistence."""

import logging
from typing import Any

from stockscope.domain.models import SnapshotKind
from stockscope.domain.views import MutationResult, SaveResult
from stockscope.services.domain_store import DomainStore
from stockscope.services.market_data_service import MarketDataService
from stockscope.services.persistence_service import PersistenceService

logger = logging.getLogger(__name__)


class StockTracker:
    """
    Entry point for user actions on holdings, alerts and the watchlist.

    The in-memory change is applied first; the affected collection is then
    saved on the storage worker and the outcome returned with the result.
    Validation and lookup errors (InvalidInputError, NotFoundError)
    propagate and change nothing.
    """

    def __init__(
        self,
        store: DomainStore,
        persistence: PersistenceService,
        market_data_service: MarketDataService,
    ):
        self._store = store
        self._persistence = persistence
        self._market = market_data_service

    async def _commit(self, kind: SnapshotKind, value: Any) -> MutationResult:
        saved = await self._persistence.save_async(kind)
        if not saved.ok:
            logger.warning("Change to %s kept in memory but not saved: %s", kind.value, saved.error)
        return MutationResult(value=value, saved=saved)

    # Portfolio

    async def add_holding(self, symbol: str, shares: Any, avg_price: Any) -> MutationResult:
        holding = self._store.add_holding(symbol, shares, avg_price)
        return await self._commit(SnapshotKind.PORTFOLIO, holding)

    async def add_holding_at_market(self, symbol: str, shares: Any) -> MutationResult:
        """Add a holding whose average price is the current quote price."""
        quote = await self._market.get_quote(symbol)
        return await self.add_holding(quote.symbol, shares, quote.price)

    async def edit_holding(self, holding_id: str, shares: Any, avg_price: Any) -> MutationResult:
        holding = self._store.edit_holding(holding_id, shares, avg_price)
        return await self._commit(SnapshotKind.PORTFOLIO, holding)

    async def remove_holding(self, holding_id: str) -> MutationResult:
        holding = self._store.remove_holding(holding_id)
        return await self._commit(SnapshotKind.PORTFOLIO, holding)

    # Alerts

    async def add_alert(self, symbol: str, target_price: Any) -> MutationResult:
        alert = self._store.add_alert(symbol, target_price)
        return await self._commit(SnapshotKind.ALERTS, alert)

    async def remove_alert(self, alert_id: str) -> MutationResult:
        alert = self._store.remove_alert(alert_id)
        return await self._commit(SnapshotKind.ALERTS, alert)

    async def clear_triggered_alerts(self) -> MutationResult:
        cleared = self._store.clear_triggered_alerts()
        if not cleared:
            return MutationResult(value=[], saved=SaveResult())
        return await self._commit(SnapshotKind.ALERTS, cleared)

    # Watchlist

    async def add_watchlist_item(self, symbol: str) -> MutationResult:
        addition = self._store.add_watchlist_item(symbol)
        if not addition.added:
            return MutationResult(value=addition, saved=SaveResult())
        return await self._commit(SnapshotKind.WATCHLIST, addition)

    async def remove_watchlist_item(self, item_id: str) -> MutationResult:
        item = self._store.remove_watchlist_item(item_id)
        return await self._commit(SnapshotKind.WATCHLIST, item)
