"""Persistence of the domain store to key-value storage."""

import asyncio
import functools
import json
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from typing import Any, Callable, TypeVar, Union

from stockscope.core.exceptions import PersistenceError, SnapshotImportError
from stockscope.core.timezone import format_datetime, now_eastern, parse_datetime_eastern
from stockscope.domain.models import SnapshotKind
from stockscope.domain.views import CompactResult, ImportSummary, SaveResult, StorageUsage
from stockscope.repositories.protocols import KeyValueRepository
from stockscope.services.domain_store import DomainStore
from stockscope.snapshot import SnapshotExporter, SnapshotImporter
from stockscope.snapshot.codec import (
    alert_from_dict,
    decode_collection,
    dedupe_watchlist,
    encode_compact,
    holding_from_dict,
    watchlist_item_from_dict,
)

logger = logging.getLogger(__name__)

COMPACT_KEY = "compactData"

_DECODERS: dict[SnapshotKind, Callable[[Any], Any]] = {
    SnapshotKind.PORTFOLIO: holding_from_dict,
    SnapshotKind.ALERTS: alert_from_dict,
    SnapshotKind.WATCHLIST: watchlist_item_from_dict,
}

T = TypeVar("T")


class PersistenceService:
    """
    Reads and writes the DomainStore's collections.

    Each collection lives under its primary key with a {data, timestamp}
    backup beside it. Writes never raise: a failed write is logged and
    returned as a failed SaveResult while the in-memory state keeps the
    change. The compact copy is derived on demand and never read back.

    The *_async methods serialize on the calling event loop and hand the
    storage calls to a single worker thread, so a slow disk never stalls
    the loop and writes reach the repository in submission order.
    """

    def __init__(
        self,
        store: DomainStore,
        repository: KeyValueRepository,
        backup_retention_days: int = 30,
    ):
        self._store = store
        self._repo = repository
        self._retention = timedelta(days=backup_retention_days)
        self._exporter = SnapshotExporter(store)
        self._importer = SnapshotImporter()
        # One thread: the repository's session must not be used concurrently
        self._worker = ThreadPoolExecutor(max_workers=1, thread_name_prefix="stockscope-storage")

    async def run_on_worker(self, func: Callable[..., T], *args: Any) -> T:
        """Run a blocking storage call on the storage worker thread."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._worker, functools.partial(func, *args))

    def close(self) -> None:
        """Wait for queued writes, then stop the storage worker."""
        self._worker.shutdown(wait=True)

    # Writes

    def save(self, kind: SnapshotKind) -> SaveResult:
        """Write one collection and its backup."""
        try:
            payload, backup = self._serialize(kind)
        except (TypeError, ValueError) as e:
            return self._serialization_failed(kind, e)
        return self._write(kind, payload, backup)

    async def save_async(self, kind: SnapshotKind) -> SaveResult:
        """
        Snapshot one collection now and write it on the storage worker.

        The collection is encoded before the first await, so the stored copy
        matches the in-memory state at the time of the call.
        """
        try:
            payload, backup = self._serialize(kind)
        except (TypeError, ValueError) as e:
            return self._serialization_failed(kind, e)
        return await self.run_on_worker(self._write, kind, payload, backup)

    def _serialize(self, kind: SnapshotKind) -> tuple[str, str]:
        data = self._encode(kind)
        payload = json.dumps(data)
        backup = json.dumps({"data": data, "timestamp": format_datetime(now_eastern())})
        return payload, backup

    @staticmethod
    def _serialization_failed(kind: SnapshotKind, error: Exception) -> SaveResult:
        logger.error("Serializing %s failed: %s", kind.value, error)
        return SaveResult.failed(
            f"Serialization failed for {kind.value}: {error}", [kind.value, kind.backup_key]
        )

    def _write(self, kind: SnapshotKind, payload: str, backup: str) -> SaveResult:
        keys = [kind.value, kind.backup_key]
        try:
            self._repo.set(kind.value, payload)
            self._repo.set(kind.backup_key, backup)
        except PersistenceError as e:
            logger.error("Saving %s failed: %s", kind.value, e.message)
            return SaveResult.failed(e.message, keys)
        return SaveResult(ok=True, keys=keys)

    def save_all(self) -> SaveResult:
        result = SaveResult()
        for kind in SnapshotKind:
            result = result.merge(self.save(kind))
        return result

    # Reads

    def load(self, kind: SnapshotKind) -> list:
        """
        Decode one collection from storage.

        Falls back to the backup when the primary record is corrupt, and to
        an empty list when neither is usable. Raises PersistenceError only
        when the storage itself cannot be read.
        """
        raw = self._repo.get(kind.value)
        if raw is not None:
            try:
                return self._decode(kind, json.loads(raw))
            except (ValueError, SnapshotImportError) as e:
                logger.warning("Primary record '%s' is unreadable (%s); trying backup", kind.value, e)

        raw_backup = self._repo.get(kind.backup_key)
        if raw_backup is None:
            return []
        try:
            backup = json.loads(raw_backup)
            if not isinstance(backup, dict) or "data" not in backup:
                raise SnapshotImportError("backup record has no data")
            entries = self._decode(kind, backup["data"])
        except (ValueError, SnapshotImportError) as e:
            logger.error("Backup record '%s' is unreadable (%s)", kind.backup_key, e)
            return []
        if raw is not None:
            logger.warning("Recovered %d %s entries from backup", len(entries), kind.value)
        return entries

    def load_into_store(self) -> dict[str, int]:
        """Load every collection into the store; returns entry counts per key."""
        counts: dict[str, int] = {}
        for kind in SnapshotKind:
            try:
                entries = self.load(kind)
            except PersistenceError as e:
                logger.error("Loading %s failed: %s", kind.value, e.message)
                continue
            self._replace(kind, entries)
            counts[kind.value] = len(entries)
        logger.info("Loaded state: %s", counts)
        return counts

    # Housekeeping

    def compact(self) -> CompactResult:
        """Regenerate the compact copy and prune stale backups (best-effort)."""
        return self._write_compact(self._compact_payload())

    async def compact_async(self) -> CompactResult:
        return await self.run_on_worker(self._write_compact, self._compact_payload())

    def _compact_payload(self) -> str:
        compact = encode_compact(
            self._store.holdings,
            self._store.alerts,
            self._store.watchlist,
            last_updated=now_eastern(),
        )
        return json.dumps(compact, separators=(",", ":"))

    def _write_compact(self, payload: str) -> CompactResult:
        result = CompactResult()
        try:
            self._repo.set(COMPACT_KEY, payload)
            result.compact_bytes = len(payload.encode("utf-8"))
        except PersistenceError as e:
            logger.warning("Compaction write failed: %s", e.message)
            result.ok = False
            result.error = e.message

        try:
            result.pruned_backups = self.prune_backups()
        except PersistenceError as e:
            logger.warning("Backup pruning failed: %s", e.message)
            result.ok = False
            result.error = "; ".join(filter(None, [result.error, e.message]))
        return result

    def prune_backups(self) -> list[str]:
        """Delete backups older than the retention window, or unreadable ones."""
        cutoff = now_eastern() - self._retention
        pruned = []
        for kind in SnapshotKind:
            raw = self._repo.get(kind.backup_key)
            if raw is None:
                continue
            try:
                timestamp = parse_datetime_eastern(json.loads(raw)["timestamp"])
            except (ValueError, KeyError, TypeError, OverflowError):
                logger.warning("Backup '%s' has no readable timestamp; pruning", kind.backup_key)
                timestamp = None
            if timestamp is None or timestamp < cutoff:
                self._repo.delete(kind.backup_key)
                pruned.append(kind.backup_key)
        return pruned

    def storage_usage(self) -> StorageUsage:
        """Byte size of every stored value."""
        return StorageUsage(
            sizes={key: len(value.encode("utf-8")) for key, value in self._repo.items().items()}
        )

    async def storage_usage_async(self) -> StorageUsage:
        return await self.run_on_worker(self.storage_usage)

    # Export / import

    def export_all(self) -> dict[str, Any]:
        return self._exporter.export_all()

    def export_json(self) -> str:
        return self._exporter.export_json()

    def import_all(self, document: Union[str, bytes, dict[str, Any]]) -> ImportSummary:
        """
        Replace the collections present in document, then persist them.

        Raises SnapshotImportError for malformed input, leaving state untouched.
        """
        summary, kinds = self._apply_import(document)
        for kind in kinds:
            summary.saved = summary.saved.merge(self.save(kind))
        logger.info("Imported snapshot: %s", ", ".join(summary.replaced))
        return summary

    async def import_all_async(self, document: Union[str, bytes, dict[str, Any]]) -> ImportSummary:
        """Like import_all, with the writes done on the storage worker."""
        summary, kinds = self._apply_import(document)
        for kind in kinds:
            summary.saved = summary.saved.merge(await self.save_async(kind))
        logger.info("Imported snapshot: %s", ", ".join(summary.replaced))
        return summary

    def _apply_import(self, document) -> tuple[ImportSummary, list[SnapshotKind]]:
        parsed = self._importer.parse(document)
        summary = ImportSummary(version=parsed.version, imported_at=now_eastern())
        kinds = []
        if parsed.portfolio is not None:
            self._store.replace_portfolio(parsed.portfolio)
            summary.holdings_imported = len(parsed.portfolio)
            kinds.append(SnapshotKind.PORTFOLIO)
        if parsed.alerts is not None:
            self._store.replace_alerts(parsed.alerts)
            summary.alerts_imported = len(parsed.alerts)
            kinds.append(SnapshotKind.ALERTS)
        if parsed.watchlist is not None:
            self._store.replace_watchlist(parsed.watchlist)
            summary.watchlist_imported = len(parsed.watchlist)
            kinds.append(SnapshotKind.WATCHLIST)
        return summary, kinds

    def _encode(self, kind: SnapshotKind) -> list[dict[str, Any]]:
        if kind is SnapshotKind.PORTFOLIO:
            return self._exporter.encode_portfolio()
        if kind is SnapshotKind.ALERTS:
            return self._exporter.encode_alerts()
        return self._exporter.encode_watchlist()

    @staticmethod
    def _decode(kind: SnapshotKind, data: Any) -> list:
        entries = decode_collection(data, _DECODERS[kind], kind.value)
        if kind is SnapshotKind.WATCHLIST:
            entries = dedupe_watchlist(entries)
        return entries

    def _replace(self, kind: SnapshotKind, entries: list) -> None:
        if kind is SnapshotKind.PORTFOLIO:
            self._store.replace_portfolio(entries)
        elif kind is SnapshotKind.ALERTS:
            self._store.replace_alerts(entries)
        else:
            self._store.replace_watchlist(entries)
