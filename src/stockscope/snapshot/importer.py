"""Snapshot import functionality."""

import json
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from stockscope.core.exceptions import SnapshotImportError
from stockscope.domain.models import Alert, Holding, WatchlistItem
from stockscope.snapshot.codec import (
    SNAPSHOT_VERSION,
    alert_from_dict,
    decode_collection,
    dedupe_watchlist,
    holding_from_dict,
    watchlist_item_from_dict,
)

logger = logging.getLogger(__name__)


@dataclass
class ParsedSnapshot:
    """Decoded collections; None means the document did not carry that collection."""

    portfolio: Optional[list[Holding]] = None
    alerts: Optional[list[Alert]] = None
    watchlist: Optional[list[WatchlistItem]] = None
    version: Optional[str] = None


class SnapshotImporter:
    """
    Parser for export documents.

    Parsing is all-or-nothing: a malformed document raises
    SnapshotImportError before any state is touched. Partial documents are
    allowed, and unknown versions are parsed best-effort.
    """

    def parse(self, document: Union[str, bytes, dict[str, Any]]) -> ParsedSnapshot:
        """Decode a document given as JSON text or an already-parsed dict."""
        if isinstance(document, (str, bytes)):
            try:
                document = json.loads(document)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise SnapshotImportError(f"Import file is not valid JSON: {e}")

        if not isinstance(document, dict):
            raise SnapshotImportError("Import document must be a JSON object")

        version = document.get("version")
        if version is not None and str(version) != SNAPSHOT_VERSION:
            logger.warning("Importing snapshot version %s (expected %s)", version, SNAPSHOT_VERSION)

        parsed = ParsedSnapshot(version=str(version) if version is not None else None)
        if "portfolio" in document:
            parsed.portfolio = self._unique_ids(
                decode_collection(document["portfolio"], holding_from_dict, "portfolio"),
                "holding_id",
            )
        if "alerts" in document:
            parsed.alerts = self._unique_ids(
                decode_collection(document["alerts"], alert_from_dict, "alerts"),
                "alert_id",
            )
        if "watchlist" in document:
            parsed.watchlist = self._unique_ids(
                dedupe_watchlist(
                    decode_collection(document["watchlist"], watchlist_item_from_dict, "watchlist")
                ),
                "item_id",
            )

        if parsed.portfolio is None and parsed.alerts is None and parsed.watchlist is None:
            raise SnapshotImportError("Import document contains no portfolio, alerts or watchlist")
        return parsed

    def parse_file(self, path: str) -> ParsedSnapshot:
        file_path = Path(path)
        if not file_path.exists():
            raise SnapshotImportError(f"File not found: {path}")
        return self.parse(file_path.read_text(encoding="utf-8"))

    @staticmethod
    def _unique_ids(entities: list, id_attr: str) -> list:
        """Give a fresh id to any entity whose id repeats an earlier one."""
        seen: set[str] = set()
        for entity in entities:
            if getattr(entity, id_attr) in seen:
                setattr(entity, id_attr, str(uuid.uuid4()))
            seen.add(getattr(entity, id_attr))
        return entities
