"""Snapshot export functionality."""

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from stockscope.core.timezone import format_datetime, now_eastern
from stockscope.snapshot.codec import (
    SNAPSHOT_VERSION,
    alert_to_dict,
    holding_to_dict,
    watchlist_item_to_dict,
)

if TYPE_CHECKING:
    from stockscope.services.domain_store import DomainStore


class SnapshotExporter:
    """
    Exporter for the full portfolio/alerts/watchlist document.

    Format: {portfolio, alerts, watchlist, exportDate, version}
    """

    def __init__(self, store: "DomainStore"):
        self._store = store

    def export_all(self) -> dict[str, Any]:
        """Build the versioned export document from the current state."""
        return {
            "portfolio": self.encode_portfolio(),
            "alerts": self.encode_alerts(),
            "watchlist": self.encode_watchlist(),
            "exportDate": format_datetime(now_eastern()),
            "version": SNAPSHOT_VERSION,
        }

    def encode_portfolio(self) -> list[dict[str, Any]]:
        return [holding_to_dict(h) for h in self._store.holdings]

    def encode_alerts(self) -> list[dict[str, Any]]:
        return [alert_to_dict(a) for a in self._store.alerts]

    def encode_watchlist(self) -> list[dict[str, Any]]:
        return [watchlist_item_to_dict(w) for w in self._store.watchlist]

    def export_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.export_all(), indent=indent)

    def export_file(self, path: str) -> Path:
        """
        Write the export document to a file.

        Args:
            path: Output file path (parent directories are created)
        """
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(self.export_json(), encoding="utf-8")
        return file_path
