"""JSON field mapping for persisted and exported snapshots."""

import uuid
from datetime import datetime
from typing import Any, Optional

from stockscope.core.exceptions import AppError, SnapshotImportError
from stockscope.core.timezone import format_datetime, now_eastern, parse_datetime_eastern
from stockscope.domain.models import Alert, Holding, WatchlistItem
from stockscope.core.validation import normalize_symbol, parse_positive_decimal

SNAPSHOT_VERSION = "1.0"


def _pick(data: dict[str, Any], *names: str) -> Any:
    """Return the first present field among names (camelCase first, snake_case fallback)."""
    for name in names:
        if name in data:
            return data[name]
    return None


def _format_optional(dt: Optional[datetime]) -> Optional[str]:
    return format_datetime(dt) if dt else None


def _parse_timestamp(value: Any, field_name: str) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise SnapshotImportError(f"{field_name} must be an ISO timestamp or epoch milliseconds")
    try:
        return parse_datetime_eastern(value)
    except ValueError:
        raise SnapshotImportError(f"Invalid {field_name}: {value!r}")


def _parse_id(value: Any) -> str:
    if value is None or value == "":
        return str(uuid.uuid4())
    return str(value)


def _require_object(entry: Any, kind: str) -> dict[str, Any]:
    if not isinstance(entry, dict):
        raise SnapshotImportError(f"{kind} entry must be an object")
    return entry


# Full representation


def holding_to_dict(holding: Holding) -> dict[str, Any]:
    return {
        "id": holding.holding_id,
        "symbol": holding.symbol,
        "shares": str(holding.shares),
        "avgPrice": str(holding.avg_price),
        "dateAdded": _format_optional(holding.date_added),
    }


def alert_to_dict(alert: Alert) -> dict[str, Any]:
    data = {
        "id": alert.alert_id,
        "symbol": alert.symbol,
        "targetPrice": str(alert.target_price),
        "dateCreated": _format_optional(alert.date_created),
        "triggered": alert.triggered,
    }
    if alert.trigger_date is not None:
        data["triggerDate"] = format_datetime(alert.trigger_date)
    return data


def watchlist_item_to_dict(item: WatchlistItem) -> dict[str, Any]:
    return {
        "id": item.item_id,
        "symbol": item.symbol,
        "dateAdded": _format_optional(item.date_added),
    }


def holding_from_dict(entry: Any) -> Holding:
    """Decode one holding; validation failures raise SnapshotImportError."""
    data = _require_object(entry, "Holding")
    try:
        return Holding(
            holding_id=_parse_id(_pick(data, "id", "holding_id")),
            symbol=normalize_symbol(_pick(data, "symbol")),
            shares=parse_positive_decimal(_pick(data, "shares"), "shares"),
            avg_price=parse_positive_decimal(_pick(data, "avgPrice", "avg_price"), "avgPrice"),
            date_added=_parse_timestamp(_pick(data, "dateAdded", "date_added"), "dateAdded")
            or now_eastern(),
        )
    except SnapshotImportError:
        raise
    except AppError as e:
        raise SnapshotImportError(f"Invalid holding: {e.message}")


def alert_from_dict(entry: Any) -> Alert:
    """
    Decode one alert.

    A triggered alert must carry its trigger date; a pending alert's stray
    trigger date is dropped.
    """
    data = _require_object(entry, "Alert")
    triggered = _pick(data, "triggered")
    if triggered is None:
        triggered = False
    if not isinstance(triggered, bool):
        raise SnapshotImportError(f"Alert 'triggered' must be a boolean, got {triggered!r}")

    trigger_date = _parse_timestamp(_pick(data, "triggerDate", "trigger_date"), "triggerDate")
    if triggered and trigger_date is None:
        raise SnapshotImportError("Triggered alert is missing triggerDate")
    if not triggered:
        trigger_date = None

    try:
        return Alert(
            alert_id=_parse_id(_pick(data, "id", "alert_id")),
            symbol=normalize_symbol(_pick(data, "symbol")),
            target_price=parse_positive_decimal(
                _pick(data, "targetPrice", "target_price"), "targetPrice"
            ),
            date_created=_parse_timestamp(_pick(data, "dateCreated", "date_created"), "dateCreated")
            or now_eastern(),
            triggered=triggered,
            trigger_date=trigger_date,
        )
    except SnapshotImportError:
        raise
    except AppError as e:
        raise SnapshotImportError(f"Invalid alert: {e.message}")


def watchlist_item_from_dict(entry: Any) -> WatchlistItem:
    data = _require_object(entry, "Watchlist")
    try:
        return WatchlistItem(
            item_id=_parse_id(_pick(data, "id", "item_id")),
            symbol=normalize_symbol(_pick(data, "symbol")),
            date_added=_parse_timestamp(_pick(data, "dateAdded", "date_added"), "dateAdded")
            or now_eastern(),
        )
    except SnapshotImportError:
        raise
    except AppError as e:
        raise SnapshotImportError(f"Invalid watchlist item: {e.message}")


def decode_collection(entries: Any, decoder, kind: str) -> list:
    """Decode a list of entries, rejecting the whole collection on the first bad entry."""
    if not isinstance(entries, list):
        raise SnapshotImportError(f"'{kind}' must be a list")
    decoded = []
    for position, entry in enumerate(entries):
        try:
            decoded.append(decoder(entry))
        except SnapshotImportError as e:
            raise SnapshotImportError(f"{kind}[{position}]: {e.message}")
    return decoded


def dedupe_watchlist(items: list[WatchlistItem]) -> list[WatchlistItem]:
    """Keep the first item per symbol."""
    seen: set[str] = set()
    unique = []
    for item in items:
        if item.symbol not in seen:
            seen.add(item.symbol)
            unique.append(item)
    return unique


# Compact representation (derived, never read back)


def encode_compact(
    holdings: list[Holding],
    alerts: list[Alert],
    watchlist: list[WatchlistItem],
    last_updated: datetime,
) -> dict[str, Any]:
    """Short-field copy of the three collections."""
    return {
        "p": [
            {
                "i": h.holding_id,
                "s": h.symbol,
                "n": str(h.shares),
                "a": str(h.avg_price),
                "d": _format_optional(h.date_added),
            }
            for h in holdings
        ],
        "a": [
            {
                "i": a.alert_id,
                "s": a.symbol,
                "t": str(a.target_price),
                "d": _format_optional(a.date_created),
                "x": 1 if a.triggered else 0,
                "y": _format_optional(a.trigger_date),
            }
            for a in alerts
        ],
        "w": [
            {
                "i": w.item_id,
                "s": w.symbol,
                "d": _format_optional(w.date_added),
            }
            for w in watchlist
        ],
        "u": format_datetime(last_updated),
    }
