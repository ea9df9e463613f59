"""Timestamps for stored records, normalized to US/Eastern market time."""

from datetime import datetime, timezone
from typing import Union

import pytz
from dateutil import parser as date_parser

EASTERN_TZ = pytz.timezone("US/Eastern")

StoredTimestamp = Union[str, int, float]


def now_eastern() -> datetime:
    return datetime.now(EASTERN_TZ)


def to_eastern(dt: datetime) -> datetime:
    """Naive datetimes are taken to be Eastern already."""
    if dt.tzinfo is None:
        return EASTERN_TZ.localize(dt)
    return dt.astimezone(EASTERN_TZ)


def parse_datetime_eastern(value: StoredTimestamp) -> datetime:
    """
    Read a stored timestamp.

    Accepts ISO-8601 text (with or without an offset; a missing offset
    means Eastern) and epoch milliseconds as written by browser clients.
    Raises ValueError when the value cannot be read.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a timestamp: {value!r}")
    if isinstance(value, (int, float)):
        try:
            utc = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError) as e:
            raise ValueError(f"Epoch value out of range: {value!r}") from e
        return utc.astimezone(EASTERN_TZ)
    try:
        return to_eastern(date_parser.parse(value))
    except OverflowError as e:
        raise ValueError(f"Timestamp out of range: {value!r}") from e


def format_datetime(dt: datetime) -> str:
    """ISO-8601 text in Eastern time; the form every record is written in."""
    return to_eastern(dt).isoformat()
