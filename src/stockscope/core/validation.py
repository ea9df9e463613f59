"""Input normalization shared by the store and the snapshot codec."""

from decimal import Decimal, InvalidOperation
from typing import Any

from stockscope.core.exceptions import InvalidInputError

MAX_SYMBOL_LENGTH = 20


def normalize_symbol(symbol: Any) -> str:
    """Strip and uppercase a ticker symbol, rejecting empty or oversized input."""
    if not isinstance(symbol, str):
        raise InvalidInputError("Symbol must be a string")
    normalized = symbol.strip().upper()
    if not normalized:
        raise InvalidInputError("Symbol is required")
    if len(normalized) > MAX_SYMBOL_LENGTH:
        raise InvalidInputError(f"Symbol too long: {normalized}")
    return normalized


def parse_positive_decimal(value: Any, field_name: str) -> Decimal:
    """Convert value to a finite Decimal > 0."""
    if isinstance(value, bool) or value is None:
        raise InvalidInputError(f"{field_name} must be a number")
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidInputError(f"{field_name} must be a number, got {value!r}")
    if not number.is_finite():
        raise InvalidInputError(f"{field_name} must be finite")
    if number <= 0:
        raise InvalidInputError(f"{field_name} must be greater than 0")
    return number
