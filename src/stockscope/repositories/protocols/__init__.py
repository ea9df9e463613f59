"""Repository protocols (interfaces)."""

from stockscope.repositories.protocols.kv_repo import KeyValueRepository

__all__ = [
    "KeyValueRepository",
]
