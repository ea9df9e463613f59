"""Key-value repository protocol for snapshot storage."""

from typing import Protocol, Optional


class KeyValueRepository(Protocol):
    """
    Interface for durable string-to-string storage.

    Implementations raise PersistenceError when the backend fails.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None."""
        ...

    def set(self, key: str, value: str) -> None:
        """Insert or replace the value under key."""
        ...

    def delete(self, key: str) -> bool:
        """Delete key; return True if it existed."""
        ...

    def keys(self) -> list[str]:
        """List stored keys in sorted order."""
        ...

    def items(self) -> dict[str, str]:
        """Return every stored key with its value."""
        ...
