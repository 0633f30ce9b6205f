"""Shared protocol for cache store backends."""

from typing import Optional, Protocol


class CacheStore(Protocol):
    """Protocol for string key-value stores with a per-entry TTL."""
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if missing or expired."""

    def put(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value that expires after `ttl_seconds`."""

    def clear(self) -> None:
        """Remove every entry owned by this store."""
