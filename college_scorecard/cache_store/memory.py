"""In-memory cache store with TTL, intended for single-process use and tests."""

import threading
import time
from typing import Callable, Optional

from college_scorecard.cache_store.base import CacheStore
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="cache_store/in_memory_cache_store")


class InMemoryCacheStore(CacheStore):
    """Thread-safe, TTL-aware in-memory store."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize an empty store; `clock` returns seconds and is swappable in tests."""
        logger.debug("Initializing InMemoryCacheStore")
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        """Return the value for `key`, dropping it if it has expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at <= self._clock():
                self._entries.pop(key, None)
                return None
            return value

    def put(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store `value` until `ttl_seconds` from now, replacing any previous entry."""
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl_seconds)

    def clear(self) -> None:
        """Clear all entries."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
