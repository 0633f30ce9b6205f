"""Redis-backed cache store with TTL."""

from typing import Optional

from college_scorecard.cache_store.base import CacheStore
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="cache_store/redis_cache_store")


class RedisCacheStore(CacheStore):
    """Stores cached response bodies in Redis under a key prefix, expiring via SETEX."""

    def __init__(self, client, prefix: str = "college_scorecard:") -> None:
        """Initialize with a Redis client and a key prefix."""
        logger.debug("Initializing RedisCacheStore")
        self.client = client
        self.prefix = prefix

    def _key(self, key: str) -> str:
        """Return the namespaced Redis key."""
        return f"{self.prefix}{key}"

    def get(self, key: str) -> Optional[str]:
        """Fetch a value; Redis handles expiry."""
        raw = self.client.get(self._key(key))
        if raw is None:
            return None
        if isinstance(raw, bytes):
            return raw.decode("utf-8")
        return str(raw)

    def put(self, key: str, value: str, ttl_seconds: int) -> None:
        """Write a value with a TTL."""
        self.client.setex(self._key(key), ttl_seconds, value.encode("utf-8"))

    def clear(self) -> None:
        """Delete every key under the configured prefix."""
        for key in self.client.scan_iter(f"{self.prefix}*"):
            self.client.delete(key)
