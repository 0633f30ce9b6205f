"""Response cache keyed by a digest of the request URL.

A cache operation either returns a value or it doesn't: backend outages,
serialization errors and corrupt entries are logged and reported as a miss,
so a failing cache can only cost an extra network call.
"""

from __future__ import annotations

import base64
import hashlib
import json
import re
from typing import Any, Optional

from college_scorecard.cache_store.base import CacheStore
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="cache")

CACHE_KEY_PREFIX = "scorecard_"
MAX_CACHE_KEY_LENGTH = 200
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def cache_key_for_url(url: str) -> str:
    """Derive a stable, alphanumeric cache key from the full request URL."""
    digest = base64.b64encode(hashlib.md5(url.encode("utf-8")).digest()).decode("ascii")
    return (CACHE_KEY_PREFIX + _NON_ALNUM.sub("", digest))[:MAX_CACHE_KEY_LENGTH]


class ResponseCache:
    """JSON-aware wrapper over a CacheStore."""

    def __init__(self, store: CacheStore, ttl_seconds: int = 600) -> None:
        self.store = store
        self.ttl_seconds = ttl_seconds

    def get(self, key: str) -> Optional[Any]:
        """Return the cached JSON value for `key`, or None."""
        try:
            raw = self.store.get(key)
            if raw is None:
                return None
            return json.loads(raw)
        except Exception as exc:
            logger.warning("Cache read failed; treating as miss", extra={"key": key, "error": str(exc)})
            return None

    def put(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        """Serialize and store `value`; failures are logged and dropped."""
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        try:
            self.store.put(key, json.dumps(value), ttl)
        except Exception as exc:
            logger.warning("Cache write failed; continuing without caching", extra={"key": key, "error": str(exc)})

    def clear(self) -> bool:
        """Best-effort clear; returns False if the backend refused."""
        try:
            self.store.clear()
        except Exception as exc:
            logger.error("Failed to clear response cache: %s", exc)
            return False
        return True
