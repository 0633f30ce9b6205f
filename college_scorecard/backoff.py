"""Deterministic exponential backoff and retryable-status classification."""

from __future__ import annotations

from dataclasses import dataclass

RATE_LIMITED_STATUS = 429


def is_retryable_status(status_code: int) -> bool:
    """Return True for 429 and any 5xx; everything else (including 0) is permanent."""
    return status_code == RATE_LIMITED_STATUS or 500 <= status_code <= 599


@dataclass(frozen=True)
class BackoffPolicy:
    """Pure exponential backoff clamped at `max_delay_ms`. No jitter."""
    base_delay_ms: int = 300
    max_delay_ms: int = 10000

    def delay_for_attempt(self, attempt_index: int) -> int:
        """Milliseconds to wait after the failed attempt `attempt_index` (0-based)."""
        if attempt_index < 0:
            raise ValueError("attempt_index must be >= 0")
        return min(self.base_delay_ms * (2 ** attempt_index), self.max_delay_ms)
