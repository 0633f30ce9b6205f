"""Daily call quota and per-run execution-time budget."""

from __future__ import annotations

import datetime as dt
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from college_scorecard.results import FailureReason
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="quota")


@dataclass
class QuotaState:
    """Mutable counters owned by a single QuotaTracker."""
    daily_usage: int = 0
    last_reset_date: dt.date = field(default_factory=dt.date.today)
    execution_start: Optional[float] = None  # monotonic seconds


@dataclass(frozen=True)
class QuotaStatus:
    """Snapshot of quota usage for display."""
    daily_usage: int
    daily_limit: int
    remaining: int
    last_reset: dt.date
    execution_time_elapsed_ms: int


class QuotaTracker:
    """Counts network attempts per calendar day and enforces a per-run time budget.

    Both limits are checked before a network call is made. The execution budget
    is measured from the first check of a run (or from the last
    `reset_execution_timer()` call), so it has to trigger before a host-imposed
    ceiling is hit rather than after.
    """

    def __init__(
        self,
        daily_limit: int = 1000,
        execution_time_limit_ms: int = 300000,
        *,
        state: QuotaState | None = None,
        today: Callable[[], dt.date] = dt.date.today,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.daily_limit = daily_limit
        self.execution_time_limit_ms = execution_time_limit_ms
        self._today = today
        self._monotonic = monotonic
        self.state = state or QuotaState(last_reset_date=today())
        self._lock = threading.Lock()

    def _roll_over_if_new_day(self) -> None:
        today = self._today()
        if self.state.last_reset_date != today:
            logger.info(
                "Resetting daily quota",
                extra={"previous_date": str(self.state.last_reset_date), "usage": self.state.daily_usage},
            )
            self.state.daily_usage = 0
            self.state.last_reset_date = today

    def _elapsed_ms(self) -> int:
        if self.state.execution_start is None:
            return 0
        return int((self._monotonic() - self.state.execution_start) * 1000)

    def gate(self) -> Optional[FailureReason]:
        """Return the reason a network attempt must not be made now, or None."""
        with self._lock:
            self._roll_over_if_new_day()
            if self.state.daily_usage >= self.daily_limit:
                logger.warning("Daily API quota reached (%d/%d)", self.state.daily_usage, self.daily_limit)
                return FailureReason.QUOTA_EXCEEDED

            if self.state.execution_start is None:
                self.state.execution_start = self._monotonic()
            elapsed = self._elapsed_ms()
            if elapsed >= self.execution_time_limit_ms:
                logger.warning(
                    "Execution time budget spent (%dms of %dms)", elapsed, self.execution_time_limit_ms
                )
                return FailureReason.TIME_LIMIT_EXCEEDED
            return None

    def check_quota(self) -> bool:
        """True if another network attempt is allowed."""
        return self.gate() is None

    def increment(self) -> None:
        """Record one network attempt."""
        with self._lock:
            self._roll_over_if_new_day()
            self.state.daily_usage += 1

    def reset_execution_timer(self) -> None:
        """Start a fresh execution budget for a new top-level operation."""
        with self._lock:
            self.state.execution_start = self._monotonic()

    def status(self) -> QuotaStatus:
        with self._lock:
            self._roll_over_if_new_day()
            return QuotaStatus(
                daily_usage=self.state.daily_usage,
                daily_limit=self.daily_limit,
                remaining=self.daily_limit - self.state.daily_usage,
                last_reset=self.state.last_reset_date,
                execution_time_elapsed_ms=self._elapsed_ms(),
            )
