"""Retrying fetcher: cache, quota gate, HTTP attempts with backoff."""

from __future__ import annotations

import json
import time
from typing import Callable

from college_scorecard.backoff import BackoffPolicy, is_retryable_status
from college_scorecard.cache import ResponseCache, cache_key_for_url
from college_scorecard.http_executor import HttpRequestExecutor
from college_scorecard.quota import QuotaTracker
from college_scorecard.results import Failure, FailureReason, FetchResult, HttpResponse, Success
from utils.logging_utils import get_tagged_logger, mask_url

logger = get_tagged_logger(__name__, tag="fetcher")

_GATE_DETAILS = {
    FailureReason.QUOTA_EXCEEDED: "API quota limit reached",
    FailureReason.TIME_LIMIT_EXCEEDED: "Execution time limit approaching",
}


def _describe(response: HttpResponse) -> str:
    """Render a failed attempt the way it is reported to callers."""
    text = f"HTTP {response.status_code}"
    if response.error:
        text += f": {response.error}"
    return text


class RetryingFetcher:
    """Public entry point for fetching JSON from the Scorecard API.

    `fetch()` never raises; every path ends in a Success or a Failure.
    """

    def __init__(
        self,
        executor: HttpRequestExecutor,
        cache: ResponseCache,
        quota: QuotaTracker,
        backoff: BackoffPolicy | None = None,
        *,
        max_retries: int = 3,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.executor = executor
        self.cache = cache
        self.quota = quota
        self.backoff = backoff or BackoffPolicy()
        self.max_retries = max_retries
        self._sleep = sleep

    def fetch(self, url: str, *, use_cache: bool = True, max_retries: int | None = None) -> FetchResult:
        """Fetch and parse JSON from `url`.

        Cache hits skip the quota gate and the network entirely. Status 429 and
        5xx are retried with exponential backoff; any other non-200 status ends
        the fetch on the spot.
        """
        attempts = self.max_retries if max_retries is None or max_retries <= 0 else max_retries
        safe_url = mask_url(url)

        cache_key = None
        if use_cache:
            cache_key = cache_key_for_url(url)
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug("Cache hit for %s", safe_url)
                return Success(payload=cached, served_from_cache=True)

        last: HttpResponse | None = None
        for attempt in range(attempts):
            rejected = self.quota.gate()
            if rejected is not None:
                return Failure(reason=rejected, detail=_GATE_DETAILS[rejected])

            response = self.executor.execute(url)
            self.quota.increment()
            last = response

            if response.success:
                try:
                    payload = json.loads(response.body or "")
                except (ValueError, RecursionError) as exc:
                    logger.error("Unparsable 200 response from %s: %s", safe_url, exc)
                    return Failure(
                        reason=FailureReason.PARSE_ERROR,
                        detail=f"Failed to parse JSON response: {exc}",
                        status_code=response.status_code,
                    )
                if cache_key is not None:
                    self.cache.put(cache_key, payload)
                logger.info("Fetched %s on attempt %d", safe_url, attempt + 1)
                return Success(payload=payload, served_from_cache=False)

            if not is_retryable_status(response.status_code):
                if response.status_code == 0:
                    return Failure(
                        reason=FailureReason.TRANSPORT_ERROR,
                        detail=_describe(response),
                        status_code=0,
                    )
                logger.warning("Non-retryable HTTP %d from %s", response.status_code, safe_url)
                return Failure(
                    reason=FailureReason.HTTP_ERROR,
                    detail=_describe(response),
                    status_code=response.status_code,
                )

            if attempt < attempts - 1:
                delay_ms = self.backoff.delay_for_attempt(attempt)
                logger.warning(
                    "HTTP %d from %s; retrying in %dms (attempt %d/%d)",
                    response.status_code, safe_url, delay_ms, attempt + 1, attempts,
                )
                self._sleep(delay_ms / 1000.0)

        detail = "Maximum retries exceeded"
        if last is not None:
            detail = f"{detail} (last: {_describe(last)})"
        logger.error("Giving up on %s after %d attempts", safe_url, attempts)
        return Failure(
            reason=FailureReason.RETRIES_EXHAUSTED,
            detail=detail,
            status_code=last.status_code if last is not None else None,
        )
