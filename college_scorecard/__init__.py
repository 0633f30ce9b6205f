"""Resilient client for the College Scorecard API."""

from .backoff import BackoffPolicy, is_retryable_status
from .cache import ResponseCache, cache_key_for_url
from .fetcher import RetryingFetcher
from .http_executor import HttpRequestExecutor
from .quota import QuotaState, QuotaStatus, QuotaTracker
from .results import Failure, FailureReason, FetchResult, HttpResponse, Success
from .scorecard_api import CollegeLookup, ScorecardClient, SearchResult, build_url

__all__ = [
    "BackoffPolicy",
    "is_retryable_status",
    "ResponseCache",
    "cache_key_for_url",
    "RetryingFetcher",
    "HttpRequestExecutor",
    "QuotaState",
    "QuotaStatus",
    "QuotaTracker",
    "Failure",
    "FailureReason",
    "FetchResult",
    "HttpResponse",
    "Success",
    "CollegeLookup",
    "ScorecardClient",
    "SearchResult",
    "build_url",
]
