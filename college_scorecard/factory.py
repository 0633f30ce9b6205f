"""Factory helpers for wiring the Scorecard client at startup."""

from __future__ import annotations

try:
    import redis  # type: ignore
except ImportError:  # pragma: no cover - optional dependency
    redis = None

from college_scorecard import config
from college_scorecard.backoff import BackoffPolicy
from college_scorecard.cache import ResponseCache
from college_scorecard.cache_store import CacheStore, InMemoryCacheStore, RedisCacheStore
from college_scorecard.fetcher import RetryingFetcher
from college_scorecard.http_executor import HttpRequestExecutor
from college_scorecard.quota import QuotaTracker
from college_scorecard.scorecard_api import ScorecardClient
from utils.logging_utils import get_tagged_logger, mask_url

logger = get_tagged_logger(__name__, tag="factory")


DEFAULT_CACHE_BACKEND = "memory"


def build_cache_store(settings: config.Settings | None = None) -> CacheStore:
    """Instantiate the configured cache backend."""
    settings = settings or config.settings
    backend = (settings.cache_backend or DEFAULT_CACHE_BACKEND).lower()

    if backend == "memory":
        logger.info("Using in-memory response cache")
        return InMemoryCacheStore()

    if backend == "redis":
        url = settings.cache_redis_url
        if not url:
            raise ValueError("cache_redis_url must be set for the Redis cache backend")
        if redis is None:
            logger.warning("redis package not installed; falling back to in-memory cache")
            return InMemoryCacheStore()
        try:
            client = redis.Redis.from_url(url)
            client.ping()
            logger.info("Using Redis response cache", extra={"redis_url": mask_url(url)})
            return RedisCacheStore(client)
        except Exception as exc:
            logger.warning("Falling back to in-memory cache (Redis unavailable)", extra={"error": str(exc)})
            return InMemoryCacheStore()

    raise ValueError(f"Unknown cache backend '{backend}'")


def build_fetcher(settings: config.Settings | None = None, store: CacheStore | None = None) -> RetryingFetcher:
    """Compose cache, quota tracker, backoff policy and executor from settings."""
    settings = settings or config.settings
    return RetryingFetcher(
        executor=HttpRequestExecutor(timeout_ms=settings.request_timeout_ms, user_agent=settings.user_agent),
        cache=ResponseCache(store or build_cache_store(settings), ttl_seconds=settings.cache_duration_seconds),
        quota=QuotaTracker(
            daily_limit=settings.daily_quota_limit,
            execution_time_limit_ms=settings.execution_time_limit_ms,
        ),
        backoff=BackoffPolicy(
            base_delay_ms=settings.retry_delay_base_ms,
            max_delay_ms=settings.retry_delay_max_ms,
        ),
        max_retries=settings.retry_attempts,
    )


def build_client(settings: config.Settings | None = None, store: CacheStore | None = None) -> ScorecardClient:
    """Build a ready-to-use ScorecardClient."""
    settings = settings or config.settings
    return ScorecardClient(
        build_fetcher(settings, store),
        base_url=settings.base_url,
        api_key=settings.api_key,
        per_page=settings.per_page,
    )
