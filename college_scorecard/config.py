"""Client configuration pulled from environment variables via pydantic."""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")

VERSION = "1.2.5"


class Settings(BaseSettings):
    """Environment-driven configuration for the College Scorecard client."""
    model_config = SettingsConfigDict(env_prefix="SCORECARD_", extra="ignore")

    base_url: str = "https://api.data.gov/ed/collegescorecard/v1/schools"
    api_key: str | None = None
    per_page: int = Field(default=25, ge=1)
    retry_attempts: int = Field(default=3, ge=1)
    retry_delay_base_ms: int = Field(default=300, ge=0)
    retry_delay_max_ms: int = Field(default=10000, ge=0)
    request_timeout_ms: int = Field(default=30000, gt=0)
    cache_duration_seconds: int = Field(default=600, gt=0)
    daily_quota_limit: int = Field(default=1000, ge=0)
    execution_time_limit_ms: int = Field(default=300000, gt=0)
    cache_backend: str = "memory"  # options: memory, redis
    cache_redis_url: str | None = None
    service_api_key: str | None = None
    version: str = VERSION

    @field_validator("base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so query strings attach cleanly."""
        return str(v).rstrip("/")

    @property
    def user_agent(self) -> str:
        """Client identifier sent with every request."""
        return f"CollegeScorecardClient/{self.version}"


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4, exclude={'api_key', 'service_api_key'})}")
