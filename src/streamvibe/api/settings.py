"""Application settings loaded from environment variables."""

import functools

from pydantic_settings import BaseSettings

from streamvibe.cache.memory import DEFAULT_MAX_ENTRIES, DEFAULT_TTL_SECONDS
from streamvibe.source.constants import (
    DEFAULT_CONCURRENCY_LIMIT,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_REGION_HINT,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RETRY_BASE_DELAY,
)


class AppSettings(BaseSettings):
    """API service configuration."""

    # Upstream source
    SOURCE_BASE_URL: str = ""
    SOURCE_API_KEY: str = ""
    SOURCE_API_HOST: str = ""
    SOURCE_REGION_HINT: str = DEFAULT_REGION_HINT
    SOURCE_MAX_ATTEMPTS: int = DEFAULT_MAX_ATTEMPTS
    SOURCE_RETRY_BASE_DELAY: float = DEFAULT_RETRY_BASE_DELAY
    SOURCE_REQUEST_TIMEOUT: float = DEFAULT_REQUEST_TIMEOUT
    SOURCE_CONCURRENCY_LIMIT: int = DEFAULT_CONCURRENCY_LIMIT

    # Ephemeral asset cache
    ASSET_CACHE_TTL_SECONDS: float = DEFAULT_TTL_SECONDS
    ASSET_CACHE_MAX_ENTRIES: int = DEFAULT_MAX_ENTRIES

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # CORS
    CORS_ALLOWED_ORIGINS: str = "*"  # comma-separated origins

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = {"env_prefix": ""}


@functools.lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return cached application settings singleton."""
    return AppSettings()
