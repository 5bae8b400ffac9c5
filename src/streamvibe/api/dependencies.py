"""Process-wide service instances and their FastAPI providers."""

import functools

from streamvibe.api.settings import get_settings
from streamvibe.cache.memory import AssetCache
from streamvibe.db.session import DatabaseManager
from streamvibe.history.service import HistoryTracker
from streamvibe.resolver.service import AssetResolver
from streamvibe.source.client import SourceClient

db_manager = DatabaseManager.from_env()


@functools.lru_cache(maxsize=1)
def get_asset_cache() -> AssetCache:
    settings = get_settings()
    return AssetCache(settings.ASSET_CACHE_TTL_SECONDS, max_entries=settings.ASSET_CACHE_MAX_ENTRIES)


@functools.lru_cache(maxsize=1)
def get_source_client() -> SourceClient:
    settings = get_settings()
    return SourceClient(
        settings.SOURCE_BASE_URL,
        api_key=settings.SOURCE_API_KEY,
        api_host=settings.SOURCE_API_HOST,
        region_hint=settings.SOURCE_REGION_HINT,
        max_attempts=settings.SOURCE_MAX_ATTEMPTS,
        retry_base_delay=settings.SOURCE_RETRY_BASE_DELAY,
        concurrency_limit=settings.SOURCE_CONCURRENCY_LIMIT,
        request_timeout=settings.SOURCE_REQUEST_TIMEOUT,
    )


@functools.lru_cache(maxsize=1)
def get_history_tracker() -> HistoryTracker:
    return HistoryTracker(db_manager)


@functools.lru_cache(maxsize=1)
def get_resolver() -> AssetResolver:
    """Return the shared resolver; one instance so single-flight spans all requests."""
    return AssetResolver(
        db_manager,
        get_source_client(),
        get_asset_cache(),
        get_history_tracker(),
    )
