"""Ephemeral asset cache and playback-link expiry checks."""

from streamvibe.cache.expiry import is_expired, link_expiry
from streamvibe.cache.memory import AssetCache, CacheEntry

__all__ = [
    "AssetCache",
    "CacheEntry",
    "is_expired",
    "link_expiry",
]
