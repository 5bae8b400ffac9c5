"""Identifier to playable asset resolution."""

from streamvibe.resolver.exceptions import AssetNotFoundError, ResolutionError, UpstreamError
from streamvibe.resolver.service import AssetResolver
from streamvibe.resolver.validation import is_valid_user_key

__all__ = [
    "AssetNotFoundError",
    "AssetResolver",
    "ResolutionError",
    "UpstreamError",
    "is_valid_user_key",
]
