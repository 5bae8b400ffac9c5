"""Re-export all model classes."""

from streamvibe.db.models.asset import CachedAsset
from streamvibe.db.models.user import User

__all__ = [
    "CachedAsset",
    "User",
]
