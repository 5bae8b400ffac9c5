"""Shared database package -- convenience re-exports.

Importing this module registers all models with Base.metadata.
"""

from streamvibe.db.base import Base
from streamvibe.db.models import CachedAsset, User
from streamvibe.db.operations import AssetRepository, UserRepository
from streamvibe.db.session import DatabaseManager

__all__ = [
    # Base
    "Base",
    # Models
    "CachedAsset",
    "User",
    # Session
    "DatabaseManager",
    # Operations
    "AssetRepository",
    "UserRepository",
]
