"""Shared configuration."""

from streamvibe.config.constants import DEFAULT_DATABASE_URL
from streamvibe.config.database import DatabaseSettings

__all__ = [
    "DEFAULT_DATABASE_URL",
    "DatabaseSettings",
]
