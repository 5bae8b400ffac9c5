"""Centralized constants for the API service."""

from dataclasses import dataclass

# --- Application metadata ---

APP_TITLE = "Stream Vibe API"
APP_DESCRIPTION = "Resolves media identifiers and redirects to a playable stream"
APP_VERSION = "0.1.0"
SERVICE_NAME = "stream-api"


# --- Route configuration ---


@dataclass(frozen=True, slots=True)
class _Route:
    """A route prefix paired with its OpenAPI tag."""

    prefix: str
    tag: str


class Routes:
    """API route prefixes and tags."""

    PLAY = _Route("", "play")
    HEALTH = "/health"


# --- Error bodies ---

ERROR_IDENTIFIER_REQUIRED = "videoId is required"
ERROR_NOT_FOUND = "Song not found"
ERROR_INTERNAL = "Internal server error"
