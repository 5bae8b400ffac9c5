"""Playback routes."""

from streamvibe.api.play.router import router

__all__ = ["router"]
