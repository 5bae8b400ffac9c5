"""Pydantic models for resolved assets and per-user play history.

These are pure data models shared by the resolver, the persistence layer
and the history tracker. No DB or HTTP dependencies.
"""

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Assets
# ---------------------------------------------------------------------------


class AssetSummary(BaseModel):
    """Descriptive fields recorded in a user's history for one play."""

    id: str
    title: str = ""
    author: str | None = None
    thumbnail: str | None = None
    duration_seconds: int | None = None
    is_explicit: bool = False


class Asset(BaseModel):
    """Resolved representation of one external identifier.

    ``playback_links`` and ``thumbnail_links`` are ordered; the last entry
    is the one in active use. Each playback link embeds its own expiry as
    a query parameter.
    """

    id: str
    playback_links: list[str] = Field(min_length=1)
    title: str = ""
    author: str | None = None
    thumbnail_links: list[str] = Field(default_factory=list)
    duration_seconds: int | None = None
    is_explicit: bool = False
    keywords: list[str] = Field(default_factory=list)

    @property
    def playback_url(self) -> str:
        return self.playback_links[-1]

    @property
    def thumbnail_url(self) -> str | None:
        return self.thumbnail_links[-1] if self.thumbnail_links else None

    def summary(self) -> AssetSummary:
        """Build the history summary for this asset."""
        return AssetSummary(
            id=self.id,
            title=self.title,
            author=self.author,
            thumbnail=self.thumbnail_url,
            duration_seconds=self.duration_seconds,
            is_explicit=self.is_explicit,
        )


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------


class PlayedAsset(AssetSummary):
    """Asset summary with a play counter (frequency view)."""

    play_count: int = Field(default=1, ge=1)


class HistoryRecord(BaseModel):
    """Both history views of one user.

    ``recent`` is most-recent-first and holds one entry per asset id.
    ``frequent`` holds one entry per asset id in first-play order.
    """

    recent: list[AssetSummary] = Field(default_factory=list)
    frequent: list[PlayedAsset] = Field(default_factory=list)
