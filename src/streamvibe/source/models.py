"""Pydantic models for the upstream source's JSON payload.

Field names follow the source's camelCase keys through aliases.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from streamvibe.schemas import Asset


class SourceThumbnail(BaseModel):
    """Thumbnail image, ordered smallest to largest by the source."""

    url: str
    width: int | None = None
    height: int | None = None


class SourceFormat(BaseModel):
    """One adaptive stream format; ``url`` carries an ``expire`` query parameter."""

    model_config = ConfigDict(populate_by_name=True)

    url: str
    mime_type: str | None = Field(default=None, alias="mimeType")
    bitrate: int | None = None


class SourceVideoResponse(BaseModel):
    """Top-level response of the source's video details endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    status: str | None = None
    id: str | None = None
    title: str = ""
    author: str | None = None
    thumbnail: list[SourceThumbnail] = Field(default_factory=list)
    adaptive_formats: list[SourceFormat] = Field(default_factory=list, alias="adaptiveFormats")
    duration: int | None = None
    is_explicit: bool | None = Field(default=None, alias="isExplicit")
    keywords: list[str] = Field(default_factory=list)

    @field_validator("thumbnail", "adaptive_formats", "keywords", mode="before")
    @classmethod
    def _null_as_empty(cls, value: object) -> object:
        return [] if value is None else value

    def to_asset(self, identifier: str) -> Asset | None:
        """Convert to a domain ``Asset``; ``None`` when there is nothing playable."""
        if not self.adaptive_formats:
            return None
        return Asset(
            id=identifier,
            playback_links=[fmt.url for fmt in self.adaptive_formats],
            title=self.title,
            author=self.author,
            thumbnail_links=[thumb.url for thumb in self.thumbnail],
            duration_seconds=self.duration,
            is_explicit=bool(self.is_explicit),
            keywords=self.keywords,
        )
