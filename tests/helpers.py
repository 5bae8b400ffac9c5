"""Shared builders for assets and source payloads."""

from typing import Any

from streamvibe.schemas import Asset

SOURCE_URL = "https://source.test/video"


def stream_link(expire: int | None, itag: int = 251) -> str:
    """Build a playback link, optionally carrying an ``expire`` parameter."""
    link = f"https://media.test/videoplayback?itag={itag}&id=o-abc"
    if expire is not None:
        link += f"&expire={expire}"
    return link


def make_asset(identifier: str = "abc123", *, expire: int | None = 2_000_000_000, title: str = "Song") -> Asset:
    return Asset(
        id=identifier,
        playback_links=[stream_link(expire, itag=140), stream_link(expire)],
        title=title,
        author="Artist",
        thumbnail_links=["https://img.test/small.jpg", "https://img.test/large.jpg"],
        duration_seconds=215,
        is_explicit=False,
    )


def source_payload(
    identifier: str = "abc123",
    *,
    expire: int | None = 2_000_000_000,
    status: str | None = "OK",
    title: str = "Song",
    formats: int = 2,
) -> dict[str, Any]:
    """JSON body as returned by the upstream source."""
    body: dict[str, Any] = {
        "id": identifier,
        "title": title,
        "author": "Artist",
        "thumbnail": [
            {"url": "https://img.test/small.jpg", "width": 120, "height": 90},
            {"url": "https://img.test/large.jpg", "width": 480, "height": 360},
        ],
        "adaptiveFormats": [
            {"url": stream_link(expire, itag=140 + i), "mimeType": "audio/webm", "bitrate": 128000}
            for i in range(formats)
        ],
        "duration": "215",
        "isExplicit": False,
        "keywords": ["music"],
    }
    if status is not None:
        body["status"] = status
    return body
