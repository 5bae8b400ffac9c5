"""Upstream media source client."""

from streamvibe.source.client import SourceClient
from streamvibe.source.exceptions import (
    SourceClientError,
    SourceHTTPError,
    SourceResponseError,
    SourceTimeoutError,
    SourceTransportError,
)
from streamvibe.source.models import SourceFormat, SourceThumbnail, SourceVideoResponse

__all__ = [
    "SourceClient",
    "SourceClientError",
    "SourceFormat",
    "SourceHTTPError",
    "SourceResponseError",
    "SourceThumbnail",
    "SourceTimeoutError",
    "SourceTransportError",
    "SourceVideoResponse",
]
