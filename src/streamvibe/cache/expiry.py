"""Expiry checks for playback links that carry their own deadline."""

import time

import httpx

from streamvibe.schemas import Asset

EXPIRE_PARAM = "expire"


def link_expiry(link: str) -> int | None:
    """Return the epoch-seconds ``expire`` value embedded in ``link``.

    ``None`` when the link cannot be parsed or the parameter is missing or
    not an integer.
    """
    try:
        raw = httpx.URL(link).params.get(EXPIRE_PARAM)
    except (httpx.InvalidURL, TypeError, ValueError):
        return None
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def is_expired(asset: Asset, now: float | None = None) -> bool:
    """Whether the asset's active playback link has lapsed.

    Fails closed: an asset without links, or whose last link has no
    readable expiry, counts as expired. ``expiry == now`` is expired.
    """
    if not asset.playback_links:
        return True
    expiry = link_expiry(asset.playback_links[-1])
    if expiry is None:
        return True
    current = int(time.time() if now is None else now)
    return expiry <= current
