"""Process-local TTL cache for resolved assets."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from streamvibe.schemas import Asset

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 600.0
DEFAULT_MAX_ENTRIES = 10_000


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """An asset plus the monotonic deadline after which it is dropped."""

    asset: Asset
    expires_at: float


class AssetCache:
    """Fixed-TTL, in-memory ``identifier -> Asset`` store.

    The TTL runs from insertion and is unrelated to the expiry embedded in
    the asset's playback links. Safe to share between coroutines on one
    event loop: no method awaits.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        *,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, identifier: str) -> Asset | None:
        """Return the cached asset, or ``None`` on miss or TTL expiry."""
        entry = self._entries.get(identifier)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            del self._entries[identifier]
            logger.debug("Asset cache entry expired for %s", identifier)
            return None
        return entry.asset

    def set(self, identifier: str, asset: Asset) -> None:
        """Insert or replace an entry, restarting its TTL."""
        self._entries.pop(identifier, None)
        if len(self._entries) >= self._max_entries:
            self._prune()
        self._entries[identifier] = CacheEntry(asset=asset, expires_at=self._clock() + self._ttl)

    def evict(self, identifier: str) -> bool:
        """Drop an entry. Returns whether one was present."""
        return self._entries.pop(identifier, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and self.get(identifier) is not None

    def __len__(self) -> int:
        """Number of live entries; expired ones are dropped first."""
        self._drop_expired()
        return len(self._entries)

    def _drop_expired(self) -> None:
        now = self._clock()
        self._entries = {k: e for k, e in self._entries.items() if e.expires_at > now}

    def _prune(self) -> None:
        self._drop_expired()
        # Insertion order equals expiry order since the TTL is fixed.
        while len(self._entries) >= self._max_entries:
            del self._entries[next(iter(self._entries))]
