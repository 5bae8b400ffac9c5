"""Asset resolution: ephemeral cache, persistent store, expiry check, upstream fetch."""

import asyncio
import logging
import time
from collections.abc import Callable

from streamvibe.cache.expiry import is_expired
from streamvibe.cache.memory import AssetCache
from streamvibe.db.operations import AssetRepository
from streamvibe.db.session import DatabaseManager
from streamvibe.history.service import HistoryTracker
from streamvibe.resolver.exceptions import AssetNotFoundError, UpstreamError
from streamvibe.resolver.validation import is_valid_user_key
from streamvibe.schemas import Asset
from streamvibe.source.client import SourceClient
from streamvibe.source.exceptions import SourceClientError

logger = logging.getLogger(__name__)


class AssetResolver:
    """Turns an identifier into an ``Asset`` with a currently valid playback link.

    Lookup order:
    1. Ephemeral cache hit: returned as-is, no expiry re-check.
    2. Persistent store hit whose active link has not lapsed: cached, returned.
    3. Otherwise fetch from the source, replace the stored copy, cache it.

    Concurrent misses for one identifier share a single load unless
    ``coalesce`` is off. A history update is scheduled as a detached task
    once the asset is known; its outcome never reaches the caller.
    """

    def __init__(
        self,
        db_manager: DatabaseManager,
        source: SourceClient,
        cache: AssetCache,
        history: HistoryTracker | None = None,
        *,
        repository: AssetRepository | None = None,
        clock: Callable[[], float] = time.time,
        coalesce: bool = True,
    ) -> None:
        self._db = db_manager
        self._source = source
        self._cache = cache
        self._history = history
        self._assets = repository or AssetRepository()
        self._clock = clock
        self._coalesce = coalesce
        self._inflight: dict[str, asyncio.Task[Asset]] = {}

    async def resolve(self, identifier: str, user_key: str | None = None) -> Asset:
        """Resolve ``identifier``; the playable URL is ``asset.playback_url``.

        Raises:
            AssetNotFoundError: the source has nothing playable for it.
            UpstreamError: the source failed on every attempt.
        """
        asset = self._cache.get(identifier)
        if asset is not None:
            logger.debug("Asset cache hit for %s", identifier)
        elif self._coalesce:
            asset = await self._load_coalesced(identifier)
        else:
            asset = await self._load(identifier)

        self._record_play(user_key, asset)
        return asset

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def _load_coalesced(self, identifier: str) -> Asset:
        while True:
            task = self._inflight.get(identifier)
            if task is None or task.cancelled():
                task = asyncio.create_task(self._load(identifier), name=f"resolve:{identifier}")
                self._inflight[identifier] = task
                task.add_done_callback(lambda done, key=identifier: self._forget(key, done))
                # Cancelling the first caller cancels the load itself.
                return await task

            logger.debug("Joining in-flight resolution for %s", identifier)
            try:
                return await asyncio.shield(task)
            except asyncio.CancelledError:
                current = asyncio.current_task()
                if task.cancelled() and current is not None and not current.cancelling():
                    logger.debug("In-flight resolution for %s was cancelled, retrying", identifier)
                    continue
                raise

    def _forget(self, identifier: str, task: asyncio.Task[Asset]) -> None:
        if self._inflight.get(identifier) is task:
            del self._inflight[identifier]

    async def _load(self, identifier: str) -> Asset:
        logger.debug("Asset cache miss for %s", identifier)
        async with self._db.session() as session:
            stored = await self._assets.find_by_external_id(identifier, session)

        if stored is not None:
            if not is_expired(stored, now=self._clock()):
                logger.info("Serving stored asset for %s", identifier)
                self._cache.set(identifier, stored)
                return stored
            logger.info("Stored asset for %s has expired, refetching", identifier)
        else:
            logger.info("Asset %s not stored, fetching from source", identifier)

        try:
            fresh = await self._source.fetch_asset(identifier)
        except SourceClientError as exc:
            raise UpstreamError(identifier, str(exc)) from exc

        if fresh is None:
            raise AssetNotFoundError(identifier)

        async with self._db.session() as session:
            await self._assets.upsert(identifier, fresh, session)
        logger.info("Stored fresh asset for %s", identifier)

        self._cache.set(identifier, fresh)
        return fresh

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def _record_play(self, user_key: str | None, asset: Asset) -> None:
        if self._history is None or user_key is None:
            return
        if not is_valid_user_key(user_key):
            logger.debug("Ignoring malformed user key for %s", asset.id)
            return
        self._history.schedule(user_key.strip(), asset.summary())
