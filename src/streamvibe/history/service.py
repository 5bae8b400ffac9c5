"""Per-user play history: recency and frequency views, updated off the request path."""

import asyncio
import logging
import weakref

from sqlalchemy.exc import SQLAlchemyError

from streamvibe.db.operations import UserRepository
from streamvibe.db.session import DatabaseManager
from streamvibe.history.exceptions import HistoryUpdateError
from streamvibe.schemas import AssetSummary, HistoryRecord, PlayedAsset

logger = logging.getLogger(__name__)


def apply_play(record: HistoryRecord, summary: AssetSummary) -> HistoryRecord:
    """Return ``record`` with one more play of ``summary`` merged in.

    ``recent``: any previous entry for the asset is removed and the summary
    is put first. ``frequent``: an existing entry only has its counter
    bumped (its descriptive fields stay as of the first play); a new asset
    is appended with a count of 1.
    """
    recent = [item for item in record.recent if item.id != summary.id]
    recent.insert(0, summary)

    frequent = [item.model_copy() for item in record.frequent]
    for item in frequent:
        if item.id == summary.id:
            item.play_count += 1
            break
    else:
        frequent.append(PlayedAsset(**summary.model_dump(), play_count=1))

    return HistoryRecord(recent=recent, frequent=frequent)


class HistoryTracker:
    """Records plays against existing users.

    ``record_play`` never raises: failures are logged and dropped.
    ``schedule`` runs it as a detached task so the resolution caller does
    not wait for it. Updates for the same user are serialized.
    """

    def __init__(
        self,
        db_manager: DatabaseManager,
        repository: UserRepository | None = None,
    ) -> None:
        self._db = db_manager
        self._users = repository or UserRepository()
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def schedule(self, user_key: str, summary: AssetSummary) -> asyncio.Task[None]:
        """Start a detached history update and return its task."""
        task = asyncio.create_task(self.record_play(user_key, summary), name=f"history:{summary.id}")
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for every scheduled update to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def record_play(self, user_key: str, summary: AssetSummary) -> None:
        """Merge one play into the user's history. Unknown users are a no-op."""
        try:
            updated = await self._record_play(user_key, summary)
        except Exception:
            logger.exception("History update failed for %s (asset %s)", user_key, summary.id)
            return

        if updated:
            logger.info("Updated play history for %s (asset %s)", user_key, summary.id)
        else:
            logger.debug("No user %s, skipping play history for %s", user_key, summary.id)

    async def _record_play(self, user_key: str, summary: AssetSummary) -> bool:
        lock = self._lock_for(user_key)
        async with lock:
            try:
                async with self._db.session() as session:
                    record = await self._users.get_history(user_key, session, for_update=True)
                    if record is None:
                        return False
                    await self._users.update_history(user_key, apply_play(record, summary), session)
            except SQLAlchemyError as exc:
                raise HistoryUpdateError(user_key, str(exc)) from exc
        return True

    def _lock_for(self, user_key: str) -> asyncio.Lock:
        lock = self._locks.get(user_key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_key] = lock
        return lock
