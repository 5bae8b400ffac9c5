"""Database operations for assets and user history, bridging pydantic models to DB rows."""

import json
import logging

from pydantic import TypeAdapter, ValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from streamvibe.db.base import utc_now
from streamvibe.db.models.asset import CachedAsset
from streamvibe.db.models.user import User
from streamvibe.schemas import Asset, AssetSummary, HistoryRecord, PlayedAsset

logger = logging.getLogger(__name__)

_RECENT_ADAPTER = TypeAdapter(list[AssetSummary])
_FREQUENT_ADAPTER = TypeAdapter(list[PlayedAsset])


class AssetRepository:
    """Keyed storage for resolved assets."""

    async def find_by_external_id(
        self,
        external_id: str,
        session: AsyncSession,
    ) -> Asset | None:
        """Return the stored asset for ``external_id``, or ``None``.

        A row whose JSON no longer validates as an ``Asset`` is reported
        absent so the caller refetches it.
        """
        result = await session.execute(select(CachedAsset).where(CachedAsset.external_id == external_id))
        row = result.scalar_one_or_none()
        if row is None:
            return None

        try:
            return Asset.model_validate_json(row.data_json)
        except ValidationError:
            logger.warning("Stored asset %s is malformed, treating as absent", external_id)
            return None

    async def upsert(
        self,
        external_id: str,
        asset: Asset,
        session: AsyncSession,
    ) -> Asset:
        """Insert or replace the stored asset for ``external_id``.

        Replacement is wholesale: the previous payload is discarded.
        """
        result = await session.execute(select(CachedAsset).where(CachedAsset.external_id == external_id))
        row = result.scalar_one_or_none()
        now = utc_now()
        data_str = asset.model_dump_json()

        if row is None:
            try:
                async with session.begin_nested():
                    session.add(
                        CachedAsset(
                            external_id=external_id,
                            data_json=data_str,
                            fetched_at=now,
                        )
                    )
                return asset
            except IntegrityError:
                # Another writer inserted it first; last write wins.
                logger.debug("Concurrent insert for asset %s, replacing", external_id)
                result = await session.execute(select(CachedAsset).where(CachedAsset.external_id == external_id))
                row = result.scalar_one()

        row.data_json = data_str
        row.fetched_at = now
        await session.flush()
        return asset


class UserRepository:
    """Reads and writes the history views stored on user rows."""

    async def find_by_email(
        self,
        email: str,
        session: AsyncSession,
        *,
        for_update: bool = False,
    ) -> User | None:
        stmt = select(User).where(User.email == email)
        if for_update:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_history(
        self,
        email: str,
        session: AsyncSession,
        *,
        for_update: bool = False,
    ) -> HistoryRecord | None:
        """Return both history views for a user, or ``None`` if the user is unknown."""
        user = await self.find_by_email(email, session, for_update=for_update)
        if user is None:
            return None
        return self.history_from_row(user)

    async def update_history(
        self,
        email: str,
        record: HistoryRecord,
        session: AsyncSession,
    ) -> User | None:
        """Persist both history views in one write. Unknown users are left alone."""
        user = await self.find_by_email(email, session)
        if user is None:
            return None

        user.recently_played_json = _RECENT_ADAPTER.dump_json(record.recent).decode()
        user.most_played_json = _FREQUENT_ADAPTER.dump_json(record.frequent).decode()
        await session.flush()
        return user

    @staticmethod
    def history_from_row(user: User) -> HistoryRecord:
        """Decode the JSON history columns of a user row."""
        recent = _RECENT_ADAPTER.validate_python(json.loads(user.recently_played_json or "[]"))
        frequent = _FREQUENT_ADAPTER.validate_python(json.loads(user.most_played_json or "[]"))
        return HistoryRecord(recent=recent, frequent=frequent)
