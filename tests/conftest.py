"""Shared test configuration and fixtures."""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy import BigInteger
from sqlalchemy.ext.compiler import compiles

from streamvibe.config.database import DatabaseSettings
from streamvibe.db.base import Base
from streamvibe.db.models.user import User
from streamvibe.db.session import DatabaseManager


# Register a compilation rule so BigInteger renders as INTEGER on SQLite,
# which enables autoincrement on primary key columns during tests.
@compiles(BigInteger, "sqlite")  # type: ignore[misc]
def _compile_big_integer_sqlite(type_: BigInteger, compiler: object, **kw: object) -> str:
    return "INTEGER"


@pytest.fixture
async def db_manager() -> AsyncGenerator[DatabaseManager]:
    """DatabaseManager over a fresh in-memory SQLite database."""
    manager = DatabaseManager(DatabaseSettings(database_url="sqlite+aiosqlite://", use_null_pool=False))
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
async def known_user(db_manager: DatabaseManager) -> str:
    email = "listener@example.com"
    async with db_manager.session() as session:
        session.add(User(email=email))
    return email
