"""Database base and engine/session setup for the durable backend."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import DateTime, inspect, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator

logger = logging.getLogger("siahrokh.storage")


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def as_utc(dt: datetime) -> datetime:
    """Aware UTC datetime (naive values are taken as UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetime on every dialect.

    SQLite keeps no offset, so values are written as UTC and read back with
    UTC attached.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        return None if value is None else as_utc(value)

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        return None if value is None else as_utc(value)


def make_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False)


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Columns added after the first release: (table, column, DDL)
_MIGRATIONS = [
    ("tournaments", "registration_fee", "ALTER TABLE tournaments ADD COLUMN registration_fee TEXT"),
]


def _column_names(sync_conn, table: str) -> set[str]:
    return {c["name"] for c in inspect(sync_conn).get_columns(table)}


async def _run_migrations(conn) -> None:
    """Add new columns if they don't exist."""
    for table, column, sql in _MIGRATIONS:
        if column not in await conn.run_sync(_column_names, table):
            await conn.execute(text(sql))
            logger.info("Migration applied: %s", sql)


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables and run migrations."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await _run_migrations(conn)
