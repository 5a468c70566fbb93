"""Engine and session lifecycle for the account store."""

from __future__ import annotations

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from newsdesk.core.config import DatabaseSettings, get_settings
from newsdesk.infrastructure.database.base import Base

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # created_by references accounts.id; SQLite ignores that unless asked.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database: DatabaseSettings, *, echo: bool = False) -> AsyncEngine:
    """Create an async engine for ``database.url``.

    Pool sizing is only passed through when configured, since SQLite's
    default pool rejects those arguments.
    """
    options: dict[str, Any] = {"echo": database.echo or echo}
    if database.pool_size is not None:
        options["pool_size"] = database.pool_size
    if database.max_overflow is not None:
        options["max_overflow"] = database.max_overflow

    engine = create_async_engine(database.url, **options)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def get_engine() -> AsyncEngine:
    global _engine, _session_factory
    if _engine is None:
        settings = get_settings()
        _engine = build_engine(settings.database, echo=settings.debug)
        _session_factory = async_sessionmaker(bind=_engine, class_=AsyncSession, expire_on_commit=False)
    return _engine


async def dispose_engine() -> None:
    """Close pooled connections and forget the engine so settings are re-read."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Open a session that commits on clean exit and rolls back on error."""
    get_engine()
    assert _session_factory is not None
    async with _session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with session_scope() as session:
        yield session


async def init_db() -> None:
    """Create missing tables. Deployed databases should use the alembic migrations."""
    from newsdesk.infrastructure.database import models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
