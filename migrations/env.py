"""Alembic environment for the account store.

The database URL always comes from application settings (``DATABASE__URL``),
never from ``alembic.ini``, so migrations and the app hit the same database.
"""

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection

from newsdesk.core.config import get_settings
from newsdesk.infrastructure.database import Base, build_engine, models  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _configure(connection: Connection | None = None, url: str | None = None) -> None:
    options = {"target_metadata": target_metadata, "compare_type": True}
    if connection is not None:
        # ALTER support on SQLite goes through table rebuilds.
        options["render_as_batch"] = connection.dialect.name == "sqlite"
        context.configure(connection=connection, **options)
    else:
        context.configure(url=url, literal_binds=True, dialect_opts={"paramstyle": "named"}, **options)


def _migrate(connection: Connection | None = None, url: str | None = None) -> None:
    _configure(connection, url)
    with context.begin_transaction():
        context.run_migrations()


def run_offline() -> None:
    """Emit SQL for the synchronous driver of the configured database."""
    url = get_settings().database_url.replace("+aiosqlite", "")
    _migrate(url=url)


async def run_online() -> None:
    engine = build_engine(get_settings().database)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(lambda sync_conn: _migrate(connection=sync_conn))
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    asyncio.run(run_online())
