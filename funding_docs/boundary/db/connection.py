"""
Async engine and sessions for the document registry.

PostgreSQL (asyncpg) in production; SQLite (aiosqlite) for local runs and
tests, with foreign keys switched on so chunk rows follow their document.

Dependencies: sqlalchemy, funding_docs.configs
System role: Database connection lifecycle
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from funding_docs.boundary.db.base import Base
from funding_docs.configs import get_settings

POOL_SIZING_OPTIONS = frozenset({"pool_size", "max_overflow", "pool_timeout"})


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_async_engine(url: str, echo: bool = False, **engine_options) -> AsyncEngine:
    """
    Create an async engine for url.

    SQLite engines get the foreign key pragma on every connection and drop
    pool sizing options, which their pools do not accept. Anything else
    (poolclass, connect_args) is passed through.

    Args:
        url: SQLAlchemy async URL
        echo: Log emitted SQL
        **engine_options: Extra create_async_engine keyword arguments

    Returns:
        AsyncEngine: New engine
    """
    if not url.startswith("sqlite"):
        return create_async_engine(url, echo=echo, pool_pre_ping=True, **engine_options)

    options = {k: v for k, v in engine_options.items() if k not in POOL_SIZING_OPTIONS}
    engine = create_async_engine(url, echo=echo, **options)
    event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


@lru_cache
def get_async_engine() -> AsyncEngine:
    """Process-wide engine built from the POSTGRES_* settings."""
    db = get_settings().database
    return build_async_engine(
        db.async_database_url,
        echo=db.echo_sql,
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
        pool_timeout=db.pool_timeout,
    )


def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Session factory on the shared engine.

    Sessions neither autoflush nor expire on commit; the registry commits
    each status change itself and keeps using the returned rows.
    """
    return async_sessionmaker(bind=get_async_engine(), autoflush=False, expire_on_commit=False)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request."""
    async with get_async_session_factory()() as session:
        yield session


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create every registered table that does not exist yet.

    Args:
        engine: Target engine (defaults to the application engine)
    """
    from funding_docs.boundary.db import models  # noqa: F401  registers tables

    async with (engine or get_async_engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
