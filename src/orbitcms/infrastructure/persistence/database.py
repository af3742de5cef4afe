"""Database engine and session management."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from orbitcms.config import Settings

logger = logging.getLogger(__name__)


# Hey future me - SQLite ignores FOR UPDATE and the driver defers BEGIN until the first
# write, so two read-modify-write updates of one playlist could both read the old array.
# Taking the write lock at BEGIN makes every session scope exclusive; other scopes wait
# on the busy timeout instead of overwriting each other.
def _lock_on_begin(engine: AsyncEngine) -> None:
    """Make SQLite transactions start with BEGIN IMMEDIATE."""

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection: Any, _connection_record: Any) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")


class Database:
    """Database connection and session manager."""

    def __init__(self, settings: Settings) -> None:
        """Initialize database with settings."""
        self.settings = settings

        engine_kwargs: dict[str, Any] = {
            "echo": settings.database.echo,
            "pool_pre_ping": settings.database.pool_pre_ping,
        }

        # Only apply pool settings for PostgreSQL
        if "postgresql" in settings.database.url:
            engine_kwargs.update(
                {
                    "pool_size": settings.database.pool_size,
                    "max_overflow": settings.database.max_overflow,
                    "pool_timeout": settings.database.pool_timeout,
                    "pool_recycle": settings.database.pool_recycle,
                }
            )
        elif "sqlite" in settings.database.url:
            engine_kwargs.update(
                {
                    "connect_args": {
                        "check_same_thread": False,
                        "timeout": 30,  # Wait up to 30s for lock
                    }
                }
            )
            db_path = settings.get_sqlite_db_path()
            if db_path is not None:
                db_path.parent.mkdir(parents=True, exist_ok=True)

        self._engine = create_async_engine(settings.database.url, **engine_kwargs)
        if "sqlite" in settings.database.url:
            _lock_on_begin(self._engine)
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    # Hey future me - every collection call opens its own scope, so one scope == one
    # atomic document operation. Don't be tempted to share a scope across the two
    # sides of a track/playlist link: the link sync is deliberately step-by-step.
    @asynccontextmanager
    async def session_scope(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a transactional scope for database operations."""
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                # Rollback on any exception, then re-raise for the caller to handle.
                await session.rollback()
                raise
            finally:
                await session.close()

    async def ping(self) -> None:
        """Round-trip a trivial statement. Raises on connection failure."""
        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def close(self) -> None:
        """Close database connection."""
        await self._engine.dispose()

    async def create_tables(self) -> None:
        """Create all tables and indexes that don't exist yet."""
        from orbitcms.infrastructure.persistence.models import Base

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.debug("Ensured tables exist", extra={"url": self._safe_url()})

    def _safe_url(self) -> str:
        return self._engine.url.render_as_string(hide_password=True)
