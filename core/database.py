"""Async SQLAlchemy database engine and session management.

A ``Database`` owns one engine and its session factory. It is created at
application startup, handed to the repositories that need it, and disposed
at shutdown:
- Connection pooling (configurable pool_size/max_overflow)
- Automatic session lifecycle (commit on success, rollback on error)
- Works with PostgreSQL (asyncpg) and SQLite (aiosqlite)
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import Settings
from core.models.base import Base

logger = logging.getLogger(__name__)


class Database:
    """Engine + session factory with an explicit lifecycle."""

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 20,
        max_overflow: int = 10,
        echo: bool = False,
    ):
        engine_kwargs: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
        # SQLite pools do not accept sizing arguments
        if not url.startswith("sqlite"):
            engine_kwargs.update(pool_size=pool_size, max_overflow=max_overflow)

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            echo=settings.db_echo,
        )

    # -- Sessions --

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session that commits on success and rolls back on error.

        Usage::

            async with database.session() as session:
                result = await session.execute(select(Book))
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    # -- Lifecycle --

    async def init_models(self) -> None:
        """Create tables for every registered model if they are missing."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ready (%s)", self.engine.url.render_as_string(hide_password=True))

    async def close(self) -> None:
        """Dispose of the connection pool on shutdown."""
        await self.engine.dispose()
