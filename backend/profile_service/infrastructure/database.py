"""Database Session Manager — bounded async connection pool with rollback and health checks.

Invariants:
    - Every session rolls back on SQLAlchemy failure before the error propagates
    - Store failures are logged here and re-raised unchanged (the boundary maps them to 500)
    - Pool is bounded: pool_size + max_overflow connections, pool_timeout seconds to acquire
    - pool_pre_ping detects stale connections

Design Decisions:
    - Explicitly constructed instance, owned by the FastAPI lifespan and stored on
      app.state: no module-level singleton, tests swap in their own engine
    - expire_on_commit=False: returned ORM rows stay readable after commit
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self,
        database_url: str | None = None,
        pool_size: int = 20,
        max_overflow: int = 10,
        pool_timeout: float = 2.0,
        echo: bool = False,
        engine: AsyncEngine | None = None,
    ):
        if engine is None:
            if database_url is None:
                raise ValueError("database_url or engine is required")
            engine = create_async_engine(
                database_url,
                **_engine_options(database_url, pool_size, max_overflow, pool_timeout, echo),
            )
        self.engine = engine
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "DatabaseSessionManager":
        """Wrap an existing engine (test fixtures, scripts)."""
        return cls(engine=engine)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with rollback on store failure."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"DB error ({type(e).__name__}): {e}")
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                result = await db.execute(text("SELECT 1"))
                return result.scalar() == 1
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("Database connection pool closed")


def _engine_options(
    database_url: str, pool_size: int, max_overflow: int,
    pool_timeout: float, echo: bool,
) -> dict:
    options: dict = {"echo": echo, "pool_pre_ping": True}
    # SQLite uses a single-connection pool without sizing knobs
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_recycle=3600,
        )
    return options
