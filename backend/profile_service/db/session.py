"""Async Session Factory — DB sessions and schema bootstrap outside FastAPI.

Invariants:
    - Meant for scripts (seed) and test fixtures, not request handling
    - create_schema is idempotent (create_all skips existing tables)

Design Decisions:
    - Separate from infrastructure/database.py: scripts need a raw factory
      without the request-scoped rollback/logging wrapper
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from profile_service.db.base import Base
import profile_service.models  # noqa: F401  (populates Base.metadata)


def create_session_factory(
    database_url: str,
) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """Create an engine and async session factory for the given database URL."""
    engine = create_async_engine(database_url, echo=False)
    return engine, async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create the users table and its indexes if they do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
