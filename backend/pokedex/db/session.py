"""Async Session Factory — one place that decides how sessions are configured.

Invariants:
    - Sessions never expire attributes on commit (no lazy loads after commit in async code)
    - create_schema() is for local SQLite runs only; PostgreSQL uses Alembic

Design Decisions:
    - Takes an engine, not a URL: DatabaseSessionManager and test fixtures own their engines
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker,
)

from pokedex.db.base import Base
import pokedex.models  # noqa: F401  (populate Base.metadata)


def create_session_factory(
    engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to the given engine."""
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables on the given engine (idempotent)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
