"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Tests never touch the real PokeAPI: FakeProvider is injected via dependency_overrides
    - Every test gets a fresh in-memory SQLite database
    - db_manager patched to a DatabaseSessionManager over the test engine: routes go through
      the real get_db and its rollback/error mapping

Design Decisions:
    - SQLite in-memory: fast, no external dependency; enforces the UNIQUE index on name
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from pokedex.api.dependencies import get_pokemon_provider  # noqa: E402
from pokedex.db.base import Base  # noqa: E402
from pokedex.db.session import create_schema, create_session_factory  # noqa: E402
from pokedex.infrastructure.database import DatabaseSessionManager  # noqa: E402
import pokedex.infrastructure.database as db_module  # noqa: E402
from pokedex.main import app  # noqa: E402
from tests.fakes import FakeProvider  # noqa: E402


# ─── Database ────────────────────────────────────────────────────

@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    await create_schema(engine)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return create_session_factory(test_engine)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


# ─── API ─────────────────────────────────────────────────────────

@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
async def client(test_engine, test_session_factory, fake_provider):
    """FastAPI test client: provider overridden, sessions from the test engine."""
    app.dependency_overrides[get_pokemon_provider] = lambda: fake_provider

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    # raise_app_exceptions=False: unhandled errors must reach the client as 500s
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
