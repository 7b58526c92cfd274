"""Pokedex API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PokedexError → structured JSON responses (api/error_handlers.py)
    - CORS configured from settings (not hardcoded)
    - Database and PokeAPI client initialized on startup, released on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - SQLite databases get their schema created on startup; PostgreSQL uses Alembic migrations
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pokedex.api.error_handlers import register_error_handlers
from pokedex.api.routes import health, pokemons
from pokedex.config import get_settings
from pokedex.db.session import create_schema
from pokedex.infrastructure import database
from pokedex.infrastructure.database import init_db
from pokedex.infrastructure.observability import setup_logging
from pokedex.infrastructure.pokeapi_client import PokeAPIClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_url.startswith("sqlite"):
        await create_schema(database.db_manager.engine)
    app.state.pokeapi_client = PokeAPIClient(
        base_url=settings.pokeapi_base_url,
        timeout_seconds=settings.pokeapi_timeout_seconds,
    )
    logger.info("Pokedex API started")
    yield
    logger.info("Pokedex API shutting down")
    await app.state.pokeapi_client.aclose()
    await database.db_manager.dispose()


app = FastAPI(
    title="Pokedex API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(pokemons.router)

register_error_handlers(app)
