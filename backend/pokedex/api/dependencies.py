"""Route Dependencies — wires the domain service from request-scoped resources.

Invariants:
    - One PokemonRepository per request (bound to that request's AsyncSession)
    - The PokeAPI client is process-wide (app.state), created by the lifespan

Design Decisions:
    - FastAPI Depends over module globals: tests swap the provider via dependency_overrides
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from pokedex.core.repository_protocols import PokemonProvider
from pokedex.infrastructure.database import get_db
from pokedex.infrastructure.pokemon_repository import PokemonRepository
from pokedex.services.pokemon_service import PokemonService


def get_pokemon_provider(request: Request) -> PokemonProvider:
    """The shared PokeAPI client created on startup."""
    provider = getattr(request.app.state, "pokeapi_client", None)
    if provider is None:
        raise RuntimeError("PokeAPI client not initialized")
    return provider


def get_pokemon_service(
    db: AsyncSession = Depends(get_db),
    provider: PokemonProvider = Depends(get_pokemon_provider),
) -> PokemonService:
    return PokemonService(PokemonRepository(db), provider)
