"""Pokemon Routes — REST CRUD over the catalog.

Invariants:
    - Request bodies validated by Pydantic before reaching the handler (400 on failure)
    - Handlers never build error responses: PokedexError subclasses carry their HTTP status
      and are rendered by api/error_handlers.py
    - Responses expose the projection only (schemas/pokemon.py), never the full payload

Design Decisions:
    - Path ids typed as str, not UUID: malformed ids must reach the repository and
      surface as INVALID_ID, not as a generic validation error
    - DELETE returns 200 with a confirmation message (the UI reads a JSON body)
"""

import logging

from fastapi import APIRouter, Depends, status

from pokedex.api.dependencies import get_pokemon_service
from pokedex.schemas.pokemon import PokemonLookup, project_pokemon
from pokedex.services.pokemon_service import PokemonService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/pokemons", tags=["pokemons"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_pokemon(
    body: PokemonLookup,
    service: PokemonService = Depends(get_pokemon_service),
):
    """Register a Pokemon by name or PokeAPI number."""
    pokemon = await service.create(body.name)
    return {
        "message": f"Pokemon {pokemon.name} registered successfully",
        "pokemon": project_pokemon(pokemon),
    }


@router.get("")
async def list_pokemons(
    service: PokemonService = Depends(get_pokemon_service),
):
    """List all registered Pokemon, ordered by PokeAPI number."""
    pokemons = await service.find_all()
    return {
        "count": len(pokemons),
        "pokemons": [project_pokemon(p) for p in pokemons],
    }


@router.get("/{pokemon_id}")
async def get_pokemon(
    pokemon_id: str,
    service: PokemonService = Depends(get_pokemon_service),
):
    pokemon = await service.find_by_id(pokemon_id)
    return project_pokemon(pokemon)


@router.put("/{pokemon_id}")
async def update_pokemon(
    pokemon_id: str,
    body: PokemonLookup,
    service: PokemonService = Depends(get_pokemon_service),
):
    """Re-fetch from PokeAPI and replace the stored name + payload."""
    pokemon = await service.update(pokemon_id, body.name)
    return {
        "message": f"Pokemon updated to {pokemon.name} successfully",
        "pokemon": project_pokemon(pokemon, include_updated=True),
    }


@router.delete("/{pokemon_id}")
async def delete_pokemon(
    pokemon_id: str,
    service: PokemonService = Depends(get_pokemon_service),
):
    pokemon = await service.delete(pokemon_id)
    return {"message": f"Pokemon {pokemon.name} deleted successfully"}
