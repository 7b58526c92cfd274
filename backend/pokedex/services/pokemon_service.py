"""Pokemon Service — orchestrates provider lookups and persistence for the catalog.

Invariants:
    - Stored name is ALWAYS derived from the provider's own "name" field, never the caller's key
      (lookup by number or alternate casing still stores the canonical display name)
    - create rejects names already present; update rejects names held by a DIFFERENT id
    - Storage uniqueness violations are reported as AlreadyExistsError (race fallback)
    - find_all/find_by_id wrap unrecognized failures in InternalError
    - Provider errors (PokemonNotFoundUpstreamError, UpstreamError) propagate unchanged

Design Decisions:
    - No state between calls: each operation is a short-lived fetch → check → write sequence
    - Depends on Protocols (core/repository_protocols.py), so tests inject fakes
"""

import logging

from pokedex.core.domain_types import Payload, PokemonName, canonical_name
from pokedex.core.errors import (
    AlreadyExistsError, ConstraintViolationError, InternalError,
    InvalidIdError, ResourceNotFoundError, UpstreamError,
)
from pokedex.core.repository_protocols import (
    PokemonLike, PokemonProvider, PokemonStorage,
)

logger = logging.getLogger(__name__)


class PokemonService:
    """Catalog operations: create, list, get, update, delete."""

    def __init__(self, repository: PokemonStorage, provider: PokemonProvider):
        self.repository = repository
        self.provider = provider

    async def create(self, key: str) -> PokemonLike:
        """Fetch from the provider and register under the canonical name."""
        payload = await self.provider.fetch_by_key(key)
        name = self._name_from_payload(key, payload)

        if await self.repository.exists(name):
            raise AlreadyExistsError(name)

        try:
            pokemon = await self.repository.insert(name, payload)
        except ConstraintViolationError as e:
            raise AlreadyExistsError(name) from e
        logger.info(
            f"Pokemon {name} registered",
            extra={"pokemon_id": str(pokemon.id), "lookup_key": key},
        )
        return pokemon

    async def find_all(self) -> list[PokemonLike]:
        try:
            return await self.repository.find_all()
        except Exception as e:
            logger.error(f"Failed to list pokemons: {e}", exc_info=True)
            raise InternalError("Failed to list pokemons") from e

    async def find_by_id(self, pokemon_id: str) -> PokemonLike:
        try:
            return await self.repository.find_by_id(pokemon_id)
        except (ResourceNotFoundError, InvalidIdError):
            raise
        except Exception as e:
            logger.error(
                f"Failed to load pokemon: {e}",
                extra={"pokemon_id": str(pokemon_id)}, exc_info=True,
            )
            raise InternalError(f"Failed to load Pokemon {pokemon_id}") from e

    async def update(self, pokemon_id: str, key: str) -> PokemonLike:
        """Replace name + payload of an existing entry with a fresh provider lookup."""
        current = await self.find_by_id(pokemon_id)
        payload = await self.provider.fetch_by_key(key)
        name = self._name_from_payload(key, payload)

        holder = await self.repository.find_by_name(name)
        if holder is not None and holder.id != current.id:
            raise AlreadyExistsError(name, conflicting_id=str(holder.id))

        try:
            pokemon = await self.repository.replace(pokemon_id, name, payload)
        except ConstraintViolationError as e:
            raise AlreadyExistsError(name) from e
        logger.info(
            f"Pokemon {pokemon_id} updated to {name}",
            extra={"pokemon_id": str(pokemon_id), "lookup_key": key},
        )
        return pokemon

    async def delete(self, pokemon_id: str) -> PokemonLike:
        """Delete an entry. Returns the removed record (for confirmation messages)."""
        pokemon = await self.find_by_id(pokemon_id)
        await self.repository.delete(pokemon_id)
        return pokemon

    @staticmethod
    def _name_from_payload(key: str, payload: Payload) -> PokemonName:
        raw = payload.get("name") if isinstance(payload, dict) else None
        if not isinstance(raw, str) or not raw.strip():
            raise UpstreamError(key, "response has no name")
        return canonical_name(raw)
