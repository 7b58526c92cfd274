"""Pokemon Repository — SQLAlchemy persistence for catalog entries.

Invariants:
    - Identifiers are parsed here: a malformed id raises InvalidIdError, never a DB error
    - Uniqueness violations on name surface as ConstraintViolationError (session rolled back)
    - find_all order: ascending provider number from the payload (core/ordering.py)
    - Every write commits and refreshes before returning the entity

Design Decisions:
    - Repository owns commit: each service operation is one short unit of work
    - delete() double-checks rowcount: zero rows after a successful lookup is DeleteFailedError
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pokedex.core.domain_types import Payload, PokemonId, parse_pokemon_id
from pokedex.core.errors import (
    ConstraintViolationError, DeleteFailedError, InvalidIdError, ResourceNotFoundError,
)
from pokedex.core.ordering import order_by_provider_number
from pokedex.models.pokemon import Pokemon

logger = logging.getLogger(__name__)


class PokemonRepository:
    """Persistence operations over the pokemons table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def exists(self, name: str) -> bool:
        return await self.find_by_name(name) is not None

    async def find_by_name(self, name: str) -> Pokemon | None:
        result = await self.db.execute(
            select(Pokemon).where(Pokemon.name == name.strip().lower()),
        )
        return result.scalar_one_or_none()

    async def insert(self, name: str, data: Payload) -> Pokemon:
        pokemon = Pokemon(name=name, data=data)
        self.db.add(pokemon)
        await self._commit(name)
        await self.db.refresh(pokemon)
        logger.info(
            f"Pokemon {pokemon.name} inserted",
            extra={"pokemon_id": str(pokemon.id)},
        )
        return pokemon

    async def find_all(self) -> list[Pokemon]:
        result = await self.db.execute(select(Pokemon))
        return order_by_provider_number(result.scalars().all())

    async def find_by_id(self, pokemon_id: str) -> Pokemon:
        parsed = self._parse_id(pokemon_id)
        result = await self.db.execute(
            select(Pokemon).where(Pokemon.id == parsed),
        )
        pokemon = result.scalar_one_or_none()
        if pokemon is None:
            raise ResourceNotFoundError("Pokemon", str(pokemon_id))
        return pokemon

    async def replace(
        self, pokemon_id: str, name: str, data: Payload,
    ) -> Pokemon:
        pokemon = await self.find_by_id(pokemon_id)
        pokemon.name = name
        pokemon.data = data
        pokemon.updated_at = datetime.now(timezone.utc)
        await self._commit(name)
        await self.db.refresh(pokemon)
        return pokemon

    async def delete(self, pokemon_id: str) -> None:
        parsed = self._parse_id(pokemon_id)
        await self.find_by_id(pokemon_id)
        result = await self.db.execute(
            delete(Pokemon).where(Pokemon.id == parsed),
        )
        if result.rowcount == 0:
            await self.db.rollback()
            raise DeleteFailedError(str(pokemon_id))
        await self.db.commit()
        logger.info("Pokemon deleted", extra={"pokemon_id": str(pokemon_id)})

    # ─── Helpers ─────────────────────────────────────────────────

    @staticmethod
    def _parse_id(pokemon_id: str) -> PokemonId:
        parsed = parse_pokemon_id(pokemon_id)
        if parsed is None:
            raise InvalidIdError(str(pokemon_id))
        return parsed

    async def _commit(self, name: str) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Unique constraint rejected name {name!r}: {e.orig}")
            raise ConstraintViolationError(name.strip().lower()) from e
