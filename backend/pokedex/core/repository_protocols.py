"""Boundary Protocols — contracts between the domain service and its IO.

Invariants:
    - The service depends on these Protocols, never on httpx or SQLAlchemy directly
    - Implementations provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, so test fakes need no inheritance
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from pokedex.core.domain_types import Payload


class PokemonLike(Protocol):
    """Structural contract for persisted Pokemon records."""
    id: UUID
    name: str
    data: dict
    created_at: datetime
    updated_at: datetime


class PokemonProvider(Protocol):
    """Contract for the read-only upstream provider."""
    async def fetch_by_key(self, key: str) -> Payload: ...


class PokemonStorage(Protocol):
    """Contract for Pokemon persistence — implemented by PokemonRepository."""
    async def exists(self, name: str) -> bool: ...
    async def find_by_name(self, name: str) -> PokemonLike | None: ...
    async def insert(self, name: str, data: Payload) -> PokemonLike: ...
    async def find_all(self) -> list[PokemonLike]: ...
    async def find_by_id(self, pokemon_id: str) -> PokemonLike: ...
    async def replace(
        self, pokemon_id: str, name: str, data: Payload,
    ) -> PokemonLike: ...
    async def delete(self, pokemon_id: str) -> None: ...
