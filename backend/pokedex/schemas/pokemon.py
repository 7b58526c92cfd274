"""Pokemon Schemas — request validation and the public response projection.

Invariants:
    - PokemonLookup.name: string, stripped, 1-100 chars (name or numeric id)
    - project_pokemon exposes ONLY id, name, types, sprites, abilities, stats + timestamps;
      the rest of the provider payload never leaves the server

Design Decisions:
    - Projection as a plain function over PokemonLike: routes stay thin and the shape is
      testable without an app
    - camelCase timestamp keys (createdAt/updatedAt): the wire format the UI consumes
    - Timestamps rendered in UTC with an explicit offset; naive values (SQLite) are read as UTC
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator

from pokedex.core.domain_types import PROJECTED_FIELDS
from pokedex.core.repository_protocols import PokemonLike


class PokemonLookup(BaseModel):
    """Create/update body — a Pokemon name or PokeAPI number."""
    name: str = Field(min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Pokemon name or id is required")
        return v


def project_pokemon(pokemon: PokemonLike, include_updated: bool = False) -> dict:
    """Partial view of a stored Pokemon for API responses."""
    data = pokemon.data or {}
    view = {"id": str(pokemon.id), "name": pokemon.name}
    for key in PROJECTED_FIELDS:
        view[key] = data.get(key)
    view["createdAt"] = _utc_iso(pokemon.created_at)
    if include_updated:
        view["updatedAt"] = _utc_iso(pokemon.updated_at)
    return view


def _utc_iso(value: datetime) -> str:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc).isoformat()
    return value.astimezone(timezone.utc).isoformat()
