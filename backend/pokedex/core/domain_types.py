"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - PokemonId wraps a UUID — never a bare string in domain logic
    - PokemonName is always trimmed and lowercased (see canonical_name)
    - Payload is an opaque JSON document; only "name" and "id" are ever read

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - JSONValue as a recursive alias: the provider response is schema-less and
      must round-trip through storage unchanged
"""

from typing import NewType, Union
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

PokemonId = NewType("PokemonId", UUID)
PokemonName = NewType("PokemonName", str)


# ─── Value Types ─────────────────────────────────────────────────

JSONValue = Union[
    None, bool, int, float, str, list["JSONValue"], dict[str, "JSONValue"],
]
Payload = dict[str, JSONValue]

# Sub-fields of the provider payload exposed to API clients
PROJECTED_FIELDS = ("types", "sprites", "abilities", "stats")


def canonical_name(raw: str) -> PokemonName:
    """Normalize a name the way it is stored (trimmed, lowercase)."""
    return PokemonName(raw.strip().lower())


def parse_pokemon_id(raw: str) -> PokemonId | None:
    """Parse a string identifier. Returns None when structurally invalid."""
    try:
        return PokemonId(UUID(str(raw)))
    except (ValueError, TypeError, AttributeError):
        return None
