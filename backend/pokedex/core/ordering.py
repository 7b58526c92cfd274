"""Listing Order — ascending provider number, computed from the opaque payload.

Invariants:
    - Records with a numeric payload "id" come first, ordered numerically (2 < 10)
    - Numeric strings are coerced ("25" sorts as 25); bools are never numbers
    - Records without a usable id follow, ordered by name

Design Decisions:
    - Sorted in Python rather than SQL: JSON path extraction and casting differ
      between PostgreSQL and SQLite, and the catalog is never paginated
"""

from typing import Iterable, Protocol, TypeVar

from pokedex.core.domain_types import JSONValue


class HasPayload(Protocol):
    name: str
    data: dict


T = TypeVar("T", bound=HasPayload)


def provider_number(payload: JSONValue) -> int | None:
    """Numeric form of payload["id"], or None if absent/non-numeric."""
    if not isinstance(payload, dict):
        return None
    value = payload.get("id")
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def sort_key(record: HasPayload) -> tuple[int, int, str]:
    number = provider_number(record.data)
    if number is None:
        return (1, 0, record.name)
    return (0, number, record.name)


def order_by_provider_number(records: Iterable[T]) -> list[T]:
    return sorted(records, key=sort_key)
