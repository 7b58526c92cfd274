"""Pokemon ORM — persists one provider document per unique Pokemon name.

Invariants:
    - id is a UUID primary key generated on insert, never reused or mutated
    - name is trimmed + lowercased on assignment and UNIQUE at the storage level
    - data stores the full PokeAPI response verbatim (opaque JSON)
    - created_at set once; updated_at refreshed on every UPDATE

Design Decisions:
    - JSON column for data: provider shape is not ours to model (ADR: schema-less payload)
    - Generic Uuid type: native UUID on PostgreSQL, CHAR(32) on SQLite for tests
    - UNIQUE index on name is authoritative; the service's existence check is a fast path
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON, Uuid
from sqlalchemy.orm import Mapped, mapped_column, validates

from pokedex.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Pokemon(Base):
    """Catalog entry — a locally persisted copy of a PokeAPI record."""
    __tablename__ = "pokemons"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True, index=True,
    )
    data: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    @validates("name")
    def normalize_name(self, key: str, value: str) -> str:
        return value.strip().lower()

    def __repr__(self) -> str:
        return f"<Pokemon {self.name} ({self.id})>"
