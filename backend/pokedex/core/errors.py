"""Error Hierarchy — typed, categorized exceptions for every Pokedex failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries the HTTP status the API layer responds with
    - to_response() produces the REST envelope {"error": {code, message, ...}}
    - Provider/storage failures are translated into this hierarchy before leaving their layer

Design Decisions:
    - Single hierarchy with PokedexError base: one FastAPI handler catches all (ADR: uniform error shape)
    - ConstraintViolationError is repository-level; the service translates it to AlreadyExistsError
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    pokemon_id: str | None = None
    lookup_key: str | None = None
    debug_info: dict[str, Any] | None = None


class PokedexError(Exception):
    """Base exception for all Pokedex errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "pokemon_id": self.context.pokemon_id,
                    "lookup_key": self.context.lookup_key,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InputValidationError(PokedexError):
    """Request body failed shape validation."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class InvalidIdError(PokedexError):
    """Identifier is not structurally valid for the store."""
    def __init__(self, pokemon_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.pokemon_id = pokemon_id
        super().__init__(
            f"Invalid Pokemon id: {pokemon_id}",
            "INVALID_ID", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.pokemon_id = pokemon_id


class ResourceNotFoundError(PokedexError):
    """Requested resource does not exist locally."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.pokemon_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource_id = resource_id


class PokemonNotFoundUpstreamError(PokedexError):
    """The provider has no Pokemon for the lookup key."""
    def __init__(self, key: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.lookup_key = key
        super().__init__(
            f"Pokemon {key} not found in PokeAPI",
            "POKEMON_NOT_FOUND_UPSTREAM", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.key = key


class AlreadyExistsError(PokedexError):
    """A Pokemon with the canonical name is already registered."""
    def __init__(
        self,
        name: str,
        conflicting_id: str | None = None,
        context: ErrorContext | None = None,
    ):
        if conflicting_id:
            message = f"Pokemon {name} is already registered with id {conflicting_id}"
        else:
            message = f"Pokemon {name} is already registered"
        super().__init__(
            message, "ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.name = name
        self.conflicting_id = conflicting_id


class ConstraintViolationError(PokedexError):
    """Storage-level uniqueness constraint rejected a write."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unique constraint violated for name '{name}'",
            "CONSTRAINT_VIOLATION", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.name = name


# ─── Infrastructure Errors (500-level) ──────────────────────────

class UpstreamError(PokedexError):
    """Provider call failed for a reason other than not-found."""
    def __init__(self, key: str, cause: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.lookup_key = key
        super().__init__(
            f"Error fetching Pokemon {key} from PokeAPI: {cause}",
            "UPSTREAM_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.key = key
        self.cause = cause


class DeleteFailedError(PokedexError):
    """Delete affected zero rows although the record was just found."""
    def __init__(self, pokemon_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.pokemon_id = pokemon_id
        super().__init__(
            f"Failed to delete Pokemon with id {pokemon_id}",
            "DELETE_FAILED", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )


class DatabaseError(PokedexError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class InternalError(PokedexError):
    """Unrecognized failure wrapped by the service layer."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
