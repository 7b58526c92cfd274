"""Pokemon Store — UI state container mirroring the server catalog.

Invariants:
    - Every operation sets is_loading=True and clears error on entry
    - is_loading is False on every exit path (finally), including a failed refresh
    - Mutations never patch pokemons locally: the full list is re-fetched after success
    - A failed fetch_all leaves pokemons at its previous value
    - error holds the server's message string (or a per-operation fallback), never a code
    - success_message clears itself after success_message_ttl seconds; a newer message
      replaces the pending clear
    - Enrichment runs as a detached task: its result only ever touches ai_message,
      its failures are logged and dropped

Design Decisions:
    - Explicit object injected into consumers (no module-level singleton)
    - A refresh failure after a successful mutation reports success (the server changed)
      and leaves the refresh error in `error`
    - Not safe for overlapping operations on one instance (sequential user actions only)
"""

import asyncio
import logging
from dataclasses import dataclass

from pokedex.client.api import PokemonApi, PokemonApiError
from pokedex.client.enrichment import EnrichmentClient

logger = logging.getLogger(__name__)


@dataclass
class StoreResult:
    """Outcome of a store operation, as returned to UI callers."""
    success: bool
    error: str | None = None


class PokemonStore:
    """Shared catalog state for one client session."""

    def __init__(
        self,
        api: PokemonApi,
        enrichment: EnrichmentClient | None = None,
        success_message_ttl: float = 5.0,
    ):
        self.api = api
        self.enrichment = enrichment
        self.success_message_ttl = success_message_ttl

        self.pokemons: list[dict] = []
        self.is_loading = False
        self.error: str | None = None
        self.success_message: str | None = None
        self.ai_message: str | None = None

        self._clear_handle: asyncio.TimerHandle | None = None
        self._background: set[asyncio.Task] = set()

    # ─── Operations ──────────────────────────────────────────────

    async def fetch_all(self) -> StoreResult:
        self._begin()
        try:
            await self._load()
            return StoreResult(success=True)
        except PokemonApiError as e:
            return self._fail(e, "Error fetching pokemons")
        finally:
            self.is_loading = False

    async def add(self, key: str) -> StoreResult:
        self._begin()
        try:
            response = await self.api.create(key)
            await self._refresh_after_mutation()
            name = _pokemon_name(response) or key
            self.show_success_message(f"Pokemon {name} added successfully!")
            self._schedule_enrichment(name)
            return StoreResult(success=True)
        except PokemonApiError as e:
            return self._fail(e, "Error adding pokemon")
        finally:
            self.is_loading = False

    async def update(self, pokemon_id: str, key: str) -> StoreResult:
        self._begin()
        try:
            response = await self.api.update(pokemon_id, key)
            await self._refresh_after_mutation()
            name = _pokemon_name(response) or key
            self.show_success_message(f"Pokemon updated to {name} successfully!")
            self._schedule_enrichment(name)
            return StoreResult(success=True)
        except PokemonApiError as e:
            return self._fail(e, "Error updating pokemon")
        finally:
            self.is_loading = False

    async def delete(self, pokemon_id: str, display_name: str) -> StoreResult:
        self._begin()
        try:
            await self.api.delete(pokemon_id)
            await self._refresh_after_mutation()
            self.show_success_message(f"Pokemon {display_name} deleted successfully!")
            return StoreResult(success=True)
        except PokemonApiError as e:
            result = self._fail(e, "Error deleting pokemon")
            self.show_success_message(f"Error: {result.error}")
            return result
        finally:
            self.is_loading = False

    def show_success_message(self, message: str) -> None:
        """Set the banner message and schedule its clear on the running loop.

        Outside a running event loop no clear is scheduled: the message stays until
        the next show_success_message call replaces it.
        """
        self.success_message = message
        if self._clear_handle is not None:
            self._clear_handle.cancel()
            self._clear_handle = None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; success message will not auto-clear")
            return
        self._clear_handle = loop.call_later(
            self.success_message_ttl, self._clear_success_message,
        )

    @property
    def pending_tasks(self) -> frozenset[asyncio.Task]:
        """Enrichment tasks still running (for shutdown and tests)."""
        return frozenset(self._background)

    async def aclose(self) -> None:
        """Cancel the pending message timer and any in-flight enrichment."""
        if self._clear_handle is not None:
            self._clear_handle.cancel()
            self._clear_handle = None
        for task in list(self._background):
            task.cancel()
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)

    # ─── Helpers ─────────────────────────────────────────────────

    def _begin(self) -> None:
        self.is_loading = True
        self.error = None

    def _fail(self, exc: PokemonApiError, fallback: str) -> StoreResult:
        self.error = exc.message or fallback
        logger.error(f"{fallback}: {self.error}")
        return StoreResult(success=False, error=self.error)

    async def _load(self) -> None:
        self.pokemons = await self.api.get_all()

    async def _refresh_after_mutation(self) -> None:
        try:
            await self._load()
        except PokemonApiError as e:
            self.error = e.message or "Error fetching pokemons"
            logger.error(f"Refresh after mutation failed: {self.error}")

    def _clear_success_message(self) -> None:
        self.success_message = None
        self._clear_handle = None

    def _schedule_enrichment(self, pokemon_name: str) -> None:
        if self.enrichment is None:
            return
        task = asyncio.create_task(self._enrich(pokemon_name))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _enrich(self, pokemon_name: str) -> None:
        try:
            info = await self.enrichment.get_pokemon_info(pokemon_name)
        except Exception as e:
            logger.warning(f"Enrichment for {pokemon_name} failed: {e}")
            return
        if info:
            self.ai_message = info


def _pokemon_name(response: dict) -> str | None:
    pokemon = response.get("pokemon") if isinstance(response, dict) else None
    if isinstance(pokemon, dict) and isinstance(pokemon.get("name"), str):
        return pokemon["name"]
    return None
