"""PokeAPI Client — single-attempt lookups against the read-only upstream provider.

Invariants:
    - Exactly one HTTP attempt per call: no retries, no backoff
    - Lookup keys (name or numeric id) are trimmed and lowercased before the request
    - 404 → PokemonNotFoundUpstreamError; every other failure → UpstreamError
    - Successful responses are returned as decoded JSON objects, unmodified

Design Decisions:
    - One shared httpx.AsyncClient per process, owned by the app lifespan
      (connection pooling across requests)
    - Bounded timeout from settings; a timeout is an UpstreamError like any transport failure
"""

import logging

import httpx

from pokedex.core.domain_types import Payload
from pokedex.core.errors import PokemonNotFoundUpstreamError, UpstreamError

logger = logging.getLogger(__name__)


class PokeAPIClient:
    """Fetches Pokemon documents from PokeAPI by name or number."""

    def __init__(
        self,
        base_url: str = "https://pokeapi.co/api/v2/pokemon",
        timeout_seconds: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self.http = http_client or httpx.AsyncClient(timeout=timeout_seconds)

    async def fetch_by_key(self, key: str) -> Payload:
        """Fetch the full provider document for a name or numeric id."""
        lookup = str(key).strip().lower()
        url = f"{self.base_url}/{lookup}"
        try:
            response = await self.http.get(url)
        except httpx.TimeoutException as e:
            logger.warning("PokeAPI timeout", extra={"lookup_key": lookup})
            raise UpstreamError(key, f"timeout ({type(e).__name__})") from e
        except httpx.HTTPError as e:
            logger.error(f"PokeAPI transport error: {e}", extra={"lookup_key": lookup})
            raise UpstreamError(key, str(e) or type(e).__name__) from e

        if response.status_code == httpx.codes.NOT_FOUND:
            raise PokemonNotFoundUpstreamError(key)
        if response.is_error:
            logger.error(
                f"PokeAPI returned HTTP {response.status_code}",
                extra={"lookup_key": lookup, "status_code": response.status_code},
            )
            raise UpstreamError(key, f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamError(key, "invalid JSON response") from e
        if not isinstance(payload, dict):
            raise UpstreamError(key, "unexpected response document")
        return payload

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http.aclose()
