"""Client Session — builds one PokemonStore with its HTTP clients from settings.

Invariants:
    - One store per session; HTTP clients closed when the session exits
    - Enrichment disabled when no webhook URL is configured
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx

from pokedex.client.api import PokemonApi
from pokedex.client.config import ClientSettings, get_client_settings
from pokedex.client.enrichment import EnrichmentClient
from pokedex.client.store import PokemonStore


@asynccontextmanager
async def open_store(
    settings: ClientSettings | None = None,
) -> AsyncIterator[PokemonStore]:
    """Yield a ready PokemonStore; pending enrichment is cancelled on exit."""
    settings = settings or get_client_settings()
    async with httpx.AsyncClient(
        base_url=settings.api_base_url, timeout=settings.api_timeout_seconds,
    ) as api_http, httpx.AsyncClient(
        timeout=settings.enrichment_timeout_seconds,
    ) as webhook_http:
        enrichment = None
        if settings.enrichment_webhook_url:
            enrichment = EnrichmentClient(settings.enrichment_webhook_url, webhook_http)
        store = PokemonStore(
            PokemonApi(api_http),
            enrichment=enrichment,
            success_message_ttl=settings.success_message_ttl_seconds,
        )
        try:
            yield store
        finally:
            await store.aclose()
