"""Enrichment Client — best-effort supplementary text from an informational webhook.

Invariants:
    - Never raises for HTTP, transport, or decoding failures: returns None and logs a warning
    - Returns the webhook's "output" string, or None when absent/empty
"""

import logging

import httpx

logger = logging.getLogger(__name__)


class EnrichmentClient:
    """Posts {"pokemon": name} to the webhook and reads back {"output": text}."""

    def __init__(self, webhook_url: str, http: httpx.AsyncClient):
        self.webhook_url = webhook_url
        self.http = http

    async def get_pokemon_info(self, pokemon_name: str) -> str | None:
        try:
            response = await self.http.post(
                self.webhook_url, json={"pokemon": pokemon_name},
            )
        except httpx.HTTPError as e:
            logger.warning(f"Enrichment webhook call failed: {e}")
            return None

        if response.is_error:
            logger.warning(
                f"Enrichment webhook returned {response.status_code} for {pokemon_name}",
            )
            return None
        try:
            data = response.json()
        except ValueError:
            logger.warning(f"Enrichment webhook sent invalid JSON for {pokemon_name}")
            return None
        output = data.get("output") if isinstance(data, dict) else None
        return output if isinstance(output, str) and output else None
