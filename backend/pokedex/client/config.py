"""Client Configuration — environment-driven settings for the API consumer.

Invariants:
    - All variables prefixed POKEDEX_CLIENT_ (no clash with server settings)
    - get_client_settings() is cached — single instance per process

Design Decisions:
    - Separate BaseSettings from the server's: the client runs without database settings
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Client settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="POKEDEX_CLIENT_", env_file=".env", extra="ignore",
    )

    api_base_url: str = "http://localhost:8000"
    api_timeout_seconds: float = 30.0

    # Informational webhook (optional; empty disables enrichment)
    enrichment_webhook_url: str = ""
    enrichment_timeout_seconds: float = 15.0

    success_message_ttl_seconds: float = 5.0


@lru_cache
def get_client_settings() -> ClientSettings:
    return ClientSettings()
