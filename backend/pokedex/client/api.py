"""Pokemon API Client — HTTP calls to the Pokedex REST API.

Invariants:
    - Non-2xx responses raise PokemonApiError with the server's error.message when present
    - Transport failures and undecodable bodies raise PokemonApiError with a per-operation fallback
    - Never returns partial data on failure

Design Decisions:
    - Message string only: the store surfaces text to the UI, never structured codes
"""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

POKEMONS_PATH = "/api/v1/pokemons"


class PokemonApiError(Exception):
    """A Pokedex API call failed. `message` is safe to show to users."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    if isinstance(error, str) and error:
        return error
    return fallback


class PokemonApi:
    """Thin async wrapper over the /api/v1/pokemons endpoints."""

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def get_all(self) -> list[dict]:
        data = await self._request("GET", POKEMONS_PATH, "Error fetching pokemons")
        return data.get("pokemons", [])

    async def get_one(self, pokemon_id: str) -> dict:
        return await self._request(
            "GET", f"{POKEMONS_PATH}/{pokemon_id}",
            f"Error fetching pokemon with id {pokemon_id}",
        )

    async def create(self, name: str) -> dict:
        return await self._request(
            "POST", POKEMONS_PATH, "Error creating pokemon", json={"name": name},
        )

    async def update(self, pokemon_id: str, name: str) -> dict:
        return await self._request(
            "PUT", f"{POKEMONS_PATH}/{pokemon_id}",
            f"Error updating pokemon with id {pokemon_id}",
            json={"name": name},
        )

    async def delete(self, pokemon_id: str) -> dict:
        return await self._request(
            "DELETE", f"{POKEMONS_PATH}/{pokemon_id}",
            f"Error deleting pokemon with id {pokemon_id}",
        )

    async def _request(
        self, method: str, path: str, fallback: str, json: Any = None,
    ) -> dict:
        try:
            response = await self.http.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise PokemonApiError(fallback) from e

        if response.is_error:
            raise PokemonApiError(
                _error_message(response, fallback), response.status_code,
            )
        try:
            data = response.json()
        except ValueError as e:
            raise PokemonApiError(fallback, response.status_code) from e
        if not isinstance(data, dict):
            raise PokemonApiError(fallback, response.status_code)
        return data
