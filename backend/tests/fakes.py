"""Test doubles — PokeAPI-shaped payloads and an in-memory provider.

Invariants:
    - FakeProvider resolves lookups by name or number, case-insensitively, like PokeAPI
    - Returned payloads are deep copies: tests cannot mutate the fixtures by accident
"""

import copy

from pokedex.core.errors import PokemonNotFoundUpstreamError


def make_payload(number: int, name: str, *types: str) -> dict:
    """Minimal PokeAPI-shaped document, including fields never projected."""
    return {
        "id": number,
        "name": name,
        "base_experience": 100 + number,
        "height": number % 20,
        "types": [
            {"slot": i + 1, "type": {"name": t, "url": f"https://pokeapi.co/api/v2/type/{t}/"}}
            for i, t in enumerate(types or ("normal",))
        ],
        "sprites": {
            "front_default": f"https://img.example/{number}.png",
            "front_shiny": f"https://img.example/shiny/{number}.png",
        },
        "abilities": [
            {"ability": {"name": "static", "url": ""}, "is_hidden": False, "slot": 1},
        ],
        "stats": [
            {"base_stat": 35, "effort": 0, "stat": {"name": "hp", "url": ""}},
        ],
        "moves": [{"move": {"name": "thunder-shock"}}],
    }


PAYLOADS = {
    "pikachu": make_payload(25, "pikachu", "electric"),
    "bulbasaur": make_payload(1, "bulbasaur", "grass", "poison"),
    "charmander": make_payload(4, "charmander", "fire"),
    "squirtle": make_payload(7, "squirtle", "water"),
    "mewtwo": make_payload(150, "mewtwo", "psychic"),
}


class FakeProvider:
    """In-memory stand-in for PokeAPIClient."""

    def __init__(self, payloads: dict[str, dict] | None = None):
        self.payloads = copy.deepcopy(payloads if payloads is not None else PAYLOADS)
        self.calls: list[str] = []
        self.fail_with: Exception | None = None

    async def fetch_by_key(self, key: str) -> dict:
        self.calls.append(key)
        if self.fail_with is not None:
            raise self.fail_with
        lookup = str(key).strip().lower()
        for payload in self.payloads.values():
            if lookup in (str(payload["name"]).lower(), str(payload["id"])):
                return copy.deepcopy(payload)
        raise PokemonNotFoundUpstreamError(key)
