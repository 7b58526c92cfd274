"""Pokemon Routes — HTTP status mapping and response envelopes.

Invariants:
    - POST → 201 {message, pokemon}; duplicate → 409; unknown upstream → 404; bad body → 400
    - GET list → 200 {count, pokemons} ordered by provider number
    - GET one → 200 projection; malformed id → 400 INVALID_ID; unknown id → 404
    - PUT → 200 {message, pokemon}; conflict with another id → 409
    - DELETE → 200 {message}; then GET → 404
    - Upstream, database and delete failures → 500; message generic outside development
    - Projection never leaks payload fields beyond types/sprites/abilities/stats
"""

from uuid import uuid4

from sqlalchemy import delete
from sqlalchemy.exc import OperationalError

from pokedex.api.error_handlers import GENERIC_ERROR_MESSAGE
from pokedex.config import get_settings
from pokedex.core.errors import UpstreamError
from pokedex.infrastructure.pokemon_repository import PokemonRepository
from pokedex.models.pokemon import Pokemon

URL = "/api/v1/pokemons"
PROJECTION_KEYS = {"id", "name", "types", "sprites", "abilities", "stats", "createdAt"}


async def _create(client, name: str) -> dict:
    res = await client.post(URL, json={"name": name})
    assert res.status_code == 201, res.text
    return res.json()["pokemon"]


async def test_full_lifecycle_scenario(client):
    """Create, duplicate, get, update by number, delete, get again."""
    res = await client.post(URL, json={"name": "pikachu"})
    assert res.status_code == 201
    body = res.json()
    assert body["pokemon"]["name"] == "pikachu"
    assert "pikachu" in body["message"]
    pokemon_id = body["pokemon"]["id"]

    res = await client.post(URL, json={"name": "PIKACHU"})
    assert res.status_code == 409
    assert "pikachu" in res.json()["error"]["message"]

    res = await client.get(f"{URL}/{pokemon_id}")
    assert res.status_code == 200
    assert set(res.json()) == PROJECTION_KEYS
    assert res.json()["id"] == pokemon_id
    assert res.json()["name"] == "pikachu"

    res = await client.put(f"{URL}/{pokemon_id}", json={"name": "25"})
    assert res.status_code == 200
    assert res.json()["pokemon"]["id"] == pokemon_id
    assert res.json()["pokemon"]["name"] == "pikachu"

    res = await client.delete(f"{URL}/{pokemon_id}")
    assert res.status_code == 200
    assert "pikachu" in res.json()["message"]

    res = await client.get(f"{URL}/{pokemon_id}")
    assert res.status_code == 404


async def test_create_projection_hides_rest_of_payload(client):
    pokemon = await _create(client, "pikachu")
    assert set(pokemon) == PROJECTION_KEYS
    assert "moves" not in pokemon
    assert "base_experience" not in pokemon
    assert pokemon["types"][0]["type"]["name"] == "electric"
    assert pokemon["sprites"]["front_default"].endswith("/25.png")
    assert pokemon["createdAt"].endswith("+00:00")


async def test_create_unknown_upstream_returns_404(client):
    res = await client.post(URL, json={"name": "missingno"})
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "POKEMON_NOT_FOUND_UPSTREAM"
    assert "missingno" in res.json()["error"]["message"]


async def test_create_upstream_failure_returns_500(client, fake_provider):
    fake_provider.fail_with = UpstreamError("pikachu", "HTTP 503")
    res = await client.post(URL, json={"name": "pikachu"})
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "UPSTREAM_ERROR"
    assert "HTTP 503" in res.json()["error"]["message"]


async def test_upstream_failure_message_is_generic_in_production(
    client, fake_provider, monkeypatch,
):
    monkeypatch.setattr(get_settings(), "environment", "production")
    fake_provider.fail_with = UpstreamError("pikachu", "HTTP 503")
    res = await client.post(URL, json={"name": "pikachu"})
    assert res.status_code == 500
    assert res.json()["error"]["message"] == GENERIC_ERROR_MESSAGE


async def test_create_missing_name_returns_400(client):
    res = await client.post(URL, json={})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert res.json()["error"]["message"]


async def test_create_blank_name_returns_400(client):
    res = await client.post(URL, json={"name": "   "})
    assert res.status_code == 400


async def test_create_non_string_name_returns_400(client):
    res = await client.post(URL, json={"name": 25})
    assert res.status_code == 400


async def test_list_envelope_and_order(client):
    for name in ("mewtwo", "pikachu", "bulbasaur"):
        await _create(client, name)
    res = await client.get(URL)
    assert res.status_code == 200
    body = res.json()
    assert body["count"] == 3
    assert [p["name"] for p in body["pokemons"]] == ["bulbasaur", "pikachu", "mewtwo"]


async def test_list_empty(client):
    res = await client.get(URL)
    assert res.json() == {"count": 0, "pokemons": []}


async def test_get_invalid_id_returns_400(client):
    res = await client.get(f"{URL}/not-a-valid-id")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_ID"


async def test_get_unknown_id_returns_404(client):
    res = await client.get(f"{URL}/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_update_conflict_returns_409(client):
    pikachu = await _create(client, "pikachu")
    mewtwo = await _create(client, "mewtwo")
    res = await client.put(f"{URL}/{mewtwo['id']}", json={"name": "pikachu"})
    assert res.status_code == 409
    assert pikachu["id"] in res.json()["error"]["message"]

    res = await client.get(f"{URL}/{mewtwo['id']}")
    assert res.json()["name"] == "mewtwo"


async def test_update_response_includes_updated_at(client):
    pikachu = await _create(client, "pikachu")
    res = await client.put(f"{URL}/{pikachu['id']}", json={"name": "charmander"})
    assert res.status_code == 200
    assert res.json()["pokemon"]["name"] == "charmander"
    assert "updatedAt" in res.json()["pokemon"]


async def test_update_unknown_id_returns_404(client):
    res = await client.put(f"{URL}/{uuid4()}", json={"name": "pikachu"})
    assert res.status_code == 404


async def test_update_invalid_id_returns_400(client):
    res = await client.put(f"{URL}/xyz", json={"name": "pikachu"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_ID"


async def test_update_missing_body_returns_400(client):
    pikachu = await _create(client, "pikachu")
    res = await client.put(f"{URL}/{pikachu['id']}", json={})
    assert res.status_code == 400


async def test_update_unknown_upstream_returns_404(client):
    pikachu = await _create(client, "pikachu")
    res = await client.put(f"{URL}/{pikachu['id']}", json={"name": "missingno"})
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "POKEMON_NOT_FOUND_UPSTREAM"


async def test_delete_unknown_id_returns_404(client):
    res = await client.delete(f"{URL}/{uuid4()}")
    assert res.status_code == 404


async def test_delete_invalid_id_returns_400(client):
    res = await client.delete(f"{URL}/42")
    assert res.status_code == 400


async def test_delete_frees_name_for_reuse(client):
    pikachu = await _create(client, "pikachu")
    await client.delete(f"{URL}/{pikachu['id']}")
    again = await _create(client, "pikachu")
    assert again["id"] != pikachu["id"]


# ─── Storage failures ────────────────────────────────────────────

def _raise_operational(*args, **kwargs):
    raise OperationalError("SELECT pokemons", {}, Exception("database is locked"))


async def test_create_database_failure_returns_500(client, monkeypatch):
    async def broken_exists(self, name):
        _raise_operational()

    monkeypatch.setattr(PokemonRepository, "exists", broken_exists)
    res = await client.post(URL, json={"name": "pikachu"})
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "DATABASE_ERROR"


async def test_database_failure_message_is_generic_in_production(client, monkeypatch):
    async def broken_exists(self, name):
        _raise_operational()

    monkeypatch.setattr(PokemonRepository, "exists", broken_exists)
    monkeypatch.setattr(get_settings(), "environment", "production")
    res = await client.post(URL, json={"name": "pikachu"})
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "DATABASE_ERROR"
    assert res.json()["error"]["message"] == GENERIC_ERROR_MESSAGE


async def test_update_database_failure_returns_500(client, monkeypatch):
    pokemon = await _create(client, "pikachu")

    async def broken_replace(self, pokemon_id, name, data):
        _raise_operational()

    monkeypatch.setattr(PokemonRepository, "replace", broken_replace)
    res = await client.put(f"{URL}/{pokemon['id']}", json={"name": "bulbasaur"})
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "DATABASE_ERROR"

    monkeypatch.undo()
    res = await client.get(f"{URL}/{pokemon['id']}")
    assert res.json()["name"] == "pikachu"


async def test_delete_when_row_vanishes_returns_500(client, monkeypatch):
    pokemon = await _create(client, "pikachu")
    lookup = PokemonRepository.find_by_id
    lookups = []

    async def find_then_vanish(self, pokemon_id):
        found = await lookup(self, pokemon_id)
        lookups.append(pokemon_id)
        # Second lookup is the one inside PokemonRepository.delete
        if len(lookups) == 2:
            await self.db.execute(delete(Pokemon).where(Pokemon.id == found.id))
        return found

    monkeypatch.setattr(PokemonRepository, "find_by_id", find_then_vanish)
    res = await client.delete(f"{URL}/{pokemon['id']}")
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "DELETE_FAILED"

    monkeypatch.undo()
    res = await client.get(f"{URL}/{pokemon['id']}")
    assert res.status_code == 200
