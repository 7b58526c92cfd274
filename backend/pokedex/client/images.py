"""Pokemon Images — pick which sprite a Pokemon card shows.

Invariants:
    - Always returns a URL: no front_default → poke-ball placeholder
    - front_shiny is only ever chosen when both sprites exist, with probability 0.5

Design Decisions:
    - Random source injectable (rng) so callers and tests can make the choice deterministic
"""

import random

DEFAULT_IMAGE_URL = (
    "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/items/poke-ball.png"
)


def pick_image_url(sprites: dict | None, rng: random.Random | None = None) -> str:
    """Front sprite URL, shiny half of the time when a shiny variant exists.

    Falls back to a poke-ball placeholder when there is no front sprite.
    """
    sprites = sprites or {}
    front = sprites.get("front_default")
    if not front:
        return DEFAULT_IMAGE_URL
    shiny = sprites.get("front_shiny")
    if not shiny:
        return front
    roll = (rng or random).random()
    return shiny if roll < 0.5 else front
