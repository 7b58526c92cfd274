"""Client Layer — Python consumer of the Pokedex REST API.

Invariants:
    - Never imports server modules (api/, services/, infrastructure/): talks HTTP only
    - PokemonStore is the single owner of UI-facing state; components receive it injected

Design Decisions:
    - httpx.AsyncClient injected everywhere: same client type as the server's provider
      client, and tests swap the transport for httpx.MockTransport
"""
