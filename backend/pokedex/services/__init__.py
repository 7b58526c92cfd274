"""Services Layer — domain orchestration between provider and persistence.

Invariants:
    - Services depend on core Protocols, not on concrete infrastructure classes

Design Decisions:
    - One service class per aggregate
"""
