"""Infrastructure Layer — database, upstream provider client, and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - External failures mapped to core/errors.py types before leaving this layer

Design Decisions:
    - Thin wrappers over raw clients (httpx, SQLAlchemy) with error mapping
"""
