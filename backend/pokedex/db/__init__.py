"""Database Package — SQLAlchemy Base and standalone session factory.

Invariants:
    - Single declarative Base shared by every model
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for local runs and tests
"""
