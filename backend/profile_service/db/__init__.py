"""Database Infrastructure — declarative base, session factory, schema bootstrap and seed.

Invariants:
    - Single async engine per process in the API (owned by DatabaseSessionManager)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL (native async, no thread pool overhead)
"""
