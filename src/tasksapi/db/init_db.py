"""
tasksapi.db.init_db

DB initialization helpers (dev/test convenience).

Responsibilities:
- Create tables for local development and tests.
- Fail fast when the database cannot be reached at startup.
"""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from tasksapi.db import models  # noqa: F401  # ensure models are registered on Base.metadata
from tasksapi.db.base import Base


async def ping(engine: AsyncEngine) -> None:
    # Any error here propagates and aborts application startup.
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def init_db(engine: AsyncEngine) -> None:
    """
    Dev/test bootstrap: create tables if they don't exist.
    Production relies on Alembic migrations.
    """

    # Use a transactional DDL block when supported by the backend.
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# --- Module Notes -----------------------------------------------------------
# The schema is static: registering a principal inserts rows, it never creates tables.
