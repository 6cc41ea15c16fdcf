"""
tasksapi.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness check (`/healthz`).
- Provide readiness check (`/readyz`) with DB connectivity validation.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from tasksapi.api.deps import db_session

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)) -> dict[str, str]:
    # A failing query surfaces as a 500 StorageError via `api.errors`.
    await session.execute(text("SELECT 1"))
    return {"status": "ready", "database": session.bind.dialect.name}


# --- Module Notes -----------------------------------------------------------
# Neither check is tenant-scoped, so neither goes through the authorization gate.
