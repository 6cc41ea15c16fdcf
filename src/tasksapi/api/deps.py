"""
tasksapi.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Build the process-wide `ServiceContainer` (settings, DB engine, session factory,
  token issuer/validator, authorization gate) exactly once at startup.
- Provide dependency functions for the container and request-scoped DB sessions.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from tasksapi.auth.gate import AuthorizationGate
from tasksapi.auth.jwt import JwtConfig, SessionIssuer, SessionValidator
from tasksapi.db.session import create_engine, create_sessionmaker
from tasksapi.settings import Settings


@dataclass(frozen=True, slots=True)
class ServiceContainer:
    """
    Everything a request needs that outlives the request. Read-only after startup.
    """

    settings: Settings
    engine: AsyncEngine
    sessionmaker: async_sessionmaker[AsyncSession]
    issuer: SessionIssuer
    validator: SessionValidator
    gate: AuthorizationGate


def build_container(settings: Settings) -> ServiceContainer:
    cfg = JwtConfig(
        alg=settings.jwt_alg,
        issuer=settings.jwt_issuer,
        secret=settings.jwt_secret,
        ttl=settings.token_ttl,
    )
    validator = SessionValidator(cfg)
    engine = create_engine(settings)
    return ServiceContainer(
        settings=settings,
        engine=engine,
        sessionmaker=create_sessionmaker(engine),
        issuer=SessionIssuer(cfg),
        validator=validator,
        gate=AuthorizationGate(validator),
    )


def container_dep(request: Request) -> ServiceContainer:
    # The container is created by the lifespan handler in `tasksapi.api.app.create_app`.
    return request.app.state.container  # type: ignore[attr-defined]


async def db_session(
    container: ServiceContainer = Depends(container_dep),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit is explicit; anything uncommitted is rolled back on close.
    async with container.sessionmaker() as session:
        yield session


# --- Module Notes -----------------------------------------------------------
# Tests construct their own container through `create_app(settings=...)`; there is no
# module-level engine or key anywhere in the package.
