"""
tests.conftest

Shared fixtures.

Responsibilities:
- Give every test its own SQLite database file and a fully started app (lifespan entered).
- Expose the app's service container and a DB session for repository-level tests.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import timedelta

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession

from tasksapi.api.app import create_app
from tasksapi.api.deps import ServiceContainer
from tasksapi.auth.jwt import JwtConfig
from tasksapi.db.session import session_scope
from tasksapi.settings import Settings

TEST_SECRET = "test-signing-key"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'tasks.db'}",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest.fixture
def jwt_cfg() -> JwtConfig:
    return JwtConfig(alg="HS256", issuer="tasksapi", secret=TEST_SECRET, ttl=timedelta(minutes=10))


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx ASGITransport does not drive lifespan; enter it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def container(app: FastAPI) -> ServiceContainer:
    return app.state.container


@pytest_asyncio.fixture
async def session(container: ServiceContainer) -> AsyncIterator[AsyncSession]:
    async with session_scope(container.sessionmaker) as s:
        yield s
