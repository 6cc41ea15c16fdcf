"""
tasksapi.api.app

FastAPI app factory for the to-do service.

Responsibilities:
- Build the FastAPI application and register routers, middleware and error handlers.
- Build the `ServiceContainer` once on startup and dispose its engine on shutdown.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from tasksapi import __version__
from tasksapi.api.deps import build_container
from tasksapi.api.errors import register_exception_handlers
from tasksapi.api.routers.accounts import router as accounts_router
from tasksapi.api.routers.health import router as health_router
from tasksapi.api.routers.labels import router as labels_router
from tasksapi.api.routers.tasks import router as tasks_router
from tasksapi.db.init_db import init_db, ping
from tasksapi.observability.logging import configure_logging, get_logger
from tasksapi.observability.middleware import RequestContextMiddleware
from tasksapi.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        container = build_container(settings)
        try:
            # Unreachable storage is fatal: the exception aborts startup.
            await ping(container.engine)
            if settings.env in ("dev", "test"):
                # Dev/test convenience: create tables automatically. Prod uses Alembic.
                await init_db(container.engine)
        except Exception:
            await container.engine.dispose()
            raise
        app.state.container = container
        try:
            yield
        finally:
            await container.engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Tasks API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(accounts_router)
    # Order matters: `/{identity}/tasks` must win over `/{identity}/{collection}`.
    app.include_router(tasks_router)
    app.include_router(labels_router)

    return app


# --- Module Notes -----------------------------------------------------------
# This file is intentionally small: app composition stays here; auth and storage logic
# stay in `auth`, `db.repositories` and `services`.
