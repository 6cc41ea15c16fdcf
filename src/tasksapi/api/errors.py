"""
tasksapi.api.errors

Exception handlers mapping the error taxonomy onto HTTP responses.

Responsibilities:
- Render `ServiceError` subclasses as {"error": code, "message": message}.
- Turn request validation failures into 400 `ValidationError`.
- Answer storage-engine failures with a generic 500 `StorageError`; driver text is logged,
  never returned.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from tasksapi.errors import ServiceError, StorageError, ValidationError
from tasksapi.observability.logging import get_logger

log = get_logger(__name__)


def _render(err: ServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=err.status_code,
        content={"error": err.code, "message": err.message},
    )


async def _service_error(_: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error("service_error", code=exc.code, exc_info=exc)
    return _render(exc)


async def _request_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for item in exc.errors():
        loc = ".".join(str(p) for p in item.get("loc", ()) if p != "body")
        problems.append(f"{loc}: {item.get('msg', 'invalid')}" if loc else item.get("msg", ""))
    return _render(ValidationError("; ".join(problems) or None))


async def _storage_error(_: Request, exc: Exception) -> JSONResponse:
    log.error("storage_error", exc_info=exc)
    return _render(StorageError())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, _service_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(SQLAlchemyError, _storage_error)


# --- Module Notes -----------------------------------------------------------
# Handlers are installed by `api.app.create_app`; routers simply raise typed errors.
