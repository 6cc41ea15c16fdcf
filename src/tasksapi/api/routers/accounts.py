"""
tasksapi.api.routers.accounts

Unauthenticated account endpoints.

Responsibilities:
- `POST /register`: create a principal together with its task namespace.
- `GET /login`: exchange (identity, secret) for a session token.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from tasksapi.api.deps import ServiceContainer, container_dep, db_session
from tasksapi.db.models import IDENTITY_MAX_LEN
from tasksapi.services.accounts import AccountService

router = APIRouter(tags=["accounts"])


class Credentials(BaseModel):
    identity: str = Field(min_length=1, max_length=IDENTITY_MAX_LEN)
    secret: str = Field(min_length=1, max_length=256)


class RegisterResponse(BaseModel):
    message: str
    id: uuid.UUID


class LoginResponse(BaseModel):
    token: str


def _service(container: ServiceContainer, session: AsyncSession) -> AccountService:
    return AccountService(
        session=session,
        issuer=container.issuer,
        bcrypt_rounds=container.settings.bcrypt_rounds,
    )


@router.post("/register", response_model=RegisterResponse)
async def register(
    body: Credentials,
    container: ServiceContainer = Depends(container_dep),
    session: AsyncSession = Depends(db_session),
) -> RegisterResponse:
    principal_id = await _service(container, session).register(body.identity, body.secret)
    return RegisterResponse(message="Principal registered successfully", id=principal_id)


@router.get("/login", response_model=LoginResponse)
async def login(
    body: Credentials,
    container: ServiceContainer = Depends(container_dep),
    session: AsyncSession = Depends(db_session),
) -> LoginResponse:
    # GET with a JSON body, as the public API has always accepted it.
    token = await _service(container, session).login(body.identity, body.secret)
    return LoginResponse(token=token)


# --- Module Notes -----------------------------------------------------------
# Both handlers delegate entirely to `AccountService`; typed errors become JSON in `api.errors`.
