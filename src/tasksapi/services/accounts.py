"""
tasksapi.services.accounts

Account lifecycle service (transaction owner for register/login).

Responsibilities:
- Register a principal and provision its namespace in one all-or-nothing transaction.
- Verify credentials and mint a session token.
"""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from tasksapi.auth.jwt import SessionIssuer
from tasksapi.db.repositories.namespaces import TenantNamespaceRepo, namespace_name
from tasksapi.db.repositories.principals import PrincipalRepo
from tasksapi.errors import AuthError, ServiceError, UnknownIdentity
from tasksapi.observability.logging import get_logger

log = get_logger(__name__)


class AccountService:
    def __init__(
        self,
        *,
        session: AsyncSession,
        issuer: SessionIssuer,
        bcrypt_rounds: int = 12,
    ) -> None:
        self._session = session
        self._issuer = issuer
        self._principals = PrincipalRepo(session, bcrypt_rounds=bcrypt_rounds)
        self._namespaces = TenantNamespaceRepo(session)

    async def register(self, identity: str, secret: str) -> uuid.UUID:
        namespace_name(identity)
        try:
            principal = await self._principals.create(identity=identity, secret=secret)
            await self._namespaces.provision(identity, principal_id=principal.id)
            await self._session.commit()
        except ServiceError:
            await self._session.rollback()
            raise
        log.info("principal_registered", identity=identity, principal_id=str(principal.id))
        return principal.id

    async def login(self, identity: str, secret: str) -> str:
        try:
            await self._principals.verify(identity, secret)
        except (AuthError, UnknownIdentity) as e:
            log.info("login_denied", identity=identity, reason=e.code)
            raise
        token = self._issuer.issue(identity)
        log.info("login_succeeded", identity=identity)
        return token


# --- Module Notes -----------------------------------------------------------
# Storage errors other than the typed ones above propagate untouched; the request-scoped
# session is rolled back when `api.deps.db_session` closes it.
