"""
tasksapi.db.repositories.principals

Repository for `Principal` entities (credential store).

Responsibilities:
- Create identity records with a hashed secret.
- Verify an (identity, secret) pair.
"""

from __future__ import annotations

import asyncio

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tasksapi.auth.passwords import hash_secret, verify_secret
from tasksapi.db.models import Principal
from tasksapi.errors import DuplicateIdentity, InvalidSecret, UnknownIdentity


class PrincipalRepo:
    def __init__(self, session: AsyncSession, *, bcrypt_rounds: int = 12) -> None:
        self._session = session
        self._rounds = bcrypt_rounds

    async def get_by_identity(self, identity: str) -> Principal | None:
        stmt = select(Principal).where(Principal.identity == identity)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def create(self, *, identity: str, secret: str) -> Principal:
        if await self.get_by_identity(identity) is not None:
            raise DuplicateIdentity()

        # bcrypt is deliberately slow; keep it off the event loop.
        secret_hash = await asyncio.to_thread(hash_secret, secret, rounds=self._rounds)
        principal = Principal(identity=identity, secret_hash=secret_hash)
        self._session.add(principal)
        try:
            await self._session.flush()
        except IntegrityError as e:
            # Lost a race against a concurrent registration of the same identity.
            raise DuplicateIdentity() from e
        return principal

    async def verify(self, identity: str, secret: str) -> Principal:
        principal = await self.get_by_identity(identity)
        if principal is None:
            raise UnknownIdentity()
        ok = await asyncio.to_thread(verify_secret, secret, principal.secret_hash)
        if not ok:
            raise InvalidSecret()
        return principal


# --- Module Notes -----------------------------------------------------------
# `create` only flushes; `services.accounts.AccountService.register` commits it together
# with the namespace row so neither can exist without the other.
