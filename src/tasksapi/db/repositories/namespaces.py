"""
tasksapi.db.repositories.namespaces

Repository for per-tenant task namespaces.

Responsibilities:
- Derive the namespace name from an (already authorized) identity.
- Provision a namespace for a new principal.
- CRUD over the namespace's task records, plus distinct-value and equality queries on
  the whitelisted label fields (project, context, date).

Every statement filters on `Task.namespace` with a bound parameter; the identity string
never becomes part of the SQL text.
"""

from __future__ import annotations

import datetime as dt
import unicodedata
import uuid
from dataclasses import dataclass

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from tasksapi.db.models import IDENTITY_MAX_LEN, TASK_ID_MAX, Task, TenantNamespace
from tasksapi.errors import (
    InvalidField,
    NamespaceConflict,
    NotFound,
    StorageError,
    UnknownIdentity,
    ValidationError,
)

# Field name -> mapped column. Anything outside this map is rejected.
FIELD_COLUMNS = {
    "project": Task.project,
    "context": Task.context,
    "date": Task.date,
}


def namespace_name(identity: str) -> str:
    """
    The namespace for `identity` is the identity itself, once it passes validation.
    Identical identities map to the same name and distinct ones never collide.
    """

    if not isinstance(identity, str) or not identity.strip():
        raise ValidationError("Identity must be a non-empty string")
    if len(identity) > IDENTITY_MAX_LEN:
        raise ValidationError(f"Identity must be at most {IDENTITY_MAX_LEN} characters")
    if any(unicodedata.category(ch).startswith("C") for ch in identity):
        raise ValidationError("Identity must not contain control characters")
    # The identity is also the first path segment of every tenant route.
    if "/" in identity or "\\" in identity or identity in (".", ".."):
        raise ValidationError("Identity must be usable as a single URL path segment")
    return identity


@dataclass(frozen=True, slots=True)
class TaskAttributes:
    """
    The mutable attributes of a task record (everything except its id).
    """

    body: str
    date: dt.date | None = None
    project: str | None = None
    context: str | None = None
    done: bool = False


def _check_task_id(task_id: int) -> None:
    # Ids outside the allocatable range cannot name a record.
    if not 1 <= task_id <= TASK_ID_MAX:
        raise NotFound(f"Task {task_id} not found")


def _column(field: str):
    try:
        return FIELD_COLUMNS[field]
    except KeyError:
        raise InvalidField(f"Unknown field: {field}") from None


def _as_text(value: object) -> str:
    if isinstance(value, dt.date):
        return value.isoformat()[:10]
    # Some drivers hand dates back as strings; keep calendar-day precision either way.
    return str(value)


class TenantNamespaceRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists(self, identity: str) -> bool:
        return await self._session.get(TenantNamespace, namespace_name(identity)) is not None

    async def provision(self, identity: str, *, principal_id: uuid.UUID) -> TenantNamespace:
        name = namespace_name(identity)
        if await self._session.get(TenantNamespace, name) is not None:
            raise NamespaceConflict()
        ns = TenantNamespace(name=name, principal_id=principal_id, next_task_id=0)
        self._session.add(ns)
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise NamespaceConflict() from e
        return ns

    async def list(self, identity: str) -> list[Task]:
        stmt = (
            select(Task)
            .where(Task.namespace == namespace_name(identity))
            .order_by(Task.task_id)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def insert(self, identity: str, attrs: TaskAttributes) -> Task:
        name = namespace_name(identity)
        # Single-statement counter bump: concurrent inserts never share an id.
        stmt = (
            update(TenantNamespace)
            .where(TenantNamespace.name == name)
            .values(next_task_id=TenantNamespace.next_task_id + 1)
            .returning(TenantNamespace.next_task_id)
            .execution_options(synchronize_session=False)
        )
        task_id = (await self._session.execute(stmt)).scalar_one_or_none()
        if task_id is None:
            raise UnknownIdentity(f"No namespace for identity {identity!r}")

        task = Task(
            namespace=name,
            task_id=task_id,
            body=attrs.body,
            date=attrs.date,
            project=attrs.project,
            context=attrs.context,
            done=attrs.done,
        )
        self._session.add(task)
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise StorageError("Task violates a storage constraint") from e
        return task

    async def get(self, identity: str, task_id: int) -> Task:
        _check_task_id(task_id)
        task = await self._session.get(Task, (namespace_name(identity), task_id))
        if task is None:
            raise NotFound(f"Task {task_id} not found")
        return task

    async def update(self, identity: str, task_id: int, attrs: TaskAttributes) -> Task:
        task = await self.get(identity, task_id)
        task.body = attrs.body
        task.date = attrs.date
        task.project = attrs.project
        task.context = attrs.context
        task.done = attrs.done
        try:
            await self._session.flush()
        except StaleDataError as e:
            # Zero rows matched: the record was removed concurrently.
            raise NotFound(f"Task {task_id} not found") from e
        except IntegrityError as e:
            raise StorageError("Task violates a storage constraint") from e
        return task

    async def remove(self, identity: str, task_id: int) -> None:
        _check_task_id(task_id)
        stmt = (
            delete(Task)
            .where(Task.namespace == namespace_name(identity), Task.task_id == task_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise NotFound(f"Task {task_id} not found")

    async def distinct_values(self, identity: str, field: str) -> set[str]:
        column = _column(field)
        stmt = (
            select(column)
            .distinct()
            .where(Task.namespace == namespace_name(identity), column.is_not(None))
        )
        values = (await self._session.execute(stmt)).scalars().all()
        return {text for text in (_as_text(v) for v in values) if text}

    async def find_by_field(self, identity: str, field: str, value: str) -> list[Task]:
        column = _column(field)
        match: object = value
        if field == "date":
            try:
                match = dt.date.fromisoformat(value)
            except ValueError:
                raise ValidationError(f"Invalid date: {value!r}") from None
        stmt = (
            select(Task)
            .where(Task.namespace == namespace_name(identity), column == match)
            .order_by(Task.task_id)
        )
        return list((await self._session.execute(stmt)).scalars().all())


# --- Module Notes -----------------------------------------------------------
# Callers must pass the identity admitted by `auth.gate.AuthorizationGate`; this repo
# trusts it as the tenant key and never widens a query beyond that namespace.
