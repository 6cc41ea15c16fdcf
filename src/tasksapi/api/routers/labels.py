"""
tasksapi.api.routers.labels

Tenant-scoped label endpoints: `/{identity}/{projects,contexts,dates}[/{value}]`.

Responsibilities:
- List the distinct non-empty values of one label field.
- List the tasks whose label field equals a given value.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tasksapi.api.deps import db_session
from tasksapi.api.routers.tasks import TaskOut
from tasksapi.auth.deps import require_tenant
from tasksapi.db.repositories.namespaces import TenantNamespaceRepo
from tasksapi.errors import InvalidField

router = APIRouter(prefix="/{identity}", tags=["labels"])

COLLECTIONS = {
    "projects": "project",
    "contexts": "context",
    "dates": "date",
}


def _field(collection: str) -> str:
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise InvalidField(f"Unknown collection: {collection}") from None


@router.get("/{collection}", response_model=list[str])
async def list_values(
    collection: str,
    identity: str = Depends(require_tenant),
    session: AsyncSession = Depends(db_session),
) -> list[str]:
    values = await TenantNamespaceRepo(session).distinct_values(identity, _field(collection))
    return sorted(values)


@router.get("/{collection}/{value}", response_model=list[TaskOut])
async def list_by_value(
    collection: str,
    value: str,
    identity: str = Depends(require_tenant),
    session: AsyncSession = Depends(db_session),
) -> list[TaskOut]:
    tasks = await TenantNamespaceRepo(session).find_by_field(identity, _field(collection), value)
    return [TaskOut.from_row(t) for t in tasks]
