"""
tasksapi.api.routers.tasks

Tenant-scoped task endpoints (`/{identity}/tasks...`).

Responsibilities:
- CRUD over the caller's own task namespace.
- Every route depends on `require_tenant`, so storage is only reached after the
  authorization gate admitted the request for the identity in the path.
"""

from __future__ import annotations

import datetime as dt
from typing import Annotated

from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from tasksapi.api.deps import db_session
from tasksapi.auth.deps import require_tenant
from tasksapi.db.models import BODY_MAX_LEN, LABEL_MAX_LEN, Task
from tasksapi.db.repositories.namespaces import TaskAttributes, TenantNamespaceRepo

router = APIRouter(prefix="/{identity}/tasks", tags=["tasks"])


class TaskIn(BaseModel):
    body: str = Field(min_length=1, max_length=BODY_MAX_LEN)
    date: dt.date | None = None
    project: str | None = Field(default=None, max_length=LABEL_MAX_LEN)
    context: str | None = Field(default=None, max_length=LABEL_MAX_LEN)
    done: bool = False

    @field_validator("date", mode="before")
    @classmethod
    def _blank_date_is_none(cls, v: object) -> object:
        # Clients send "" for "no date".
        return None if v == "" else v

    def attributes(self) -> TaskAttributes:
        return TaskAttributes(
            body=self.body,
            date=self.date,
            project=self.project,
            context=self.context,
            done=self.done,
        )


class TaskOut(BaseModel):
    id: int
    body: str
    date: dt.date | None
    project: str | None
    context: str | None
    done: bool

    @classmethod
    def from_row(cls, task: Task) -> TaskOut:
        return cls(
            id=task.task_id,
            body=task.body,
            date=task.date,
            project=task.project,
            context=task.context,
            done=task.done,
        )


class MessageResponse(BaseModel):
    message: str


# Unbounded here; ids that cannot exist resolve to NotFound in the repository.
TaskId = Annotated[int, Path(description="Per-namespace task id")]


@router.get("", response_model=list[TaskOut])
async def list_tasks(
    identity: str = Depends(require_tenant),
    session: AsyncSession = Depends(db_session),
) -> list[TaskOut]:
    tasks = await TenantNamespaceRepo(session).list(identity)
    return [TaskOut.from_row(t) for t in tasks]


@router.post("", response_model=TaskOut, status_code=HTTP_201_CREATED)
async def create_task(
    body: TaskIn,
    identity: str = Depends(require_tenant),
    session: AsyncSession = Depends(db_session),
) -> TaskOut:
    task = await TenantNamespaceRepo(session).insert(identity, body.attributes())
    await session.commit()
    return TaskOut.from_row(task)


@router.get("/{task_id}", response_model=TaskOut)
async def get_task(
    task_id: TaskId,
    identity: str = Depends(require_tenant),
    session: AsyncSession = Depends(db_session),
) -> TaskOut:
    task = await TenantNamespaceRepo(session).get(identity, task_id)
    return TaskOut.from_row(task)


@router.put("/{task_id}", response_model=TaskOut)
async def update_task(
    body: TaskIn,
    task_id: TaskId,
    identity: str = Depends(require_tenant),
    session: AsyncSession = Depends(db_session),
) -> TaskOut:
    task = await TenantNamespaceRepo(session).update(identity, task_id, body.attributes())
    await session.commit()
    return TaskOut.from_row(task)


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: TaskId,
    identity: str = Depends(require_tenant),
    session: AsyncSession = Depends(db_session),
) -> MessageResponse:
    await TenantNamespaceRepo(session).remove(identity, task_id)
    await session.commit()
    return MessageResponse(message="Task was deleted successfully")


# --- Module Notes -----------------------------------------------------------
# This router must be registered before `routers.labels`, whose `/{identity}/{collection}`
# pattern would otherwise also match `/{identity}/tasks`.
