"""
tasksapi.db.models

Persistence schema for principals and their task namespaces.

Responsibilities:
- Define ORM models:
  - Principal: identity record with a bcrypt secret hash
  - TenantNamespace: one isolated task collection per principal, carrying its id counter
  - Task: a task record, owned by exactly one namespace
"""

from __future__ import annotations

import datetime as dt
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Date, ForeignKey, Index, Integer, String, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tasksapi.db.base import Base

IDENTITY_MAX_LEN = 64
BODY_MAX_LEN = 100
LABEL_MAX_LEN = 30
# Task ids are allocated from 1 and stored as a 32-bit signed INTEGER.
TASK_ID_MAX = 2**31 - 1


def _utcnow() -> datetime:
    # Persist naive UTC timestamps for simplicity.
    return datetime.utcnow()


class Principal(Base):
    __tablename__ = "principals"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    identity: Mapped[str] = mapped_column(
        String(IDENTITY_MAX_LEN), nullable=False, unique=True, index=True
    )
    secret_hash: Mapped[str] = mapped_column(String(128), nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    namespace: Mapped[TenantNamespace] = relationship(back_populates="principal")


class TenantNamespace(Base):
    __tablename__ = "tenant_namespaces"

    # Namespace name == owning identity; see `repositories.namespaces.namespace_name`.
    name: Mapped[str] = mapped_column(String(IDENTITY_MAX_LEN), primary_key=True)
    principal_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("principals.id"), nullable=False, unique=True
    )
    # Last task id handed out in this namespace; bumped atomically on insert.
    next_task_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    principal: Mapped[Principal] = relationship(back_populates="namespace")


class Task(Base):
    __tablename__ = "tasks"

    namespace: Mapped[str] = mapped_column(
        String(IDENTITY_MAX_LEN), ForeignKey("tenant_namespaces.name"), primary_key=True
    )
    task_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)

    body: Mapped[str] = mapped_column(String(BODY_MAX_LEN), nullable=False)
    date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    project: Mapped[str | None] = mapped_column(String(LABEL_MAX_LEN), nullable=True)
    context: Mapped[str | None] = mapped_column(String(LABEL_MAX_LEN), nullable=True)
    done: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_tasks_namespace_project", "namespace", "project"),
        Index("ix_tasks_namespace_context", "namespace", "context"),
        Index("ix_tasks_namespace_date", "namespace", "date"),
    )


# --- Module Notes -----------------------------------------------------------
# Every tenant shares the `tasks` table; isolation comes from the `namespace` column being
# part of the primary key and of every WHERE clause issued by `TenantNamespaceRepo`.
