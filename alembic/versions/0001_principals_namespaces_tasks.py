"""principals, tenant namespaces and the shared tasks table

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "principals",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("identity", sa.String(64), nullable=False),
        sa.Column("secret_hash", sa.String(128), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_principals_identity", "principals", ["identity"], unique=True)

    op.create_table(
        "tenant_namespaces",
        sa.Column("name", sa.String(64), primary_key=True),
        sa.Column(
            "principal_id", sa.Uuid(), sa.ForeignKey("principals.id"), nullable=False, unique=True
        ),
        sa.Column("next_task_id", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "tasks",
        sa.Column(
            "namespace", sa.String(64), sa.ForeignKey("tenant_namespaces.name"), primary_key=True
        ),
        sa.Column("task_id", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("body", sa.String(100), nullable=False),
        sa.Column("date", sa.Date(), nullable=True),
        sa.Column("project", sa.String(30), nullable=True),
        sa.Column("context", sa.String(30), nullable=True),
        sa.Column("done", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_tasks_namespace_project", "tasks", ["namespace", "project"])
    op.create_index("ix_tasks_namespace_context", "tasks", ["namespace", "context"])
    op.create_index("ix_tasks_namespace_date", "tasks", ["namespace", "date"])


def downgrade() -> None:
    op.drop_table("tasks")
    op.drop_table("tenant_namespaces")
    op.drop_index("ix_principals_identity", table_name="principals")
    op.drop_table("principals")
