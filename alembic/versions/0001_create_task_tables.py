"""create state, task and user tables

Revision ID: 0001_create_task_tables
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from datetime import datetime, timezone
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_create_task_tables"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DEFAULT_STATES = ["Pendiente", "En Progreso", "Completado"]


def upgrade() -> None:
    state_table = op.create_table(
        "state",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_state_name_lower", "state", [sa.text("lower(name)")], unique=True)

    op.create_table(
        "task",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.String(length=1000), nullable=True),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "state_id",
            sa.Integer(),
            sa.ForeignKey("state.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_task_state_id", "task", ["state_id"])
    op.create_index("ix_task_due_date", "task", ["due_date"])
    op.create_index("ix_task_created_at", "task", ["created_at"])

    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("email", name="uq_user_email"),
    )

    now = datetime.now(timezone.utc)
    op.bulk_insert(
        state_table,
        [{"name": name, "created_at": now, "updated_at": now} for name in DEFAULT_STATES],
    )


def downgrade() -> None:
    op.drop_table("user")
    op.drop_index("ix_task_created_at", table_name="task")
    op.drop_index("ix_task_due_date", table_name="task")
    op.drop_index("ix_task_state_id", table_name="task")
    op.drop_table("task")
    op.drop_index("ix_state_name_lower", table_name="state")
    op.drop_table("state")
