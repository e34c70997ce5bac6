"""add task tags table"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0002_add_task_tags"
down_revision = "0001_create_tasks"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "task_tags",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "task_id",
            sa.String(length=32),
            sa.ForeignKey("tasks.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_task_tags_task_id", "task_tags", ["task_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_task_tags_task_id", table_name="task_tags")
    op.drop_table("task_tags")
