"""
Initial schema: users, task lists, task list members and to-dos.

Revision ID: 20261001_000000_initial_schema
Revises:
Create Date: 2026-10-01 00:00:00
"""

import sqlalchemy as sa

from alembic import op  # type: ignore[reportMissingImports]

# revision identifiers, used by Alembic.
revision = "20261001_000000_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("avatar", sa.Text(), nullable=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id", name="users_pkey"),
    )
    op.create_index("idx_users_email", "users", ["email"])

    op.create_table(
        "task_lists",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.String(length=64), nullable=False),
        sa.PrimaryKeyConstraint("id", name="task_lists_pkey"),
    )

    op.create_table(
        "task_list_members",
        sa.Column("task_list_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("position", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.ForeignKeyConstraint(
            ["task_list_id"],
            ["task_lists.id"],
            ondelete="CASCADE",
            name="task_list_members_task_list_id_fkey",
        ),
        sa.PrimaryKeyConstraint("task_list_id", "user_id", name="task_list_members_pkey"),
    )
    op.create_index("idx_task_list_members_user", "task_list_members", ["user_id"])

    # No foreign key on task_list_id: to-dos outlive their list
    op.create_table(
        "todos",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "is_completed", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.Column("task_list_id", sa.Uuid(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="todos_pkey"),
    )
    op.create_index("idx_todos_task_list", "todos", ["task_list_id"])


def downgrade() -> None:
    op.drop_index("idx_todos_task_list", table_name="todos")
    op.drop_table("todos")
    op.drop_index("idx_task_list_members_user", table_name="task_list_members")
    op.drop_table("task_list_members")
    op.drop_table("task_lists")
    op.drop_index("idx_users_email", table_name="users")
    op.drop_table("users")
