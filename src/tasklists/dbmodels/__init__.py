"""
Database models for Tasklists (authoritative ORM definitions).

This module defines the SQLAlchemy Base with a naming convention for stable
Alembic autogenerate diffs, and exposes `target_metadata` for Alembic.

`todos.task_list_id` deliberately carries no foreign key: deleting a task list
leaves its to-dos in place.
"""

from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    ForeignKeyConstraint,
    Index,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Text,
    Uuid,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Naming convention for deterministic constraint/index names in Alembic diffs
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class Users(Base):
    __tablename__ = "users"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="users_pkey"),
        Index("idx_users_email", "email"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar: Mapped[str | None] = mapped_column(Text)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)


class TaskLists(Base):
    __tablename__ = "task_lists"
    __table_args__ = (PrimaryKeyConstraint("id", name="task_lists_pkey"),)

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    # ISO-8601 string, assigned by the server at creation
    created_at: Mapped[str] = mapped_column(String(64), nullable=False)

    members: Mapped[list["TaskListMembers"]] = relationship(
        "TaskListMembers",
        uselist=True,
        back_populates="task_list",
        order_by="TaskListMembers.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def user_ids(self) -> list[UUID]:
        return [member.user_id for member in self.members]


class TaskListMembers(Base):
    __tablename__ = "task_list_members"
    __table_args__ = (
        ForeignKeyConstraint(
            ["task_list_id"],
            ["task_lists.id"],
            ondelete="CASCADE",
            name="task_list_members_task_list_id_fkey",
        ),
        # One row per (list, user); membership adds rely on this for conflict detection
        PrimaryKeyConstraint("task_list_id", "user_id", name="task_list_members_pkey"),
        Index("idx_task_list_members_user", "user_id"),
    )

    task_list_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    position: Mapped[int] = mapped_column(server_default=text("0"), nullable=False)

    task_list: Mapped["TaskLists"] = relationship("TaskLists", back_populates="members")


class ToDos(Base):
    __tablename__ = "todos"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="todos_pkey"),
        Index("idx_todos_task_list", "task_list_id"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    task_list_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)


# Expose for Alembic
target_metadata = Base.metadata
