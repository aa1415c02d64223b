"""
TaskList GraphQL type definitions
"""

from typing import TYPE_CHECKING, Annotated
from uuid import UUID

import strawberry

if TYPE_CHECKING:
    from .todo import ToDo
    from .user import User


@strawberry.type
class TaskList:
    """TaskList type for GraphQL API."""

    id: UUID
    title: str
    created_at: str
    user_ids: strawberry.Private[list[UUID]]

    @strawberry.field
    async def progress(self, info: strawberry.Info) -> float:
        """Percentage of this list's to-dos that are completed (0 when it has none)."""
        from ..resolvers.task_list import resolve_task_list_progress

        return await resolve_task_list_progress(self, info)

    @strawberry.field
    async def users(
        self, info: strawberry.Info
    ) -> list[Annotated["User", strawberry.lazy(".user")]]:
        """Get the members of this list."""
        from ..resolvers.task_list import resolve_task_list_users

        return await resolve_task_list_users(self, info)

    @strawberry.field
    async def todos(
        self, info: strawberry.Info
    ) -> list[Annotated["ToDo", strawberry.lazy(".todo")]]:
        """Get the to-dos in this list."""
        from ..resolvers.task_list import resolve_task_list_todos

        return await resolve_task_list_todos(self, info)
