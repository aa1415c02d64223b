"""
ToDo GraphQL type definitions
"""

from typing import TYPE_CHECKING, Annotated
from uuid import UUID

import strawberry

if TYPE_CHECKING:
    from .task_list import TaskList


@strawberry.type
class ToDo:
    """ToDo type for GraphQL API."""

    id: UUID
    content: str
    is_completed: bool
    task_list_id: strawberry.Private[UUID]

    @strawberry.field
    async def task_list(
        self, info: strawberry.Info
    ) -> Annotated["TaskList", strawberry.lazy(".task_list")] | None:
        """Get the owning list; null once that list has been deleted."""
        from ..resolvers.todo import resolve_todo_task_list

        return await resolve_todo_task_list(self, info)
