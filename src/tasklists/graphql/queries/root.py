"""
Root GraphQL query definitions
"""

from uuid import UUID

import strawberry

from ..types.task_list import TaskList
from ..types.todo import ToDo


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field(name="myTaskLists")
    async def my_task_lists(self, info: strawberry.Info) -> list[TaskList]:
        """Get the task lists the current user is a member of."""
        from ..resolvers.task_list import resolve_my_task_lists

        return await resolve_my_task_lists(info)

    @strawberry.field(name="getTaskList")
    async def get_task_list(self, info: strawberry.Info, id: UUID) -> TaskList | None:
        """Get a task list by ID."""
        from ..resolvers.task_list import resolve_task_list_by_id

        return await resolve_task_list_by_id(info, id)

    @strawberry.field(name="toDo")
    async def to_do(self, info: strawberry.Info, id: UUID) -> ToDo | None:
        """Get a to-do by ID."""
        from ..resolvers.todo import resolve_todo_by_id

        return await resolve_todo_by_id(info, id)
