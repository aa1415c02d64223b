"""
Root GraphQL mutation definitions
"""

from uuid import UUID

import strawberry

from ..types.task_list import TaskList
from ..types.todo import ToDo
from ..types.user import AuthUser


# Input types for mutations
@strawberry.input
class SignUpInput:
    """Input for creating an account."""

    email: str
    password: str
    name: str
    avatar: str | None = None


@strawberry.input
class SignInInput:
    """Input for signing in."""

    email: str
    password: str


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # Account mutations
    @strawberry.mutation(name="signUp")
    async def sign_up(self, info: strawberry.Info, input: SignUpInput) -> AuthUser:
        """Create an account and return a session for it."""
        from ..resolvers.auth import sign_up

        return await sign_up(info, input)

    @strawberry.mutation(name="signIn")
    async def sign_in(self, info: strawberry.Info, input: SignInInput) -> AuthUser:
        """Return a session for an existing account."""
        from ..resolvers.auth import sign_in

        return await sign_in(info, input)

    # TaskList mutations
    @strawberry.mutation(name="createTaskList")
    async def create_task_list(self, info: strawberry.Info, title: str) -> TaskList:
        """Create a new task list."""
        from ..resolvers.task_list import create_task_list

        return await create_task_list(info, title)

    @strawberry.mutation(name="updateTaskList")
    async def update_task_list(
        self, info: strawberry.Info, id: UUID, title: str
    ) -> TaskList | None:
        """Rename a task list."""
        from ..resolvers.task_list import update_task_list

        return await update_task_list(info, id, title)

    @strawberry.mutation(name="deleteTaskList")
    async def delete_task_list(self, info: strawberry.Info, id: UUID) -> bool:
        """Delete a task list."""
        from ..resolvers.task_list import delete_task_list

        return await delete_task_list(info, id)

    @strawberry.mutation(name="addUserToTaskList")
    async def add_user_to_task_list(
        self, info: strawberry.Info, task_list_id: UUID, user_id: UUID
    ) -> TaskList | None:
        """Share a task list with another user."""
        from ..resolvers.task_list import add_user_to_task_list

        return await add_user_to_task_list(info, task_list_id, user_id)

    # ToDo mutations
    @strawberry.mutation(name="createToDo")
    async def create_to_do(
        self, info: strawberry.Info, content: str, task_list_id: UUID
    ) -> ToDo:
        """Add a to-do to a task list."""
        from ..resolvers.todo import create_todo

        return await create_todo(info, content, task_list_id)

    @strawberry.mutation(name="updateToDo")
    async def update_to_do(
        self,
        info: strawberry.Info,
        id: UUID,
        is_completed: bool,
        content: str | None = None,
    ) -> ToDo | None:
        """Update a to-do's completion flag and, optionally, its content."""
        from ..resolvers.todo import update_todo

        return await update_todo(info, id, is_completed, content)

    @strawberry.mutation(name="deleteToDo")
    async def delete_to_do(self, info: strawberry.Info, id: UUID) -> bool:
        """Delete a to-do."""
        from ..resolvers.todo import delete_todo

        return await delete_todo(info, id)
