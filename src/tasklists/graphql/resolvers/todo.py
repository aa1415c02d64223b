from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry
from sqlalchemy import delete, select, update

from ...config import settings
from ...database.connection import get_async_session
from ...dbmodels import TaskLists, ToDos
from ...logging import get_logger
from ..access_control import (
    get_auth_context_from_info,
    is_task_list_member,
    require_authenticated,
)
from ..converters import to_task_list, to_todo
from ..loaders import get_loaders

if TYPE_CHECKING:
    from ..types.task_list import TaskList
    from ..types.todo import ToDo

logger = get_logger(__name__)


async def _readable_task_list(
    info: strawberry.Info, task_list_id: UUID
) -> tuple[TaskLists | None, bool]:
    """
    Load a to-do's owning list and decide whether the caller may see it.

    Orphans are readable since there is no member set left to check.
    """
    task_list = await get_loaders(info.context).task_list_loader.load(task_list_id)
    if task_list is None or not settings.enforce_task_list_membership:
        return task_list, True
    return task_list, is_task_list_member(task_list, get_auth_context_from_info(info))


# Query resolvers
async def resolve_todo_by_id(info: strawberry.Info, id: UUID) -> ToDo | None:
    """
    Resolve a to-do by its ID, including to-dos whose list has been deleted.

    With membership enforced, to-dos of a list the caller does not belong to
    resolve to null, as `getTaskList` does for the list itself.
    """
    auth_context = require_authenticated(info)

    async with get_async_session() as session:
        result = await session.execute(select(ToDos).where(ToDos.id == id))
        todo = result.scalar_one_or_none()

    if todo is None:
        logger.info("To-do not found", todo_id=str(id))
        return None

    _, readable = await _readable_task_list(info, todo.task_list_id)
    if not readable:
        logger.info(
            "Access denied to to-do",
            todo_id=str(id),
            user_id=str(auth_context.user_id),
        )
        return None

    return to_todo(todo)


# ToDo field resolvers
async def resolve_todo_task_list(todo: ToDo, info: strawberry.Info) -> TaskList | None:
    """Resolve the owning task list; null for an orphan or a list hidden from the caller."""
    task_list, readable = await _readable_task_list(info, todo.task_list_id)
    if task_list is None or not readable:
        return None
    return to_task_list(task_list)


# Mutation resolvers
async def create_todo(info: strawberry.Info, content: str, task_list_id: UUID) -> ToDo:
    """
    Create an open to-do under a task list.

    The referenced list is not checked for existence.
    """
    auth_context = require_authenticated(info)

    async with get_async_session() as session:
        todo = ToDos(content=content, task_list_id=task_list_id, is_completed=False)
        session.add(todo)
        await session.flush()

        logger.info(
            "To-do created",
            todo_id=str(todo.id),
            task_list_id=str(task_list_id),
            user_id=str(auth_context.user_id),
        )

        get_loaders(info.context).clear_all()
        return to_todo(todo)


async def update_todo(
    info: strawberry.Info, id: UUID, is_completed: bool, content: str | None = None
) -> ToDo | None:
    """
    Set a to-do's completion flag, and its content when given.

    Returns null if the to-do does not exist.
    """
    auth_context = require_authenticated(info)

    values: dict[str, object] = {"is_completed": is_completed}
    if content is not None:
        values["content"] = content

    async with get_async_session() as session:
        await session.execute(update(ToDos).where(ToDos.id == id).values(**values))
        result = await session.execute(select(ToDos).where(ToDos.id == id))
        todo = result.scalar_one_or_none()

    get_loaders(info.context).clear_all()

    if todo is None:
        logger.info("To-do not found for update", todo_id=str(id))
        return None

    logger.info(
        "To-do updated",
        todo_id=str(id),
        fields=sorted(values),
        user_id=str(auth_context.user_id),
    )
    return to_todo(todo)


async def delete_todo(info: strawberry.Info, id: UUID) -> bool:
    """Delete a to-do by ID. Always reports success, whether or not it existed."""
    auth_context = require_authenticated(info)

    async with get_async_session() as session:
        await session.execute(delete(ToDos).where(ToDos.id == id))

    logger.info("To-do deleted", todo_id=str(id), user_id=str(auth_context.user_id))

    get_loaders(info.context).clear_all()
    return True
