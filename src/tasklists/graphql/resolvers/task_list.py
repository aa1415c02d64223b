from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID

import strawberry
from sqlalchemy import delete, insert, select, update
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ...auth.errors import Conflict
from ...config import settings
from ...database.connection import get_async_session
from ...dbmodels import TaskListMembers, TaskLists
from ...logging import get_logger
from ..access_control import is_task_list_member, require_authenticated
from ..converters import to_task_list, to_todo, to_user
from ..loaders import get_loaders

if TYPE_CHECKING:
    from ..types.task_list import TaskList
    from ..types.todo import ToDo
    from ..types.user import User

logger = get_logger(__name__)


async def _get_task_list(session: AsyncSession, id: UUID) -> TaskLists | None:
    stmt = select(TaskLists).where(TaskLists.id == id).options(selectinload(TaskLists.members))
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


# Query resolvers
async def resolve_my_task_lists(info: strawberry.Info) -> list[TaskList]:
    """Resolve every task list whose member set contains the caller."""
    auth_context = require_authenticated(info)

    async with get_async_session() as session:
        member_of = select(TaskListMembers.task_list_id).where(
            TaskListMembers.user_id == auth_context.user_id
        )
        stmt = (
            select(TaskLists)
            .where(TaskLists.id.in_(member_of))
            .options(selectinload(TaskLists.members))
            .order_by(TaskLists.created_at)
        )
        result = await session.execute(stmt)

        return [to_task_list(task_list) for task_list in result.scalars().all()]


async def resolve_task_list_by_id(
    info: strawberry.Info,
    id: UUID,
    require_membership: bool | None = None,
) -> TaskList | None:
    """
    Resolve a task list by its ID.

    With membership enforced (the default, see `enforce_task_list_membership`),
    lists the caller does not belong to resolve to null just like missing ones.
    """
    auth_context = require_authenticated(info)
    if require_membership is None:
        require_membership = settings.enforce_task_list_membership

    async with get_async_session() as session:
        task_list = await _get_task_list(session, id)

    if task_list is None:
        logger.info("Task list not found", task_list_id=str(id))
        return None

    if require_membership and not is_task_list_member(task_list, auth_context):
        logger.info(
            "Access denied to task list",
            task_list_id=str(id),
            user_id=str(auth_context.user_id),
        )
        return None

    return to_task_list(task_list)


# TaskList field resolvers
async def resolve_task_list_progress(task_list: TaskList, info: strawberry.Info) -> float:
    """
    Percentage of completed to-dos, 100 * completed / total.

    Returns 0 for a list without to-dos; fractional values are kept as-is.
    """
    todos = await get_loaders(info.context).todos_by_task_list_loader.load(task_list.id)
    if not todos:
        return 0.0

    completed = sum(1 for todo in todos if todo.is_completed)
    return 100 * completed / len(todos)


async def resolve_task_list_users(task_list: TaskList, info: strawberry.Info) -> list[User]:
    """
    Resolve each member ID to its user.

    Lookups run concurrently; members whose user no longer exists are left out.
    """
    user_loader = get_loaders(info.context).user_loader
    users = await asyncio.gather(*(user_loader.load(user_id) for user_id in task_list.user_ids))

    missing = [str(uid) for uid, user in zip(task_list.user_ids, users) if user is None]
    if missing:
        logger.warning(
            "Task list references unknown users",
            task_list_id=str(task_list.id),
            user_ids=missing,
        )

    return [to_user(user) for user in users if user is not None]


async def resolve_task_list_todos(task_list: TaskList, info: strawberry.Info) -> list[ToDo]:
    """Resolve all to-dos that reference this list."""
    todos = await get_loaders(info.context).todos_by_task_list_loader.load(task_list.id)
    return [to_todo(todo) for todo in todos]


# Mutation resolvers
async def create_task_list(info: strawberry.Info, title: str) -> TaskList:
    """
    Create a new task list.

    The authenticated user becomes its first and only member.
    """
    auth_context = require_authenticated(info)

    async with get_async_session() as session:
        task_list = TaskLists(
            title=title,
            created_at=datetime.now(UTC).isoformat(),
            members=[TaskListMembers(user_id=auth_context.user_id, position=0)],
        )
        session.add(task_list)
        await session.flush()

        logger.info(
            "Task list created",
            task_list_id=str(task_list.id),
            user_id=str(auth_context.user_id),
        )

        get_loaders(info.context).clear_all()
        return to_task_list(task_list)


async def update_task_list(info: strawberry.Info, id: UUID, title: str) -> TaskList | None:
    """
    Replace a task list's title.

    Any signed-in user may rename any list. Returns null if the list does not exist.
    """
    auth_context = require_authenticated(info)

    async with get_async_session() as session:
        await session.execute(update(TaskLists).where(TaskLists.id == id).values(title=title))
        task_list = await _get_task_list(session, id)

    get_loaders(info.context).clear_all()

    if task_list is None:
        logger.info("Task list not found for update", task_list_id=str(id))
        return None

    logger.info(
        "Task list updated",
        task_list_id=str(id),
        user_id=str(auth_context.user_id),
    )
    return to_task_list(task_list)


async def _insert_member(
    session: AsyncSession, task_list_id: UUID, user_id: UUID, position: int
) -> bool:
    """
    Add a member row unless one already exists, as a single statement.

    Returns False if the user was already a member.
    """
    values = {"task_list_id": task_list_id, "user_id": user_id, "position": position}
    dialect = session.get_bind().dialect.name

    if dialect in ("postgresql", "sqlite"):
        dialect_insert = postgresql_insert if dialect == "postgresql" else sqlite_insert
        stmt = (
            dialect_insert(TaskListMembers)
            .values(**values)
            .on_conflict_do_nothing(index_elements=["task_list_id", "user_id"])
        )
        result = await session.execute(stmt)
        return result.rowcount == 1

    try:
        async with session.begin_nested():
            await session.execute(insert(TaskListMembers).values(**values))
    except IntegrityError:
        return False
    return True


async def add_user_to_task_list(
    info: strawberry.Info, task_list_id: UUID, user_id: UUID
) -> TaskList | None:
    """
    Append a user to a task list's members.

    Returns null if the list does not exist. The user is not checked for existence.

    Raises:
        Conflict: If the user is already a member, including when a concurrent
            request added them first
    """
    auth_context = require_authenticated(info)

    async with get_async_session() as session:
        task_list = await _get_task_list(session, task_list_id)
        if task_list is None:
            logger.info("Task list not found for member add", task_list_id=str(task_list_id))
            return None

        if user_id in task_list.user_ids or not await _insert_member(
            session, task_list_id, user_id, len(task_list.members)
        ):
            logger.info(
                "User already a member of task list",
                task_list_id=str(task_list_id),
                member_id=str(user_id),
            )
            raise Conflict()

        await session.refresh(task_list, attribute_names=["members"])

        logger.info(
            "User added to task list",
            task_list_id=str(task_list_id),
            member_id=str(user_id),
            user_id=str(auth_context.user_id),
        )

        get_loaders(info.context).clear_all()
        return to_task_list(task_list)


async def delete_task_list(info: strawberry.Info, id: UUID) -> bool:
    """
    Delete a task list by ID.

    Always reports success, whether or not the list existed. The list's to-dos are
    left in place and their `taskList` resolves to null afterwards.
    """
    auth_context = require_authenticated(info)

    async with get_async_session() as session:
        await session.execute(delete(TaskListMembers).where(TaskListMembers.task_list_id == id))
        await session.execute(delete(TaskLists).where(TaskLists.id == id))

    logger.info("Task list deleted", task_list_id=str(id), user_id=str(auth_context.user_id))

    get_loaders(info.context).clear_all()
    return True
