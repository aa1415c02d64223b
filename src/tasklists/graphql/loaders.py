from collections import defaultdict
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import selectinload
from strawberry.dataloader import DataLoader

from ..database.connection import get_async_session
from ..dbmodels import TaskLists, ToDos, Users


async def load_users(keys: list[UUID]) -> list[Users | None]:
    """Batch load users by ID."""
    async with get_async_session() as session:
        stmt = select(Users).where(Users.id.in_(keys))
        result = await session.execute(stmt)
        users_map = {user.id: user for user in result.scalars().all()}
        return [users_map.get(key) for key in keys]


async def load_task_lists(keys: list[UUID]) -> list[TaskLists | None]:
    """Batch load task lists by ID."""
    async with get_async_session() as session:
        stmt = (
            select(TaskLists)
            .where(TaskLists.id.in_(keys))
            .options(selectinload(TaskLists.members))
        )
        result = await session.execute(stmt)
        task_lists_map = {task_list.id: task_list for task_list in result.scalars().all()}
        return [task_lists_map.get(key) for key in keys]


async def load_todos_by_task_list(keys: list[UUID]) -> list[list[ToDos]]:
    """Batch load the to-dos of each task list."""
    async with get_async_session() as session:
        stmt = select(ToDos).where(ToDos.task_list_id.in_(keys))
        result = await session.execute(stmt)
        grouped: dict[UUID, list[ToDos]] = defaultdict(list)
        for todo in result.scalars().all():
            grouped[todo.task_list_id].append(todo)
        return [grouped[key] for key in keys]


class Loaders:
    """Per-request DataLoaders; never share an instance across requests."""

    def __init__(self):
        self.user_loader = DataLoader(load_fn=load_users)
        self.task_list_loader = DataLoader(load_fn=load_task_lists)
        self.todos_by_task_list_loader = DataLoader(load_fn=load_todos_by_task_list)

    def clear_all(self) -> None:
        """Drop cached rows after a write in the same request."""
        self.user_loader.clear_all()
        self.task_list_loader.clear_all()
        self.todos_by_task_list_loader.clear_all()


def get_loaders(context: dict) -> Loaders:
    """Return the request's loaders, attaching a fresh set if none exist yet."""
    loaders = context.get("loaders")
    if loaders is None:
        loaders = context["loaders"] = Loaders()
    return loaders
