"""
Conversion from stored records to GraphQL types
"""

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from ..dbmodels import TaskLists, ToDos, Users
from .types.task_list import TaskList
from .types.todo import ToDo
from .types.user import User


def normalize_id(source: Any) -> UUID:
    """
    Return the external identifier of a record.

    Accepts a stored row, a mapping carrying either a storage key (`_id`) or an
    already normalized `id`, or a bare identifier.
    """
    if isinstance(source, Mapping):
        raw = source.get("_id") or source.get("id")
    elif isinstance(source, (UUID, str)):
        raw = source
    else:
        raw = getattr(source, "id", None)

    if raw is None:
        raise ValueError("Record has no identifier")
    return raw if isinstance(raw, UUID) else UUID(str(raw))


def to_user(user: Users) -> User:
    return User(
        id=normalize_id(user),
        name=user.name,
        email=user.email,
        avatar=user.avatar,
    )


def to_task_list(task_list: TaskLists) -> TaskList:
    return TaskList(
        id=normalize_id(task_list),
        title=task_list.title,
        created_at=task_list.created_at,
        user_ids=list(task_list.user_ids),
    )


def to_todo(todo: ToDos) -> ToDo:
    return ToDo(
        id=normalize_id(todo),
        content=todo.content,
        is_completed=todo.is_completed,
        task_list_id=todo.task_list_id,
    )
