"""
Shared access control logic for GraphQL resolvers
"""

from typing import TYPE_CHECKING

import strawberry

from ..auth.context import ANONYMOUS, AuthContext
from ..auth.errors import AuthenticationRequired
from ..logging import get_logger

if TYPE_CHECKING:
    from ..dbmodels import TaskLists

logger = get_logger(__name__)


def get_auth_context_from_info(info: strawberry.Info) -> AuthContext:
    """
    Extract the auth context resolved for this request.

    Returns the anonymous context if none was attached.
    """
    auth_context = info.context.get("auth_context")
    if auth_context is None:
        logger.debug("No auth context in GraphQL context, treating as anonymous")
        return ANONYMOUS
    return auth_context


def require_authenticated(info: strawberry.Info) -> AuthContext:
    """
    Return the caller's auth context, or fail before any side effect.

    Raises:
        AuthenticationRequired: If no user is signed in
    """
    auth_context = get_auth_context_from_info(info)
    if not auth_context.is_authenticated:
        raise AuthenticationRequired()
    return auth_context


def is_task_list_member(task_list: "TaskLists", auth_context: AuthContext | None) -> bool:
    """
    Check if the authenticated user belongs to the task list's member set.

    Args:
        task_list: The task list, with members loaded
        auth_context: The authentication context (can be None)

    Returns:
        True if the user is a member, False otherwise
    """
    if not auth_context or not auth_context.is_authenticated:
        return False

    return auth_context.user_id in task_list.user_ids
