"""
Tests for task list query, mutation and field resolvers
"""

import asyncio
from datetime import datetime
from uuid import uuid4

import pytest
import pytest_asyncio

from tasklists.auth.errors import Conflict
from tasklists.graphql.resolvers.task_list import (
    add_user_to_task_list,
    create_task_list,
    delete_task_list,
    resolve_my_task_lists,
    resolve_task_list_by_id,
    resolve_task_list_progress,
    resolve_task_list_todos,
    resolve_task_list_users,
    update_task_list,
)
from tasklists.graphql.resolvers.todo import create_todo, update_todo


@pytest_asyncio.fixture
async def owner(create_user):
    return await create_user(name="Owner", email="owner@example.com")


@pytest_asyncio.fixture
async def friend(create_user):
    return await create_user(name="Friend", email="friend@example.com")


class TestCreateTaskList:
    @pytest.mark.asyncio
    async def test_creator_is_sole_member(self, owner, make_info):
        task_list = await create_task_list(make_info(owner.id), "Groceries")

        assert task_list.title == "Groceries"
        assert task_list.user_ids == [owner.id]
        # ISO-8601 timestamp
        assert datetime.fromisoformat(task_list.created_at).tzinfo is not None

    @pytest.mark.asyncio
    async def test_two_creators_get_distinct_lists(self, owner, friend, make_info):
        first = await create_task_list(make_info(owner.id), "Mine")
        second = await create_task_list(make_info(friend.id), "Theirs")

        assert first.id != second.id
        assert first.user_ids == [owner.id]
        assert second.user_ids == [friend.id]


class TestQueries:
    @pytest.mark.asyncio
    async def test_my_task_lists_returns_only_memberships(self, owner, friend, make_info):
        mine = await create_task_list(make_info(owner.id), "Mine")
        await create_task_list(make_info(friend.id), "Theirs")

        lists = await resolve_my_task_lists(make_info(owner.id))

        assert [task_list.id for task_list in lists] == [mine.id]

    @pytest.mark.asyncio
    async def test_my_task_lists_includes_shared_lists(self, owner, friend, make_info):
        shared = await create_task_list(make_info(friend.id), "Shared")
        await add_user_to_task_list(make_info(friend.id), shared.id, owner.id)

        lists = await resolve_my_task_lists(make_info(owner.id))

        assert [task_list.id for task_list in lists] == [shared.id]

    @pytest.mark.asyncio
    async def test_get_task_list_for_member(self, owner, make_info):
        created = await create_task_list(make_info(owner.id), "Mine")

        task_list = await resolve_task_list_by_id(make_info(owner.id), created.id)

        assert task_list is not None
        assert task_list.title == "Mine"

    @pytest.mark.asyncio
    async def test_get_task_list_missing_returns_none(self, owner, make_info):
        assert await resolve_task_list_by_id(make_info(owner.id), uuid4()) is None

    @pytest.mark.asyncio
    async def test_get_task_list_hidden_from_non_members(self, owner, friend, make_info):
        created = await create_task_list(make_info(owner.id), "Private")

        assert await resolve_task_list_by_id(make_info(friend.id), created.id) is None

    @pytest.mark.asyncio
    async def test_get_task_list_open_read_when_membership_not_required(
        self, owner, friend, make_info
    ):
        created = await create_task_list(make_info(owner.id), "Private")

        task_list = await resolve_task_list_by_id(
            make_info(friend.id), created.id, require_membership=False
        )

        assert task_list is not None
        assert task_list.id == created.id


class TestUpdateTaskList:
    @pytest.mark.asyncio
    async def test_replaces_title_only(self, owner, friend, make_info):
        created = await create_task_list(make_info(owner.id), "Old")
        await add_user_to_task_list(make_info(owner.id), created.id, friend.id)

        updated = await update_task_list(make_info(owner.id), created.id, "New")

        assert updated.title == "New"
        assert updated.created_at == created.created_at
        assert updated.user_ids == [owner.id, friend.id]

    @pytest.mark.asyncio
    async def test_missing_list_returns_none(self, owner, make_info):
        assert await update_task_list(make_info(owner.id), uuid4(), "New") is None


class TestAddUserToTaskList:
    @pytest.mark.asyncio
    async def test_adds_member(self, owner, friend, make_info):
        created = await create_task_list(make_info(owner.id), "Shared")

        updated = await add_user_to_task_list(make_info(owner.id), created.id, friend.id)

        assert updated.user_ids == [owner.id, friend.id]

    @pytest.mark.asyncio
    async def test_second_add_conflicts(self, owner, friend, make_info):
        created = await create_task_list(make_info(owner.id), "Shared")

        await add_user_to_task_list(make_info(owner.id), created.id, friend.id)
        with pytest.raises(Conflict, match="User already exists in this TaskList!"):
            await add_user_to_task_list(make_info(owner.id), created.id, friend.id)

    @pytest.mark.asyncio
    async def test_adding_creator_conflicts(self, owner, make_info):
        created = await create_task_list(make_info(owner.id), "Mine")

        with pytest.raises(Conflict):
            await add_user_to_task_list(make_info(owner.id), created.id, owner.id)

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_adds_conflict_once(self, owner, friend, make_info):
        created = await create_task_list(make_info(owner.id), "Shared")

        results = await asyncio.gather(
            add_user_to_task_list(make_info(owner.id), created.id, friend.id),
            add_user_to_task_list(make_info(owner.id), created.id, friend.id),
            return_exceptions=True,
        )

        conflicts = [r for r in results if isinstance(r, Conflict)]
        successes = [r for r in results if not isinstance(r, BaseException)]
        assert len(conflicts) == 1
        assert len(successes) == 1

        task_list = await resolve_task_list_by_id(make_info(owner.id), created.id)
        assert task_list.user_ids == [owner.id, friend.id]

    @pytest.mark.asyncio
    async def test_missing_list_returns_none(self, owner, friend, make_info):
        assert await add_user_to_task_list(make_info(owner.id), uuid4(), friend.id) is None


class TestDeleteTaskList:
    @pytest.mark.asyncio
    async def test_delete_reports_success(self, owner, make_info):
        created = await create_task_list(make_info(owner.id), "Doomed")

        assert await delete_task_list(make_info(owner.id), created.id) is True
        assert await resolve_task_list_by_id(make_info(owner.id), created.id) is None
        assert await resolve_my_task_lists(make_info(owner.id)) == []

    @pytest.mark.asyncio
    async def test_delete_missing_list_still_succeeds(self, owner, make_info):
        assert await delete_task_list(make_info(owner.id), uuid4()) is True


class TestTaskListFields:
    @pytest.mark.asyncio
    async def test_progress_is_zero_without_todos(self, owner, make_info):
        task_list = await create_task_list(make_info(owner.id), "Empty")

        assert await resolve_task_list_progress(task_list, make_info(owner.id)) == 0

    @pytest.mark.asyncio
    async def test_progress_is_exact_percentage(self, owner, make_info):
        info = make_info(owner.id)
        task_list = await create_task_list(info, "Chores")
        todos = [await create_todo(info, f"Chore {i}", task_list.id) for i in range(4)]
        await update_todo(info, todos[0].id, True)

        progress = await resolve_task_list_progress(task_list, make_info(owner.id))

        assert progress == 25.0

    @pytest.mark.asyncio
    async def test_progress_keeps_fractions(self, owner, make_info):
        info = make_info(owner.id)
        task_list = await create_task_list(info, "Thirds")
        todos = [await create_todo(info, f"Item {i}", task_list.id) for i in range(3)]
        await update_todo(info, todos[0].id, True)

        progress = await resolve_task_list_progress(task_list, make_info(owner.id))

        assert progress == pytest.approx(100 / 3)
        assert progress != 33

    @pytest.mark.asyncio
    async def test_users_resolves_members(self, owner, friend, make_info):
        created = await create_task_list(make_info(owner.id), "Shared")
        task_list = await add_user_to_task_list(make_info(owner.id), created.id, friend.id)

        users = await resolve_task_list_users(task_list, make_info(owner.id))

        assert [user.name for user in users] == ["Owner", "Friend"]
        assert all(not hasattr(user, "password_hash") for user in users)

    @pytest.mark.asyncio
    async def test_users_drops_dangling_members(self, owner, make_info):
        created = await create_task_list(make_info(owner.id), "Shared")
        task_list = await add_user_to_task_list(make_info(owner.id), created.id, uuid4())

        users = await resolve_task_list_users(task_list, make_info(owner.id))

        assert [user.id for user in users] == [owner.id]

    @pytest.mark.asyncio
    async def test_todos_resolves_only_this_list(self, owner, make_info):
        info = make_info(owner.id)
        first = await create_task_list(info, "First")
        second = await create_task_list(info, "Second")
        await create_todo(info, "In first", first.id)
        await create_todo(info, "In second", second.id)

        todos = await resolve_task_list_todos(first, make_info(owner.id))

        assert [todo.content for todo in todos] == ["In first"]
