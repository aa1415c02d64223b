"""Tests for resolving the requesting user from the Authorization header."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from tasklists.auth.errors import AuthenticationError
from tasklists.auth.identity import resolve_identity
from tasklists.auth.tokens import get_token_service


class TestResolveIdentity:
    @pytest.mark.asyncio
    async def test_missing_header_is_anonymous(self, database):
        auth_context = await resolve_identity(None)

        assert auth_context.is_authenticated is False
        assert auth_context.user_id is None

    @pytest.mark.asyncio
    async def test_empty_header_is_anonymous(self, database):
        auth_context = await resolve_identity("")

        assert auth_context.is_authenticated is False

    @pytest.mark.asyncio
    async def test_valid_token_resolves_user(self, database, create_user):
        user = await create_user(email="ada@example.com")
        token = await get_token_service().issue_token(user.id)

        auth_context = await resolve_identity(token)

        assert auth_context.is_authenticated is True
        assert auth_context.user_id == user.id
        assert auth_context.user.email == "ada@example.com"
        assert auth_context.token == token

    @pytest.mark.asyncio
    async def test_unknown_user_is_anonymous(self, database):
        token = await get_token_service().issue_token(uuid4())

        auth_context = await resolve_identity(token)

        assert auth_context.is_authenticated is False

    @pytest.mark.asyncio
    async def test_header_is_not_stripped_of_scheme(self, database, create_user):
        user = await create_user()
        token = await get_token_service().issue_token(user.id)

        with pytest.raises(AuthenticationError):
            await resolve_identity(f"Bearer {token}")

    @pytest.mark.asyncio
    async def test_expired_token_raises(self, database, create_user):
        user = await create_user()
        token = await get_token_service().issue_token(
            user.id, now=datetime.now(UTC) - timedelta(days=31)
        )

        with pytest.raises(AuthenticationError):
            await resolve_identity(token)

    @pytest.mark.asyncio
    async def test_contexts_are_independent(self, database, create_user):
        first = await create_user(email="first@example.com")
        second = await create_user(email="second@example.com")
        service = get_token_service()

        first_context = await resolve_identity(await service.issue_token(first.id))
        second_context = await resolve_identity(await service.issue_token(second.id))
        anonymous = await resolve_identity(None)

        assert first_context.user_id == first.id
        assert second_context.user_id == second.id
        assert anonymous.user_id is None
