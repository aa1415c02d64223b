"""
Shared pytest fixtures and configuration for all tests.
"""

import os
import sys
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock
from uuid import UUID

import pytest
import pytest_asyncio
import strawberry

# Add src directory to path so imports work
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tasklists.auth.context import ANONYMOUS, AuthContext  # noqa: E402


@pytest_asyncio.fixture(scope="function")
async def database(tmp_path: Path) -> AsyncGenerator[Any, None]:
    """Point the shared connection pool at a fresh SQLite file with the schema created."""
    from tasklists.database.connection import get_async_engine, init_database, reset_database
    from tasklists.dbmodels import Base

    reset_database()
    init_database(f"sqlite:///{tmp_path / 'tasklists.db'}", force_reinit=True)

    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()
    reset_database()


@pytest.fixture
def create_user(database: Any):
    """Factory inserting a user row; returns the stored record."""
    from tasklists.auth.passwords import hash_password
    from tasklists.database.connection import get_async_session
    from tasklists.dbmodels import Users

    async def _create_user(
        name: str = "Test User",
        email: str = "test@example.com",
        password: str = "s3cret-pass",
        avatar: str | None = None,
    ) -> Users:
        async with get_async_session() as session:
            user = Users(
                name=name,
                email=email,
                avatar=avatar,
                password_hash=hash_password(password),
            )
            session.add(user)
            await session.flush()
            return user

    return _create_user


@pytest.fixture
def make_info():
    """Factory for mock GraphQL info objects carrying a per-request context."""
    from tasklists.graphql.loaders import Loaders

    def _make_info(user_id: UUID | None = None) -> MagicMock:
        info = MagicMock(spec=strawberry.Info)
        info.context = {
            "request": MagicMock(),
            "auth_context": (
                AuthContext(user_id=user_id, token="test-token") if user_id else ANONYMOUS
            ),
            "loaders": Loaders(),
        }
        return info

    return _make_info


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
