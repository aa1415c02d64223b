"""
Tests for per-request logging context
"""

from uuid import uuid4

import pytest
import structlog
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from tasklists.auth.context import ANONYMOUS, AuthContext
from tasklists.logging import bind_identity, bind_request, clear_request_context
from tasklists.middleware import LoggingContextMiddleware


@pytest.fixture(autouse=True)
def clean_context():
    clear_request_context()
    yield
    clear_request_context()


def test_bind_request_starts_fresh_context():
    structlog.contextvars.bind_contextvars(user_id="left-over")

    request_id = bind_request(graphql_operation="mutation:SignIn")

    assert structlog.contextvars.get_contextvars() == {
        "request_id": request_id,
        "graphql_operation": "mutation:SignIn",
    }


def test_bind_request_keeps_caller_request_id():
    assert bind_request("abc123") == "abc123"


def test_bind_identity_tags_signed_in_user():
    user_id = uuid4()
    bind_request()

    bind_identity(AuthContext(user_id=user_id))

    assert structlog.contextvars.get_contextvars()["user_id"] == str(user_id)


def test_bind_identity_skips_anonymous():
    bind_request()

    bind_identity(ANONYMOUS)

    assert "user_id" not in structlog.contextvars.get_contextvars()


@pytest.mark.asyncio
async def test_middleware_binds_and_clears_context():
    seen = {}
    app = FastAPI()
    app.add_middleware(LoggingContextMiddleware)

    @app.post("/graphql")
    async def graphql_endpoint():
        seen.update(structlog.contextvars.get_contextvars())
        return {}

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post(
            "/graphql",
            json={"query": "query MyTaskLists { myTaskLists { id } }"},
            headers={"x-request-id": "req-1"},
        )

    assert response.headers["x-request-id"] == "req-1"
    assert seen == {"request_id": "req-1", "graphql_operation": "MyTaskLists"}
    assert structlog.contextvars.get_contextvars() == {}
