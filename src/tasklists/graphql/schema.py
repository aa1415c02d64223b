"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from fastapi import HTTPException, Request
from graphql import validate_schema as gql_validate_schema
from strawberry.fastapi import GraphQLRouter

from ..auth.errors import AuthenticationError
from ..auth.identity import resolve_identity
from ..logging import bind_identity, get_logger
from .loaders import Loaders
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)

# Create the GraphQL schema
schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
)


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    This ensures that all type references can be resolved, causing the server
    to fail fast rather than erroring at runtime.

    Raises:
        Exception: If the schema is invalid or has unresolved types
    """
    try:
        graphql_schema = schema._schema

        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        # Check that introspection query works (catches most resolution issues)
        from graphql import get_introspection_query, graphql_sync

        result = graphql_sync(graphql_schema, get_introspection_query())

        if result.errors:
            error_messages = [str(e) for e in result.errors]
            raise Exception(f"GraphQL introspection failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise


async def get_context(request: Request) -> dict[str, Any]:
    """
    Build the per-request context for GraphQL resolvers.

    The identity is resolved once per request from the raw Authorization header.
    A token that fails verification rejects the whole request with a 401 before
    any resolver runs.
    """
    try:
        auth_context = await resolve_identity(request.headers.get("authorization"))
    except AuthenticationError as e:
        raise HTTPException(
            status_code=401,
            detail=str(e),
        ) from e

    bind_identity(auth_context)

    return {
        "request": request,
        "auth_context": auth_context,
        "loaders": Loaders(),
    }


# Create the GraphQL router for FastAPI integration
def create_graphql_router() -> GraphQLRouter[dict[str, Any], None]:
    """Create a GraphQL router for FastAPI."""
    return GraphQLRouter(
        schema,
        path="/graphql",
        graphql_ide="graphiql",  # Enable GraphiQL IDE in development
        context_getter=get_context,
    )
