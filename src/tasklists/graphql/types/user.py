"""
User GraphQL type definitions
"""

from uuid import UUID

import strawberry


@strawberry.type
class User:
    """User type for GraphQL API. The stored password hash is never exposed."""

    id: UUID
    name: str
    email: str
    avatar: str | None


@strawberry.type
class AuthUser:
    """Session returned by signUp and signIn."""

    user: User
    token: str
