"""Authentication and authorization system for Tasklists."""

from .context import AuthContext
from .errors import (
    AuthenticationError,
    AuthenticationRequired,
    Conflict,
    InvalidCredentials,
    TasklistsError,
)
from .identity import resolve_identity
from .tokens import JWTTokenService, get_token_service

__all__ = [
    "AuthContext",
    "AuthenticationError",
    "AuthenticationRequired",
    "Conflict",
    "InvalidCredentials",
    "TasklistsError",
    "JWTTokenService",
    "get_token_service",
    "resolve_identity",
]
