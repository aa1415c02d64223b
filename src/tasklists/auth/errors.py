"""Error kinds surfaced by the Tasklists API."""

from __future__ import annotations


class TasklistsError(Exception):
    """Base class for errors raised deliberately by resolvers."""

    message: str = "Request failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class AuthenticationError(TasklistsError):
    """Raised when a presented token fails verification (bad signature, malformed, expired)."""

    message = "Invalid token"


class AuthenticationRequired(TasklistsError):
    """Raised when a protected operation runs without a signed-in user."""

    message = "Authentication Error. Please sign in"


class InvalidCredentials(TasklistsError):
    """Raised when sign-in email or password does not match."""

    message = "Invalid credentials!"


class Conflict(TasklistsError):
    """Raised when a write would duplicate existing state."""

    message = "User already exists in this TaskList!"
