"""
Structured logging for the Tasklists API

Per-request fields (request id, GraphQL operation, signed-in user) live in
structlog's context variables and are merged into every event logged while
the request is handled.
"""

import logging
import secrets
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from .auth.context import AuthContext


def configure_logging(debug: bool = False, log_level: str | None = None) -> None:
    """Configure structlog on top of the standard library handlers.

    Args:
        debug: Render colored console output instead of JSON lines
        log_level: Level name; defaults to DEBUG when debugging, INFO otherwise
    """
    if log_level is None:
        level = logging.DEBUG if debug else logging.INFO
    else:
        level = logging.getLevelName(log_level.upper())

    logging.basicConfig(level=level, stream=sys.stdout, format="%(message)s", force=True)

    renderer = (
        structlog.dev.ConsoleRenderer(colors=True)
        if debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request(
    request_id: str | None = None, graphql_operation: str | None = None
) -> str:
    """Start a fresh logging context for one HTTP request and return its id."""
    request_id = request_id or secrets.token_urlsafe(9)

    structlog.contextvars.clear_contextvars()
    fields = {"request_id": request_id}
    if graphql_operation:
        fields["graphql_operation"] = graphql_operation
    structlog.contextvars.bind_contextvars(**fields)
    return request_id


def bind_identity(auth_context: "AuthContext") -> None:
    """Tag the rest of the request's events with the signed-in user, if any."""
    if auth_context.is_authenticated:
        structlog.contextvars.bind_contextvars(user_id=str(auth_context.user_id))


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
