"""Resolve the requesting user from the Authorization header."""

from __future__ import annotations

from sqlalchemy import select

from ..database.connection import get_async_session
from ..dbmodels import Users
from ..logging import get_logger
from .context import ANONYMOUS, AuthContext
from .tokens import JWTTokenService, get_token_service

logger = get_logger(__name__)


async def resolve_identity(
    authorization: str | None,
    token_service: JWTTokenService | None = None,
) -> AuthContext:
    """
    Derive the request's AuthContext from a raw credential.

    The header value is used as-is as the token; no scheme prefix is stripped.

    1. No credential -> anonymous context
    2. Token verified (signature, 30-day expiry); failures raise AuthenticationError
    3. User looked up by the token subject; unknown user -> anonymous context

    Raises:
        AuthenticationError: If the token does not verify
    """
    if not authorization:
        return ANONYMOUS

    token_service = token_service or get_token_service()
    user_id = await token_service.verify_token(authorization)
    if user_id is None:
        logger.debug("Token carries no subject, treating request as anonymous")
        return ANONYMOUS

    async with get_async_session() as session:
        result = await session.execute(select(Users).where(Users.id == user_id))
        user = result.scalar_one_or_none()

    if user is None:
        logger.info("Token subject does not match any user", user_id=str(user_id))
        return ANONYMOUS

    return AuthContext(user_id=user.id, user=user, token=authorization)
