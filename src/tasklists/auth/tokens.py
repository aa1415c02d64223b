"""JWT session tokens for signed-in users."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt
from jwt.exceptions import InvalidTokenError

from ..config import settings
from ..logging import get_logger
from .errors import AuthenticationError

logger = get_logger(__name__)


class JWTTokenService:
    """Issue and verify self-signed JWT session tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "tasklists",
        audience: str = "tasklists-api",
        token_expiry_days: int = 30,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.token_expiry_days = token_expiry_days

    async def issue_token(self, user_id: UUID, now: datetime | None = None) -> str:
        """Issue a token whose subject is the user's id, valid for the configured window."""
        now = now or datetime.now(UTC)

        payload = {
            "sub": str(user_id),
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "exp": now + timedelta(days=self.token_expiry_days),
        }

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    async def verify_token(self, token: str) -> UUID | None:
        """
        Verify a token and return the user id it was issued for.

        Returns None when the token is valid but carries no subject.

        Raises:
            AuthenticationError: If the token is malformed, badly signed or expired
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options={"verify_exp": True, "verify_iat": True, "require": ["exp"]},
            )
        except InvalidTokenError as e:
            logger.warning("JWT token validation failed", error=str(e))
            raise AuthenticationError("Invalid token") from e

        subject = payload.get("sub")
        if not subject:
            return None

        try:
            return UUID(subject)
        except (TypeError, ValueError) as e:
            logger.warning("JWT subject is not a user id", subject=subject)
            raise AuthenticationError("Invalid token subject") from e


def get_token_service() -> JWTTokenService:
    """Create the token service from settings (no global caching for test safety)."""
    return JWTTokenService(
        secret_key=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        token_expiry_days=settings.token_expiry_days,
    )
