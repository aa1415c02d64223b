from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry
from sqlalchemy import select

from ...auth.errors import InvalidCredentials
from ...auth.passwords import hash_password, verify_password
from ...auth.tokens import get_token_service
from ...database.connection import get_async_session
from ...dbmodels import Users
from ...logging import get_logger
from ..converters import to_user

if TYPE_CHECKING:
    from ..mutations.root import SignInInput, SignUpInput
    from ..types.user import AuthUser

logger = get_logger(__name__)


async def sign_up(info: strawberry.Info, input: SignUpInput) -> AuthUser:
    """
    Create a user and open a session for it.

    Email uniqueness is not checked; signing up twice creates two accounts.
    """
    async with get_async_session() as session:
        user = Users(
            name=input.name,
            email=input.email,
            avatar=input.avatar,
            password_hash=hash_password(input.password),
        )
        session.add(user)
        await session.flush()

        logger.info("User signed up", user_id=str(user.id))

        from ..types.user import AuthUser

        return AuthUser(
            user=to_user(user),
            token=await get_token_service().issue_token(user.id),
        )


async def sign_in(info: strawberry.Info, input: SignInInput) -> AuthUser:
    """
    Open a session for an existing user.

    Raises:
        InvalidCredentials: If no user has this email or the password does not match
    """
    async with get_async_session() as session:
        result = await session.execute(select(Users).where(Users.email == input.email).limit(1))
        user = result.scalar_one_or_none()

    if user is None or not verify_password(input.password, user.password_hash):
        logger.info("Sign-in rejected")
        raise InvalidCredentials()

    logger.info("User signed in", user_id=str(user.id))

    from ..types.user import AuthUser

    return AuthUser(
        user=to_user(user),
        token=await get_token_service().issue_token(user.id),
    )
