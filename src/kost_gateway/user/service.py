"""Landlord account service: register, login, refresh.

register runs inside the router's `async with db.begin()`; login and refresh
only read.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from src.kost_common.errors import (
    AccountDisabledError,
    EmailExistsError,
    InvalidCredentialsError,
    UsernameExistsError,
)
from src.kost_gateway.auth.jwt_handler import (
    create_access_token,
    create_refresh_token,
    decode_token,
)
from src.kost_gateway.auth.password import hash_password, verify_password
from src.kost_gateway.user.db_models import UserModel

logger = logging.getLogger("kost.auth")


async def _find_user(
    db: AsyncSession, column: InstrumentedAttribute, value: str
) -> UserModel | None:
    result = await db.execute(select(UserModel).where(column == value))
    return result.scalar_one_or_none()


class UserService:
    async def register(
        self,
        username: str,
        email: str,
        password: str,
        db: AsyncSession,
    ) -> UserModel:
        if await _find_user(db, UserModel.username, username) is not None:
            raise UsernameExistsError()
        if await _find_user(db, UserModel.email, email) is not None:
            raise EmailExistsError()

        user = UserModel(
            username=username,
            email=email,
            password_hash=hash_password(password),
            is_active=True,
        )
        db.add(user)
        await db.flush()
        await db.refresh(user)  # id, created_at come from server defaults
        logger.info("landlord account created id=%s", user.id)
        return user

    async def login(
        self,
        username: str,
        password: str,
        db: AsyncSession,
    ) -> tuple[UserModel, str, str]:
        """Return (user, access_token, refresh_token).

        An unknown username and a wrong password raise the same
        InvalidCredentialsError.
        """
        user = await _find_user(db, UserModel.username, username)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("login rejected")
            raise InvalidCredentialsError()
        if not user.is_active:
            raise AccountDisabledError()

        user_id = str(user.id)
        return user, create_access_token(user_id), create_refresh_token(user_id)

    async def refresh(self, refresh_token: str) -> str:
        """Mint a new access token; the refresh token itself is not rotated."""
        claims = decode_token(refresh_token, expected_type="refresh")
        return create_access_token(str(claims["sub"]))
