"""
Postboard Backend — Auth Service
==================================

What:  Username/password login that returns a signed access token.
How:   One user lookup, a bcrypt verification, then token issuance.

Indistinguishable failures:
    Unknown user and wrong password raise the same UnauthorizedError with
    the same message. For an unknown user a dummy verification runs so both
    paths cost roughly one bcrypt check.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from postboard.exceptions import UnauthorizedError
from postboard.models.user import User
from postboard.security import IssuedToken, PasswordHasher, TokenIssuer
from postboard.services.user_service import UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    user: User
    token: IssuedToken


class AuthService:
    def __init__(self, users: UserService, hasher: PasswordHasher, tokens: TokenIssuer):
        self._users = users
        self._hasher = hasher
        self._tokens = tokens

    async def login(self, db: AsyncSession, username: str, password: str) -> LoginResult:
        """
        Raises:
            UnauthorizedError: unknown user or wrong password (same message)
        """
        user = await self._users.get_by_username(db, username)

        if user is None:
            await run_in_threadpool(self._hasher.dummy_verify)
            logger.info("Login failed: unknown user")
            raise UnauthorizedError()

        valid = await run_in_threadpool(self._hasher.verify, password, user.password_hash)
        if not valid:
            logger.info("Login failed for user id=%d", user.id)
            raise UnauthorizedError()

        token = self._tokens.issue(user.id, user.username)
        logger.info("Login succeeded for user id=%d", user.id)
        return LoginResult(user=user, token=token)
