"""
Postboard Backend — User Service
==================================

What:  The user query set: create, lookup by name, lookup by id, list.
Why:   Keeps SQL and error translation out of the route handlers.
How:   Each method issues exactly one parameterized statement on the
       request's AsyncSession and translates store errors into app errors.

Statements:
    register        INSERT INTO "user" (user_name, password_hash, created_at) ... RETURNING *
    get_by_username SELECT * FROM "user" WHERE user_name = :name
    get_by_id       SELECT * FROM "user" WHERE id = :id
    list_all        SELECT * FROM "user" ORDER BY id

Registration failures:
    A duplicate user_name (IntegrityError) and a password the hasher refuses
    both raise the same ConflictError. The real cause goes to the log only.
"""

import logging
from typing import List, Optional

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from postboard.exceptions import ConflictError, DatabaseError, NotFoundError, PasswordTooLongError
from postboard.models.user import User
from postboard.security import PasswordHasher

logger = logging.getLogger(__name__)


class UserService:
    """Query layer for the `user` table."""

    def __init__(self, hasher: PasswordHasher):
        self._hasher = hasher

    async def register(self, db: AsyncSession, username: str, password: str) -> User:
        """
        Hash the password and insert a new user.

        Raises:
            ConflictError: name already taken, or password could not be hashed
            DatabaseError: any other store failure
        """
        try:
            # bcrypt is CPU bound; keep it off the event loop
            password_hash = await run_in_threadpool(self._hasher.hash, password)
        except PasswordTooLongError as e:
            logger.warning("Registration failed: password rejected by hasher (%s)", e.context)
            raise ConflictError(context={"cause": "password_hash"})

        stmt = (
            insert(User)
            .values({User.username: username, User.password_hash: password_hash})
            .returning(User)
        )
        try:
            result = await db.execute(stmt)
            user = result.scalar_one()
            await db.commit()
        except IntegrityError:
            logger.warning("Registration failed: user_name %r already exists", username)
            raise ConflictError(context={"cause": "unique_violation"})
        except SQLAlchemyError as e:
            logger.error("Database error registering user: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("User registered: id=%d", user.id)
        return user

    async def get_by_username(self, db: AsyncSession, username: str) -> Optional[User]:
        """Return the user with this login name, or None."""
        try:
            result = await db.execute(select(User).where(User.username == username))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error looking up user by name: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

    async def get_by_id(self, db: AsyncSession, user_id: int) -> User:
        """
        Raises:
            NotFoundError: no user has this id
        """
        try:
            result = await db.execute(select(User).where(User.id == user_id))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching user %s: %s", user_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the user. Please try again.",
                context={"user_id": user_id},
            )

        if user is None:
            raise NotFoundError(resource="user", resource_id=str(user_id))
        return user

    async def list_all(self, db: AsyncSession) -> List[User]:
        try:
            result = await db.execute(select(User).order_by(User.id))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing users: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve users. Please try again.",
                context={"error_type": type(e).__name__},
            )
