"""
Postboard Backend — User & Auth Service Unit Tests
====================================================

What:  Tests for UserService and AuthService business logic.
How:   Uses a mocked AsyncSession; no database is touched.

What we test:
    ✅ Registration stores a bcrypt hash, never the raw password
    ✅ Duplicate names and unhashable passwords raise the same ConflictError
    ✅ Other store failures become DatabaseError
    ✅ Lookup by id raises NotFoundError when absent
    ✅ Login failures are identical for unknown users and wrong passwords
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from postboard.exceptions import ConflictError, DatabaseError, NotFoundError, UnauthorizedError
from postboard.models.user import User
from postboard.security import TokenIssuer
from postboard.services.auth_service import AuthService
from postboard.services.user_service import UserService


def _result(scalar=None, scalars=None):
    result = MagicMock()
    result.scalar_one.return_value = scalar
    result.scalar_one_or_none.return_value = scalar
    result.scalars.return_value.all.return_value = scalars or []
    return result


def _user(user_id=1, username="alice", password_hash="$2b$04$x"):
    return User(
        id=user_id,
        username=username,
        password_hash=password_hash,
        created_at=datetime.now(timezone.utc),
    )


class TestUserServiceRegister:

    @pytest.mark.asyncio
    async def test_register_success(self, mock_db_session, hasher):
        service = UserService(hasher)
        mock_db_session.execute.return_value = _result(scalar=_user())

        user = await service.register(mock_db_session, "alice", "s3cret-password")

        assert user.username == "alice"
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_register_binds_hash_not_plaintext(self, mock_db_session, hasher):
        service = UserService(hasher)
        mock_db_session.execute.return_value = _result(scalar=_user())

        await service.register(mock_db_session, "alice", "s3cret-password")

        stmt = mock_db_session.execute.call_args.args[0]
        params = stmt.compile().params
        assert "s3cret-password" not in params.values()
        stored_hash = next(v for v in params.values() if isinstance(v, str) and v.startswith("$2b$"))
        assert hasher.verify("s3cret-password", stored_hash)

    @pytest.mark.asyncio
    async def test_register_duplicate_name(self, mock_db_session, hasher):
        service = UserService(hasher)
        mock_db_session.execute.side_effect = IntegrityError(
            "INSERT", {}, Exception("UNIQUE constraint failed: user.user_name")
        )

        with pytest.raises(ConflictError) as exc_info:
            await service.register(mock_db_session, "alice", "s3cret-password")

        assert exc_info.value.message == "Registration failed"
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_register_unhashable_password_matches_duplicate(self, mock_db_session, hasher):
        """Hash failure and name clash are indistinguishable to the caller."""
        service = UserService(hasher)

        with pytest.raises(ConflictError) as exc_info:
            await service.register(mock_db_session, "alice", "x" * 100)

        assert exc_info.value.message == "Registration failed"
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_register_store_failure(self, mock_db_session, hasher):
        service = UserService(hasher)
        mock_db_session.execute.side_effect = OperationalError("INSERT", {}, Exception("disk I/O error"))

        with pytest.raises(DatabaseError):
            await service.register(mock_db_session, "alice", "s3cret-password")


class TestUserServiceLookup:

    def setup_method(self):
        self.service = UserService(MagicMock())

    @pytest.mark.asyncio
    async def test_get_by_id_found(self, mock_db_session):
        mock_db_session.execute.return_value = _result(scalar=_user(user_id=3))

        user = await self.service.get_by_id(mock_db_session, 3)

        assert user.id == 3

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _result(scalar=None)

        with pytest.raises(NotFoundError, match="user with ID '42'"):
            await self.service.get_by_id(mock_db_session, 42)

    @pytest.mark.asyncio
    async def test_get_by_username_absent_is_none(self, mock_db_session):
        mock_db_session.execute.return_value = _result(scalar=None)

        assert await self.service.get_by_username(mock_db_session, "nobody") is None

    @pytest.mark.asyncio
    async def test_list_all(self, mock_db_session):
        users = [_user(1, "alice"), _user(2, "bob")]
        mock_db_session.execute.return_value = _result(scalars=users)

        assert await self.service.list_all(mock_db_session) == users

    @pytest.mark.asyncio
    async def test_list_all_store_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("gone"))

        with pytest.raises(DatabaseError):
            await self.service.list_all(mock_db_session)


class TestAuthServiceLogin:

    def setup_method(self):
        self.tokens = TokenIssuer(secret_key="auth-service-test-secret-0123456789abcdef")

    def _service(self, hasher, user):
        users = MagicMock()
        users.get_by_username = AsyncMock(return_value=user)
        return AuthService(users, hasher, self.tokens)

    @pytest.mark.asyncio
    async def test_login_success_issues_token(self, mock_db_session, hasher):
        user = _user(user_id=5, password_hash=hasher.hash("s3cret-password"))
        service = self._service(hasher, user)

        result = await service.login(mock_db_session, "alice", "s3cret-password")

        assert result.user is user
        assert self.tokens.decode(result.token.access_token).user_id == 5

    @pytest.mark.asyncio
    async def test_unknown_user_and_wrong_password_look_the_same(self, mock_db_session, hasher):
        user = _user(password_hash=hasher.hash("s3cret-password"))

        with pytest.raises(UnauthorizedError) as unknown:
            await self._service(hasher, None).login(mock_db_session, "ghost", "s3cret-password")
        with pytest.raises(UnauthorizedError) as wrong:
            await self._service(hasher, user).login(mock_db_session, "alice", "wrong-password")

        assert unknown.value.message == wrong.value.message == "Invalid username or password"
