"""
Postboard Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Unit tests use a mocked AsyncSession; API tests build a real app with
       `create_app(settings)` on a per-test SQLite file through aiosqlite.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── hasher:          Fast bcrypt hasher (4 rounds)
    ├── make_settings:   Settings factory pointing at a temp SQLite file
    ├── make_app:        App factory; creates the schema, disposes the engine
    ├── app / test_client: Default app (auth and ownership on) and its client
    └── signup:          Register + login helper returning (user_id, headers)
"""

import os
from typing import Dict, Tuple
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must happen BEFORE any app import: postboard.main builds a module-level app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

TEST_SECRET_KEY = "test-signing-key-that-is-long-enough-1234567890"
DEFAULT_PASSWORD = "correct-horse-battery"


# ══════════════════════════════════════════════════════════════════════════
# Unit Test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        result = MagicMock()
        result.scalar_one_or_none.return_value = post
        mock_db_session.execute.return_value = result
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def hasher():
    from postboard.security import PasswordHasher
    return PasswordHasher(rounds=4)


# ══════════════════════════════════════════════════════════════════════════
# Application Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_settings(tmp_path):
    """Settings for an isolated SQLite file; keyword overrides win."""
    from postboard.config import Settings

    def _make(**overrides):
        values = {
            "database_url": f"sqlite+aiosqlite:///{tmp_path / 'postboard_test.db'}",
            "jwt_secret_key": TEST_SECRET_KEY,
            "bcrypt_rounds": 4,
            "log_level": "WARNING",
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest_asyncio.fixture
async def make_app(make_settings):
    """
    Builds apps with their schema created.

    Every engine created through this fixture is disposed at teardown.
    """
    from postboard.database import create_schema
    from postboard.main import create_app

    apps = []

    async def _make(**overrides):
        app = create_app(make_settings(**overrides))
        await create_schema(app.state.engine)
        apps.append(app)
        return app

    yield _make

    for app in apps:
        await app.state.engine.dispose()


@pytest_asyncio.fixture
async def app(make_app):
    return await make_app()


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the app through ASGITransport.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def signup():
    """Register a user, log in, and return (user_id, Authorization headers)."""

    async def _signup(
        client: AsyncClient, user_name: str, password: str = DEFAULT_PASSWORD
    ) -> Tuple[int, Dict[str, str]]:
        response = await client.post("/register", json={"user_name": user_name, "password": password})
        assert response.status_code == 201, response.text

        response = await client.post("/login", json={"user_name": user_name, "password": password})
        assert response.status_code == 200, response.text
        body = response.json()
        return body["id"], {"Authorization": f"Bearer {body['access_token']}"}

    return _signup
