"""
Blog Backend — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── sample_post_data / sample_category_data: Row-shaped test data
    ├── test_app: FastAPI app on its own in-memory SQLite database
    └── test_client: HTTPX AsyncClient wired to test_app
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any blog imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from blog.config import Settings
from blog.database import dispose_engine
from blog.main import create_app
from blog.migrations import create_tables


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_post(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = post
            result = await post_service.get_post(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_post_data():
    return {
        "id": 7,
        "title": "Hi",
        "body": "World",
        "category_id": 1,
        "created_at": datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc),
    }


@pytest.fixture
def sample_category_data():
    return {
        "id": 1,
        "title": "Tech",
        "created_at": datetime(2026, 10, 19, 11, 0, 0, tzinfo=timezone.utc),
    }


@pytest_asyncio.fixture
async def test_app():
    """
    A fresh application with its own in-memory database and schema.

    httpx's ASGITransport does not run the lifespan, so the tables are
    created here directly.
    """
    app = create_app(Settings(database_url="sqlite+aiosqlite://", log_level="WARNING"))
    await create_tables(app.state.engine)
    yield app
    await dispose_engine(app.state.engine)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient that routes requests directly to test_app.

    Usage:
        async def test_index(test_client):
            response = await test_client.get("/api/")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
