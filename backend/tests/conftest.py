"""
Postboard Backend: Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session:  AsyncMock session (no real DB needed)
    ├── sample_post_data: dict matching the Post JSON shape
    ├── sqlite_engine:    in-memory SQLite with the schema created
    ├── db_session:       AsyncSession bound to sqlite_engine
    ├── test_client:      HTTPX AsyncClient, get_db_session → mock_db_session
    └── sqlite_client:    HTTPX AsyncClient, get_db_session → sqlite_engine
"""

import os
from contextlib import asynccontextmanager

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["MAX_BODY_SIZE"] = "4096"

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from app.database import Base, get_db_session
from app.models.post import Post, PostTag  # noqa: F401  (registers tables)


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_list(mock_db_session):
            mock_db_session.execute.side_effect = OperationalError(...)
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
    """A dictionary in the JSON shape of a stored Post."""
    now = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)
    return {
        "id": 1,
        "slug": "abc",
        "title": "Hello, Postboard",
        "body": "First post body.",
        "category": "news",
        "tags": ["intro", "meta"],
        "created_at": now,
        "updated_at": now,
    }


@pytest_asyncio.fixture
async def sqlite_engine():
    """In-memory SQLite database with the post tables created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(sqlite_engine):
    factory = async_sessionmaker(sqlite_engine, expire_on_commit=False)
    async with factory() as session:
        yield session


@asynccontextmanager
async def _client_for(override):
    from app.main import app

    app.dependency_overrides[get_db_session] = override
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_client(mock_db_session):
    """
    HTTPX AsyncClient talking to the app, with every request handed
    mock_db_session. Pair with patch("app.routes.posts.post_service").
    """
    async def override():
        yield mock_db_session

    async with _client_for(override) as client:
        yield client


@pytest_asyncio.fixture
async def sqlite_client(sqlite_engine):
    """
    HTTPX AsyncClient whose requests run against the in-memory SQLite
    database, one session per request handled like app.database.get_db_session
    (no commit of its own, so writes only persist if the service commits them).
    """
    factory = async_sessionmaker(sqlite_engine, expire_on_commit=False)

    async def override():
        async with factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async with _client_for(override) as client:
        yield client
