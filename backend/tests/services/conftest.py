"""Service test fixtures: in-memory DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - app.state.resources points at a session manager bound to that database
    - No cache configured, so the redis probe reports `unknown`

Design Decisions:
    - SQLite in-memory via aiosqlite: no external services needed for route tests
    - DatabaseSessionManager built with __new__: the real constructor passes
      pool sizing that SQLite's static pool rejects
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

import helpdesk.models  # noqa: F401
from helpdesk.config import get_settings
from helpdesk.db.base import Base
from helpdesk.infrastructure.database import DatabaseSessionManager
from helpdesk.infrastructure.resources import AppResources
from helpdesk.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def test_database(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
async def client(test_database):
    """FastAPI test client with app.state.resources bound to the test DB."""
    original = getattr(app.state, "resources", None)
    app.state.resources = AppResources(
        settings=get_settings(), database=test_database, cache=None,
    )

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.resources = original


@pytest.fixture
def create_user(client):
    """POST a user and return the response `data`."""
    async def _create(**overrides):
        payload = {
            "username": "agent1",
            "email": "agent1@example.com",
            "password": "s3cretpass",
            "fullName": "Agent One",
        }
        payload.update(overrides)
        res = await client.post("/api/v1/users", json=payload)
        assert res.status_code == 201, res.text
        return res.json()["data"]
    return _create


@pytest.fixture
def create_ticket(client):
    """POST a ticket and return the response `data`."""
    async def _create(**overrides):
        payload = {
            "title": "Printer jam",
            "description": "Paper stuck in tray 2 on floor 3",
        }
        payload.update(overrides)
        res = await client.post("/api/v1/tickets", json=payload)
        assert res.status_code == 201, res.text
        return res.json()["data"]
    return _create
