"""
Pytest configuration and shared fixtures.

Tests run against a throwaway SQLite database (aiosqlite) created per test,
with foreign keys enforced like they are on PostgreSQL. Tests marked "db"
target the PostgreSQL database named by DATABASE_URL and are skipped unless
RUN_DB_TESTS=1.
"""

import os

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event

from task_management.core.config import Settings
from task_management.core.context import AppContext
from task_management.db.base import Base
from task_management.main import create_app
from task_management import models  # noqa: F401

TEST_SECRET_KEY = "test-secret-key-with-at-least-32-bytes!!"
TEST_EMAIL = "ana@mail.com"
TEST_PASSWORD = "secret123"


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no external deps")
    config.addinivalue_line("markers", "db: requires a PostgreSQL database")


def pytest_collection_modifyitems(config, items):
    run_db = os.environ.get("RUN_DB_TESTS") == "1"

    skip_db = pytest.mark.skip(reason="db tests skipped by default; set RUN_DB_TESTS=1 to enable")

    for item in items:
        if item.get_closest_marker("db") and not run_db:
            item.add_marker(skip_db)


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'tasks.db'}",
        JWT_SECRET_KEY=TEST_SECRET_KEY,
        JWT_ISSUER="task-management-tests",
        JWT_AUDIENCE="task-management-test-clients",
        BCRYPT_ROUNDS=4,
    )


@pytest.fixture
async def context(settings):
    context = AppContext.from_settings(settings)
    event.listen(context.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    async with context.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield context

    await context.close()


@pytest.fixture
async def db_session(context):
    async with context.session_maker() as session:
        yield session


@pytest.fixture
def app(context):
    return create_app(context)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def auth_headers(client):
    """Register a user through the API and return its bearer header."""
    response = await client.post(
        "/auth/register",
        json={"username": "ana", "email": TEST_EMAIL, "password": TEST_PASSWORD},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}
