"""
TableBook Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test gets a fresh on-disk SQLite database (through aiosqlite)
       with tables created from the ORM metadata, wrapped in the same
       `Database` handle the application uses against PostgreSQL.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── database:         Database handle over a throwaway SQLite file
    ├── test_client:      HTTPX AsyncClient bound to an app using `database`
    └── booking_payload:  JSON body with every booking field populated
"""

import os

# Override settings for testing BEFORE any tablebook imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["DB_REQUIRE_SSL"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from tablebook.database import Base, Database
from tablebook.models import booking, user  # noqa: F401  (register tables on Base.metadata)


@pytest_asyncio.fixture
async def database(tmp_path):
    """
    Provides a Database with empty users and bookings tables.

    Usage:
        async def test_something(database):
            async with database.session() as session:
                ...
    """
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'tablebook_test.db'}", pool_size=5)
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, so the fixture attaches the test
    Database to app.state exactly where the lifespan would.
    """
    from tablebook.main import create_app

    app = create_app()
    app.state.database = database
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def booking_payload():
    """A complete booking body as a client would POST it."""
    return {
        "date": "2024-06-14",
        "number_of_guest": 4,
        "full_name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone_number": "+44 20 7946 0000",
        "description": "Window table, one high chair",
        "user_id": "user-ada",
        "title": "Birthday dinner",
    }
