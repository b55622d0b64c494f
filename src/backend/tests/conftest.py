"""
Pytest fixtures for OneVote backend tests.
"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment variables before importing app
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "false")
os.environ["DATABASE_URL"] = ""
os.environ["CREATE_SCHEMA_ON_STARTUP"] = "false"

SEED_NAMES = [
    "Candidate A",
    "Candidate B",
    "Candidate C",
    "Candidate D",
    "Candidate E",
]


def sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def seed_names() -> list[str]:
    """Ballot the test ledgers seed."""
    return list(SEED_NAMES)


@pytest.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Any, None]:
    """File-backed SQLite database with the ledger schema."""
    from db.session import Database

    db = Database(sqlite_url(tmp_path / "ledger.db"))
    await db.create_schema()
    yield db
    await db.dispose()


@pytest.fixture
def unavailable_database() -> Any:
    """Database handle with no URL configured."""
    from db.session import Database

    return Database("")


@pytest.fixture
def ledger(database: Any) -> Any:
    """Vote ledger over the test database."""
    from services.vote_ledger import VoteLedger

    return VoteLedger(database, seed_names=SEED_NAMES, timeout_seconds=5)


@pytest.fixture
def unavailable_ledger(unavailable_database: Any) -> Any:
    """Vote ledger whose store cannot be reached."""
    from services.vote_ledger import VoteLedger

    return VoteLedger(unavailable_database, seed_names=SEED_NAMES, timeout_seconds=5)


@pytest.fixture
async def app(database: Any) -> AsyncGenerator[Any, None]:
    """FastAPI application wired to the test database."""
    from api.deps import get_database_handle
    from main import app as fastapi_app

    fastapi_app.dependency_overrides[get_database_handle] = lambda: database
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def client(app: Any) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """Create mock database session."""
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.add = MagicMock()
    session.add_all = MagicMock()
    return session
