"""
QuickNotes Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock async session (service unit tests, no DB)
    ├── sample_note_data: Field values of a stored note
    ├── app_settings: Settings pointing at a fresh SQLite file under tmp_path
    ├── test_client: HTTPX AsyncClient for an app with storage initialized
    └── strict_client: same, with strict_missing_ids enabled
"""

import os
import tempfile
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set BEFORE any quicknotes import: the module-level app in quicknotes.main
# is built from these values and must never point at ./notes.db
_TEST_DIR = tempfile.mkdtemp(prefix="quicknotes_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/default.db"
os.environ["LOG_LEVEL"] = "WARNING"

from quicknotes.config import Settings  # noqa: E402
from quicknotes.main import create_app  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Helpers
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def running_client(app_settings: Settings) -> AsyncGenerator[AsyncClient, None]:
    """
    Build an app, run its lifespan (storage init/dispose) and yield a client.

    ASGITransport does not send lifespan events, so the lifespan context is
    entered explicitly.
    """
    app = create_app(app_settings)
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            client.notes_app = app
            yield client


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_note(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
            result = await note_service.get_note(mock_db_session, 1)
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
def sample_note_data():
    """Field values of a stored note, as the ORM would hand them back."""
    return {
        "id": 1,
        "title": "Test",
        "content": "Body",
        # SQLite returns naive datetimes
        "created_at": datetime.now(timezone.utc).replace(tzinfo=None),
    }


@pytest.fixture
def app_settings(tmp_path):
    """Settings for an isolated app backed by its own SQLite file."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def test_client(app_settings):
    """
    HTTPX AsyncClient talking to a fresh app with an empty notes table.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/notes")
            assert response.status_code == 200
    """
    async with running_client(app_settings) as client:
        yield client


@pytest_asyncio.fixture
async def strict_client(app_settings):
    """Like test_client, but PATCH/DELETE on unknown ids answer 404."""
    strict = app_settings.model_copy(update={"strict_missing_ids": True})
    async with running_client(strict) as client:
        yield client


@pytest.fixture
def client_factory():
    """
    Returns running_client, for tests that need an app with custom Settings.

    Usage:
        async with client_factory(settings) as client:
            ...
    """
    return running_client
