"""
Fixtures for integration tests
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from matchm8.core.security import create_access_token
from matchm8.database import Database
from matchm8.main import app


@pytest_asyncio.fixture
async def client(mock_db):
    """
    HTTP client for testing API endpoints.

    Points the Database singleton at the mock database; the lifespan
    (real Mongo connection) never runs under ASGITransport.
    """
    original_db = Database.db
    Database.db = mock_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    Database.db = original_db


@pytest.fixture
def admin_headers():
    """Authorization header with a valid admin JWT."""
    token = create_access_token("admin")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def player_headers():
    """A valid token without the admin role."""
    token = create_access_token("alice", role="player")
    return {"Authorization": f"Bearer {token}"}
