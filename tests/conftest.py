"""
Pytest fixtures and configuration for all tests.
"""

import os

# Settings needs these before anything under matchm8 is imported
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("JWT_SECRET", "test-secret-key-at-least-32-chars-long")
os.environ.setdefault("ADMIN_KEY", "test-admin-key")

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from matchm8.models import DeadlineMode, Fixture, LeagueConfig


class FakeCursor:
    """Stands in for a Motor cursor: find(...).sort(...).to_list(...)"""

    def __init__(self, docs):
        self.docs = docs

    def sort(self, *args, **kwargs):
        return self

    async def to_list(self, length=None):
        return list(self.docs)


def make_collection(docs=None):
    collection = MagicMock()
    collection.find = MagicMock(return_value=FakeCursor(docs or []))
    collection.find_one = AsyncMock(return_value=None)
    collection.replace_one = AsyncMock()
    collection.insert_one = AsyncMock()
    collection.bulk_write = AsyncMock()
    collection.find_one_and_update = AsyncMock()
    collection.delete_one = AsyncMock()
    collection.delete_many = AsyncMock()
    collection.update_many = AsyncMock()
    collection.count_documents = AsyncMock(return_value=0)
    return collection


@pytest.fixture
def mock_db():
    """
    Motor database double: db["name"] always returns the same mock collection.
    """
    collections = {}

    def get_collection(name):
        if name not in collections:
            collections[name] = make_collection()
        return collections[name]

    db = MagicMock()
    db.__getitem__.side_effect = get_collection
    return db


@pytest.fixture
def league_config():
    """first_kickoff, 10 minutes before kickoff."""
    return LeagueConfig(
        season=2025,
        deadline_mode=DeadlineMode.FIRST_KICKOFF,
        lock_offset_minutes=10,
        timezone="UTC"
    )


@pytest.fixture
def per_match_config():
    return LeagueConfig(
        season=2025,
        deadline_mode=DeadlineMode.PER_MATCH,
        lock_offset_minutes=10,
        timezone="UTC"
    )


@pytest.fixture
def week_fixtures():
    """Three fixtures spread over a weekend."""
    return [
        Fixture(id="A", home="Arsenal", away="Chelsea",
                kickoff=datetime(2025, 3, 1, 10, 0, tzinfo=timezone.utc)),
        Fixture(id="B", home="Liverpool", away="Everton",
                kickoff=datetime(2025, 3, 1, 15, 0, tzinfo=timezone.utc)),
        Fixture(id="C", home="Leeds", away="Burnley",
                kickoff=datetime(2025, 3, 2, 14, 0, tzinfo=timezone.utc)),
    ]


@pytest.fixture
def player_directory():
    return {"alice": "Alice", "bob": "Bob", "carol": "Carol"}


@pytest.fixture
def fake_cursor():
    """Factory for cursors returning the given documents."""
    return FakeCursor
