"""
Unit tests for ScoreRepository, FixtureRepository, ConfigRepository and PlayerRepository
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from matchm8.models import PlayerCreate, PlayerUpdate
from matchm8.repositories.config_repository import ConfigRepository
from matchm8.repositories.fixture_repository import FixtureRepository
from matchm8.repositories.player_repository import PlayerRepository
from matchm8.repositories.score_repository import ScoreRepository


class TestScoreRepository:
    """Test suite for ScoreRepository database operations."""

    @pytest.mark.asyncio
    async def test_get_week_rows_never_computed(self, mock_db):
        repo = ScoreRepository(mock_db)

        assert await repo.get_week_rows(2025, 3) is None

    @pytest.mark.asyncio
    async def test_save_week_rows_replaces_document(self, mock_db):
        repo = ScoreRepository(mock_db)
        rows = [{"player_id": "alice", "name": "Alice", "week_points": 3}]

        await repo.save_week_rows(2025, 3, rows)

        filter_, doc = repo.weekly.replace_one.call_args.args
        assert filter_ == {"_id": "2025:3"}
        assert doc["rows"] == rows
        assert repo.weekly.replace_one.call_args.kwargs["upsert"] is True

    @pytest.mark.asyncio
    async def test_get_all_weeks(self, mock_db, fake_cursor):
        repo = ScoreRepository(mock_db)
        repo.weekly.find.return_value = fake_cursor([
            {"_id": "2025:1", "week": 1, "rows": [{"player_id": "a"}]},
            {"_id": "2025:2", "week": 2},
        ])

        weeks = await repo.get_all_weeks(2025)

        assert weeks == {1: [{"player_id": "a"}], 2: []}
        repo.weekly.find.assert_called_once_with({"season": 2025})

    @pytest.mark.asyncio
    async def test_save_season_totals_returns_timestamp(self, mock_db):
        repo = ScoreRepository(mock_db)

        updated_at = await repo.save_season_totals(2025, [])

        assert updated_at.tzinfo is not None
        doc = repo.season_totals.replace_one.call_args.args[1]
        assert doc["_id"] == 2025
        assert doc["updated_at"] == updated_at

    @pytest.mark.asyncio
    async def test_delete_week_rows(self, mock_db):
        repo = ScoreRepository(mock_db)
        repo.weekly.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))

        assert await repo.delete_week_rows(2025, 3) is True
        repo.weekly.delete_one.assert_awaited_once_with({"_id": "2025:3"})

    @pytest.mark.asyncio
    async def test_rename_player_in_weekly_rows(self, mock_db):
        repo = ScoreRepository(mock_db)
        repo.weekly.update_many = AsyncMock(return_value=MagicMock(modified_count=2))

        assert await repo.rename_player("alice", "Alicia") == 2

        args = repo.weekly.update_many.call_args
        assert args.args == (
            {"rows.player_id": "alice"},
            {"$set": {"rows.$[row].name": "Alicia"}},
        )
        assert args.kwargs["array_filters"] == [{"row.player_id": "alice"}]


class TestFixtureRepository:

    @pytest.mark.asyncio
    async def test_get_week_missing(self, mock_db):
        repo = FixtureRepository(mock_db)
        assert await repo.get_week(2025, 3) is None

    @pytest.mark.asyncio
    async def test_get_week(self, mock_db):
        repo = FixtureRepository(mock_db)
        repo.collection.find_one = AsyncMock(return_value={"_id": "2025:3", "fixtures": [{"id": "A"}]})

        assert await repo.get_week(2025, 3) == [{"id": "A"}]
        repo.collection.find_one.assert_awaited_once_with({"_id": "2025:3"})


class TestConfigRepository:

    @pytest.mark.asyncio
    async def test_get_raw_empty(self, mock_db):
        repo = ConfigRepository(mock_db)
        assert await repo.get_raw() == {}

    @pytest.mark.asyncio
    async def test_get_raw_strips_id(self, mock_db):
        repo = ConfigRepository(mock_db)
        repo.collection.find_one = AsyncMock(return_value={"_id": "league", "lock_mins": 10})

        assert await repo.get_raw() == {"lock_mins": 10}


class TestPlayerRepository:

    @pytest.mark.asyncio
    async def test_create_duplicate(self, mock_db):
        repo = PlayerRepository(mock_db)
        repo.collection.insert_one = AsyncMock(side_effect=DuplicateKeyError("dup"))

        with pytest.raises(ValueError):
            await repo.create(PlayerCreate(id="alice", name="Alice"))

    @pytest.mark.asyncio
    async def test_create(self, mock_db):
        repo = PlayerRepository(mock_db)

        player = await repo.create(PlayerCreate(id="alice", name="Alice"))

        assert player.id == "alice"
        assert player.is_active is True
        assert repo.collection.insert_one.call_args.args[0]["_id"] == "alice"

    @pytest.mark.asyncio
    async def test_get_directory(self, mock_db, fake_cursor):
        repo = PlayerRepository(mock_db)
        repo.collection.find.return_value = fake_cursor([
            {"_id": "alice", "name": "Alice"},
            {"_id": "bob"},
        ])

        assert await repo.get_directory() == {"alice": "Alice", "bob": ""}

    @pytest.mark.asyncio
    async def test_exists(self, mock_db):
        repo = PlayerRepository(mock_db)
        repo.collection.count_documents = AsyncMock(return_value=1)

        assert await repo.exists("alice") is True

    @pytest.mark.asyncio
    async def test_update_sets_name_and_unsets_blank_email(self, mock_db):
        repo = PlayerRepository(mock_db)
        repo.collection.find_one_and_update = AsyncMock(return_value={"_id": "alice", "name": "Alicia"})

        player = await repo.update("alice", PlayerUpdate(name=" Alicia ", email=""))

        assert player.name == "Alicia"
        filter_, update = repo.collection.find_one_and_update.call_args.args
        assert filter_ == {"_id": "alice"}
        assert update == {"$set": {"name": "Alicia"}, "$unset": {"email": ""}}
        assert repo.collection.find_one_and_update.call_args.kwargs["return_document"] == ReturnDocument.AFTER

    @pytest.mark.asyncio
    async def test_update_missing_player(self, mock_db):
        repo = PlayerRepository(mock_db)
        repo.collection.find_one_and_update = AsyncMock(return_value=None)

        assert await repo.update("zed", PlayerUpdate(name="Zed")) is None

    @pytest.mark.asyncio
    async def test_update_without_changes_reads_player(self, mock_db):
        repo = PlayerRepository(mock_db)
        repo.collection.find_one = AsyncMock(return_value={"_id": "alice", "name": "Alice"})

        player = await repo.update("alice", PlayerUpdate())

        assert player.name == "Alice"
        repo.collection.find_one_and_update.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete(self, mock_db):
        repo = PlayerRepository(mock_db)
        repo.collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=0))

        assert await repo.delete("zed") is False
