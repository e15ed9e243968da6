"""
Unit tests for ConfigService and FixtureService
"""

import pytest
from unittest.mock import AsyncMock

from matchm8.models import DeadlineMode, LeagueConfig
from matchm8.services.config_service import ConfigService, InvalidConfigError
from matchm8.services.fixture_service import FixtureService, InvalidFixturesError, WeekNotFoundError


class TestConfigService:
    """Test suite for ConfigService."""

    @pytest.mark.asyncio
    async def test_get_config_defaults(self, mock_db):
        service = ConfigService(mock_db)
        service.config_repo.get_raw = AsyncMock(return_value={})

        config = await service.get_config()

        assert config.deadline_mode == DeadlineMode.FIRST_KICKOFF
        assert config.lock_offset_minutes == 0
        assert config.timezone == "UTC"
        assert config.season == service.settings.default_season

    @pytest.mark.asyncio
    async def test_get_config_legacy_document(self, mock_db):
        service = ConfigService(mock_db)
        service.config_repo.get_raw = AsyncMock(return_value={
            "deadline_mode": "per_match", "lock_mins": "10", "timezone": "Europe/London"
        })

        config = await service.get_config()

        assert config.deadline_mode == DeadlineMode.PER_MATCH
        assert config.lock_offset_minutes == 10
        assert config.timezone == "Europe/London"

    @pytest.mark.asyncio
    async def test_update_config_saves_canonical(self, mock_db):
        service = ConfigService(mock_db)
        service.config_repo.get_raw = AsyncMock(return_value={"lock_mins": 30, "season": 2025})
        service.config_repo.save = AsyncMock()

        config = await service.update_config({"deadline_mode": "per_match", "timezone": None})

        saved = service.config_repo.save.call_args.args[0]
        assert config.deadline_mode == DeadlineMode.PER_MATCH
        assert saved["deadline_mode"] == "per_match"
        assert saved["lock_offset_minutes"] == 30
        assert "lock_mins" not in saved

    @pytest.mark.asyncio
    async def test_update_config_unknown_timezone(self, mock_db):
        service = ConfigService(mock_db)
        service.config_repo.get_raw = AsyncMock(return_value={})
        service.config_repo.save = AsyncMock()

        with pytest.raises(InvalidConfigError):
            await service.update_config({"timezone": "Atlantis/Capital"})

        service.config_repo.save.assert_not_called()


class TestFixtureService:
    """Test suite for FixtureService."""

    @pytest.mark.asyncio
    async def test_import_week(self, mock_db):
        service = FixtureService(mock_db)
        service.config_service.get_config = AsyncMock(
            return_value=LeagueConfig(season=2025, timezone="Europe/Madrid")
        )
        service.fixture_repo.replace_week = AsyncMock(return_value=2)

        fixtures = await service.import_week(4, [
            {"homeTeam": "Betis", "awayTeam": "Sevilla", "kickoff": "2025-03-01T21:00:00"},
            {"homeTeam": "Getafe", "awayTeam": "Celta"},
        ])

        assert [f.id for f in fixtures] == ["4-1", "4-2"]
        assert fixtures[0].kickoff.hour == 20  # Madrid winter time, UTC+1
        season, week, stored = service.fixture_repo.replace_week.call_args.args
        assert (season, week) == (2025, 4)
        assert stored[1]["kickoff"] is None

    @pytest.mark.asyncio
    async def test_import_empty_payload(self, mock_db):
        service = FixtureService(mock_db)
        service.config_service.get_config = AsyncMock(return_value=LeagueConfig())

        with pytest.raises(InvalidFixturesError):
            await service.import_week(4, [])

    @pytest.mark.asyncio
    async def test_get_missing_week(self, mock_db):
        service = FixtureService(mock_db)
        service.config_service.get_config = AsyncMock(return_value=LeagueConfig())
        service.fixture_repo.get_week = AsyncMock(return_value=None)

        with pytest.raises(WeekNotFoundError):
            await service.get_week(12)
