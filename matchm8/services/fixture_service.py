"""
FixtureService - weekly fixture lists.
"""

import logging
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from matchm8.engine.normalization import normalize_fixtures
from matchm8.models import Fixture, LeagueConfig
from matchm8.repositories.fixture_repository import FixtureRepository
from matchm8.services.config_service import ConfigService

logger = logging.getLogger(__name__)


class FixtureServiceError(Exception):
    """Base exception for fixture service errors."""
    pass


class WeekNotFoundError(FixtureServiceError):
    """Raised when a week has no imported fixtures."""
    pass


class InvalidFixturesError(FixtureServiceError):
    """Raised when an import payload contains no usable fixtures."""
    pass


class FixtureService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.fixture_repo = FixtureRepository(db)
        self.config_service = ConfigService(db)

    async def get_week(self, week: int, config: Optional[LeagueConfig] = None) -> list[Fixture]:
        """Normalized fixtures of a week. Raises WeekNotFoundError if never imported."""
        config = config or await self.config_service.get_config()

        raw = await self.fixture_repo.get_week(config.season, week)
        if raw is None:
            raise WeekNotFoundError(f"No fixtures for week {week}")

        return normalize_fixtures(raw, week, config.timezone)

    async def import_week(self, week: int, raw: Any) -> list[Fixture]:
        """
        Normalize and store a week's fixtures, replacing whatever was there.

        Naive kickoff times are read in the league timezone.
        """
        config = await self.config_service.get_config()

        fixtures = normalize_fixtures(raw, week, config.timezone)
        if not fixtures:
            raise InvalidFixturesError("Payload contains no fixtures")

        await self.fixture_repo.replace_week(
            config.season,
            week,
            [fixture.model_dump() for fixture in fixtures]
        )

        without_kickoff = sum(1 for fixture in fixtures if fixture.kickoff is None)
        logger.info(
            f"📅 Imported {len(fixtures)} fixtures for season {config.season} week {week} "
            f"({without_kickoff} without kickoff)"
        )
        return fixtures
