"""
ResultService - actual scores entered by admins.
"""

import logging
from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase

from matchm8.engine.normalization import clamp_score, normalize_results
from matchm8.models import Result
from matchm8.repositories.result_repository import ResultRepository
from matchm8.services.config_service import ConfigService
from matchm8.services.fixture_service import FixtureService

logger = logging.getLogger(__name__)


class ResultServiceError(Exception):
    """Base exception for result service errors."""
    pass


class UnknownFixtureError(ResultServiceError):
    """Raised when the fixture is not part of the week."""
    pass


class ResultNotFoundError(ResultServiceError):
    """Raised when deleting a result that was never entered."""
    pass


class ResultService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.result_repo = ResultRepository(db)
        self.config_service = ConfigService(db)
        self.fixture_service = FixtureService(db)

    async def get_results(self, week: int) -> dict[str, Result]:
        """fixture_id -> Result for every fixture with a score."""
        config = await self.config_service.get_config()
        docs = await self.result_repo.get_week(config.season, week)
        return normalize_results(docs)

    async def upsert_result(self, week: int, fixture_id: str, home, away) -> Result:
        """
        Create or correct the result of a fixture.

        Scores are clamped to 0..99. Upserting again overwrites.
        """
        config = await self.config_service.get_config()
        fixtures = await self.fixture_service.get_week(week, config)

        if fixture_id not in {fixture.id for fixture in fixtures}:
            raise UnknownFixtureError(f"Fixture {fixture_id} is not part of week {week}")

        before = await self.result_repo.get(config.season, week, fixture_id)

        doc = await self.result_repo.upsert(
            config.season,
            week,
            fixture_id,
            clamp_score(home),
            clamp_score(away),
            updated_at=datetime.now(timezone.utc)
        )

        action = "updated" if before else "created"
        logger.info(
            f"Result {action} for week {week} fixture {fixture_id}: {doc['home']}-{doc['away']}"
            + (f" (was {before['home']}-{before['away']})" if before else "")
        )

        return Result(
            fixture_id=fixture_id,
            home=doc["home"],
            away=doc["away"],
            updated_at=doc.get("updated_at"),
        )

    async def delete_result(self, week: int, fixture_id: str) -> None:
        """Remove a result; the fixture goes back to pending."""
        config = await self.config_service.get_config()
        deleted = await self.result_repo.delete(config.season, week, fixture_id)
        if not deleted:
            raise ResultNotFoundError(f"No result for fixture {fixture_id} in week {week}")
        logger.info(f"Result removed for week {week} fixture {fixture_id}")
