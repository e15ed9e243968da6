"""
LockService - lock status of a week as of now.
"""

from datetime import datetime
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from matchm8.engine.locks import compute_lock_status
from matchm8.models import LockStatus
from matchm8.services.config_service import ConfigService
from matchm8.services.fixture_service import FixtureService, WeekNotFoundError


class LockService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.config_service = ConfigService(db)
        self.fixture_service = FixtureService(db)

    async def get_lock_status(self, week: int, now: Optional[datetime] = None) -> LockStatus:
        """
        Lock status for `week`. A week without fixtures is reported as open.
        """
        config = await self.config_service.get_config()

        try:
            fixtures = await self.fixture_service.get_week(week, config)
        except WeekNotFoundError:
            fixtures = []

        return compute_lock_status(fixtures, config, now)
