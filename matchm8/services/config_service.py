"""
ConfigService - league rules (deadline mode, lock offset, timezone, season).

Read fresh on every call; the stored document is the only source of truth
for lock decisions.
"""

import logging
from typing import Any

import pytz
from motor.motor_asyncio import AsyncIOMotorDatabase

from matchm8.core.config import get_settings
from matchm8.engine.normalization import normalize_config, resolve_timezone
from matchm8.models import LeagueConfig
from matchm8.repositories.config_repository import ConfigRepository

logger = logging.getLogger(__name__)


class ConfigServiceError(Exception):
    """Base exception for config service errors."""
    pass


class InvalidConfigError(ConfigServiceError):
    """Raised when an admin tries to store an invalid value."""
    pass


class ConfigService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.config_repo = ConfigRepository(db)
        self.settings = get_settings()

    async def get_config(self) -> LeagueConfig:
        """Stored config with defaults filled in."""
        raw = await self.config_repo.get_raw()
        raw.setdefault("season", self.settings.default_season)
        return normalize_config(raw)

    async def update_config(self, changes: dict[str, Any]) -> LeagueConfig:
        """
        Merge `changes` into the stored config and save it in canonical form.

        Legacy offset names (lock_mins, lock_minutes_before_kickoff) are
        dropped once a canonical value is written.
        """
        changes = {key: value for key, value in changes.items() if value is not None}

        timezone = changes.get("timezone")
        if timezone is not None and resolve_timezone(timezone) is pytz.UTC and timezone.upper() != "UTC":
            raise InvalidConfigError(f"Unknown timezone: {timezone}")

        raw = await self.config_repo.get_raw()
        raw.setdefault("season", self.settings.default_season)
        raw.update(changes)

        config = normalize_config(raw)
        await self.config_repo.save(config.model_dump(mode="json"))

        logger.info(
            f"League config updated: season={config.season} mode={config.deadline_mode.value} "
            f"offset={config.lock_offset_minutes}m tz={config.timezone}"
        )
        return config
