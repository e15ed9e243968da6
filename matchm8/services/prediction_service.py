"""
PredictionService - Business logic for prediction submission.

This is where locks are enforced: the lock engine only reports state,
and nothing gets written here for a fixture that is already closed.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from matchm8.core.config import get_settings
from matchm8.engine.locks import compute_lock_status
from matchm8.engine.normalization import normalize_incoming_predictions, normalize_predictions
from matchm8.models import DeadlineMode, PlayerPredictions, PredictionSubmission
from matchm8.repositories.player_repository import PlayerRepository
from matchm8.repositories.prediction_repository import PredictionRepository
from matchm8.services.config_service import ConfigService
from matchm8.services.fixture_service import FixtureService

logger = logging.getLogger(__name__)


class PredictionServiceError(Exception):
    """Base exception for prediction service errors."""
    pass


class PlayerNotFoundError(PredictionServiceError):
    """Raised when the player is not in the directory."""
    pass


class InvalidPredictionError(PredictionServiceError):
    """Raised when prediction data is invalid."""
    pass


class WeekLockedError(PredictionServiceError):
    """Raised when the whole week is closed (first_kickoff mode)."""

    def __init__(self, message: str, lock_at: Optional[datetime] = None):
        super().__init__(message)
        self.lock_at = lock_at


class AllFixturesLockedError(PredictionServiceError):
    """Raised when every submitted fixture is already closed (per_match mode)."""

    def __init__(self, message: str, skipped_ids: list[str]):
        super().__init__(message)
        self.skipped_ids = skipped_ids


class PredictionService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.prediction_repo = PredictionRepository(db)
        self.player_repo = PlayerRepository(db)
        self.config_service = ConfigService(db)
        self.fixture_service = FixtureService(db)
        self.settings = get_settings()

    async def submit(
        self,
        week: int,
        player_id: str,
        raw_predictions: Any,
        now: Optional[datetime] = None
    ) -> PredictionSubmission:
        """
        Save a player's picks for a week, merged with what they already had.

        Validates:
        - At least one usable {id, home, away} row
        - Player exists
        - Week has fixtures and every id belongs to it
        - first_kickoff: the week is not locked (WeekLockedError)
        - per_match: locked rows are skipped; if all are locked, AllFixturesLockedError

        Scores are clamped to 0..99. Fixtures not in the payload keep their
        previous prediction.
        """
        incoming = normalize_incoming_predictions(raw_predictions)
        if not incoming:
            raise InvalidPredictionError("predictions must be a non-empty array with {id, home, away}")

        if not await self.player_repo.exists(player_id):
            raise PlayerNotFoundError(f"Player {player_id} not found")

        config = await self.config_service.get_config()
        fixtures = await self.fixture_service.get_week(week, config)

        known_ids = {fixture.id for fixture in fixtures}
        unknown = [p.fixture_id for p in incoming if p.fixture_id not in known_ids]
        if unknown:
            raise InvalidPredictionError(f"Unknown fixture id(s) for week {week}: {', '.join(unknown)}")

        now = now or datetime.now(timezone.utc)
        lock_status = compute_lock_status(fixtures, config, now)
        bypass = self.settings.dev_bypass_lock

        if bypass:
            accepted, skipped = incoming, []
        else:
            if lock_status.mode == DeadlineMode.FIRST_KICKOFF and lock_status.week_locked:
                logger.info(f"🔒 Rejected picks from {player_id}: week {week} locked")
                raise WeekLockedError(
                    f"Week {week} is locked (first kickoff passed)",
                    lock_at=lock_status.week_lock_at
                )

            accepted = [p for p in incoming if lock_status.accepts(p.fixture_id)]
            skipped = [p for p in incoming if not lock_status.accepts(p.fixture_id)]

            if not accepted:
                logger.info(f"🔒 Rejected picks from {player_id}: all fixtures locked in week {week}")
                raise AllFixturesLockedError(
                    "All selected fixtures are locked",
                    skipped_ids=[p.fixture_id for p in skipped]
                )

        saved = await self.prediction_repo.upsert_many(
            config.season, week, player_id, accepted, saved_at=now
        )

        logger.info(
            f"Saved {saved} picks for {player_id} in week {week}"
            + (f", skipped {len(skipped)} locked" if skipped else "")
        )

        return PredictionSubmission(
            week=week,
            player_id=player_id,
            mode=lock_status.mode,
            week_locked=lock_status.week_locked,
            week_lock_at=lock_status.week_lock_at,
            accepted_ids=[p.fixture_id for p in accepted],
            skipped_ids=[p.fixture_id for p in skipped],
            saved_count=saved,
            dev_bypass_lock=bypass,
        )

    async def get_player_predictions(self, week: int, player_id: str) -> PlayerPredictions:
        """All stored picks of a player for a week (empty if none)."""
        config = await self.config_service.get_config()
        docs = await self.prediction_repo.get_player_week(config.season, week, player_id)

        predictions = normalize_predictions({player_id: docs}).get(player_id, {})
        saved_times = [doc["saved_at"] for doc in docs if doc.get("saved_at")]

        return PlayerPredictions(
            player_id=player_id,
            week=week,
            predictions=predictions,
            submitted_at=max(saved_times) if saved_times else None,
        )
