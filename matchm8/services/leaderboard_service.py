"""
LeaderboardService - season standings and the recent-weeks matrix.
"""

import logging
from datetime import datetime
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from matchm8.engine.leaderboard import (
    build_matrix,
    competition_ranks,
    matrix_window,
    merge_directory,
    rebuild_season_totals,
)
from matchm8.models import LeaderboardMatrix, SeasonStanding, SeasonTotal
from matchm8.repositories.player_repository import PlayerRepository
from matchm8.repositories.score_repository import ScoreRepository
from matchm8.services.config_service import ConfigService

logger = logging.getLogger(__name__)


class LeaderboardService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.score_repo = ScoreRepository(db)
        self.player_repo = PlayerRepository(db)
        self.config_service = ConfigService(db)

    async def rebuild_season_totals(self, season: int) -> list[SeasonTotal]:
        """Fold every stored weekly table of the season and save the result."""
        totals, _ = await self._rebuild(season)
        return totals

    async def _rebuild(self, season: int) -> tuple[list[SeasonTotal], datetime]:
        weeks = await self.score_repo.get_all_weeks(season)
        directory = await self.player_repo.get_directory()

        totals = rebuild_season_totals(weeks, directory)
        updated_at = await self.score_repo.save_season_totals(
            season, [total.model_dump() for total in totals]
        )

        logger.info(f"🏆 Season {season} totals rebuilt from {len(weeks)} weeks ({len(totals)} players)")
        return totals, updated_at

    async def get_season_totals(self, season: int) -> tuple[list[SeasonTotal], Optional[datetime]]:
        """
        Stored season totals and when they were built; rebuilt if missing.

        Players added since the last build are listed with zero.
        """
        doc = await self.score_repo.get_season_totals(season)
        if doc is None:
            return await self._rebuild(season)

        stored = [SeasonTotal(**row) for row in doc.get("rows", [])]
        totals = merge_directory(stored, await self.player_repo.get_directory())
        return totals, doc.get("updated_at")

    async def get_season_leaderboard(self, limit: Optional[int] = None) -> list[SeasonStanding]:
        """Current season standings; tied totals share a rank."""
        config = await self.config_service.get_config()
        totals, _ = await self.get_season_totals(config.season)

        ranks = competition_ranks([total.total_points for total in totals])
        standings = [
            SeasonStanding(**total.model_dump(), rank=rank)
            for total, rank in zip(totals, ranks)
        ]

        return standings[:limit] if limit is not None else standings

    async def get_matrix(self, window: int = 5, end_week: Optional[int] = None) -> LeaderboardMatrix:
        """
        Per-week points for the last `window` computed weeks ending at `end_week`.

        With nothing computed yet the matrix is empty.
        """
        config = await self.config_service.get_config()
        weeks = await self.score_repo.get_all_weeks(config.season)

        if not weeks and end_week is None:
            return LeaderboardMatrix(start_week=1, end_week=1, weeks=[], rows=[])

        start_week, end_week = matrix_window(weeks.keys(), window, end_week)
        return build_matrix(start_week, end_week, weeks)
