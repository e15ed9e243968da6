"""
ScoringService - weekly tables, persisted scores and per-player breakdowns.

Stored weekly tables are derived data: computing a week again replaces the
stored rows, and season totals are rebuilt from scratch afterwards.
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from matchm8.engine.normalization import normalize_predictions, normalize_results, normalize_weekly_rows
from matchm8.engine.scoring import compute_week_table, player_week_breakdown, summarize_week
from matchm8.models import (
    ComputedWeek,
    Fixture,
    LeagueConfig,
    PlayerWeekBreakdown,
    Prediction,
    Result,
    SavedWeek,
    ScoresSummary,
    WeeklyScoreWithSeason,
    WeekScores,
    WeekWipe,
)
from matchm8.repositories.player_repository import PlayerRepository
from matchm8.repositories.prediction_repository import PredictionRepository
from matchm8.repositories.result_repository import ResultRepository
from matchm8.repositories.score_repository import ScoreRepository
from matchm8.services.config_service import ConfigService
from matchm8.services.fixture_service import FixtureService, WeekNotFoundError
from matchm8.services.leaderboard_service import LeaderboardService

logger = logging.getLogger(__name__)


class ScoringServiceError(Exception):
    """Base exception for scoring service errors."""
    pass


class NoResultsError(ScoringServiceError):
    """Raised when computing a week that has no results yet."""
    pass


class PlayerNotFoundError(ScoringServiceError):
    """Raised when a breakdown is asked for a player not in the directory."""
    pass


class ScoringService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.prediction_repo = PredictionRepository(db)
        self.result_repo = ResultRepository(db)
        self.player_repo = PlayerRepository(db)
        self.score_repo = ScoreRepository(db)
        self.config_service = ConfigService(db)
        self.fixture_service = FixtureService(db)
        self.leaderboard_service = LeaderboardService(db)

    async def _load_week(
        self,
        config: LeagueConfig,
        week: int
    ) -> tuple[list[Fixture], dict[str, dict[str, Prediction]], dict[str, Result]]:
        """Fixtures, predictions by player and results of a week, normalized."""
        try:
            fixtures = await self.fixture_service.get_week(week, config)
        except WeekNotFoundError:
            fixtures = []

        prediction_docs = await self.prediction_repo.get_week(config.season, week)
        grouped: dict[str, list[dict]] = {}
        for doc in prediction_docs:
            grouped.setdefault(str(doc.get("player_id")), []).append(doc)

        result_docs = await self.result_repo.get_week(config.season, week)

        return fixtures, normalize_predictions(grouped), normalize_results(result_docs)

    async def preview_week(self, week: int) -> WeekScores:
        """Weekly table computed on the fly, nothing saved."""
        config = await self.config_service.get_config()
        fixtures, predictions, results = await self._load_week(config, week)
        directory = await self.player_repo.get_directory()

        table = compute_week_table(predictions, results, directory)
        return WeekScores(summary=summarize_week(week, fixtures, results, table), rows=table)

    async def compute_and_persist(self, week: int) -> ComputedWeek:
        """
        Compute the week's table, store it, and rebuild the season totals.

        Running it twice over the same data stores the same rows.
        """
        config = await self.config_service.get_config()
        _, predictions, results = await self._load_week(config, week)

        # a stored table must still be recomputable once its last result is deleted
        if not results and await self.score_repo.get_week_rows(config.season, week) is None:
            raise NoResultsError(f"No results for week {week} yet")

        directory = await self.player_repo.get_directory()
        table = compute_week_table(predictions, results, directory)

        await self.score_repo.save_week_rows(
            config.season, week, [row.model_dump() for row in table]
        )
        season_totals = await self.leaderboard_service.rebuild_season_totals(config.season)

        by_player = {total.player_id: total.total_points for total in season_totals}
        weekly = [
            WeeklyScoreWithSeason(**row.model_dump(), season_total=by_player.get(row.player_id, 0))
            for row in table
        ]

        logger.info(
            f"🧮 Week {week} computed: {len(table)} players, "
            f"{len(results)} results, season {config.season}"
        )

        return ComputedWeek(week=week, saved=len(table), weekly=weekly, season_totals=season_totals)

    async def get_week(self, week: int) -> SavedWeek:
        """Stored rows for the week; computed on the fly if never saved."""
        config = await self.config_service.get_config()
        stored = await self.score_repo.get_week_rows(config.season, week)

        if stored is not None:
            return SavedWeek(week=week, saved=True, rows=normalize_weekly_rows(stored))

        preview = await self.preview_week(week)
        return SavedWeek(week=week, saved=False, rows=preview.rows)

    async def get_summary(self, week: Optional[int] = None) -> ScoresSummary:
        """Season totals, plus the stored table of `week` when one is asked for."""
        config = await self.config_service.get_config()
        season_totals, updated_at = await self.leaderboard_service.get_season_totals(config.season)

        weekly = None
        if week is not None:
            stored = await self.score_repo.get_week_rows(config.season, week)
            weekly = normalize_weekly_rows(stored) if stored is not None else []

        return ScoresSummary(
            week=week,
            updated_at=updated_at,
            season_totals=season_totals,
            weekly=weekly,
        )

    async def get_player_week(self, week: int, player_id: str) -> PlayerWeekBreakdown:
        """Fixture-by-fixture points for one player."""
        if not await self.player_repo.exists(player_id):
            raise PlayerNotFoundError(f"Player {player_id} not found")

        config = await self.config_service.get_config()
        fixtures, predictions, results = await self._load_week(config, week)

        return player_week_breakdown(player_id, fixtures, predictions.get(player_id, {}), results)

    async def wipe_week(self, week: int) -> WeekWipe:
        """
        Delete a week's predictions, results and stored table, then rebuild
        the season totals without it. Fixtures are kept.
        """
        config = await self.config_service.get_config()

        predictions_deleted = await self.prediction_repo.delete_week(config.season, week)
        results_deleted = await self.result_repo.delete_week(config.season, week)
        scores_deleted = await self.score_repo.delete_week_rows(config.season, week)

        await self.leaderboard_service.rebuild_season_totals(config.season)

        logger.warning(
            f"🧹 Week {week} wiped: {predictions_deleted} predictions, "
            f"{results_deleted} results, season {config.season}"
        )

        return WeekWipe(
            week=week,
            predictions_deleted=predictions_deleted,
            results_deleted=results_deleted,
            scores_deleted=scores_deleted,
        )
