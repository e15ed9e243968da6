from .fixture import Fixture
from .config import DeadlineMode, LeagueConfig
from .prediction import Prediction, PlayerPredictions, PredictionSubmission
from .result import Result
from .player import Player, PlayerCreate, PlayerUpdate
from .lock import FixtureLock, LockStatus
from .scores import (
    WeeklyScoreRow,
    SeasonTotal,
    MatrixRow,
    LeaderboardMatrix,
    ScoreLine,
    PlayerWeekRow,
    PlayerWeekTotals,
    PlayerWeekBreakdown,
    WeekSummary,
    WeekScores,
    WeeklyScoreWithSeason,
    ComputedWeek,
    SavedWeek,
    SeasonStanding,
    ScoresSummary,
    WeekWipe,
)

__all__ = [
    "Fixture",
    "DeadlineMode",
    "LeagueConfig",
    "Prediction",
    "PlayerPredictions",
    "PredictionSubmission",
    "Result",
    "Player",
    "PlayerCreate",
    "PlayerUpdate",
    "FixtureLock",
    "LockStatus",
    "WeeklyScoreRow",
    "SeasonTotal",
    "MatrixRow",
    "LeaderboardMatrix",
    "ScoreLine",
    "PlayerWeekRow",
    "PlayerWeekTotals",
    "PlayerWeekBreakdown",
    "WeekSummary",
    "WeekScores",
    "WeeklyScoreWithSeason",
    "ComputedWeek",
    "SavedWeek",
    "SeasonStanding",
    "ScoresSummary",
    "WeekWipe",
]
