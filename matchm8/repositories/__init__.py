from .config_repository import ConfigRepository
from .player_repository import PlayerRepository
from .fixture_repository import FixtureRepository
from .prediction_repository import PredictionRepository
from .result_repository import ResultRepository
from .score_repository import ScoreRepository

__all__ = [
    "ConfigRepository",
    "PlayerRepository",
    "FixtureRepository",
    "PredictionRepository",
    "ResultRepository",
    "ScoreRepository",
]
