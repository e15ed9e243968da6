"""
Pure computation core: normalization, locks, scoring and leaderboards.

No I/O lives here; services read the data, call in, and persist the output.
"""

from .normalization import (
    clamp_score,
    parse_kickoff,
    normalize_config,
    normalize_fixtures,
    normalize_incoming_predictions,
    normalize_players,
    normalize_predictions,
    normalize_results,
    normalize_weekly_rows,
)
from .locks import compute_lock_status
from .scoring import (
    EXACT_SCORE_POINTS,
    CORRECT_OUTCOME_POINTS,
    compute_week_table,
    merge_predictions,
    outcome,
    player_week_breakdown,
    points_for,
    summarize_week,
)
from .leaderboard import build_matrix, competition_ranks, matrix_window, rebuild_season_totals

__all__ = [
    "clamp_score",
    "parse_kickoff",
    "normalize_config",
    "normalize_fixtures",
    "normalize_incoming_predictions",
    "normalize_players",
    "normalize_predictions",
    "normalize_results",
    "normalize_weekly_rows",
    "compute_lock_status",
    "EXACT_SCORE_POINTS",
    "CORRECT_OUTCOME_POINTS",
    "compute_week_table",
    "merge_predictions",
    "outcome",
    "player_week_breakdown",
    "points_for",
    "summarize_week",
    "build_matrix",
    "competition_ranks",
    "matrix_window",
    "rebuild_season_totals",
]
