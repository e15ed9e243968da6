"""
Leaderboard aggregation - season totals and the recent-weeks matrix.

Both are plain folds over stored weekly rows: no hidden state, so running
them twice over the same weeks gives the same answer.
"""

from typing import Any, Iterable, Mapping, Optional

from matchm8.engine.normalization import normalize_weekly_rows
from matchm8.engine.scoring import sort_key
from matchm8.models import LeaderboardMatrix, MatrixRow, SeasonTotal

MAX_MATRIX_WINDOW = 38


def rebuild_season_totals(
    weekly_rows_by_week: Mapping[int, Any],
    player_directory: Mapping[str, str]
) -> list[SeasonTotal]:
    """
    Season standings from every stored weekly table.

    - total_points adds up week_points across all weeks
    - weeks_played counts each player at most once per week
    - every player in the directory shows up, even with zero
    """
    totals: dict[str, SeasonTotal] = {}

    for week in sorted(weekly_rows_by_week):
        seen_this_week = set()

        for row in normalize_weekly_rows(weekly_rows_by_week[week]):
            player_id = row.player_id.strip()
            if not player_id:
                continue

            current = totals.get(player_id)
            if current is None:
                current = totals[player_id] = SeasonTotal(player_id=player_id)

            current.name = row.name or current.name
            current.total_points += row.week_points

            if player_id not in seen_this_week:
                current.weeks_played += 1
                seen_this_week.add(player_id)

    return merge_directory(totals.values(), player_directory)


def merge_directory(
    totals: Iterable[SeasonTotal],
    player_directory: Mapping[str, str]
) -> list[SeasonTotal]:
    """Add a zero row for every directory player missing from `totals`, then sort."""
    merged = {total.player_id: total for total in totals}

    for player_id, name in player_directory.items():
        player_id = str(player_id)
        current = merged.get(player_id)
        if current is None:
            merged[player_id] = SeasonTotal(player_id=player_id, name=name or "")
        elif not current.name:
            current.name = name or ""

    return sorted(
        merged.values(),
        key=lambda total: sort_key(total.total_points, total.name, total.player_id)
    )


def competition_ranks(values: list[int]) -> list[int]:
    """
    Standard competition ranking for values already sorted descending.

    [10, 10, 8] -> [1, 1, 3]
    """
    ranks = []
    last = None
    rank = 0
    for position, value in enumerate(values, start=1):
        if value != last:
            rank = position
            last = value
        ranks.append(rank)
    return ranks


def matrix_window(
    available_weeks: Iterable[int],
    window: int = 5,
    end_week: Optional[int] = None
) -> tuple[int, int]:
    """
    (start_week, end_week) for the last `window` weeks ending at `end_week`.

    `end_week` defaults to the latest available week; the window is kept
    within 1..38.
    """
    weeks = sorted(available_weeks)
    window = max(1, min(window or 5, MAX_MATRIX_WINDOW))

    if end_week is None:
        end_week = weeks[-1] if weeks else 1

    return max(1, end_week - window + 1), end_week


def build_matrix(
    start_week: int,
    end_week: int,
    per_week_rows: Mapping[int, Any]
) -> LeaderboardMatrix:
    """
    Per-week points for every player seen inside [start_week, end_week].

    The total is the sum over the window only (not the whole season).
    Rows are ranked by total with ties sharing a rank.
    """
    weeks = sorted(week for week in per_week_rows if start_week <= week <= end_week)

    names: dict[str, str] = {}
    points: dict[str, dict[int, int]] = {}

    for week in weeks:
        for row in normalize_weekly_rows(per_week_rows[week]):
            names[row.player_id] = row.name or names.get(row.player_id) or row.player_id
            points.setdefault(row.player_id, {})[week] = row.week_points

    rows = []
    for player_id, name in names.items():
        weekly = {week: points[player_id].get(week, 0) for week in weeks}
        rows.append({
            "player_id": player_id,
            "name": name,
            "weekly": weekly,
            "total": sum(weekly.values()),
        })

    rows.sort(key=lambda row: sort_key(row["total"], row["name"], row["player_id"]))
    ranks = competition_ranks([row["total"] for row in rows])

    return LeaderboardMatrix(
        start_week=start_week,
        end_week=end_week,
        weeks=weeks,
        rows=[MatrixRow(rank=rank, **row) for row, rank in zip(rows, ranks)],
    )
