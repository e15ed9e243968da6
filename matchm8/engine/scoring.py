"""
Scoring engine - points per prediction and the weekly table.

Scale (one canonical scheme for every screen):
- 3 points: exact score
- 1 point: correct outcome (home win / away win / draw)
- 0 points: anything else, or no result yet
"""

from typing import Iterable, Mapping, Optional

from matchm8.models import (
    Fixture,
    Prediction,
    Result,
    PlayerWeekBreakdown,
    PlayerWeekRow,
    PlayerWeekTotals,
    ScoreLine,
    WeeklyScoreRow,
    WeekSummary,
)

EXACT_SCORE_POINTS = 3
CORRECT_OUTCOME_POINTS = 1


def outcome(home: int, away: int) -> str:
    """H, A or D."""
    if home > away:
        return "H"
    if away > home:
        return "A"
    return "D"


def points_for(prediction: Prediction, actual: Optional[Result]) -> int:
    """
    Points for one prediction against the actual result.

    Returns 0 when there's no result yet; the caller has to track
    "pending" separately if it cares.
    """
    if actual is None:
        return 0
    if prediction.home == actual.home and prediction.away == actual.away:
        return EXACT_SCORE_POINTS
    if outcome(prediction.home, prediction.away) == outcome(actual.home, actual.away):
        return CORRECT_OUTCOME_POINTS
    return 0


def merge_predictions(
    existing: Mapping[str, Prediction],
    incoming: Iterable[Prediction]
) -> dict[str, Prediction]:
    """Upsert by fixture id: incoming picks win, untouched picks stay."""
    merged = dict(existing)
    for prediction in incoming:
        merged[prediction.fixture_id] = prediction
    return merged


def sort_key(points: int, name: str, player_id: str) -> tuple:
    # points desc, then name (case-sensitive), then id so equal names stay stable
    return (-points, name, player_id)


def compute_week_table(
    predictions_by_player: Mapping[str, Mapping[str, Prediction]],
    results: Mapping[str, Result],
    player_directory: Mapping[str, str]
) -> list[WeeklyScoreRow]:
    """
    Weekly table for every player with at least one prediction.

    Predictions for fixtures without a result add 0 and are not "missed".
    """
    table = []
    for player_id, predictions in predictions_by_player.items():
        if not predictions:
            continue

        week_points = sum(
            points_for(prediction, results.get(fixture_id))
            for fixture_id, prediction in predictions.items()
        )

        table.append(WeeklyScoreRow(
            player_id=str(player_id),
            name=player_directory.get(str(player_id), "") or "",
            week_points=week_points,
        ))

    table.sort(key=lambda row: sort_key(row.week_points, row.name, row.player_id))
    return table


def player_week_breakdown(
    player_id: str,
    fixtures: list[Fixture],
    predictions: Mapping[str, Prediction],
    results: Mapping[str, Result]
) -> PlayerWeekBreakdown:
    """
    Fixture-by-fixture view of one player's week.

    Counts:
    - pending: no result yet (with or without a prediction)
    - missed: result is in but the player never predicted
    """
    if fixtures:
        fixture_ids = [fixture.id for fixture in fixtures]
    else:
        fixture_ids = sorted(set(results) | set(predictions))

    by_id = {fixture.id: fixture for fixture in fixtures}
    totals = PlayerWeekTotals()
    rows = []

    for fixture_id in fixture_ids:
        fixture = by_id.get(fixture_id) or Fixture(id=fixture_id, home="Home", away="Away")
        prediction = predictions.get(fixture_id)
        actual = results.get(fixture_id)

        points = None
        if actual is None:
            totals.pending_count += 1
        elif prediction is None:
            totals.missed_count += 1
        else:
            points = points_for(prediction, actual)
            totals.week_points += points
            if points == EXACT_SCORE_POINTS:
                totals.exact_count += 1
            elif points == CORRECT_OUTCOME_POINTS:
                totals.outcome_count += 1

        rows.append(PlayerWeekRow(
            fixture_id=fixture_id,
            home_team=fixture.home,
            away_team=fixture.away,
            kickoff=fixture.kickoff,
            prediction=ScoreLine(home=prediction.home, away=prediction.away) if prediction else None,
            result=ScoreLine(home=actual.home, away=actual.away) if actual else None,
            points=points,
        ))

    return PlayerWeekBreakdown(player_id=player_id, rows=rows, totals=totals)


def summarize_week(
    week: int,
    fixtures: list[Fixture],
    results: Mapping[str, Result],
    table: list[WeeklyScoreRow]
) -> WeekSummary:
    if fixtures:
        with_result = sum(1 for fixture in fixtures if fixture.id in results)
        fixtures_count = len(fixtures)
    else:
        with_result = len(results)
        fixtures_count = len(results)

    return WeekSummary(
        week=week,
        fixtures_count=fixtures_count,
        fixtures_with_result=with_result,
        player_count=len(table),
    )
