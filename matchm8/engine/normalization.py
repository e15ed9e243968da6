"""
Normalization - turns whatever shape the stored JSON has into canonical models.

Fixtures, predictions and results have been written over the years by several
admin screens and import scripts, so the same concept shows up under different
field names and containers (arrays vs maps keyed by id). Everything downstream
(locks, scoring, leaderboards) only ever sees the models produced here.

Rules:
- When several synonym fields are present, the first one in the priority list wins.
- Missing identifiers get a stable fallback instead of an error.
- Nothing in this module raises for bad data.
"""

import math
import re
from collections.abc import Mapping
from datetime import datetime, timezone as dt_timezone
from typing import Any, Iterable, Optional

import pytz
from dateutil.parser import isoparse

from matchm8.models import (
    DeadlineMode,
    Fixture,
    LeagueConfig,
    Prediction,
    Result,
    WeeklyScoreRow,
)

MIN_SCORE = 0
MAX_SCORE = 99

FIXTURE_ID_KEYS = ("id", "fixture_id", "match_id", "matchId", "code", "_id")
HOME_TEAM_KEYS = ("home", "homeTeam", "home_team", "home_name", "homeTeamName")
AWAY_TEAM_KEYS = ("away", "awayTeam", "away_team", "away_name", "awayTeamName")
KICKOFF_KEYS = (
    "kickoff_utc",
    "kickoffUTC",
    "kickoffISO",
    "kickoff_iso",
    "kickoff",
    "utcDate",
    "datetime",
    "ko",
    "kickoffTime",
    "date",
    "ts",
)

PREDICTION_ID_KEYS = ("id", "fixture_id", "fixtureId", "match_id", "_id")
RESULT_ID_KEYS = ("fixture_id", "match_id", "fixtureId", "matchId", "id")
RESULT_HOME_KEYS = ("homeGoals", "home_score", "home", "ft_home")
RESULT_AWAY_KEYS = ("awayGoals", "away_score", "away", "ft_away")

PLAYER_ID_KEYS = ("player_id", "playerId", "id", "_id")
PLAYER_NAME_KEYS = ("name", "player")
WEEK_POINTS_KEYS = ("week_points", "weekPoints", "points", "total", "score")

LOCK_OFFSET_KEYS = (
    "lock_offset_minutes",
    "lockOffsetMinutes",
    "lock_mins",
    "lock_minutes_before_kickoff",
)

# one week; anything larger is treated as a typo
MAX_LOCK_OFFSET_MINUTES = 7 * 24 * 60

_LEADING_INT = re.compile(r"^[+-]?\d+")


# ============================================
# Scalars
# ============================================

def _first(obj: Mapping, keys: Iterable[str]) -> Any:
    """First value among `keys` that is present and not empty."""
    for key in keys:
        value = obj.get(key)
        if value is not None and value != "":
            return value
    return None


def _to_int(value: Any) -> Optional[int]:
    """Lenient integer parse ("3", 3.9, "2 goals" -> 3, 3, 2). None if hopeless."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value.strip())
        return int(match.group()) if match else None
    return None


def clamp_score(value: Any) -> int:
    """Score in [0, 99]; anything non-numeric becomes 0."""
    number = _to_int(value)
    if number is None:
        return MIN_SCORE
    return max(MIN_SCORE, min(MAX_SCORE, number))


def resolve_timezone(name: Any):
    """pytz zone for `name`, UTC when unknown."""
    if not isinstance(name, str) or not name.strip():
        return pytz.UTC
    try:
        return pytz.timezone(name.strip())
    except pytz.UnknownTimeZoneError:
        return pytz.UTC


def to_utc(dt: datetime, timezone: Any = "UTC") -> datetime:
    """Aware UTC datetime. Naive values are read as wall time in `timezone`."""
    if dt.tzinfo is None:
        dt = resolve_timezone(timezone).localize(dt)
    return dt.astimezone(dt_timezone.utc)


def parse_kickoff(value: Any, timezone: Any = "UTC") -> Optional[datetime]:
    """
    Parse a kickoff value into an aware UTC datetime.

    Accepts ISO-8601 strings, epoch milliseconds and datetimes.
    Returns None when the value can't be understood.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return to_utc(value, timezone)

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=dt_timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str) and value.strip():
        try:
            parsed = isoparse(value.strip())
        except (ValueError, OverflowError):
            return None
        return to_utc(parsed, timezone)

    return None


def _team_name(obj: Mapping, keys: Iterable[str], fallback: str) -> str:
    for key in keys:
        value = obj.get(key)
        if isinstance(value, Mapping):
            value = value.get("name")
        if value is not None and value != "":
            return str(value)
    return fallback


# ============================================
# Fixtures
# ============================================

def _fixture_from(obj: Mapping, fixture_id: str, timezone: Any) -> Fixture:
    kickoff = None
    for key in KICKOFF_KEYS:
        kickoff = parse_kickoff(obj.get(key), timezone)
        if kickoff is not None:
            break

    return Fixture(
        id=fixture_id,
        home=_team_name(obj, HOME_TEAM_KEYS, "Home"),
        away=_team_name(obj, AWAY_TEAM_KEYS, "Away"),
        kickoff=kickoff,
    )


def normalize_fixtures(raw: Any, week: Any, timezone: Any = "UTC") -> list[Fixture]:
    """
    Canonical fixture list for a week.

    `raw` may be a list of fixture objects, a map keyed by fixture id, or a
    wrapper object with a `fixtures` list. Fixtures without an id get
    "<week>-<position>". A repeated id keeps its first position and the
    last definition.
    """
    if isinstance(raw, Mapping) and isinstance(raw.get("fixtures"), list):
        raw = raw["fixtures"]

    fixtures: dict[str, Fixture] = {}

    if isinstance(raw, list):
        for index, item in enumerate(raw):
            if not isinstance(item, Mapping):
                continue
            fixture_id = _first(item, FIXTURE_ID_KEYS)
            fixture_id = str(fixture_id) if fixture_id is not None else f"{week}-{index + 1}"
            fixtures[fixture_id] = _fixture_from(item, fixture_id, timezone)

    elif isinstance(raw, Mapping):
        for key, item in raw.items():
            if not isinstance(item, Mapping):
                continue
            fixture_id = str(key)
            fixtures[fixture_id] = _fixture_from(item, fixture_id, timezone)

    return list(fixtures.values())


# ============================================
# Predictions
# ============================================

def _prediction_from(obj: Any) -> Optional[Prediction]:
    if not isinstance(obj, Mapping):
        return None
    fixture_id = _first(obj, PREDICTION_ID_KEYS)
    if fixture_id is None or not str(fixture_id).strip():
        return None
    return Prediction(
        fixture_id=str(fixture_id).strip(),
        home=clamp_score(obj.get("home")),
        away=clamp_score(obj.get("away")),
    )


def normalize_incoming_predictions(raw: Any) -> list[Prediction]:
    """
    Clean a submission payload: [{id, home, away}, ...].

    Rows without a fixture id are dropped; if a fixture appears twice the
    last row wins.
    """
    if not isinstance(raw, list):
        return []

    by_id: dict[str, Prediction] = {}
    for item in raw:
        prediction = _prediction_from(item)
        if prediction is not None:
            by_id[prediction.fixture_id] = prediction
    return list(by_id.values())


def normalize_predictions(raw: Any) -> dict[str, dict[str, Prediction]]:
    """
    Predictions of a whole week, as player_id -> fixture_id -> Prediction.

    Accepts:
    - [{"player_id": "p1", "predictions": [{id, home, away}, ...]}, ...]
    - {"p1": {"predictions": [...]}, ...}
    - {"p1": [...], ...}
    """
    by_player: dict[str, dict[str, Prediction]] = {}

    rows: list[tuple[Any, Any]] = []
    if isinstance(raw, list):
        for row in raw:
            if isinstance(row, Mapping):
                rows.append((_first(row, ("player_id", "playerId")), row.get("predictions")))
    elif isinstance(raw, Mapping):
        for player_id, row in raw.items():
            picks = row.get("predictions") if isinstance(row, Mapping) else row
            rows.append((player_id, picks))

    for player_id, picks in rows:
        if player_id is None or not str(player_id).strip():
            continue
        player_id = str(player_id).strip()
        current = by_player.setdefault(player_id, {})
        for prediction in normalize_incoming_predictions(picks):
            current[prediction.fixture_id] = prediction

    return by_player


# ============================================
# Results
# ============================================

def _result_from(fixture_id: str, value: Any) -> Optional[Result]:
    if isinstance(value, (list, tuple)):
        home = value[0] if len(value) > 0 else 0
        away = value[1] if len(value) > 1 else 0
        return Result(fixture_id=fixture_id, home=clamp_score(home), away=clamp_score(away))

    if isinstance(value, Mapping):
        home = _first(value, RESULT_HOME_KEYS)
        away = _first(value, RESULT_AWAY_KEYS)
        if home is None or away is None:
            return None  # pending
        return Result(fixture_id=fixture_id, home=clamp_score(home), away=clamp_score(away))

    return None


def normalize_results(raw: Any) -> dict[str, Result]:
    """
    Actual scores of a week as fixture_id -> Result.

    Accepts a map keyed by fixture id ({id: {homeGoals, awayGoals}},
    {id: {home_score, away_score}}, {id: {home, away}}, {id: [h, a]}) or a
    list of rows carrying their own fixture id. Fixtures whose score is
    incomplete are left out (still pending).
    """
    results: dict[str, Result] = {}

    if isinstance(raw, Mapping):
        for key, value in raw.items():
            result = _result_from(str(key), value)
            if result is not None:
                results[result.fixture_id] = result

    elif isinstance(raw, list):
        for row in raw:
            if not isinstance(row, Mapping):
                continue
            fixture_id = _first(row, RESULT_ID_KEYS)
            if fixture_id is None:
                continue
            result = _result_from(str(fixture_id), row)
            if result is not None:
                results[result.fixture_id] = result

    return results


# ============================================
# Config, players, stored weekly rows
# ============================================

def normalize_config(raw: Any) -> LeagueConfig:
    """
    LeagueConfig with documented defaults for anything missing or invalid:
    mode=first_kickoff, offset=0, timezone=UTC.
    """
    if isinstance(raw, LeagueConfig):
        return raw
    if not isinstance(raw, Mapping):
        raw = {}

    defaults = LeagueConfig()

    mode_raw = _first(raw, ("deadline_mode", "deadlineMode"))
    if isinstance(mode_raw, DeadlineMode):
        mode = mode_raw
    else:
        try:
            mode = DeadlineMode(str(mode_raw).strip().lower())
        except ValueError:
            mode = defaults.deadline_mode

    offset = _to_int(_first(raw, LOCK_OFFSET_KEYS))
    if offset is None or offset < 0 or offset > MAX_LOCK_OFFSET_MINUTES:
        offset = defaults.lock_offset_minutes

    tz_name = raw.get("timezone")
    if resolve_timezone(tz_name) is pytz.UTC:
        tz_name = "UTC"

    def positive(key: str, fallback: int) -> int:
        value = _to_int(raw.get(key))
        return value if value is not None and value > 0 else fallback

    return LeagueConfig(
        season=positive("season", defaults.season),
        total_weeks=positive("total_weeks", defaults.total_weeks),
        current_week=positive("current_week", defaults.current_week),
        deadline_mode=mode,
        lock_offset_minutes=offset,
        timezone=tz_name.strip(),
    )


def normalize_players(raw: Any) -> dict[str, str]:
    """Player directory as player_id -> display name."""
    directory: dict[str, str] = {}

    if isinstance(raw, list):
        for item in raw:
            if not isinstance(item, Mapping):
                continue
            player_id = _first(item, ("id", "player_id", "_id"))
            if player_id is None:
                continue
            directory[str(player_id)] = str(item.get("name") or "")

    elif isinstance(raw, Mapping):
        for player_id, item in raw.items():
            name = item.get("name") if isinstance(item, Mapping) else item
            directory[str(player_id)] = str(name or "")

    return directory


def normalize_weekly_rows(raw: Any) -> list[WeeklyScoreRow]:
    """Stored weekly table rows, whatever naming the file or document used."""
    if isinstance(raw, Mapping):
        for key in ("rows", "players", "scores"):
            if isinstance(raw.get(key), list):
                raw = raw[key]
                break
        else:
            return []

    if not isinstance(raw, list):
        return []

    rows = []
    for item in raw:
        if isinstance(item, WeeklyScoreRow):
            rows.append(item)
            continue
        if not isinstance(item, Mapping):
            continue

        player_id = _first(item, PLAYER_ID_KEYS)
        name = _first(item, PLAYER_NAME_KEYS)
        if player_id is None and name is None:
            continue

        rows.append(WeeklyScoreRow(
            player_id=str(player_id if player_id is not None else name).strip(),
            name=str(name or "").strip(),
            week_points=_to_int(_first(item, WEEK_POINTS_KEYS)) or 0,
        ))
    return rows
