"""
Unit tests for input normalization
"""

from datetime import datetime, timezone

import pytest

from matchm8.engine.normalization import (
    MAX_LOCK_OFFSET_MINUTES,
    clamp_score,
    normalize_config,
    normalize_fixtures,
    normalize_incoming_predictions,
    normalize_players,
    normalize_predictions,
    normalize_results,
    parse_kickoff,
)
from matchm8.models import DeadlineMode


class TestClampScore:
    @pytest.mark.parametrize("value,expected", [
        (3, 3),
        ("2", 2),
        ("4 goals", 4),
        (2.7, 2),
        (-1, 0),
        (150, 99),
        ("abc", 0),
        (None, 0),
        (True, 0),
    ])
    def test_clamp(self, value, expected):
        assert clamp_score(value) == expected


class TestParseKickoff:
    def test_iso_with_zone(self):
        assert parse_kickoff("2025-03-01T10:00:00Z") == datetime(2025, 3, 1, 10, 0, tzinfo=timezone.utc)

    def test_iso_with_offset(self):
        assert parse_kickoff("2025-03-01T12:00:00+02:00") == datetime(2025, 3, 1, 10, 0, tzinfo=timezone.utc)

    def test_naive_string_in_league_timezone(self):
        # Madrid is UTC+1 in March
        kickoff = parse_kickoff("2025-03-01T11:00:00", "Europe/Madrid")
        assert kickoff == datetime(2025, 3, 1, 10, 0, tzinfo=timezone.utc)

    def test_epoch_millis(self):
        assert parse_kickoff(1740823200000) == datetime(2025, 3, 1, 10, 0, tzinfo=timezone.utc)

    def test_garbage(self):
        assert parse_kickoff("next saturday") is None
        assert parse_kickoff(None) is None
        assert parse_kickoff("") is None


class TestNormalizeFixtures:
    """Tests for normalize_fixtures."""

    def test_synonym_fields(self):
        raw = [{
            "match_id": 17,
            "homeTeam": {"name": "Arsenal"},
            "away_team": "Chelsea",
            "utcDate": "2025-03-01T10:00:00Z",
        }]

        fixtures = normalize_fixtures(raw, 3)

        assert fixtures[0].id == "17"
        assert fixtures[0].home == "Arsenal"
        assert fixtures[0].away == "Chelsea"
        assert fixtures[0].kickoff == datetime(2025, 3, 1, 10, 0, tzinfo=timezone.utc)

    def test_first_synonym_wins(self):
        raw = [{"id": "A", "fixture_id": "Z", "home": "H", "away": "W"}]
        assert normalize_fixtures(raw, 1)[0].id == "A"

    def test_missing_id_gets_week_position(self):
        raw = [{"home": "H1", "away": "A1"}, {"home": "H2", "away": "A2"}]

        fixtures = normalize_fixtures(raw, 7)

        assert [f.id for f in fixtures] == ["7-1", "7-2"]

    def test_map_keyed_by_id(self):
        raw = {"A": {"home": "H", "away": "W", "kickoff": "2025-03-01T10:00:00Z"}}

        fixtures = normalize_fixtures(raw, 1)

        assert fixtures[0].id == "A"
        assert fixtures[0].kickoff is not None

    def test_wrapper_object(self):
        fixtures = normalize_fixtures({"fixtures": [{"id": "A"}]}, 1)

        assert fixtures[0].home == "Home"
        assert fixtures[0].away == "Away"
        assert fixtures[0].kickoff is None

    def test_unparseable_kickoff_is_none(self):
        fixtures = normalize_fixtures([{"id": "A", "kickoff": "soon"}], 1)
        assert fixtures[0].kickoff is None

    def test_not_a_collection(self):
        assert normalize_fixtures("nope", 1) == []


class TestNormalizePredictions:
    def test_incoming_clamps_and_dedupes(self):
        raw = [
            {"id": "A", "home": "3", "away": -2},
            {"fixtureId": "B", "home": 120, "away": 1},
            {"home": 1, "away": 1},
            {"id": "A", "home": 1, "away": 0},
        ]

        predictions = normalize_incoming_predictions(raw)

        assert [(p.fixture_id, p.home, p.away) for p in predictions] == [("A", 1, 0), ("B", 99, 1)]

    def test_incoming_not_a_list(self):
        assert normalize_incoming_predictions({"id": "A"}) == []

    def test_list_of_player_rows(self):
        raw = [{"player_id": "alice", "predictions": [{"id": "A", "home": 1, "away": 0}]}]

        by_player = normalize_predictions(raw)

        assert by_player["alice"]["A"].home == 1

    def test_map_of_lists(self):
        raw = {"bob": [{"fixture_id": "A", "home": 0, "away": 0}]}
        assert normalize_predictions(raw)["bob"]["A"].away == 0

    def test_map_of_wrappers(self):
        raw = {"carol": {"predictions": [{"id": "B", "home": 2, "away": 2}]}}
        assert normalize_predictions(raw)["carol"]["B"].home == 2


class TestNormalizeResults:
    def test_map_shapes(self):
        raw = {
            "A": {"homeGoals": 2, "awayGoals": 1},
            "B": {"home_score": "0", "away_score": "0"},
            "C": [3, 1],
            "D": {"home": 1},
        }

        results = normalize_results(raw)

        assert (results["A"].home, results["A"].away) == (2, 1)
        assert (results["B"].home, results["B"].away) == (0, 0)
        assert (results["C"].home, results["C"].away) == (3, 1)
        assert "D" not in results

    def test_list_of_rows(self):
        raw = [{"fixture_id": "A", "home": 4, "away": 4}, {"home": 1, "away": 0}]

        results = normalize_results(raw)

        assert list(results) == ["A"]


class TestNormalizeConfig:
    def test_defaults(self):
        config = normalize_config({})

        assert config.deadline_mode == DeadlineMode.FIRST_KICKOFF
        assert config.lock_offset_minutes == 0
        assert config.timezone == "UTC"

    def test_canonical_offset_beats_legacy(self):
        config = normalize_config({"lock_offset_minutes": 5, "lock_mins": 30})
        assert config.lock_offset_minutes == 5

    def test_legacy_offsets(self):
        assert normalize_config({"lock_mins": "15"}).lock_offset_minutes == 15
        assert normalize_config({"lock_minutes_before_kickoff": 20}).lock_offset_minutes == 20

    def test_invalid_values(self):
        config = normalize_config({
            "deadline_mode": "sometimes",
            "lock_offset_minutes": "lots",
            "timezone": "Nowhere/City",
            "season": -1,
        })

        assert config.deadline_mode == DeadlineMode.FIRST_KICKOFF
        assert config.lock_offset_minutes == 0
        assert config.timezone == "UTC"
        assert config.season == 2025

    def test_offset_above_one_week_uses_default(self):
        assert normalize_config({"lock_offset_minutes": 10**10}).lock_offset_minutes == 0
        assert normalize_config({"lock_offset_minutes": MAX_LOCK_OFFSET_MINUTES}).lock_offset_minutes == MAX_LOCK_OFFSET_MINUTES

    def test_mode_is_case_insensitive(self):
        assert normalize_config({"deadlineMode": "PER_MATCH"}).deadline_mode == DeadlineMode.PER_MATCH

    def test_not_a_mapping(self):
        assert normalize_config(None).deadline_mode == DeadlineMode.FIRST_KICKOFF


class TestNormalizePlayers:
    def test_list_and_map(self):
        assert normalize_players([{"id": "a", "name": "Alice"}, {"name": "no id"}]) == {"a": "Alice"}
        assert normalize_players({"b": {"name": "Bob"}, "c": "Carol"}) == {"b": "Bob", "c": "Carol"}
