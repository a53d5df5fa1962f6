"""
Test event log analysis and export.

Validates DataFrame schema, ordering checks, pitch zones and CSV/XES exports.
"""

import os

import pandas as pd
import pytest

from seeded_football.engine.events import EventType, MicroEvent, TeamSide
from seeded_football.engine.match import simulate_match
from seeded_football.engine.pitch import PitchZones, Position
from seeded_football.logger.event_logger import MatchEventLogger


FIXTURE_SEED = "0x3E2D1C0B9A8F7E6D"


@pytest.fixture
def reference_result():
    return simulate_match("fixture-1", FIXTURE_SEED)


def test_dataframe_schema(reference_result):
    """Test that all analysis columns are present and complete."""
    df = MatchEventLogger(reference_result).to_dataframe()

    required_columns = [
        'case_id', 'activity', 'sequence_number', 'minute', 'timestamp',
        'seed_index', 'team_side', 'team_id', 'player_id',
        'position_x', 'position_y', 'zone', 'x', 'y', 'time:timestamp',
    ]
    missing_columns = [col for col in required_columns if col not in df.columns]

    assert not missing_columns, f"Missing columns: {missing_columns}"
    assert len(df) == 263
    assert df.isnull().sum().sum() == 0, "Event log has missing values"


def test_dataframe_preserves_log_order(reference_result):
    """Test that rows follow the event log and synthetic times are ordered."""
    df = MatchEventLogger(reference_result).to_dataframe()

    assert df['sequence_number'].tolist() == list(range(len(df)))
    assert df['minute'].is_monotonic_increasing
    assert df['time:timestamp'].is_monotonic_increasing
    assert df['time:timestamp'].is_unique
    assert df['activity'].iloc[0] == 'possession'
    assert df['team_id'].iloc[0] == 'club-2'


def test_dataframe_is_deterministic(reference_result):
    """Test that repeated conversions give identical frames."""
    first = MatchEventLogger(reference_result).to_dataframe()
    second = MatchEventLogger(simulate_match("fixture-1", FIXTURE_SEED)).to_dataframe()

    pd.testing.assert_frame_equal(first, second)


def test_reference_log_validates(reference_result):
    """Test that a simulated log passes structural validation."""
    assert MatchEventLogger(reference_result).validate() == []


def test_validate_reports_problems():
    """Test that validation flags out-of-order and missing minutes."""
    events = [
        MicroEvent("fixture-1", 120, 0, EventType.PASS, TeamSide.HOME, 3, 0.1, 0.1),
        MicroEvent("fixture-1", 60, 0, EventType.PASS, TeamSide.AWAY, 3, 0.1, 0.1),
        MicroEvent("fixture-1", 61, 2, EventType.SHOT, TeamSide.AWAY, 30, 0.1, 0.1),
    ]
    problems = MatchEventLogger(events).validate()

    assert any("minute 1 after minute 2" in p for p in problems)
    assert any("sequence index 2" in p for p in problems)
    assert any("player index 30" in p for p in problems)
    assert any("Minutes without events" in p for p in problems)


def test_validate_flags_events_past_full_time():
    """Test that an event after minute 90 or before kickoff is reported."""
    events = list(simulate_match("fixture-1", 42).event_log)
    events.append(MicroEvent("fixture-1", 91 * 60 + 30, 0, EventType.PASS, TeamSide.HOME, 1, 0.1, 0.1))
    problems = MatchEventLogger(events).validate()

    assert any("timestamp 5490 out of range" in p for p in problems)
    assert any("Minutes outside match: [91]" in p for p in problems)

    early = [MicroEvent("fixture-1", -5, 0, EventType.PASS, TeamSide.HOME, 1, 0.1, 0.1)]
    early_problems = MatchEventLogger(early + list(simulate_match("fixture-1", 42).event_log)).validate()

    assert any("timestamp -5 out of range" in p for p in early_problems)
    assert any("Minutes outside match: [-1]" in p for p in early_problems)


def test_last_second_of_full_time_is_valid():
    """Test that 90:59 is the last accepted timestamp."""
    events = [
        MicroEvent("fixture-1", minute * 60 + 59, 0, EventType.PASS, TeamSide.AWAY, 0, 0.0, 0.0)
        for minute in range(91)
    ]

    assert MatchEventLogger(events).validate() == []


def test_validate_empty_log():
    """Test that an empty log is reported rather than passing."""
    assert MatchEventLogger([]).validate() == ["Event log is empty"]


def test_explicit_case_id(reference_result):
    """Test that the case id keyword overrides the fixture id."""
    df = MatchEventLogger(reference_result, case_id="derby").to_dataframe()

    assert (df["case_id"] == "derby").all()
    assert (MatchEventLogger(reference_result).to_dataframe()["case_id"] == "fixture-1").all()


def test_summary_stats(reference_result):
    """Test summary statistics against the reference fixture."""
    stats = MatchEventLogger(reference_result).get_summary_stats()

    assert stats['total_events'] == 263
    assert stats['goals'] == 3
    assert stats['events_by_type']['possession'] == 120
    assert stats['events_by_type']['shot'] == 63
    assert stats['events_by_side'] == {'Home': 143, 'Away': 120}
    assert sum(stats['events_by_type'].values()) == 263
    assert stats['max_events_in_minute'] <= 5
    assert stats['events_per_minute'] == pytest.approx(263 / 91)


def test_summary_stats_empty():
    """Test summary statistics for an empty log."""
    assert MatchEventLogger([]).get_summary_stats() == {}


def test_zone_breakdown_counts_every_event(reference_result):
    """Test that zone counts add up to the log size."""
    breakdown = MatchEventLogger(reference_result).zone_breakdown()

    assert set(breakdown) == {'Home', 'Away'}
    assert sum(sum(zones.values()) for zones in breakdown.values()) == 263


def test_pitch_zones_are_team_relative():
    """Test zones flip with attacking direction."""
    near_away_goal = Position.from_unit(0.9, 0.5)
    near_home_goal = Position.from_unit(0.1, 0.5)

    assert near_away_goal.x == pytest.approx(94.5)
    assert near_away_goal.y == pytest.approx(34.0)
    assert PitchZones.get_zone(near_away_goal, TeamSide.HOME) == 'att'
    assert PitchZones.get_zone(near_away_goal, TeamSide.AWAY) == 'def'
    assert PitchZones.get_zone(near_home_goal, TeamSide.HOME) == 'def'
    assert PitchZones.get_zone(Position.from_unit(0.5, 0.5), TeamSide.AWAY) == 'mid'


def test_export_to_csv(reference_result, tmp_path):
    """Test CSV export with PM4Py column aliases."""
    csv_file = os.path.join(tmp_path, "fixture-1.csv")
    MatchEventLogger(reference_result).export_to_csv(csv_file, verbose=False)

    df = pd.read_csv(csv_file)

    assert len(df) == 263
    for column in ['case:concept:name', 'concept:name', 'time:timestamp']:
        assert column in df.columns, f"Missing PM4Py column {column}"
    assert (df['case:concept:name'] == 'fixture-1').all()
    assert pd.to_datetime(df['time:timestamp']).is_monotonic_increasing


def test_export_empty_log_writes_nothing(tmp_path, capsys):
    """Test that exporting an empty log is a no-op."""
    csv_file = os.path.join(tmp_path, "empty.csv")
    MatchEventLogger([]).export_to_csv(csv_file)

    assert not os.path.exists(csv_file)
    assert "No events to export" in capsys.readouterr().out


def test_export_to_xes(reference_result, tmp_path):
    """Test XES export through PM4Py."""
    xes_file = os.path.join(tmp_path, "fixture-1.xes")
    MatchEventLogger(reference_result).export_to_xes(xes_file, verbose=False)

    assert os.path.exists(xes_file)
    with open(xes_file, encoding="utf-8") as handle:
        content = handle.read()
    assert "<log" in content
    assert "possession" in content


if __name__ == "__main__":
    result = simulate_match("fixture-1", FIXTURE_SEED)
    test_dataframe_preserves_log_order(result)
    test_reference_log_validates(result)
    test_summary_stats(result)

    print("✓ All event logger tests passed!")
