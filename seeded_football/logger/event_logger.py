"""
Event log analysis and export for simulated fixtures.

Turns a seeded event log into a PM4Py-compatible DataFrame for process
mining and offline verification.
"""

import pandas as pd
import pm4py
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from ..engine.events import EventType, MicroEvent, TeamSide
from ..engine.match import MatchEngine, SimulationResult
from ..engine.pitch import PitchZones, Position


# Synthetic kickoff time; exports never depend on the wall clock.
KICKOFF_EPOCH = datetime(2000, 1, 1)


class MatchEventLogger:
    """
    Read-only view over a simulated event log.

    Provides DataFrame conversion, summary statistics, ordering validation,
    and CSV/XES export.
    """

    def __init__(self,
                 source: Union[SimulationResult, Iterable[MicroEvent]],
                 case_id: Optional[str] = None):
        """
        Initialize logger for a simulated fixture.

        Args:
            source: SimulationResult or an ordered iterable of MicroEvents
            case_id: Process-mining case id (report fixture id if None)
        """
        if isinstance(source, SimulationResult):
            self.events: List[MicroEvent] = list(source.event_log)
            default_case_id = source.match_report.fixture_id
        else:
            self.events = list(source)
            default_case_id = self.events[0].fixture_id if self.events else "fixture"

        self.case_id = case_id or default_case_id

    def to_dataframe(self) -> pd.DataFrame:
        """One row per event, in log order."""
        rows = []
        for sequence_number, event in enumerate(self.events):
            position = Position.from_unit(event.x, event.y)
            rows.append({
                'case_id': self.case_id,
                'activity': event.event_type.value,
                'sequence_number': sequence_number,
                'minute': event.minute,
                'timestamp': event.timestamp,
                'seed_index': event.sequence_index,
                'team_side': event.team_side.value,
                'team_id': event.team_id,
                'player_id': event.player_id,
                'position_x': position.x,
                'position_y': position.y,
                'zone': PitchZones.get_zone(position, event.team_side),
                'x': event.x,
                'y': event.y,
            })

        columns = [
            'case_id', 'activity', 'sequence_number', 'minute', 'timestamp',
            'seed_index', 'team_side', 'team_id', 'player_id',
            'position_x', 'position_y', 'zone', 'x', 'y',
        ]
        df = pd.DataFrame(rows, columns=columns)

        # Timestamps within a minute are not ordered; the sequence number is
        # folded in as microseconds so the log order survives sorting.
        df['time:timestamp'] = (
            pd.Timestamp(KICKOFF_EPOCH)
            + pd.to_timedelta(df['minute'] * MatchEngine.SECONDS_PER_MINUTE, unit='s')
            + pd.to_timedelta(df['sequence_number'], unit='us')
        )
        return df

    def export_to_csv(self, filepath: str, verbose: bool = True) -> None:
        """
        Export event log to CSV format.

        Args:
            filepath: Output file path
            verbose: Print export confirmation
        """
        if not self.events:
            if verbose:
                print("No events to export")
            return

        df = self._pm4py_frame()
        df.to_csv(filepath, index=False)

        if verbose:
            print(f"Event log exported to {filepath}")

    def export_to_xes(self, filepath: str, verbose: bool = True) -> None:
        """
        Export event log to XES format using PM4Py.

        Args:
            filepath: Output file path (.xes)
            verbose: Print export confirmation
        """
        if not self.events:
            if verbose:
                print("No events to export")
            return

        df = self._pm4py_frame()
        event_log = pm4py.format_dataframe(
            df,
            case_id='case:concept:name',
            activity_key='concept:name',
            timestamp_key='time:timestamp'
        )
        pm4py.write_xes(event_log, filepath)

        if verbose:
            print(f"XES event log exported to {filepath}")

    def _pm4py_frame(self) -> pd.DataFrame:
        df = self.to_dataframe()
        df['case:concept:name'] = df['case_id']
        df['concept:name'] = df['activity']
        return df

    def validate(self) -> List[str]:
        """
        Check the structural guarantees of a seeded event log.

        Returns:
            List of problems found; empty when the log is well-formed
        """
        problems = []
        if not self.events:
            return ["Event log is empty"]

        last_timestamp = (MatchEngine.LAST_MINUTE + 1) * MatchEngine.SECONDS_PER_MINUTE - 1
        minutes_seen = set()
        previous_minute = None
        expected_index = 0

        for position, event in enumerate(self.events):
            minute = event.minute
            minutes_seen.add(minute)

            if previous_minute is not None and minute < previous_minute:
                problems.append(f"Event {position}: minute {minute} after minute {previous_minute}")

            if minute != previous_minute:
                expected_index = 0
            if event.sequence_index != expected_index:
                problems.append(
                    f"Event {position}: sequence index {event.sequence_index}, expected {expected_index}"
                )
            expected_index = event.sequence_index + 1
            previous_minute = minute

            if not 0 <= event.timestamp <= last_timestamp:
                problems.append(f"Event {position}: timestamp {event.timestamp} out of range")
            if not 0 <= event.player_index < MatchEngine.SQUAD_SIZE:
                problems.append(f"Event {position}: player index {event.player_index} out of range")
            if not (0.0 <= event.x < 1.0 and 0.0 <= event.y < 1.0):
                problems.append(f"Event {position}: coordinates ({event.x}, {event.y}) outside unit square")

        expected_minutes = set(range(MatchEngine.FIRST_MINUTE, MatchEngine.LAST_MINUTE + 1))
        missing = sorted(expected_minutes - minutes_seen)
        if missing:
            problems.append(f"Minutes without events: {missing}")
        outside = sorted(minutes_seen - expected_minutes)
        if outside:
            problems.append(f"Minutes outside match: {outside}")

        per_minute = pd.Series([event.minute for event in self.events]).value_counts()
        overfull = per_minute[per_minute > MatchEngine.MAX_EVENTS_PER_MINUTE]
        if not overfull.empty:
            problems.append(f"Minutes with too many events: {sorted(overfull.index.tolist())}")

        return problems

    def get_summary_stats(self) -> Dict[str, Any]:
        """Get summary statistics for the event log."""
        if not self.events:
            return {}

        df = self.to_dataframe()
        minutes_played = MatchEngine.LAST_MINUTE - MatchEngine.FIRST_MINUTE + 1
        activity_counts = df['activity'].value_counts()
        side_counts = df['team_side'].value_counts()

        return {
            'total_events': len(df),
            'unique_activities': df['activity'].nunique(),
            'events_per_minute': len(df) / minutes_played,
            'max_events_in_minute': int(df.groupby('minute').size().max()),
            'events_by_type': {
                event_type.value: int(activity_counts.get(event_type.value, 0))
                for event_type in EventType
            },
            'events_by_side': {
                side.value: int(side_counts.get(side.value, 0))
                for side in TeamSide
            },
            'goals': int(activity_counts.get(EventType.GOAL.value, 0)),
        }

    def zone_breakdown(self) -> Dict[str, Dict[str, int]]:
        """Count events per team side and team-relative zone."""
        if not self.events:
            return {}

        df = self.to_dataframe()
        table = df.groupby(['team_side', 'zone']).size().unstack(fill_value=0)
        return {
            side: {zone: int(count) for zone, count in row.items()}
            for side, row in table.iterrows()
        }
