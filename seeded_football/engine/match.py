"""
Main match engine for seeded football simulation.

Drives a minute-stepped simulation whose event log and report are a pure
function of the fixture seed and the two team descriptors.
"""

import hashlib
import json
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from .events import (
    BASE_EVENT_PROBABILITIES,
    STRENGTH_MULTIPLIERS,
    EventType,
    MicroEvent,
    TeamSide,
)
from .prng import SeededGenerator, SeedLike
from .report import MatchReport
from .team import TeamDescriptor, default_away_team, default_home_team, home_probability


class SimulationResult(NamedTuple):
    """Ordered event log plus finalized match report."""
    event_log: Tuple[MicroEvent, ...]
    match_report: MatchReport

    def to_dict(self) -> Dict[str, Any]:
        return {
            "eventLog": [event.to_dict() for event in self.event_log],
            "matchReport": self.match_report.to_dict(),
        }

    def fingerprint(self) -> str:
        """SHA-256 of the canonical JSON rendering, for replay verification."""
        canonical = json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class MatchEngine:
    """
    Minute-stepped deterministic match engine.

    Implements:
    - 91 minute steps (0 to 90 inclusive), 1-5 micro-events each
    - Weighted event-type selection from an ordered probability table
    - Report folding and possession normalization

    The engine holds only its two team descriptors; every call to simulate()
    builds its own generator and report.
    """

    FIRST_MINUTE = 0
    LAST_MINUTE = 90
    MAX_EVENTS_PER_MINUTE = 5
    SQUAD_SIZE = 23
    SECONDS_PER_MINUTE = 60

    # Events are stamped with this id regardless of the caller's fixture id
    EVENT_FIXTURE_ID = "fixture-1"

    def __init__(self,
                 home_team: Optional[TeamDescriptor] = None,
                 away_team: Optional[TeamDescriptor] = None):
        """
        Initialize match engine with two team descriptors.

        Args:
            home_team: Home side (reference home team if None)
            away_team: Away side (reference away team if None)
        """
        self.home_team = home_team or default_home_team()
        self.away_team = away_team or default_away_team()
        self.home_probability = home_probability(self.home_team, self.away_team)

    def simulate(self, fixture_id: str, fixture_seed: SeedLike) -> SimulationResult:
        """
        Simulate a complete fixture.

        Args:
            fixture_id: Caller's fixture identifier, carried on the report
            fixture_seed: Unsigned 64-bit seed (int, decimal or hex string)

        Returns:
            SimulationResult with the ordered event log and finalized report

        Raises:
            InvalidSeedError: If the seed is not a valid unsigned 64-bit value
        """
        rng = SeededGenerator(fixture_seed)

        event_log: List[MicroEvent] = []
        match_report = MatchReport(fixture_id=fixture_id)

        for minute in range(self.FIRST_MINUTE, self.LAST_MINUTE + 1):
            micro_events = self._generate_micro_events(rng, minute)
            event_log.extend(micro_events)

            for event in micro_events:
                match_report.fold(event, minute)

        match_report.finalize()

        return SimulationResult(event_log=tuple(event_log), match_report=match_report)

    def _generate_micro_events(self, rng: SeededGenerator, minute: int) -> List[MicroEvent]:
        """Generate this minute's batch of micro-events in draw order."""
        events = []
        event_count = int(rng.next() * self.MAX_EVENTS_PER_MINUTE) + 1

        for sequence_index in range(event_count):
            event_type = self._determine_event_type(rng)
            team_side = TeamSide.HOME if rng.next() > 0.5 else TeamSide.AWAY
            player_index = int(rng.next() * self.SQUAD_SIZE)
            x = rng.next()
            y = rng.next()
            timestamp = minute * self.SECONDS_PER_MINUTE + int(rng.next() * self.SECONDS_PER_MINUTE)

            events.append(MicroEvent(
                fixture_id=self.EVENT_FIXTURE_ID,
                timestamp=timestamp,
                sequence_index=sequence_index,
                event_type=event_type,
                team_side=team_side,
                player_index=player_index,
                x=x,
                y=y,
            ))

        return events

    def _determine_event_type(self, rng: SeededGenerator) -> EventType:
        """
        Weighted draw over the base probability table.

        Consumes exactly two values: one for the strength branch and one for
        the category selection.
        """
        probabilities = [[event_type, weight] for event_type, weight in BASE_EVENT_PROBABILITIES]

        # Both outcomes boost the same categories, so the draw only advances
        # the generator.
        if rng.next() < self.home_probability:
            self._apply_strength_multipliers(probabilities)
        else:
            self._apply_strength_multipliers(probabilities)

        # Plain left-to-right sum; sum() on floats is compensated and would
        # drift from the reference totals.
        total_probability = 0.0
        for entry in probabilities:
            total_probability += entry[1]
        for entry in probabilities:
            entry[1] /= total_probability

        rand = rng.next()
        cumulative = 0.0
        for event_type, probability in probabilities:
            cumulative += probability
            if rand < cumulative:
                return event_type

        # Rounding can leave the cumulative sum just below rand
        return EventType.PASS

    @staticmethod
    def _apply_strength_multipliers(probabilities: List[list]) -> None:
        for entry in probabilities:
            multiplier = STRENGTH_MULTIPLIERS.get(entry[0])
            if multiplier is not None:
                entry[1] *= multiplier


def simulate_match(fixture_id: str,
                   fixture_seed: SeedLike,
                   home_team: Optional[TeamDescriptor] = None,
                   away_team: Optional[TeamDescriptor] = None) -> SimulationResult:
    """
    Simulate one fixture.

    Args:
        fixture_id: Caller's fixture identifier
        fixture_seed: Unsigned 64-bit seed (int, decimal or hex string)
        home_team: Home descriptor (reference home team if None)
        away_team: Away descriptor (reference away team if None)

    Returns:
        SimulationResult(event_log, match_report)
    """
    return MatchEngine(home_team, away_team).simulate(fixture_id, fixture_seed)
