"""
Match report aggregation.

Folds micro-events into per-side tallies and rendered summary lines.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .events import EventType, MicroEvent, TeamSide


@dataclass
class SideTally:
    """Home/away counter pair."""
    home: int = 0
    away: int = 0

    def increment(self, side: TeamSide) -> None:
        if side is TeamSide.HOME:
            self.home += 1
        else:
            self.away += 1

    def to_dict(self) -> Dict[str, int]:
        return {"home": self.home, "away": self.away}


@dataclass(frozen=True)
class EventSummary:
    """Human-facing rendering of one micro-event."""
    minute: int
    team: str  # "Home" / "Away"
    event_type: EventType
    player: str
    x: float
    y: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "minute": self.minute,
            "team": self.team,
            "eventType": self.event_type.value,
            "player": self.player,
            "x": self.x,
            "y": self.y,
        }


def round_half_up(value: float) -> int:
    """Round to nearest integer with ties going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


@dataclass
class MatchReport:
    """
    Aggregated summary of a simulated fixture.

    Built incrementally via fold(); possession holds raw ticks until
    finalize() converts it to percentages.
    """
    fixture_id: str
    home_score: int = 0
    away_score: int = 0
    events: List[EventSummary] = field(default_factory=list)
    possession: SideTally = field(default_factory=SideTally)
    shots: SideTally = field(default_factory=SideTally)
    corners: SideTally = field(default_factory=SideTally)
    fouls: SideTally = field(default_factory=SideTally)
    yellow_cards: SideTally = field(default_factory=SideTally)
    red_cards: SideTally = field(default_factory=SideTally)
    finalized: bool = False

    def _tally_for(self, event_type: EventType):
        return {
            EventType.POSSESSION: self.possession,
            EventType.SHOT: self.shots,
            EventType.CORNER: self.corners,
            EventType.FOUL: self.fouls,
            EventType.YELLOW_CARD: self.yellow_cards,
            EventType.RED_CARD: self.red_cards,
        }.get(event_type)

    def fold(self, event: MicroEvent, minute: int) -> None:
        """
        Fold one micro-event into the report.

        Args:
            event: Event to account for
            minute: Simulation minute the event was generated in
        """
        if self.finalized:
            raise RuntimeError("Cannot fold events into a finalized report")

        if event.event_type is EventType.GOAL:
            if event.team_side is TeamSide.HOME:
                self.home_score += 1
            else:
                self.away_score += 1

        tally = self._tally_for(event.event_type)
        if tally is not None:
            tally.increment(event.team_side)

        self.events.append(EventSummary(
            minute=minute,
            team=event.team_side.value,
            event_type=event.event_type,
            player=f"Player {event.player_index}",
            x=event.x,
            y=event.y,
        ))

    def finalize(self) -> None:
        """Convert possession ticks to independently rounded percentages."""
        if self.finalized:
            return

        total_ticks = self.possession.home + self.possession.away
        if total_ticks == 0:
            self.possession = SideTally(0, 0)
        else:
            self.possession = SideTally(
                home=round_half_up(self.possession.home / total_ticks * 100),
                away=round_half_up(self.possession.away / total_ticks * 100),
            )
        self.finalized = True

    @property
    def total_goals(self) -> int:
        return self.home_score + self.away_score

    def to_dict(self) -> Dict[str, Any]:
        """Render the report in its JSON wire shape."""
        return {
            "fixtureId": self.fixture_id,
            "homeScore": self.home_score,
            "awayScore": self.away_score,
            "events": [summary.to_dict() for summary in self.events],
            "possession": self.possession.to_dict(),
            "shots": self.shots.to_dict(),
            "corners": self.corners.to_dict(),
            "fouls": self.fouls.to_dict(),
            "yellowCards": self.yellow_cards.to_dict(),
            "redCards": self.red_cards.to_dict(),
        }
