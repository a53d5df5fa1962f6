"""
Micro-event model for the seeded match engine.

Event types, team sides and the base event-probability table.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple


class EventType(Enum):
    """Atomic in-match occurrences, in probability-table order."""
    POSSESSION = "possession"
    SHOT = "shot"
    PASS = "pass"
    TACKLE = "tackle"
    FOUL = "foul"
    CORNER = "corner"
    YELLOW_CARD = "yellowCard"
    RED_CARD = "redCard"
    GOAL = "goal"


class TeamSide(Enum):
    """Which side of the fixture an event belongs to."""
    HOME = "Home"
    AWAY = "Away"

    @property
    def team_id(self) -> str:
        return HOME_TEAM_ID if self is TeamSide.HOME else AWAY_TEAM_ID


HOME_TEAM_ID = "club-1"
AWAY_TEAM_ID = "club-2"

# Ordered (category, weight) pairs. Normalization and selection both walk
# this tuple front to back.
BASE_EVENT_PROBABILITIES: Tuple[Tuple[EventType, float], ...] = (
    (EventType.POSSESSION, 0.5),
    (EventType.SHOT, 0.2),
    (EventType.PASS, 0.2),
    (EventType.TACKLE, 0.05),
    (EventType.FOUL, 0.03),
    (EventType.CORNER, 0.02),
    (EventType.YELLOW_CARD, 0.01),
    (EventType.RED_CARD, 0.005),
    (EventType.GOAL, 0.002),
)

# Applied whichever way the strength draw falls
STRENGTH_MULTIPLIERS: Dict[EventType, float] = {
    EventType.SHOT: 1.2,
    EventType.GOAL: 1.5,
    EventType.CORNER: 1.3,
}


@dataclass(frozen=True)
class MicroEvent:
    """
    Single in-match occurrence.

    Immutable once created; appended to the event log in strict
    minute-then-sequence order.
    """
    fixture_id: str
    timestamp: int  # seconds since kickoff, minute * 60 + [0, 59]
    sequence_index: int  # position within its minute
    event_type: EventType
    team_side: TeamSide
    player_index: int  # squad slot 0-22
    x: float  # unit pitch coordinates
    y: float

    @property
    def minute(self) -> int:
        return self.timestamp // 60

    @property
    def team_id(self) -> str:
        return self.team_side.team_id

    @property
    def player_id(self) -> str:
        return f"player-{self.player_index}"

    def to_dict(self) -> Dict[str, Any]:
        """Render the event in its JSON wire shape."""
        return {
            "fixtureId": self.fixture_id,
            "timestamp": self.timestamp,
            "seedIndex": self.sequence_index,
            "eventType": self.event_type.value,
            "teamId": self.team_id,
            "playerId": self.player_id,
            "x": self.x,
            "y": self.y,
            "meta": {},
        }
