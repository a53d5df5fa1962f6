"""
Pitch geometry for event-log analysis.

Maps the engine's unit-square coordinates onto a standard pitch and
team-relative zones.
"""

import numpy as np
from dataclasses import dataclass

from .events import TeamSide


@dataclass(frozen=True)
class Position:
    """2D position on the football pitch."""
    x: float  # 0-105 meters (goal line to goal line)
    y: float  # 0-68 meters (touchline to touchline)

    @classmethod
    def from_unit(cls, x: float, y: float) -> 'Position':
        """Scale unit-square coordinates to pitch meters."""
        return cls(
            float(np.clip(x, 0.0, 1.0) * PitchZones.LENGTH),
            float(np.clip(y, 0.0, 1.0) * PitchZones.WIDTH),
        )


class PitchZones:
    """
    Tactical thirds of the pitch.

    Home attacks towards x = LENGTH, away towards x = 0.
    """

    # Pitch dimensions (FIFA standard)
    LENGTH = 105.0  # meters
    WIDTH = 68.0    # meters

    # Zone boundaries (x-coordinates)
    DEFENSIVE_THIRD = 35.0
    MIDDLE_THIRD = 70.0

    @classmethod
    def get_zone(cls, position: Position, side: TeamSide = TeamSide.HOME) -> str:
        """
        Determine team-relative zone for a position.

        Returns:
            str: Zone identifier ('def', 'mid', 'att')
        """
        x = position.x if side is TeamSide.HOME else cls.LENGTH - position.x

        if x <= cls.DEFENSIVE_THIRD:
            return 'def'
        elif x <= cls.MIDDLE_THIRD:
            return 'mid'
        else:
            return 'att'
