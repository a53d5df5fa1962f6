"""
Team strength descriptors consumed by the match engine.

Teams are read-only inputs: the engine only looks at their ratings.
"""

from dataclasses import dataclass, field
from typing import Optional

from .errors import InvalidInputError


@dataclass(frozen=True)
class TeamDescriptor:
    """
    Strength profile for one side of a fixture.

    Ratings:
    - attack, midfield, defense: integer sub-ratings
    - overall: used for the home/away strength split; derived as the
      rounded mean of the sub-ratings when not given
    """
    name: str
    attack: int
    midfield: int
    defense: int
    overall: Optional[int] = field(default=None)

    def __post_init__(self):
        for rating in ("attack", "midfield", "defense"):
            self._check_rating(rating, getattr(self, rating))

        if self.overall is None:
            mean = (self.attack + self.midfield + self.defense) / 3
            object.__setattr__(self, "overall", int(mean + 0.5))
        else:
            self._check_rating("overall", self.overall)

    def _check_rating(self, rating: str, value) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInputError(f"{self.name}: {rating} rating must be an integer, got {value!r}")
        if value < 0:
            raise InvalidInputError(f"{self.name}: {rating} rating must be non-negative, got {value}")


def default_home_team() -> TeamDescriptor:
    """Reference home side used when the caller supplies no descriptors."""
    return TeamDescriptor(name="Home Team", attack=85, midfield=82, defense=80, overall=83)


def default_away_team() -> TeamDescriptor:
    """Reference away side used when the caller supplies no descriptors."""
    return TeamDescriptor(name="Away Team", attack=84, midfield=83, defense=81, overall=83)


def home_probability(home_team: TeamDescriptor, away_team: TeamDescriptor) -> float:
    """
    Share of combined overall strength held by the home side.

    Returns 0.5 when both sides are rated zero.
    """
    total_strength = home_team.overall + away_team.overall
    if total_strength == 0:
        return 0.5
    return home_team.overall / total_strength
