"""
Seeded football simulation engine components.

This module contains the deterministic core:
- Seeded pseudo-random generator
- Team strength descriptors
- Micro-event model and match report folding
- Main minute-stepped match engine
"""

from .errors import SimulationError, InvalidInputError, InvalidSeedError
from .prng import SeededGenerator, parse_seed
from .team import TeamDescriptor, default_home_team, default_away_team
from .events import EventType, TeamSide, MicroEvent
from .report import MatchReport, SideTally, EventSummary
from .pitch import Position, PitchZones
from .match import MatchEngine, SimulationResult, simulate_match

__all__ = [
    'SimulationError', 'InvalidInputError', 'InvalidSeedError',
    'SeededGenerator', 'parse_seed',
    'TeamDescriptor', 'default_home_team', 'default_away_team',
    'EventType', 'TeamSide', 'MicroEvent',
    'MatchReport', 'SideTally', 'EventSummary',
    'Position', 'PitchZones',
    'MatchEngine', 'SimulationResult', 'simulate_match',
]
