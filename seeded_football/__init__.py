"""
Seeded Football Simulation Package

A deterministic, seed-reproducible football match simulator.
"""

__version__ = "1.0.0"

from .engine.match import MatchEngine, SimulationResult, simulate_match
from .engine.prng import SeededGenerator, parse_seed
from .engine.team import TeamDescriptor
from .scripts.run_sim import simulate_matches

__all__ = [
    "MatchEngine", "SimulationResult", "simulate_match",
    "SeededGenerator", "parse_seed", "TeamDescriptor", "simulate_matches",
]
