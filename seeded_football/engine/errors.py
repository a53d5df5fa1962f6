"""
Error types for the seeded match simulator.

Input is validated before a simulation starts; the engine itself never fails.
"""


class SimulationError(Exception):
    """Base class for all errors raised by the simulator package."""


class InvalidInputError(SimulationError, ValueError):
    """Caller supplied input that cannot be simulated."""


class InvalidSeedError(InvalidInputError):
    """Seed is not convertible to an unsigned 64-bit integer."""
