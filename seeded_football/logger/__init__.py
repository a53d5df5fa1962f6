"""
Event log analysis for seeded match simulation.
Provides PM4Py-compatible event logs for process mining analysis.
"""

from .event_logger import MatchEventLogger

__all__ = ['MatchEventLogger']
