"""
Constants package

Contains team identifier constants used throughout the calendar system.
"""

from .team_ids import TeamIDs

__all__ = ['TeamIDs']
