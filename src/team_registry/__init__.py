"""
Team Registry Module

League structure (team -> conference/division) consumed by schedule generation.
"""

from .league_structure import LeagueStructure, TeamInfo, DEFAULT_TEAMS_FILE

__all__ = [
    'LeagueStructure',
    'TeamInfo',
    'DEFAULT_TEAMS_FILE'
]
