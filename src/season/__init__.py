"""
Season Constants

Game counts, quota sizes, playoff format and default key dates shared by
the calendar, scheduling and playoff packages.
"""

from .season_constants import SeasonConstants

__all__ = ['SeasonConstants']
