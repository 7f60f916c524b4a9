"""
Playoff System

Best-of-seven playoff series construction for the season calendar.
"""

from .playoff_series_builder import PlayoffSeriesBuilder, series_day_offsets
from .playoff_exceptions import (
    PlayoffException,
    InvalidRoundException,
    InvalidSeedingException,
    PlayoffSchedulingException,
    ExceptionSeverity,
    RecoveryStrategy
)

__all__ = [
    'PlayoffSeriesBuilder',
    'series_day_offsets',
    'PlayoffException',
    'InvalidRoundException',
    'InvalidSeedingException',
    'PlayoffSchedulingException',
    'ExceptionSeverity',
    'RecoveryStrategy',
]
