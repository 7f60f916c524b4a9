"""
Scheduling Module

Handles regular season schedule generation:
- League-level reciprocal opponent quotas (82 games per team)
- Randomized date placement with back-to-back avoidance and compaction
- Home/away alternation and national TV flags
"""

from .config import ScheduleConfig, QuotaConfig, BroadcastConfig, DEFAULT_CONFIG
from .quota_assignment import QuotaTable
from .schedule_generator import ScheduleGenerator

__all__ = [
    'ScheduleConfig',
    'QuotaConfig',
    'BroadcastConfig',
    'DEFAULT_CONFIG',
    'QuotaTable',
    'ScheduleGenerator'
]
