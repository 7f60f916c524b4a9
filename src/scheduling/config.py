"""
Configuration for the Season Schedule Generator

Centralized configuration for regular season quotas, date placement
heuristics and broadcast settings.
"""

from dataclasses import dataclass, field
from typing import List, Tuple
import json

from season.season_constants import SeasonConstants


@dataclass
class QuotaConfig:
    """Games per opponent for each tier of the league structure"""
    division_games: int = SeasonConstants.DIVISION_GAMES
    conference_upper_tier_games: int = SeasonConstants.CONFERENCE_UPPER_TIER_GAMES
    conference_lower_tier_games: int = SeasonConstants.CONFERENCE_LOWER_TIER_GAMES
    lower_tier_opponents_per_division: int = SeasonConstants.LOWER_TIER_OPPONENTS_PER_DIVISION
    inter_conference_games: int = SeasonConstants.INTER_CONFERENCE_GAMES

    def validate(self) -> List[str]:
        """Return a list of problems (empty when valid)"""
        errors = []

        for name in ('division_games', 'conference_upper_tier_games',
                     'conference_lower_tier_games', 'inter_conference_games'):
            value = getattr(self, name)
            if value < 0:
                errors.append(f"{name} cannot be negative, got {value}")

        if self.lower_tier_opponents_per_division < 0:
            errors.append("lower_tier_opponents_per_division cannot be negative")

        return errors

    def to_dict(self):
        """Convert to dictionary"""
        return {
            'division_games': self.division_games,
            'conference_upper_tier_games': self.conference_upper_tier_games,
            'conference_lower_tier_games': self.conference_lower_tier_games,
            'lower_tier_opponents_per_division': self.lower_tier_opponents_per_division,
            'inter_conference_games': self.inter_conference_games
        }


@dataclass
class BroadcastConfig:
    """National TV selection for regular season games"""
    national_tv_probability: float = SeasonConstants.NATIONAL_TV_PROBABILITY
    broadcasters: Tuple[str, ...] = SeasonConstants.BROADCASTERS

    def validate(self) -> List[str]:
        errors = []
        if not 0.0 <= self.national_tv_probability <= 1.0:
            errors.append(f"national_tv_probability must be in [0, 1], "
                          f"got {self.national_tv_probability}")
        if self.national_tv_probability > 0 and not self.broadcasters:
            errors.append("national TV games need at least one broadcaster")
        return errors


@dataclass
class ScheduleConfig:
    """Complete configuration for regular season schedule generation"""

    quotas: QuotaConfig = field(default_factory=QuotaConfig)
    broadcast: BroadcastConfig = field(default_factory=BroadcastConfig)

    # Placement heuristic
    back_to_back_avoidance: float = SeasonConstants.BACK_TO_BACK_AVOIDANCE
    all_star_break_days: int = SeasonConstants.TEAM_ALL_STAR_BREAK_DAYS

    # Generation
    parallel_generation: bool = False
    parallel_threads: int = 4

    def validate(self) -> Tuple[bool, List[str]]:
        """Validate entire configuration"""
        errors = []

        errors.extend(self.quotas.validate())
        errors.extend(self.broadcast.validate())

        if not 0.0 <= self.back_to_back_avoidance < 1.0:
            errors.append(f"back_to_back_avoidance must be in [0, 1), "
                          f"got {self.back_to_back_avoidance}")

        if self.all_star_break_days < 0:
            errors.append("all_star_break_days cannot be negative")

        if self.parallel_threads < 1:
            errors.append("Need at least 1 thread")

        return len(errors) == 0, errors

    def to_dict(self):
        return {
            'quotas': self.quotas.to_dict(),
            'broadcast': {
                'national_tv_probability': self.broadcast.national_tv_probability,
                'broadcasters': list(self.broadcast.broadcasters)
            },
            'placement': {
                'back_to_back_avoidance': self.back_to_back_avoidance,
                'all_star_break_days': self.all_star_break_days
            },
            'generation': {
                'parallel': self.parallel_generation,
                'threads': self.parallel_threads
            }
        }

    def to_json(self, filepath: str):
        """Save configuration to JSON file"""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, data) -> 'ScheduleConfig':
        config = cls()

        if 'quotas' in data:
            quota_data = data['quotas']
            defaults = QuotaConfig()
            config.quotas = QuotaConfig(
                division_games=quota_data.get('division_games', defaults.division_games),
                conference_upper_tier_games=quota_data.get(
                    'conference_upper_tier_games', defaults.conference_upper_tier_games),
                conference_lower_tier_games=quota_data.get(
                    'conference_lower_tier_games', defaults.conference_lower_tier_games),
                lower_tier_opponents_per_division=quota_data.get(
                    'lower_tier_opponents_per_division', defaults.lower_tier_opponents_per_division),
                inter_conference_games=quota_data.get(
                    'inter_conference_games', defaults.inter_conference_games)
            )

        if 'broadcast' in data:
            broadcast_data = data['broadcast']
            config.broadcast = BroadcastConfig(
                national_tv_probability=broadcast_data.get(
                    'national_tv_probability', SeasonConstants.NATIONAL_TV_PROBABILITY),
                broadcasters=tuple(broadcast_data.get('broadcasters', SeasonConstants.BROADCASTERS))
            )

        if 'placement' in data:
            placement_data = data['placement']
            config.back_to_back_avoidance = placement_data.get(
                'back_to_back_avoidance', SeasonConstants.BACK_TO_BACK_AVOIDANCE)
            config.all_star_break_days = placement_data.get(
                'all_star_break_days', SeasonConstants.TEAM_ALL_STAR_BREAK_DAYS)

        if 'generation' in data:
            generation_data = data['generation']
            config.parallel_generation = generation_data.get('parallel', False)
            config.parallel_threads = generation_data.get('threads', 4)

        return config

    @classmethod
    def from_json(cls, filepath: str) -> 'ScheduleConfig':
        """Load configuration from JSON file"""
        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def default(cls) -> 'ScheduleConfig':
        """Standard 82-game configuration"""
        return cls()


# Global default configuration
DEFAULT_CONFIG = ScheduleConfig.default()
