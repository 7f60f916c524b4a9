"""
Quota Assignment

League-level table of how many regular season games each pair of teams plays.

Quotas are computed once for the whole league as a function of the unordered
pair, so both teams of a pair always agree on their game count:

- division rivals play config.division_games
- opposite conference teams play config.inter_conference_games
- same conference, different division teams play either the upper tier
  (4) or lower tier (3) count, chosen by a rotation between each pair of
  divisions that shifts with the season year

In a standard 30-team league every team ends up with 6 upper-tier and
4 lower-tier conference opponents: 16 + 24 + 12 + 30 = 82 games.
"""

from itertools import combinations
from typing import Dict, FrozenSet, List, Set
import logging

from league_calendar.calendar_exceptions import ConfigurationError
from team_registry.league_structure import LeagueStructure
from .config import QuotaConfig, ScheduleConfig


logger = logging.getLogger(__name__)


class QuotaTable:
    """Reciprocal games-per-pair table for one league season"""

    def __init__(self, structure: LeagueStructure, config: ScheduleConfig = None,
                 season_year: int = 0):
        """
        Build the table.

        Args:
            structure: League conference/division layout
            config: Schedule configuration (defaults to the standard quotas)
            season_year: Season year, shifts the lower-tier rotation

        Raises:
            ConfigurationError: If divisions in one conference differ in size
                or the lower-tier opponent count exceeds a division's size
        """
        self.structure = structure
        self.quotas: QuotaConfig = (config or ScheduleConfig()).quotas
        self.season_year = season_year

        self._pair_games: Dict[FrozenSet[str], int] = {}
        self._lower_tier_pairs: Set[FrozenSet[str]] = set()
        self._build()

        logger.debug(f"Quota table built for {len(structure)} teams, season {season_year}")

    def _build(self):
        team_ids = self.structure.team_ids

        for team_a, team_b in combinations(team_ids, 2):
            info_a = self.structure.get_team(team_a)
            info_b = self.structure.get_team(team_b)

            if info_a.division == info_b.division:
                games = self.quotas.division_games
            elif info_a.conference != info_b.conference:
                games = self.quotas.inter_conference_games
            else:
                games = self.quotas.conference_upper_tier_games

            self._pair_games[frozenset((team_a, team_b))] = games

        for conference in self.structure.conferences:
            self._apply_lower_tier_rotation(conference)

    def _apply_lower_tier_rotation(self, conference: str):
        divisions = self.structure.divisions_in_conference(conference)
        if len(divisions) < 2:
            return

        rosters = {division: self.structure.teams_in_division(division) for division in divisions}
        sizes = {len(roster) for roster in rosters.values()}
        if len(sizes) != 1:
            raise ConfigurationError(
                f"divisions in the {conference} conference have unequal sizes",
                config_key=conference,
                config_value={division: len(roster) for division, roster in rosters.items()}
            )

        size = sizes.pop()
        lower_tier = self.quotas.lower_tier_opponents_per_division
        if lower_tier > size:
            raise ConfigurationError(
                "lower tier opponents per division exceeds division size",
                config_key='lower_tier_opponents_per_division',
                config_value=lower_tier
            )

        for pair_index, (first, second) in enumerate(combinations(divisions, 2)):
            offset = (self.season_year + pair_index) % size
            for i, team_i in enumerate(rosters[first]):
                for j, team_j in enumerate(rosters[second]):
                    if (j - i - offset) % size < lower_tier:
                        pair = frozenset((team_i, team_j))
                        self._pair_games[pair] = self.quotas.conference_lower_tier_games
                        self._lower_tier_pairs.add(pair)

    # ==================== Queries ====================

    def games_between(self, team_a: str, team_b: str) -> int:
        """Games team_a and team_b play against each other (order-independent)"""
        if team_a == team_b:
            raise ConfigurationError("team listed as its own opponent", config_key=team_a)
        try:
            return self._pair_games[frozenset((team_a, team_b))]
        except KeyError:
            missing = team_a if team_a not in self.structure else team_b
            raise ConfigurationError("conference/division lookup missing for team",
                                     config_key=missing) from None

    def for_team(self, team_id: str) -> Dict[str, int]:
        """Opponent -> games map for one team (zero-game opponents omitted)"""
        self.structure.get_team(team_id)

        result = {}
        for opponent_id in self.structure.opponents_of(team_id):
            games = self._pair_games[frozenset((team_id, opponent_id))]
            if games > 0:
                result[opponent_id] = games
        return result

    def total_games(self, team_id: str) -> int:
        return sum(self.for_team(team_id).values())

    def lower_tier_opponents(self, team_id: str) -> List[str]:
        """Conference opponents met in the lower tier this season"""
        return [opponent_id for opponent_id in self.structure.conference_opponents(team_id)
                if frozenset((team_id, opponent_id)) in self._lower_tier_pairs]

    def as_dict(self) -> Dict[str, Dict[str, int]]:
        return {team_id: self.for_team(team_id) for team_id in self.structure.team_ids}
