"""
Regular Season Schedule Generator

Builds one team's regular season schedule:
- Opponent quotas come from the league-level QuotaTable (reciprocal)
- Game dates are placed by a randomized walk over the season window with a
  back-to-back avoidance heuristic, then compacted if the walk runs short
- Opponents are interleaved round-robin over the placed dates
- Home/away alternates per meeting and mirrors between the two teams
- A share of games is flagged for national TV

Each team's schedule is generated independently. The two copies of a game
share a deterministic event id ({year}-RS-{teamA}-{teamB}-{n}).
"""

from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Set, Tuple
import random
import logging

from league_calendar.calendar_event import CalendarEvent, create_game_event
from league_calendar.calendar_exceptions import CapacityError, ConfigurationError
from team_registry.league_structure import LeagueStructure
from .config import ScheduleConfig
from .quota_assignment import QuotaTable


class ScheduleGenerator:
    """
    Generates regular season game events for a single team.

    Randomness comes only from the injected random.Random, so a seeded rng
    reproduces the same schedule.
    """

    def __init__(
        self,
        structure: LeagueStructure,
        config: Optional[ScheduleConfig] = None,
        rng: Optional[random.Random] = None,
        season_year: Optional[int] = None,
        logger: logging.Logger = None
    ):
        """
        Initialize schedule generator.

        Args:
            structure: League conference/division layout
            config: Schedule configuration (defaults to standard 82-game quotas)
            rng: Random source; a fresh unseeded Random if omitted
            season_year: Season year for quotas and event ids; defaults to
                the year of the season window's end date
            logger: Optional logger for tracking generation progress

        Raises:
            ConfigurationError: If the configuration does not validate
        """
        self.structure = structure
        self.config = config or ScheduleConfig()
        self.rng = rng or random.Random()
        self.season_year = season_year
        self.logger = logger or logging.getLogger(__name__)

        valid, errors = self.config.validate()
        if not valid:
            raise ConfigurationError("; ".join(errors), config_key="schedule_config")

        self._quota_tables: Dict[int, QuotaTable] = {}

    def quota_table(self, season_year: int) -> QuotaTable:
        """League quota table for a season (built once per year)"""
        if season_year not in self._quota_tables:
            self._quota_tables[season_year] = QuotaTable(self.structure, self.config, season_year)
        return self._quota_tables[season_year]

    # ==================== Generation ====================

    def generate_team_schedule(
        self,
        team_id: str,
        season_start: date,
        season_end: date,
        blackout_dates: Iterable[date] = (),
        opponent_ids: Optional[Iterable[str]] = None
    ) -> List[CalendarEvent]:
        """
        Generate the regular season for one team.

        Args:
            team_id: Team whose calendar is being built
            season_start: First schedulable day (inclusive)
            season_end: End of the window (exclusive)
            blackout_dates: Days where no game may be placed (all-star break)
            opponent_ids: Opponent roster supplied by the caller, checked
                against the league structure before any game is placed

        Returns:
            One GAME event per scheduled game, in placement order

        Raises:
            ConfigurationError: Missing classification data for the team or
                an opponent, or team listed as its own opponent
            CapacityError: If the window cannot hold the quota even after
                compaction
        """
        season_year = self.season_year if self.season_year is not None else season_end.year

        self.structure.validate_team(team_id)
        if opponent_ids is not None:
            opponent_ids = list(opponent_ids)
            self.structure.validate_team(team_id, opponent_ids)
            mismatched = set(opponent_ids) ^ set(self.structure.opponents_of(team_id))
            if mismatched:
                raise ConfigurationError("opponent roster does not match the league structure",
                                         config_key=team_id, config_value=sorted(mismatched))
        quotas = self.quota_table(season_year).for_team(team_id)
        total_games = sum(quotas.values())

        self.logger.debug(f"Generating {total_games} games for {team_id} "
                          f"({season_start} to {season_end})")

        if total_games == 0:
            return []

        blackout = set(blackout_dates)
        available_days = [
            season_start + timedelta(days=offset)
            for offset in range((season_end - season_start).days)
            if season_start + timedelta(days=offset) not in blackout
        ]

        game_dates = self._place_dates(team_id, available_days, total_games)
        slots = self._interleave_opponents(quotas)

        games = []
        for game_date, (opponent_id, meeting) in zip(game_dates, slots):
            games.append(self._build_game(team_id, opponent_id, meeting, game_date, season_year))

        national_tv = sum(1 for game in games if game.is_national_tv)
        home_games = sum(1 for game in games if game.is_home_game)
        self.logger.info(
            f"Generated {len(games)} games for {team_id}: "
            f"{home_games} home, {len(games) - home_games} away, {national_tv} national TV"
        )

        return games

    # ==================== Date Placement ====================

    def acceptance_probability(self, available_days: int, total_games: int) -> float:
        """
        Daily probability of placing a game.

        Each placed game consumes on average 1/p days of waiting plus the
        avoided back-to-back day, so p is chosen to make the expected
        consumption match the window.
        """
        if total_games <= 0:
            return 0.0

        days_per_game = available_days / total_games - self.config.back_to_back_avoidance
        if days_per_game <= 1.0:
            return 1.0
        return 1.0 / days_per_game

    def _place_dates(self, team_id: str, available_days: List[date], total_games: int) -> List[date]:
        probability = self.acceptance_probability(len(available_days), total_games)

        placed: List[date] = []
        skip_next = False
        for day in available_days:
            if len(placed) == total_games:
                break
            if skip_next:
                skip_next = False
                continue
            if self.rng.random() < probability:
                placed.append(day)
                skip_next = self.rng.random() < self.config.back_to_back_avoidance

        shortfall = total_games - len(placed)
        if shortfall > 0:
            self.logger.warning(
                f"Date walk for {team_id} placed {len(placed)}/{total_games} games, "
                f"compacting {shortfall} into unused days"
            )
            placed = self._compact(placed, available_days, shortfall)

        if len(placed) < total_games:
            raise CapacityError(team_id, total_games, len(available_days))

        return sorted(placed)

    def _compact(self, placed: List[date], available_days: List[date], shortfall: int) -> List[date]:
        """Fill the shortfall from unused days, preferring days with no adjacent game"""
        taken: Set[date] = set(placed)
        unused = [day for day in available_days if day not in taken]

        for _ in range(shortfall):
            if not unused:
                break

            isolated = [
                day for day in unused
                if day - timedelta(days=1) not in taken and day + timedelta(days=1) not in taken
            ]
            day = self.rng.choice(isolated or unused)

            taken.add(day)
            unused.remove(day)

        return list(taken)

    # ==================== Opponent Assignment ====================

    def _interleave_opponents(self, quotas: Dict[str, int]) -> List[Tuple[str, int]]:
        """
        Expand the quota map into (opponent, meeting number) slots.

        Meetings are interleaved so every opponent is met once before any
        opponent is met a second time.
        """
        opponents = sorted(quotas)
        self.rng.shuffle(opponents)

        slots = []
        for meeting in range(max(quotas.values())):
            for opponent_id in opponents:
                if quotas[opponent_id] > meeting:
                    slots.append((opponent_id, meeting + 1))
        return slots

    @staticmethod
    def first_meeting_at_home(team_id: str, opponent_id: str, season_year: int) -> bool:
        """Host of the first meeting; the opposite answer for the opponent"""
        return (team_id < opponent_id) == (season_year % 2 == 0)

    @staticmethod
    def game_id(season_year: int, team_id: str, opponent_id: str, meeting: int) -> str:
        team_a, team_b = sorted((team_id, opponent_id))
        return f"{season_year}-RS-{team_a}-{team_b}-{meeting}"

    def _build_game(self, team_id: str, opponent_id: str, meeting: int,
                    game_date: date, season_year: int) -> CalendarEvent:
        first_home = self.first_meeting_at_home(team_id, opponent_id, season_year)
        is_home = first_home if meeting % 2 == 1 else not first_home

        broadcast = self.config.broadcast
        is_national_tv = self.rng.random() < broadcast.national_tv_probability
        broadcaster = self.rng.choice(broadcast.broadcasters) if is_national_tv else None

        return create_game_event(
            event_id=self.game_id(season_year, team_id, opponent_id, meeting),
            event_date=game_date,
            team_id=team_id,
            opponent_id=opponent_id,
            is_home=is_home,
            game_number=meeting,
            is_national_tv=is_national_tv,
            broadcaster=broadcaster
        )
