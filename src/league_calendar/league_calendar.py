"""
League Calendar

League-wide season calendar: the twelve key dates of a league year, the
current league date and one SeasonCalendar per team.

Day advancement is atomic and non-reentrant. A day advance moves the league
date and every team calendar together, or none of them.
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta
from typing import TYPE_CHECKING, Callable, Dict, List, Optional
import random
import threading
import logging

from .calendar_event import CalendarEvent
from .calendar_exceptions import CalendarStateException, ConfigurationError
from .season_calendar import SeasonCalendar
from .season_phase import LeagueKeyDates, SeasonPhase, classify_league_phase

if TYPE_CHECKING:
    from scheduling.config import ScheduleConfig
    from team_registry.league_structure import LeagueStructure


logger = logging.getLogger(__name__)

PhaseListener = Callable[[SeasonPhase, SeasonPhase], None]


class LeagueCalendar:
    """
    League calendar owning the team id -> SeasonCalendar map.

    Team calendars always sit on the league date once attached.
    """

    def __init__(
        self,
        season_year: int,
        key_dates: LeagueKeyDates,
        current_date: Optional[date] = None
    ):
        """
        Initialize league calendar.

        Args:
            season_year: Year the season ends (2025 for 2024-25)
            key_dates: League boundaries for the year
            current_date: Starting date (defaults to the draft)
        """
        self.season_year = season_year
        self.key_dates = key_dates
        self._current_date = current_date or key_dates.draft
        self._team_calendars: Dict[str, SeasonCalendar] = {}

        self._advance_lock = threading.Lock()
        self._listener_lock = threading.Lock()
        self._listeners: List[PhaseListener] = []

    @classmethod
    def create_for_season(cls, season_year: int,
                          key_dates: Optional[LeagueKeyDates] = None) -> LeagueCalendar:
        """League calendar for a season, positioned at the draft"""
        key_dates = key_dates or LeagueKeyDates.for_season(season_year)
        calendar = cls(season_year, key_dates)
        logger.info(f"League calendar created for {season_year - 1}-{str(season_year)[-2:]} "
                    f"season, starting {calendar.current_date} ({calendar.current_phase.display_name})")
        return calendar

    # ==================== State ====================

    @property
    def current_date(self) -> date:
        return self._current_date

    @property
    def current_phase(self) -> SeasonPhase:
        return classify_league_phase(self._current_date, self.key_dates)

    @property
    def team_ids(self) -> List[str]:
        return sorted(self._team_calendars)

    @property
    def team_calendars(self) -> Dict[str, SeasonCalendar]:
        """Copy of the team id -> calendar map"""
        return dict(self._team_calendars)

    def get_phase_for_date(self, target_date: date) -> SeasonPhase:
        return classify_league_phase(target_date, self.key_dates)

    def get_days_until(self, phase: SeasonPhase) -> int:
        """
        Days from the current date to the start of a phase.

        Negative once the phase boundary has passed; 0 for OFFSEASON, which
        has no single start boundary.
        """
        if phase is SeasonPhase.OFFSEASON:
            return 0
        return (self.key_dates.boundary_for(phase) - self._current_date).days

    # ==================== Team Calendars ====================

    def add_team_calendar(self, calendar: SeasonCalendar) -> None:
        """
        Attach a team calendar and move it onto the league date.

        Raises:
            ConfigurationError: Team already has a calendar, or the calendar
                belongs to another season
        """
        if calendar.team_id in self._team_calendars:
            raise ConfigurationError("team already has a calendar", config_key=calendar.team_id)
        if calendar.season_year != self.season_year:
            raise ConfigurationError("calendar belongs to another season",
                                     config_key=calendar.team_id,
                                     config_value=calendar.season_year)

        calendar.set_current_date(self._current_date)
        self._team_calendars[calendar.team_id] = calendar

    def get_team_calendar(self, team_id: str) -> Optional[SeasonCalendar]:
        return self._team_calendars.get(team_id)

    def generate_team_calendars(
        self,
        structure: LeagueStructure,
        config: Optional[ScheduleConfig] = None,
        seed: Optional[int] = None,
        parallel: Optional[bool] = None,
        max_workers: Optional[int] = None
    ) -> Dict[str, SeasonCalendar]:
        """
        Generate and attach a calendar for every team in the league.

        Each team gets its own random.Random seeded from (seed, team_id), so a
        seeded run is reproducible whether or not it runs in parallel.

        Args:
            structure: League conference/division layout
            config: Schedule configuration
            seed: Base seed (unseeded when None)
            parallel: Generate in a thread pool (config.parallel_generation
                when None)
            max_workers: Thread pool size (config.parallel_threads when None)

        Returns:
            team id -> generated calendar

        Raises:
            ConfigurationError: A team already has a calendar, or bad
                classification data
            CapacityError: A season window cannot hold a schedule
        """
        from scheduling.config import DEFAULT_CONFIG
        from scheduling.schedule_generator import ScheduleGenerator

        settings = config or DEFAULT_CONFIG
        if parallel is None:
            parallel = settings.parallel_generation
        if max_workers is None:
            max_workers = settings.parallel_threads

        existing = [team_id for team_id in structure.team_ids if team_id in self._team_calendars]
        if existing:
            raise ConfigurationError("teams already have calendars", config_key=existing[0],
                                     config_value=len(existing))

        team_key_dates = self.key_dates.team_key_dates()

        def build(team_id: str) -> SeasonCalendar:
            rng = random.Random(f"{seed}:{team_id}") if seed is not None else random.Random()
            generator = ScheduleGenerator(structure, config=config, rng=rng,
                                          season_year=self.season_year)
            return SeasonCalendar.generate(self.season_year, team_id, structure,
                                           generator=generator, key_dates=team_key_dates)

        logger.info(f"Generating {len(structure)} team calendars for {self.season_year} "
                    f"({'parallel, ' + str(max_workers) + ' workers' if parallel else 'sequential'})")

        if parallel:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                calendars = list(executor.map(build, structure.team_ids))
        else:
            calendars = [build(team_id) for team_id in structure.team_ids]

        for calendar in calendars:
            self.add_team_calendar(calendar)

        return {calendar.team_id: calendar for calendar in calendars}

    # ==================== Advancement ====================

    def advance_day(self) -> date:
        """
        Advance the league and every team calendar by one day.

        Raises:
            CalendarStateException: If another advance is already running
        """
        if not self._advance_lock.acquire(blocking=False):
            raise CalendarStateException("day advancement already in progress",
                                         {'current_date': self._current_date})

        try:
            old_date = self._current_date
            old_phase = self.current_phase
            new_date = old_date + timedelta(days=1)

            moved: List[SeasonCalendar] = []
            try:
                for calendar in self._team_calendars.values():
                    calendar.set_current_date(new_date)
                    moved.append(calendar)
            except Exception:
                for calendar in moved:
                    calendar.set_current_date(old_date)
                raise

            self._current_date = new_date
            new_phase = self.current_phase
        finally:
            self._advance_lock.release()

        if new_phase != old_phase:
            logger.info(f"League phase changed: {old_phase.display_name} -> "
                        f"{new_phase.display_name} on {new_date}")
            self._notify_listeners(old_phase, new_phase)

        return new_date

    def advance_to_date(self, target_date: date) -> date:
        """Advance day by day to target_date; a past target is ignored with a warning"""
        if target_date < self._current_date:
            logger.warning(f"Ignoring league advance to {target_date}, "
                           f"already at {self._current_date}")
            return self._current_date

        while self._current_date < target_date:
            self.advance_day()
        return self._current_date

    # ==================== Phase Listeners ====================

    def add_phase_listener(self, listener: PhaseListener) -> None:
        """Register a callback (old_phase, new_phase) for league phase changes"""
        with self._listener_lock:
            self._listeners.append(listener)

    def remove_phase_listener(self, listener: PhaseListener) -> bool:
        with self._listener_lock:
            if listener in self._listeners:
                self._listeners.remove(listener)
                return True
            return False

    def _notify_listeners(self, old_phase: SeasonPhase, new_phase: SeasonPhase) -> None:
        # Copy listeners outside lock to prevent deadlocks
        with self._listener_lock:
            listeners = self._listeners.copy()

        for listener in listeners:
            try:
                listener(old_phase, new_phase)
            except Exception:
                logger.exception(f"Phase listener failed on {old_phase.value} -> {new_phase.value}")

    # ==================== Results and Playoffs ====================

    def record_game_result(self, team_id: str, won: bool, event_id: Optional[str] = None) -> None:
        """
        Record a result against one team's own copy of a game.

        Regular season copies of a game are dated by each team's own
        schedule, so each team records its copy when its calendar reaches it.

        Raises:
            CalendarStateException: Team has no calendar, or its calendar
                rejects the result
        """
        calendar = self._team_calendars.get(team_id)
        if calendar is None:
            raise CalendarStateException(f"{team_id} has no season calendar")
        calendar.record_game_result(won, event_id)

    def record_playoff_result(self, event_id: str, winning_team_id: str) -> None:
        """
        Apply a playoff game's result to both teams' calendars.

        Both copies of a series game share one date, so one call completes
        both. Both calendars are checked before either is updated.

        Raises:
            CalendarStateException: Unknown or regular season game, winner
                not in the game, a team calendar missing the game, or game
                already completed
        """
        game = self._find_game(event_id)
        if game is None:
            raise CalendarStateException(f"no game with id {event_id}")
        if not game.is_playoff_game:
            raise CalendarStateException(f"{event_id} is a regular season game; "
                                         f"record it per team")

        teams = (game.home_team_id, game.away_team_id)
        if winning_team_id not in teams:
            raise CalendarStateException(f"{winning_team_id} did not play in {event_id}",
                                         {'home': teams[0], 'away': teams[1]})

        calendars = []
        for team_id in teams:
            calendar = self._team_calendars.get(team_id)
            event = calendar.get_event(event_id) if calendar is not None else None
            if event is None:
                raise CalendarStateException(f"{team_id} calendar has no game {event_id}")
            if event.is_completed:
                raise CalendarStateException(f"game {event_id} already completed",
                                             {'team_id': team_id})
            if calendar.games_remaining <= 0:
                raise CalendarStateException("no games remaining to record a result for",
                                             {'team_id': team_id})
            calendars.append(calendar)

        for calendar in calendars:
            calendar.record_game_result(calendar.team_id == winning_team_id, event_id)

        logger.debug(f"Recorded {event_id}: {winning_team_id} won")

    def _find_game(self, event_id: str) -> Optional[CalendarEvent]:
        for calendar in self._team_calendars.values():
            event = calendar.get_event(event_id)
            if event is not None and event.is_game_day:
                return event
        return None

    def add_playoff_series(
        self,
        higher_seed_team: str,
        lower_seed_team: str,
        playoff_round: int,
        higher_seed: int,
        lower_seed: int,
        series_start: date
    ) -> Dict[str, List[CalendarEvent]]:
        """
        Add a playoff series to both teams' calendars.

        The higher seed (lower seed number) holds home court. Equal seeds,
        as in the Finals, give home court to higher_seed_team.

        Returns:
            team id -> the seven games inserted into that team's calendar

        Raises:
            PlayoffSchedulingException: A team has no calendar, or the
                series is already scheduled
            InvalidSeedingException: higher_seed ranks below lower_seed
            InvalidRoundException: Round outside 1-4
        """
        from playoff_system.playoff_exceptions import (
            InvalidSeedingException, PlayoffSchedulingException
        )
        from playoff_system.playoff_series_builder import PlayoffSeriesBuilder

        if higher_seed > lower_seed:
            raise InvalidSeedingException(
                f"{higher_seed_team} is listed as the higher seed but ranks below {lower_seed_team}",
                seed=higher_seed,
                opponent_seed=lower_seed
            )

        builder = PlayoffSeriesBuilder(self.season_year)
        round_name = builder.round_name(playoff_round)
        first_game_id = builder.series_game_id(playoff_round, higher_seed_team, lower_seed_team, 1)

        matchup = ((higher_seed_team, lower_seed_team, higher_seed, lower_seed, True),
                   (lower_seed_team, higher_seed_team, lower_seed, higher_seed, False))

        for team_id, *_ in matchup:
            calendar = self._team_calendars.get(team_id)
            if calendar is None:
                raise PlayoffSchedulingException(f"{team_id} has no season calendar",
                                                 playoff_round=playoff_round,
                                                 operation="add_playoff_series")
            if calendar.get_event(first_game_id) is not None:
                raise PlayoffSchedulingException(f"{round_name} series already scheduled for {team_id}",
                                                 playoff_round=playoff_round,
                                                 operation="add_playoff_series")

        added = {}
        for team_id, opponent_id, seed, opponent_seed, has_home_court in matchup:
            added[team_id] = self._team_calendars[team_id].add_playoff_series(
                opponent_id, playoff_round, seed, opponent_seed, has_home_court,
                series_start, builder=builder
            )

        logger.info(f"{round_name}: #{higher_seed} {higher_seed_team} vs "
                    f"#{lower_seed} {lower_seed_team} from {series_start}")
        return added

    def __repr__(self) -> str:
        return (f"LeagueCalendar(season={self.season_year}, date={self._current_date}, "
                f"phase={self.current_phase.value}, teams={len(self._team_calendars)})")
