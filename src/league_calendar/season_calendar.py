"""
Season Calendar

One team's season: the date-ordered event timeline, the current date and
the team's progress counters.

The current phase is never stored; it is recomputed from the current date
and the team's key dates each time it is read.
"""

from __future__ import annotations
from datetime import date, timedelta
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple
import random
import threading
import logging

from .calendar_event import CalendarEvent, EventType, create_key_date_event
from .calendar_exceptions import CalendarStateException, InvalidEventException
from .event_timeline import EventTimeline
from .season_phase import SeasonPhase, TeamKeyDates, classify_team_phase

if TYPE_CHECKING:
    from playoff_system.playoff_series_builder import PlayoffSeriesBuilder
    from scheduling.config import ScheduleConfig
    from scheduling.schedule_generator import ScheduleGenerator
    from team_registry.league_structure import LeagueStructure


logger = logging.getLogger(__name__)


class SeasonCalendar:
    """
    Per-team season calendar.

    Invariants:
    - events are non-decreasing by date
    - games_played + games_remaining == total_scheduled_games
    - wins + losses == games_played

    Result recording and playoff injection are serialized by a lock so that
    one calendar has a single writer at a time.
    """

    def __init__(
        self,
        season_year: int,
        team_id: str,
        key_dates: TeamKeyDates,
        events: Iterable[CalendarEvent] = (),
        current_date: Optional[date] = None,
        wins: int = 0,
        losses: int = 0
    ):
        """
        Initialize season calendar.

        Args:
            season_year: Year the season ends (2025 for 2024-25)
            team_id: Team owning the calendar
            key_dates: The team's season boundaries
            events: Initial events, in any order
            current_date: Starting date (defaults to season start)
            wins: Games already won
            losses: Games already lost

        Raises:
            CalendarStateException: If the counters exceed the schedule
        """
        self.season_year = season_year
        self.team_id = team_id
        self.key_dates = key_dates

        self._timeline = EventTimeline(events)
        self._current_date = current_date or key_dates.season_start
        self._lock = threading.Lock()

        if wins < 0 or losses < 0:
            raise CalendarStateException("win/loss counters cannot be negative",
                                         {'wins': wins, 'losses': losses})

        self.wins = wins
        self.losses = losses
        self.games_played = wins + losses

        if self.games_played > self.total_scheduled_games:
            raise CalendarStateException(
                "more games played than scheduled",
                {'games_played': self.games_played, 'scheduled': self.total_scheduled_games}
            )

    # ==================== Factory ====================

    @classmethod
    def generate(
        cls,
        season_year: int,
        team_id: str,
        structure: LeagueStructure,
        generator: Optional[ScheduleGenerator] = None,
        key_dates: Optional[TeamKeyDates] = None,
        config: Optional[ScheduleConfig] = None,
        rng: Optional[random.Random] = None
    ) -> SeasonCalendar:
        """
        Build a team's full regular season calendar.

        Args:
            season_year: Year the season ends
            team_id: Team to build the calendar for
            structure: League conference/division layout
            generator: Schedule generator to reuse (built from structure,
                config and rng if omitted)
            key_dates: Season boundaries (defaults for season_year if omitted)
            config: Schedule configuration for a new generator
            rng: Random source for a new generator

        Returns:
            Calendar positioned at season start

        Raises:
            ConfigurationError: Bad classification data for the team
            CapacityError: The season window cannot hold the schedule
        """
        from scheduling.schedule_generator import ScheduleGenerator

        key_dates = key_dates or TeamKeyDates.for_season(season_year)
        generator = generator or ScheduleGenerator(structure, config=config, rng=rng,
                                                   season_year=season_year)

        games = generator.generate_team_schedule(
            team_id,
            key_dates.season_start,
            key_dates.regular_season_end,
            blackout_dates=key_dates.all_star_break_dates(generator.config.all_star_break_days)
        )

        calendar = cls(season_year, team_id, key_dates,
                       events=games + cls._key_date_events(season_year, team_id, key_dates))

        logger.info(f"Season calendar {season_year} for {team_id}: "
                    f"{calendar.total_scheduled_games} games, {len(calendar.events)} events")
        return calendar

    @staticmethod
    def _key_date_events(season_year: int, team_id: str,
                         key_dates: TeamKeyDates) -> List[CalendarEvent]:
        key_events = [
            (EventType.TRADE_DEADLINE, key_dates.trade_deadline, "Trade Deadline",
             "Last day to make trades", True),
            (EventType.ALL_STAR_EVENT, key_dates.all_star_weekend, "All-Star Weekend",
             "All-Star festivities", False),
            (EventType.SEASON_END, key_dates.regular_season_end, "Regular Season End",
             "Final day of the regular season", False),
            (EventType.PLAYOFFS_START, key_dates.playoffs_start, "Playoffs Start",
             "First round begins", False),
        ]

        return [
            create_key_date_event(
                event_type=event_type,
                event_date=event_date,
                title=title,
                description=description,
                is_mandatory=mandatory,
                event_id=f"{season_year}-{team_id}-{event_type.value}"
            )
            for event_type, event_date, title, description, mandatory in key_events
        ]

    # ==================== State ====================

    @property
    def current_date(self) -> date:
        return self._current_date

    @property
    def current_phase(self) -> SeasonPhase:
        return classify_team_phase(self._current_date, self.key_dates)

    @property
    def events(self) -> Tuple[CalendarEvent, ...]:
        """Read-only, date-ordered view of every event"""
        return tuple(self._timeline.get_all_events())

    @property
    def total_scheduled_games(self) -> int:
        return len(self._timeline.get_games())

    @property
    def games_remaining(self) -> int:
        return self.total_scheduled_games - self.games_played

    # ==================== Advancement ====================

    def advance_day(self) -> date:
        """Move forward one day and return the new date"""
        return self._move_to(self._current_date + timedelta(days=1))

    def advance_to_date(self, target_date: date) -> date:
        """
        Move forward to target_date.

        A target before the current date is ignored with a warning; use
        set_current_date to move backwards.
        """
        if target_date < self._current_date:
            logger.warning(f"{self.team_id}: ignoring advance to {target_date}, "
                           f"already at {self._current_date}")
            return self._current_date
        return self._move_to(target_date)

    def set_current_date(self, new_date: date) -> date:
        """Reposition the calendar (used to keep team calendars on the league date)"""
        return self._move_to(new_date)

    def advance_to_next_game(self) -> Optional[CalendarEvent]:
        """
        Advance to the next unplayed game.

        Stops early on a key-date day (trade deadline, all-star weekend,
        playoffs start) before the game so the caller can handle it.

        Returns:
            The game when its day is reached, None when stopped early or
            when no game remains
        """
        next_game = self.get_next_game()
        if next_game is None:
            return None

        stop_days = {self.key_dates.trade_deadline, self.key_dates.all_star_weekend,
                     self.key_dates.playoffs_start}

        while self._current_date < next_game.event_date:
            self.advance_day()
            if self._current_date in stop_days and self._current_date < next_game.event_date:
                return None

        return next_game

    def _move_to(self, new_date: date) -> date:
        old_phase = self.current_phase
        self._current_date = new_date
        new_phase = self.current_phase

        if new_phase != old_phase:
            logger.debug(f"{self.team_id}: {old_phase.display_name} -> "
                         f"{new_phase.display_name} on {new_date}")

        return self._current_date

    # ==================== Results ====================

    def record_game_result(self, won: bool, event_id: Optional[str] = None) -> None:
        """
        Record the outcome of one game.

        Args:
            won: Whether this team won
            event_id: Game to mark completed (optional)

        Raises:
            CalendarStateException: No games remaining, unknown or non-game
                event id, or game already completed
        """
        with self._lock:
            if self.games_remaining <= 0:
                raise CalendarStateException(
                    "no games remaining to record a result for",
                    {'team_id': self.team_id, 'games_played': self.games_played,
                     'scheduled': self.total_scheduled_games}
                )

            if event_id is not None:
                event = self._timeline.get_event_by_id(event_id)
                if event is None or not event.is_game_day:
                    raise CalendarStateException(f"no game with id {event_id}",
                                                 {'team_id': self.team_id})
                if event.is_completed:
                    raise CalendarStateException(f"game {event_id} already completed",
                                                 {'team_id': self.team_id})
                self._timeline.replace_event(event.mark_completed())

            self.games_played += 1
            if won:
                self.wins += 1
            else:
                self.losses += 1

        logger.debug(f"{self.team_id} {'won' if won else 'lost'}: "
                     f"{self.wins}-{self.losses}, {self.games_remaining} remaining")

    def add_playoff_series(
        self,
        opponent_id: str,
        playoff_round: int,
        seed: int,
        opponent_seed: int,
        has_home_court: bool,
        series_start: date,
        builder: Optional[PlayoffSeriesBuilder] = None
    ) -> List[CalendarEvent]:
        """
        Append all seven games of a playoff series.

        Returns:
            The inserted games

        Raises:
            InvalidRoundException: Round outside 1-4
            InvalidEventException: Opponent is this team, or the series is
                already on the calendar
        """
        from playoff_system.playoff_series_builder import PlayoffSeriesBuilder

        builder = builder or PlayoffSeriesBuilder(self.season_year)
        games = builder.build_series(self.team_id, opponent_id, playoff_round, seed,
                                     opponent_seed, has_home_court, series_start)

        with self._lock:
            for game in games:
                if game.event_id in self._timeline:
                    raise InvalidEventException("playoff series already scheduled",
                                                event_id=game.event_id)
            self._timeline.add_events(games)

        logger.info(f"{self.team_id}: added {builder.round_name(playoff_round)} series vs "
                    f"{opponent_id} starting {series_start}")
        return games

    # ==================== Queries ====================

    def get_event(self, event_id: str) -> Optional[CalendarEvent]:
        return self._timeline.get_event_by_id(event_id)

    def get_events_on(self, target_date: date) -> List[CalendarEvent]:
        return self._timeline.get_events_by_date(target_date)

    def get_todays_events(self) -> List[CalendarEvent]:
        return self.get_events_on(self._current_date)

    def get_todays_game(self) -> Optional[CalendarEvent]:
        return self._game_on(self._current_date)

    def _game_on(self, target_date: date) -> Optional[CalendarEvent]:
        for event in self.get_events_on(target_date):
            if event.is_game_day:
                return event
        return None

    def get_upcoming_events(self, days: int = 7) -> List[CalendarEvent]:
        """Events from today through today + days (inclusive)"""
        if days < 0:
            return []
        return self._timeline.get_events_in_range(self._current_date, self._window_end(days))

    def _window_end(self, days: int) -> date:
        # Windows reaching past the last representable date stop at date.max
        if days > (date.max - self._current_date).days:
            return date.max
        return self._current_date + timedelta(days=days)

    def get_next_game(self) -> Optional[CalendarEvent]:
        """Next unplayed game on or after the current date"""
        for event in self._timeline.get_events_from(self._current_date):
            if event.is_game_day and not event.is_completed:
                return event
        return None

    def get_remaining_games(self) -> List[CalendarEvent]:
        """Unplayed games on or after the current date"""
        return [event for event in self._timeline.get_events_from(self._current_date)
                if event.is_game_day and not event.is_completed]

    def get_games_vs_opponent(self, opponent_id: str) -> List[CalendarEvent]:
        return [event for event in self._timeline.get_games() if event.involves(opponent_id)]

    def get_month_schedule(self, month: int, year: int) -> List[CalendarEvent]:
        if not 1 <= month <= 12 or not date.min.year <= year <= date.max.year:
            return []
        first_day = date(year, month, 1)
        if month == 12:
            last_day = date(year, 12, 31)
        else:
            last_day = date(year, month + 1, 1) - timedelta(days=1)
        return self._timeline.get_events_in_range(first_day, last_day)

    def is_back_to_back(self) -> bool:
        """True when the team plays today and also played yesterday"""
        return (self.get_todays_game() is not None
                and self._current_date > date.min
                and self._game_on(self._current_date - timedelta(days=1)) is not None)

    def get_games_in_span(self, days: int) -> int:
        """Number of games from today through today + days"""
        return sum(1 for event in self.get_upcoming_events(days) if event.is_game_day)

    def get_days_until_next_game(self) -> int:
        """Days until the next unplayed game, or -1 when none remains"""
        next_game = self.get_next_game()
        if next_game is None:
            return -1
        return (next_game.event_date - self._current_date).days

    def __repr__(self) -> str:
        return (f"SeasonCalendar(team={self.team_id}, season={self.season_year}, "
                f"date={self._current_date}, record={self.wins}-{self.losses})")
