"""
Playoff Series Builder

Creates the seven game events of a best-of-seven playoff series in the
2-2-1-1-1 home court format.

All seven games are always produced. Games that turn out to be unnecessary
are left to the caller; the calendar only knows the series dates.
"""

from datetime import date, timedelta
from typing import List
import logging

from league_calendar.calendar_event import CalendarEvent, create_game_event
from league_calendar.calendar_exceptions import InvalidEventException
from season.season_constants import SeasonConstants
from .playoff_exceptions import InvalidRoundException, InvalidSeedingException


logger = logging.getLogger(__name__)


def series_day_offsets() -> List[int]:
    """
    Days after series start for each game.

    Games are two days apart with one extra rest day after games 2 and 4:
    0, 2, 5, 7, 10, 12, 14.
    """
    offsets = []
    day = 0
    for game_number in range(1, SeasonConstants.GAMES_PER_SERIES + 1):
        offsets.append(day)
        day += SeasonConstants.SERIES_GAME_SPACING_DAYS
        if game_number in SeasonConstants.SERIES_REST_AFTER_GAMES:
            day += 1
    return offsets


class PlayoffSeriesBuilder:
    """
    Builds playoff series game events from one team's point of view.

    Works in conjunction with the calendars:
    - PlayoffSeriesBuilder: Pure construction (dates, home court, ids)
    - SeasonCalendar / LeagueCalendar: Side effects (insertion, counters)
    """

    def __init__(self, season_year: int):
        """
        Initialize series builder.

        Args:
            season_year: Season year used in event ids
        """
        self.season_year = season_year

    @staticmethod
    def _check_round(playoff_round: int) -> int:
        if not isinstance(playoff_round, int) or not 1 <= playoff_round <= SeasonConstants.PLAYOFF_ROUNDS:
            raise InvalidRoundException(playoff_round)
        return playoff_round

    @staticmethod
    def round_name(playoff_round: int) -> str:
        """
        Display name of a playoff round.

        Raises:
            InvalidRoundException: If round is outside 1-4
        """
        return SeasonConstants.ROUND_NAMES[PlayoffSeriesBuilder._check_round(playoff_round)]

    @staticmethod
    def broadcaster_for_round(playoff_round: int) -> str:
        """Finals on ABC, conference rounds on ESPN/TNT, first round on NBA TV/TNT"""
        return SeasonConstants.ROUND_BROADCASTERS[PlayoffSeriesBuilder._check_round(playoff_round)]

    def series_game_id(self, playoff_round: int, team_id: str, opponent_id: str,
                       game_number: int) -> str:
        team_a, team_b = sorted((team_id, opponent_id))
        return f"{self.season_year}-PO-R{playoff_round}-{team_a}-{team_b}-G{game_number}"

    def build_series(
        self,
        team_id: str,
        opponent_id: str,
        playoff_round: int,
        seed: int,
        opponent_seed: int,
        has_home_court: bool,
        series_start: date
    ) -> List[CalendarEvent]:
        """
        Build all seven games of a series.

        Args:
            team_id: Team owning the calendar
            opponent_id: Series opponent
            playoff_round: 1-4
            seed: team_id's seed
            opponent_seed: Opponent's seed
            has_home_court: Whether team_id hosts games 1, 2, 5 and 7
            series_start: Date of game 1

        Returns:
            Seven GAME events in game order

        Raises:
            InvalidRoundException: If round is outside 1-4
            InvalidSeedingException: If a seed is below 1
            InvalidEventException: If opponent is the team itself
        """
        round_name = self.round_name(playoff_round)
        broadcaster = self.broadcaster_for_round(playoff_round)

        if opponent_id == team_id:
            raise InvalidEventException(f"team {team_id} cannot face itself in a playoff series")

        if not isinstance(seed, int) or not isinstance(opponent_seed, int) \
                or seed < 1 or opponent_seed < 1:
            raise InvalidSeedingException(
                f"Seeds must be positive integers for {team_id} vs {opponent_id}",
                seed=seed,
                opponent_seed=opponent_seed
            )

        games = []
        for game_number, (pattern, offset) in enumerate(
                zip(SeasonConstants.HOME_COURT_PATTERN, series_day_offsets()), start=1):
            is_home = (pattern == 1) == has_home_court

            games.append(create_game_event(
                event_id=self.series_game_id(playoff_round, team_id, opponent_id, game_number),
                event_date=series_start + timedelta(days=offset),
                team_id=team_id,
                opponent_id=opponent_id,
                is_home=is_home,
                title=f"{round_name} - Game {game_number}",
                description=f"#{seed} vs #{opponent_seed}",
                is_playoff_game=True,
                playoff_round=playoff_round,
                game_number=game_number,
                is_national_tv=True,
                broadcaster=broadcaster
            ))

        logger.debug(f"Built {round_name} series {team_id} (#{seed}) vs {opponent_id} "
                     f"(#{opponent_seed}) starting {series_start}")

        return games
