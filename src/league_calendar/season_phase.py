"""
Season Phase

Date-driven season phase classification. Phases are a pure function of the
current date and a set of key boundary dates; nothing here holds state.

Boundaries are half-open and checked in a fixed priority order so that the
short windows (trade deadline day, all-star break) win over the broad
regular season and offseason ranges.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from datetime import date, timedelta
from enum import Enum
from typing import Dict, Tuple

from season.season_constants import SeasonConstants


class SeasonPhase(Enum):
    """Named segments of the league year."""
    OFFSEASON = "offseason"
    DRAFT = "draft"
    FREE_AGENCY = "free_agency"
    SUMMER_LEAGUE = "summer_league"
    TRAINING_CAMP = "training_camp"
    PRESEASON = "preseason"
    REGULAR_SEASON = "regular_season"
    ALL_STAR_BREAK = "all_star_break"
    TRADE_DEADLINE = "trade_deadline"
    PLAYOFFS = "playoffs"
    FINALS = "finals"
    CHAMPIONSHIP_CELEBRATION = "championship_celebration"

    @classmethod
    def from_string(cls, value: str) -> SeasonPhase:
        """
        Convert string to enum (case-insensitive).

        Accepts 'regular_season', 'REGULAR_SEASON' and 'Regular Season'.

        Raises:
            ValueError: If string doesn't match any valid phase
        """
        try:
            return cls(value.lower())
        except ValueError:
            pass

        normalized = value.upper().replace(' ', '_').replace('-', '_')
        try:
            return cls[normalized]
        except KeyError:
            raise ValueError(
                f"Invalid season phase: '{value}'. "
                f"Valid values: {[p.value for p in cls]}"
            )

    @property
    def display_name(self) -> str:
        """Human-readable name, e.g. "All-Star Break"."""
        if self is SeasonPhase.ALL_STAR_BREAK:
            return "All-Star Break"
        return self.value.replace('_', ' ').title()

    @property
    def season_order(self) -> int:
        """
        Rank of this phase in the canonical season ordering.

        The all-star break and trade deadline sit inside the regular season,
        so the three share a rank.
        """
        return _SEASON_ORDER[self]

    @property
    def is_in_season(self) -> bool:
        return self.season_order == _SEASON_ORDER[SeasonPhase.REGULAR_SEASON]


_SEASON_ORDER: Dict[SeasonPhase, int] = {
    SeasonPhase.OFFSEASON: 0,
    SeasonPhase.DRAFT: 1,
    SeasonPhase.FREE_AGENCY: 2,
    SeasonPhase.SUMMER_LEAGUE: 3,
    SeasonPhase.TRAINING_CAMP: 4,
    SeasonPhase.PRESEASON: 5,
    SeasonPhase.REGULAR_SEASON: 6,
    SeasonPhase.ALL_STAR_BREAK: 6,
    SeasonPhase.TRADE_DEADLINE: 6,
    SeasonPhase.PLAYOFFS: 7,
    SeasonPhase.FINALS: 8,
    SeasonPhase.CHAMPIONSHIP_CELEBRATION: 9,
}


def _key_date(season_year: int, offset_month_day: Tuple[int, int, int]) -> date:
    year_offset, month, day = offset_month_day
    return date(season_year + year_offset, month, day)


@dataclass(frozen=True)
class TeamKeyDates:
    """The five boundaries a team calendar classifies against."""
    season_start: date
    all_star_weekend: date
    trade_deadline: date
    regular_season_end: date
    playoffs_start: date

    @classmethod
    def for_season(cls, season_year: int) -> TeamKeyDates:
        """Default boundaries for the season ending in season_year."""
        return cls(
            season_start=_key_date(season_year, SeasonConstants.REGULAR_SEASON_START),
            all_star_weekend=_key_date(season_year, SeasonConstants.ALL_STAR_WEEKEND),
            trade_deadline=_key_date(season_year, SeasonConstants.TRADE_DEADLINE),
            regular_season_end=_key_date(season_year, SeasonConstants.REGULAR_SEASON_END),
            playoffs_start=_key_date(season_year, SeasonConstants.PLAYOFFS_START),
        )

    def all_star_break_dates(self, days: int = SeasonConstants.TEAM_ALL_STAR_BREAK_DAYS) -> Tuple[date, ...]:
        """Days of the team-level all-star break window."""
        return tuple(self.all_star_weekend + timedelta(days=offset) for offset in range(days))

    def to_dict(self) -> Dict[str, str]:
        return {key: value.isoformat() for key, value in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> TeamKeyDates:
        return cls(**{key: date.fromisoformat(value) for key, value in data.items()})


@dataclass(frozen=True)
class LeagueKeyDates:
    """League-wide boundaries for one league year."""
    draft: date
    free_agency_start: date
    summer_league_start: date
    summer_league_end: date
    training_camp_start: date
    preseason_start: date
    regular_season_start: date
    all_star_weekend: date
    trade_deadline: date
    regular_season_end: date
    playoffs_start: date
    finals_start: date
    championship_celebration: date

    @classmethod
    def for_season(cls, season_year: int) -> LeagueKeyDates:
        """Default boundaries for the league year ending in season_year."""
        return cls(
            draft=_key_date(season_year, SeasonConstants.DRAFT_DATE),
            free_agency_start=_key_date(season_year, SeasonConstants.FREE_AGENCY_START),
            summer_league_start=_key_date(season_year, SeasonConstants.SUMMER_LEAGUE_START),
            summer_league_end=_key_date(season_year, SeasonConstants.SUMMER_LEAGUE_END),
            training_camp_start=_key_date(season_year, SeasonConstants.TRAINING_CAMP_START),
            preseason_start=_key_date(season_year, SeasonConstants.PRESEASON_START),
            regular_season_start=_key_date(season_year, SeasonConstants.REGULAR_SEASON_START),
            all_star_weekend=_key_date(season_year, SeasonConstants.ALL_STAR_WEEKEND),
            trade_deadline=_key_date(season_year, SeasonConstants.TRADE_DEADLINE),
            regular_season_end=_key_date(season_year, SeasonConstants.REGULAR_SEASON_END),
            playoffs_start=_key_date(season_year, SeasonConstants.PLAYOFFS_START),
            finals_start=_key_date(season_year, SeasonConstants.FINALS_START),
            championship_celebration=_key_date(season_year, SeasonConstants.CHAMPIONSHIP_CELEBRATION),
        )

    def team_key_dates(self) -> TeamKeyDates:
        """Project the boundaries a team calendar needs."""
        return TeamKeyDates(
            season_start=self.regular_season_start,
            all_star_weekend=self.all_star_weekend,
            trade_deadline=self.trade_deadline,
            regular_season_end=self.regular_season_end,
            playoffs_start=self.playoffs_start,
        )

    def boundary_for(self, phase: SeasonPhase) -> date:
        """
        Start date of a phase.

        Raises:
            KeyError: For OFFSEASON, which has no single start boundary
        """
        boundaries = {
            SeasonPhase.DRAFT: self.draft,
            SeasonPhase.FREE_AGENCY: self.free_agency_start,
            SeasonPhase.SUMMER_LEAGUE: self.summer_league_start,
            SeasonPhase.TRAINING_CAMP: self.training_camp_start,
            SeasonPhase.PRESEASON: self.preseason_start,
            SeasonPhase.REGULAR_SEASON: self.regular_season_start,
            SeasonPhase.ALL_STAR_BREAK: self.all_star_weekend,
            SeasonPhase.TRADE_DEADLINE: self.trade_deadline,
            SeasonPhase.PLAYOFFS: self.playoffs_start,
            SeasonPhase.FINALS: self.finals_start,
            SeasonPhase.CHAMPIONSHIP_CELEBRATION: self.championship_celebration,
        }
        return boundaries[phase]

    def to_dict(self) -> Dict[str, str]:
        return {key: value.isoformat() for key, value in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> LeagueKeyDates:
        return cls(**{key: date.fromisoformat(value) for key, value in data.items()})


def classify_team_phase(current: date, key_dates: TeamKeyDates) -> SeasonPhase:
    """
    Map a date to a team calendar's phase.

    Args:
        current: Date to classify
        key_dates: The team's five season boundaries

    Returns:
        Exactly one SeasonPhase
    """
    season_start = key_dates.season_start
    all_star = key_dates.all_star_weekend

    if current < season_start - timedelta(days=SeasonConstants.TRAINING_CAMP_LEAD_DAYS):
        return SeasonPhase.OFFSEASON
    if current < season_start - timedelta(days=SeasonConstants.PRESEASON_LEAD_DAYS):
        return SeasonPhase.TRAINING_CAMP
    if current < season_start:
        return SeasonPhase.PRESEASON
    if all_star <= current < all_star + timedelta(days=SeasonConstants.TEAM_ALL_STAR_BREAK_DAYS):
        return SeasonPhase.ALL_STAR_BREAK
    if current == key_dates.trade_deadline:
        return SeasonPhase.TRADE_DEADLINE
    if current < key_dates.regular_season_end:
        return SeasonPhase.REGULAR_SEASON
    if current >= key_dates.playoffs_start:
        return SeasonPhase.PLAYOFFS

    # Gap between the last regular season game day and the playoffs
    return SeasonPhase.REGULAR_SEASON


def classify_league_phase(current: date, key_dates: LeagueKeyDates) -> SeasonPhase:
    """
    Map a date to the league-wide phase.

    The off days after summer league ends stay in SUMMER_LEAGUE until
    training camp opens, so the phase never steps back to OFFSEASON
    mid-year.
    """
    all_star = key_dates.all_star_weekend

    if current < key_dates.draft:
        return SeasonPhase.OFFSEASON
    if current < key_dates.free_agency_start:
        return SeasonPhase.DRAFT
    if current < key_dates.summer_league_start:
        return SeasonPhase.FREE_AGENCY
    if current < key_dates.training_camp_start:
        return SeasonPhase.SUMMER_LEAGUE
    if current < key_dates.preseason_start:
        return SeasonPhase.TRAINING_CAMP
    if current < key_dates.regular_season_start:
        return SeasonPhase.PRESEASON
    if all_star <= current < all_star + timedelta(days=SeasonConstants.LEAGUE_ALL_STAR_BREAK_DAYS):
        return SeasonPhase.ALL_STAR_BREAK
    if current == key_dates.trade_deadline:
        return SeasonPhase.TRADE_DEADLINE
    if current < key_dates.playoffs_start:
        return SeasonPhase.REGULAR_SEASON
    if current < key_dates.finals_start:
        return SeasonPhase.PLAYOFFS
    if current < key_dates.championship_celebration:
        return SeasonPhase.FINALS
    return SeasonPhase.CHAMPIONSHIP_CELEBRATION
