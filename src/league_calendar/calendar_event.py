"""
Calendar Event

Immutable calendar entry for the season calendar system.
Games and non-game key dates (draft, trade deadline, all-star weekend...)
share one record type; game-only fields stay empty for non-game events.
"""

from __future__ import annotations
from dataclasses import dataclass, replace, asdict
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional
import uuid

from .calendar_exceptions import InvalidEventException


class EventType(Enum):
    """Kinds of calendar events."""
    GAME = "game"
    PRACTICE = "practice"
    ALL_STAR_EVENT = "all_star_event"
    DRAFT = "draft"
    FREE_AGENCY_START = "free_agency_start"
    TRADE_DEADLINE = "trade_deadline"
    PLAYOFFS_START = "playoffs_start"
    SEASON_END = "season_end"
    MILESTONE = "milestone"
    MEDIA_DAY = "media_day"
    AWARDS_CEREMONY = "awards_ceremony"
    RETIREMENT_CEREMONY = "retirement_ceremony"


@dataclass(frozen=True)
class CalendarEvent:
    """
    A single entry on a team's calendar.

    Events are values: completing a game produces a new event via
    mark_completed() instead of mutating this one.
    """

    event_id: str
    event_type: EventType
    event_date: date
    title: str = ""
    description: str = ""

    # Game-specific
    home_team_id: Optional[str] = None
    away_team_id: Optional[str] = None
    is_home_game: bool = False
    is_playoff_game: bool = False
    playoff_round: int = 0
    game_number: int = 0

    is_mandatory: bool = False
    is_national_tv: bool = False
    broadcaster: Optional[str] = None

    is_completed: bool = False

    def __post_init__(self):
        """Validate the event contract."""
        if not isinstance(self.event_type, EventType):
            raise InvalidEventException(
                f"event_type must be an EventType, got {self.event_type!r}",
                event_id=self.event_id
            )

        # datetime is a subclass of date; keep only the calendar day
        if isinstance(self.event_date, datetime):
            object.__setattr__(self, 'event_date', self.event_date.date())
        elif not isinstance(self.event_date, date):
            raise InvalidEventException(
                f"event_date must be a date, got {self.event_date!r}",
                event_id=self.event_id
            )

        if self.event_type is EventType.GAME:
            if not self.home_team_id or not self.away_team_id:
                raise InvalidEventException(
                    "game events require both home_team_id and away_team_id",
                    event_id=self.event_id
                )
            if self.home_team_id == self.away_team_id:
                raise InvalidEventException(
                    f"team {self.home_team_id} cannot play itself",
                    event_id=self.event_id
                )
            if self.is_playoff_game and not 1 <= self.playoff_round <= 4:
                raise InvalidEventException(
                    f"playoff games need a round between 1 and 4, got {self.playoff_round}",
                    event_id=self.event_id
                )
            if not self.is_playoff_game and self.playoff_round != 0:
                raise InvalidEventException(
                    "regular season games must have playoff_round 0",
                    event_id=self.event_id
                )
        elif self.home_team_id or self.away_team_id or self.is_playoff_game:
            raise InvalidEventException(
                f"{self.event_type.value} events cannot carry game fields",
                event_id=self.event_id
            )

    # Derived queries

    @property
    def is_game_day(self) -> bool:
        """True for game events."""
        return self.event_type is EventType.GAME

    def involves(self, team_id: str) -> bool:
        """Check whether team_id plays in this event."""
        return self.is_game_day and team_id in (self.home_team_id, self.away_team_id)

    def opponent_of(self, team_id: str) -> Optional[str]:
        """Return the other team in this game, or None if team_id does not play."""
        if not self.involves(team_id):
            return None
        return self.away_team_id if self.home_team_id == team_id else self.home_team_id

    def mark_completed(self) -> CalendarEvent:
        """Return a completed copy of this event."""
        return replace(self, is_completed=True)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data representation."""
        data = asdict(self)
        data['event_type'] = self.event_type.value
        data['event_date'] = self.event_date.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CalendarEvent:
        """Rebuild an event from to_dict() output."""
        fields = dict(data)
        fields['event_type'] = EventType(fields['event_type'])
        fields['event_date'] = date.fromisoformat(fields['event_date'])
        return cls(**fields)

    def __str__(self) -> str:
        return f"{self.event_date.isoformat()} {self.event_type.value}: {self.title}"


def create_game_event(
    event_id: str,
    event_date: date,
    team_id: str,
    opponent_id: str,
    is_home: bool,
    title: Optional[str] = None,
    description: str = "Regular Season Game",
    is_playoff_game: bool = False,
    playoff_round: int = 0,
    game_number: int = 0,
    is_national_tv: bool = False,
    broadcaster: Optional[str] = None
) -> CalendarEvent:
    """
    Build a game event from the owning team's point of view.

    Args:
        event_id: Shared game id (same value on both teams' calendars)
        event_date: Game date
        team_id: Team owning the calendar
        opponent_id: Opposing team
        is_home: Whether team_id hosts the game
        title: Defaults to "vs OPP" / "@ OPP"

    Returns:
        CalendarEvent of type GAME
    """
    if title is None:
        title = f"vs {opponent_id}" if is_home else f"@ {opponent_id}"

    return CalendarEvent(
        event_id=event_id,
        event_type=EventType.GAME,
        event_date=event_date,
        title=title,
        description=description,
        home_team_id=team_id if is_home else opponent_id,
        away_team_id=opponent_id if is_home else team_id,
        is_home_game=is_home,
        is_playoff_game=is_playoff_game,
        playoff_round=playoff_round,
        game_number=game_number,
        is_mandatory=True,
        is_national_tv=is_national_tv,
        broadcaster=broadcaster if is_national_tv else None
    )


def create_key_date_event(
    event_type: EventType,
    event_date: date,
    title: str,
    description: str = "",
    is_mandatory: bool = False,
    event_id: Optional[str] = None
) -> CalendarEvent:
    """Build a non-game event (draft, deadline, all-star weekend...)."""
    if event_type is EventType.GAME:
        raise InvalidEventException("use create_game_event for games")

    return CalendarEvent(
        event_id=event_id or str(uuid.uuid4()),
        event_type=event_type,
        event_date=event_date,
        title=title,
        description=description,
        is_mandatory=is_mandatory
    )
