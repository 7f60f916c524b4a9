"""
League Calendar

Basketball season calendar system: per-team season calendars, the league
calendar that advances them day by day, and date-driven phase classification.

Public API:
    Classes:
        - CalendarEvent / EventType: Immutable calendar entries
        - EventTimeline: Date-ordered event storage
        - SeasonPhase, TeamKeyDates, LeagueKeyDates: Phase classification
        - SeasonCalendar: One team's season
        - LeagueCalendar: League key dates and all team calendars

    Exceptions:
        - CalendarException: Base calendar exception
        - ConfigurationError: League structure / configuration errors
        - CapacityError: Season window too small for the schedule
        - CalendarStateException: Calendar state errors
        - InvalidEventException: Event contract violations

Example Usage:
    >>> from league_calendar import LeagueCalendar
    >>> from team_registry import LeagueStructure
    >>> league = LeagueCalendar.create_for_season(2025)
    >>> league.generate_team_calendars(LeagueStructure.standard(), seed=7)
    >>> league.advance_to_date(league.key_dates.regular_season_start)
"""

from .calendar_event import (
    CalendarEvent,
    EventType,
    create_game_event,
    create_key_date_event
)

from .calendar_exceptions import (
    CalendarException,
    ConfigurationError,
    CapacityError,
    CalendarStateException,
    InvalidEventException,
    handle_calendar_exception
)

from .event_timeline import EventTimeline

from .season_phase import (
    SeasonPhase,
    TeamKeyDates,
    LeagueKeyDates,
    classify_team_phase,
    classify_league_phase
)

from .season_calendar import SeasonCalendar
from .league_calendar import LeagueCalendar

from .calendar_serializer import (
    season_calendar_to_dict,
    season_calendar_from_dict,
    league_calendar_to_dict,
    league_calendar_from_dict,
    save_league_calendar,
    load_league_calendar
)

__all__ = [
    # Events
    'CalendarEvent',
    'EventType',
    'create_game_event',
    'create_key_date_event',
    'EventTimeline',

    # Exceptions
    'CalendarException',
    'ConfigurationError',
    'CapacityError',
    'CalendarStateException',
    'InvalidEventException',
    'handle_calendar_exception',

    # Phases
    'SeasonPhase',
    'TeamKeyDates',
    'LeagueKeyDates',
    'classify_team_phase',
    'classify_league_phase',

    # Calendars
    'SeasonCalendar',
    'LeagueCalendar',

    # Persistence
    'season_calendar_to_dict',
    'season_calendar_from_dict',
    'league_calendar_to_dict',
    'league_calendar_from_dict',
    'save_league_calendar',
    'load_league_calendar'
]
