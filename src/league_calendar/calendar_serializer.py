"""
Calendar Serializer

Plain-dict and JSON round trip for season and league calendars.

The only module in the calendar package that touches the filesystem.
"""

from datetime import date
from pathlib import Path
from typing import Any, Dict, Union
import json
import logging

from .calendar_event import CalendarEvent
from .calendar_exceptions import CalendarStateException
from .league_calendar import LeagueCalendar
from .season_calendar import SeasonCalendar
from .season_phase import LeagueKeyDates, TeamKeyDates


logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def season_calendar_to_dict(calendar: SeasonCalendar) -> Dict[str, Any]:
    """Convert a team calendar to plain data"""
    return {
        'season_year': calendar.season_year,
        'team_id': calendar.team_id,
        'current_date': calendar.current_date.isoformat(),
        'key_dates': calendar.key_dates.to_dict(),
        'wins': calendar.wins,
        'losses': calendar.losses,
        'events': [event.to_dict() for event in calendar.events]
    }


def season_calendar_from_dict(data: Dict[str, Any]) -> SeasonCalendar:
    """
    Rebuild a team calendar from season_calendar_to_dict() output.

    Raises:
        CalendarStateException: If the data is incomplete or malformed
    """
    try:
        return SeasonCalendar(
            season_year=data['season_year'],
            team_id=data['team_id'],
            key_dates=TeamKeyDates.from_dict(data['key_dates']),
            events=[CalendarEvent.from_dict(event) for event in data['events']],
            current_date=date.fromisoformat(data['current_date']),
            wins=data.get('wins', 0),
            losses=data.get('losses', 0)
        )
    except (KeyError, TypeError, ValueError) as e:
        raise CalendarStateException(f"malformed season calendar data: {e}") from e


def league_calendar_to_dict(calendar: LeagueCalendar) -> Dict[str, Any]:
    """Convert a league calendar and all team calendars to plain data"""
    return {
        'format_version': FORMAT_VERSION,
        'season_year': calendar.season_year,
        'current_date': calendar.current_date.isoformat(),
        'key_dates': calendar.key_dates.to_dict(),
        'teams': {
            team_id: season_calendar_to_dict(team_calendar)
            for team_id, team_calendar in sorted(calendar.team_calendars.items())
        }
    }


def league_calendar_from_dict(data: Dict[str, Any]) -> LeagueCalendar:
    """
    Rebuild a league calendar from league_calendar_to_dict() output.

    Raises:
        CalendarStateException: If the data is incomplete, malformed or from
            an unknown format version
    """
    version = data.get('format_version', FORMAT_VERSION)
    if version != FORMAT_VERSION:
        raise CalendarStateException("unsupported calendar format",
                                     {'format_version': version, 'supported': FORMAT_VERSION})

    try:
        calendar = LeagueCalendar(
            season_year=data['season_year'],
            key_dates=LeagueKeyDates.from_dict(data['key_dates']),
            current_date=date.fromisoformat(data['current_date'])
        )
        team_data = data.get('teams', {})
    except (KeyError, TypeError, ValueError) as e:
        raise CalendarStateException(f"malformed league calendar data: {e}") from e

    for team_calendar_data in team_data.values():
        calendar.add_team_calendar(season_calendar_from_dict(team_calendar_data))

    return calendar


def save_league_calendar(calendar: LeagueCalendar, filepath: Union[str, Path]) -> Path:
    """Write a league calendar to a JSON file, returning the path written"""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(league_calendar_to_dict(calendar), f, indent=2)

    logger.info(f"Saved {calendar.season_year} league calendar "
                f"({len(calendar.team_ids)} teams) to {path}")
    return path


def load_league_calendar(filepath: Union[str, Path]) -> LeagueCalendar:
    """
    Read a league calendar from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        CalendarStateException: If the contents are not a valid calendar
    """
    path = Path(filepath)

    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise CalendarStateException(f"calendar file is not valid JSON: {path}") from e

    calendar = league_calendar_from_dict(data)
    logger.info(f"Loaded {calendar.season_year} league calendar from {path}")
    return calendar
