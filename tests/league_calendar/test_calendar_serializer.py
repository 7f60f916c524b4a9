"""
Tests for calendar persistence.
"""

import json
from datetime import date

import pytest

from league_calendar import (
    LeagueCalendar,
    CalendarStateException,
    season_calendar_to_dict,
    season_calendar_from_dict,
    league_calendar_to_dict,
    league_calendar_from_dict,
    save_league_calendar,
    load_league_calendar
)
from league_calendar.calendar_serializer import FORMAT_VERSION


@pytest.fixture
def played_league(small_structure):
    """Small league moved into the regular season with one result recorded."""
    league = LeagueCalendar.create_for_season(2025)
    league.generate_team_calendars(small_structure, seed=17)
    league.advance_to_date(date(2024, 10, 22))

    game = next(e for e in league.get_team_calendar("CCC").events if e.is_game_day)
    league.record_game_result("CCC", True, game.event_id)
    return league


class TestSeasonCalendarData:

    def test_round_trip(self, generated_calendar):
        generated_calendar.record_game_result(won=True)
        generated_calendar.advance_to_date(date(2024, 12, 1))

        data = season_calendar_to_dict(generated_calendar)
        restored = season_calendar_from_dict(data)

        assert restored.events == generated_calendar.events
        assert restored.current_date == date(2024, 12, 1)
        assert (restored.wins, restored.losses) == (1, 0)
        assert restored.key_dates == generated_calendar.key_dates

    def test_data_is_json_safe(self, generated_calendar):
        data = season_calendar_to_dict(generated_calendar)
        assert json.loads(json.dumps(data)) == data

    def test_missing_field(self, generated_calendar):
        data = season_calendar_to_dict(generated_calendar)
        del data['team_id']

        with pytest.raises(CalendarStateException, match="malformed season calendar"):
            season_calendar_from_dict(data)

    def test_bad_date(self, generated_calendar):
        data = season_calendar_to_dict(generated_calendar)
        data['current_date'] = "not-a-date"

        with pytest.raises(CalendarStateException):
            season_calendar_from_dict(data)


class TestLeagueCalendarData:

    def test_round_trip(self, played_league):
        data = league_calendar_to_dict(played_league)
        restored = league_calendar_from_dict(data)

        assert data['format_version'] == FORMAT_VERSION
        assert restored.current_date == played_league.current_date
        assert restored.current_phase is played_league.current_phase
        assert restored.team_ids == played_league.team_ids
        assert league_calendar_to_dict(restored) == data
        assert restored.get_team_calendar("CCC").wins == 1

    def test_unknown_version(self, played_league):
        data = league_calendar_to_dict(played_league)
        data['format_version'] = FORMAT_VERSION + 1

        with pytest.raises(CalendarStateException, match="unsupported calendar format"):
            league_calendar_from_dict(data)

    def test_missing_key_dates(self, played_league):
        data = league_calendar_to_dict(played_league)
        del data['key_dates']

        with pytest.raises(CalendarStateException, match="malformed league calendar"):
            league_calendar_from_dict(data)


class TestFiles:

    def test_save_and_load(self, played_league, tmp_path):
        path = save_league_calendar(played_league, tmp_path / "saves" / "league_2025.json")

        assert path.exists()
        loaded = load_league_calendar(path)

        assert league_calendar_to_dict(loaded) == league_calendar_to_dict(played_league)

        # Loaded calendars keep advancing together
        loaded.advance_day()
        assert loaded.get_team_calendar("AAA").current_date == date(2024, 10, 23)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CalendarStateException, match="not valid JSON"):
            load_league_calendar(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_league_calendar(tmp_path / "missing.json")
