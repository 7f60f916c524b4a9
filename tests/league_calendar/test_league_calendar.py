"""
Tests for LeagueCalendar: generation, day advancement, listeners, results
and playoff series injection.
"""

from datetime import date
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import Mock, patch
import logging

import pytest

from league_calendar import (
    LeagueCalendar,
    LeagueKeyDates,
    SeasonCalendar,
    SeasonPhase,
    CalendarStateException,
    ConfigurationError
)
from playoff_system import InvalidSeedingException, PlayoffSchedulingException
from scheduling import ScheduleConfig


@pytest.fixture
def small_league(small_structure):
    """Eight-team league with generated calendars, positioned at the draft."""
    league = LeagueCalendar.create_for_season(2025)
    league.generate_team_calendars(small_structure, seed=3)
    return league


def first_game(league, team_id):
    return next(e for e in league.get_team_calendar(team_id).events if e.is_game_day)


class TestCreation:

    def test_create_for_season_starts_at_draft(self):
        league = LeagueCalendar.create_for_season(2025)

        assert league.current_date == date(2024, 6, 26)
        assert league.current_phase is SeasonPhase.DRAFT
        assert league.team_ids == []

    def test_custom_start_date(self, league_key_dates):
        league = LeagueCalendar(2025, league_key_dates, current_date=date(2025, 1, 10))
        assert league.current_phase is SeasonPhase.REGULAR_SEASON

    def test_phase_for_date(self):
        league = LeagueCalendar.create_for_season(2025)

        assert league.get_phase_for_date(date(2025, 6, 5)) is SeasonPhase.FINALS
        assert league.current_date == date(2024, 6, 26)


class TestTeamCalendars:

    def test_generated_calendars(self, small_league):
        assert small_league.team_ids == ["AAA", "BBB", "CCC", "DDD", "EEE", "FFF", "GGG", "HHH"]

        for team_id in small_league.team_ids:
            calendar = small_league.get_team_calendar(team_id)
            assert calendar.total_scheduled_games == 18
            assert calendar.current_date == small_league.current_date

    def test_standard_league_shares_game_ids(self, generated_league):
        copies = {}
        for calendar in generated_league.team_calendars.values():
            assert calendar.total_scheduled_games == 82
            for event in calendar.events:
                if event.is_game_day:
                    copies.setdefault(event.event_id, []).append(event)

        assert len(copies) == 30 * 82 // 2
        for event_id, events in copies.items():
            assert len(events) == 2, event_id
            first, second = events
            assert first.home_team_id == second.home_team_id
            assert first.away_team_id == second.away_team_id

    def test_seeded_generation_is_reproducible(self, small_structure):
        first = LeagueCalendar.create_for_season(2025)
        second = LeagueCalendar.create_for_season(2025)
        first.generate_team_calendars(small_structure, seed=9)
        second.generate_team_calendars(small_structure, seed=9)

        for team_id in first.team_ids:
            assert first.get_team_calendar(team_id).events == \
                second.get_team_calendar(team_id).events

    def test_parallel_matches_sequential(self, small_structure):
        sequential = LeagueCalendar.create_for_season(2025)
        parallel = LeagueCalendar.create_for_season(2025)
        sequential.generate_team_calendars(small_structure, seed=21)
        parallel.generate_team_calendars(small_structure, seed=21, parallel=True, max_workers=3)

        for team_id in sequential.team_ids:
            assert sequential.get_team_calendar(team_id).events == \
                parallel.get_team_calendar(team_id).events

    def test_parallel_settings_from_config(self, small_structure):
        config = ScheduleConfig(parallel_generation=True, parallel_threads=2)
        league = LeagueCalendar.create_for_season(2025)

        with patch("league_calendar.league_calendar.ThreadPoolExecutor",
                   wraps=ThreadPoolExecutor) as executor:
            league.generate_team_calendars(small_structure, config=config, seed=21)

        executor.assert_called_once_with(max_workers=2)
        assert len(league.team_ids) == 8

    def test_explicit_arguments_override_config(self, small_structure):
        config = ScheduleConfig(parallel_generation=True, parallel_threads=2)
        league = LeagueCalendar.create_for_season(2025)

        with patch("league_calendar.league_calendar.ThreadPoolExecutor") as executor:
            league.generate_team_calendars(small_structure, config=config, seed=21, parallel=False)

        executor.assert_not_called()
        assert len(league.team_ids) == 8

    def test_generate_twice_rejected(self, small_league, small_structure):
        with pytest.raises(ConfigurationError, match="already have calendars"):
            small_league.generate_team_calendars(small_structure, seed=3)

    def test_add_team_calendar_syncs_date(self, team_key_dates):
        league = LeagueCalendar.create_for_season(2025)
        league.advance_day()
        calendar = SeasonCalendar(2025, "AAA", team_key_dates)

        league.add_team_calendar(calendar)

        assert calendar.current_date == date(2024, 6, 27)
        assert league.get_team_calendar("AAA") is calendar

    def test_add_duplicate_or_wrong_season(self, team_key_dates):
        league = LeagueCalendar.create_for_season(2025)
        league.add_team_calendar(SeasonCalendar(2025, "AAA", team_key_dates))

        with pytest.raises(ConfigurationError, match="already has a calendar"):
            league.add_team_calendar(SeasonCalendar(2025, "AAA", team_key_dates))
        with pytest.raises(ConfigurationError, match="another season"):
            league.add_team_calendar(SeasonCalendar(2024, "BBB", team_key_dates))

    def test_missing_team_calendar(self, small_league):
        assert small_league.get_team_calendar("ZZZ") is None

    def test_team_calendars_is_a_copy(self, small_league):
        calendars = small_league.team_calendars
        calendars.clear()
        assert len(small_league.team_ids) == 8


class TestAdvancement:

    def test_advance_day_moves_every_calendar(self, small_league):
        new_date = small_league.advance_day()

        assert new_date == date(2024, 6, 27)
        for calendar in small_league.team_calendars.values():
            assert calendar.current_date == new_date

    def test_advance_to_regular_season(self, small_league):
        small_league.advance_to_date(date(2024, 10, 22))

        assert small_league.current_phase is SeasonPhase.REGULAR_SEASON
        calendar = small_league.get_team_calendar("AAA")
        assert calendar.current_phase is SeasonPhase.REGULAR_SEASON
        assert calendar.current_date == date(2024, 10, 22)

    def test_advance_into_past_ignored(self, small_league):
        small_league.advance_to_date(date(2024, 7, 1))

        assert small_league.advance_to_date(date(2024, 6, 28)) == date(2024, 7, 1)

    def test_advance_is_not_reentrant(self):
        league = LeagueCalendar.create_for_season(2025)

        league._advance_lock.acquire()
        try:
            with pytest.raises(CalendarStateException, match="already in progress"):
                league.advance_day()
        finally:
            league._advance_lock.release()

        assert league.current_date == date(2024, 6, 26)

    def test_failed_advance_rolls_back(self, team_key_dates):
        league = LeagueCalendar.create_for_season(2025)
        good = SeasonCalendar(2025, "AAA", team_key_dates)
        failing = Mock(team_id="ZZZ", season_year=2025)
        league.add_team_calendar(good)
        league.add_team_calendar(failing)
        failing.set_current_date.side_effect = RuntimeError("calendar unavailable")

        with pytest.raises(RuntimeError):
            league.advance_day()

        assert league.current_date == date(2024, 6, 26)
        assert good.current_date == date(2024, 6, 26)

        failing.set_current_date.side_effect = None
        assert league.advance_day() == date(2024, 6, 27)

    def test_days_until(self):
        league = LeagueCalendar.create_for_season(2025)

        assert league.get_days_until(SeasonPhase.PLAYOFFS) == \
            (date(2025, 4, 19) - date(2024, 6, 26)).days
        assert league.get_days_until(SeasonPhase.DRAFT) == 0
        assert league.get_days_until(SeasonPhase.OFFSEASON) == 0

        league.advance_to_date(date(2024, 6, 30))
        assert league.get_days_until(SeasonPhase.DRAFT) == -4


class TestPhaseListeners:

    def test_listener_sees_each_transition(self):
        league = LeagueCalendar.create_for_season(2025)
        changes = []
        league.add_phase_listener(lambda old, new: changes.append((old, new)))

        league.advance_to_date(date(2024, 10, 22))

        assert changes == [
            (SeasonPhase.DRAFT, SeasonPhase.FREE_AGENCY),
            (SeasonPhase.FREE_AGENCY, SeasonPhase.SUMMER_LEAGUE),
            (SeasonPhase.SUMMER_LEAGUE, SeasonPhase.TRAINING_CAMP),
            (SeasonPhase.TRAINING_CAMP, SeasonPhase.PRESEASON),
            (SeasonPhase.PRESEASON, SeasonPhase.REGULAR_SEASON),
        ]

    def test_failing_listener_does_not_stop_others(self, caplog):
        league = LeagueCalendar.create_for_season(2025)
        calls = []

        def broken(old, new):
            raise ValueError("listener bug")

        league.add_phase_listener(broken)
        league.add_phase_listener(lambda old, new: calls.append(new))

        with caplog.at_level(logging.ERROR, logger="league_calendar.league_calendar"):
            league.advance_to_date(date(2024, 6, 30))

        assert calls == [SeasonPhase.FREE_AGENCY]
        assert league.current_date == date(2024, 6, 30)
        assert "Phase listener failed" in caplog.text

    def test_remove_listener(self):
        league = LeagueCalendar.create_for_season(2025)
        listener = Mock()
        league.add_phase_listener(listener)

        assert league.remove_phase_listener(listener)
        assert not league.remove_phase_listener(listener)

        league.advance_to_date(date(2024, 6, 30))
        listener.assert_not_called()


class TestGameResults:

    def test_result_recorded_on_own_copy(self, small_league):
        game = first_game(small_league, "AAA")
        opponent_id = game.opponent_of("AAA")

        small_league.record_game_result("AAA", True, game.event_id)

        team = small_league.get_team_calendar("AAA")
        opponent = small_league.get_team_calendar(opponent_id)
        assert (team.wins, team.losses) == (1, 0)
        assert team.get_event(game.event_id).is_completed
        assert opponent.games_played == 0
        assert not opponent.get_event(game.event_id).is_completed

    def test_each_team_records_its_copy_on_its_own_day(self, small_league):
        small_league.advance_to_date(date(2024, 10, 22))
        recorded = 0

        while recorded < 40:
            for team_id in small_league.team_ids:
                game = small_league.get_team_calendar(team_id).get_todays_game()
                if game is not None and not game.is_completed:
                    small_league.record_game_result(team_id, game.is_home_game, game.event_id)
                    recorded += 1
            small_league.advance_day()

        for calendar in small_league.team_calendars.values():
            assert calendar.games_played + calendar.games_remaining == 18
            assert all(event.is_completed for event in calendar.events
                       if event.is_game_day and event.event_date < small_league.current_date)

    def test_result_recorded_once(self, small_league):
        game = first_game(small_league, "AAA")
        small_league.record_game_result("AAA", True, game.event_id)

        with pytest.raises(CalendarStateException, match="already completed"):
            small_league.record_game_result("AAA", False, game.event_id)
        assert small_league.get_team_calendar("AAA").games_played == 1

    def test_team_without_calendar(self, small_league):
        with pytest.raises(CalendarStateException, match="no season calendar"):
            small_league.record_game_result("ZZZ", True)


class TestPlayoffResults:

    @pytest.fixture
    def finals(self, small_league):
        return small_league.add_playoff_series("AAA", "EEE", 4, 1, 1, date(2025, 6, 1))

    def test_result_applies_to_both_teams(self, small_league, finals):
        game = finals["AAA"][0]

        small_league.record_playoff_result(game.event_id, "AAA")

        winner = small_league.get_team_calendar("AAA")
        loser = small_league.get_team_calendar("EEE")
        assert (winner.wins, winner.losses) == (1, 0)
        assert (loser.wins, loser.losses) == (0, 1)
        assert winner.get_event(game.event_id).is_completed
        assert loser.get_event(game.event_id).is_completed

    def test_result_recorded_once(self, small_league, finals):
        game = finals["AAA"][0]
        small_league.record_playoff_result(game.event_id, "AAA")

        with pytest.raises(CalendarStateException, match="already completed"):
            small_league.record_playoff_result(game.event_id, "EEE")
        assert small_league.get_team_calendar("AAA").games_played == 1

    def test_regular_season_game_rejected(self, small_league):
        game = first_game(small_league, "AAA")

        with pytest.raises(CalendarStateException, match="record it per team"):
            small_league.record_playoff_result(game.event_id, "AAA")

    def test_unknown_game(self, small_league):
        with pytest.raises(CalendarStateException, match="no game with id"):
            small_league.record_playoff_result("2025-PO-R1-XXX-YYY-G1", "XXX")

    def test_winner_must_play_in_game(self, small_league, finals):
        game = finals["AAA"][0]

        with pytest.raises(CalendarStateException, match="did not play"):
            small_league.record_playoff_result(game.event_id, "BBB")

        for calendar in small_league.team_calendars.values():
            assert calendar.games_played == 0


class TestPlayoffSeries:

    def test_series_mirrored_on_both_calendars(self, small_league):
        added = small_league.add_playoff_series("AAA", "EEE", 4, 1, 1, date(2025, 6, 1))

        higher = added["AAA"]
        lower = added["EEE"]
        assert len(higher) == len(lower) == 7
        assert higher[0].is_home_game
        assert not lower[0].is_home_game
        for ours, theirs in zip(higher, lower):
            assert ours.event_id == theirs.event_id
            assert ours.event_date == theirs.event_date
            assert ours.is_home_game != theirs.is_home_game
            assert ours.broadcaster == "ABC"

        assert small_league.get_team_calendar("AAA").total_scheduled_games == 25

    def test_duplicate_series(self, small_league):
        small_league.add_playoff_series("AAA", "BBB", 1, 1, 8, date(2025, 4, 19))

        with pytest.raises(PlayoffSchedulingException, match="already scheduled"):
            small_league.add_playoff_series("AAA", "BBB", 1, 1, 8, date(2025, 4, 19))

    def test_seeds_out_of_order(self, small_league):
        with pytest.raises(InvalidSeedingException):
            small_league.add_playoff_series("AAA", "BBB", 1, 8, 1, date(2025, 4, 19))

    def test_team_without_calendar(self, small_league):
        with pytest.raises(PlayoffSchedulingException, match="no season calendar"):
            small_league.add_playoff_series("AAA", "ZZZ", 1, 1, 8, date(2025, 4, 19))
        assert small_league.get_team_calendar("AAA").total_scheduled_games == 18


def test_repr(small_league):
    assert repr(small_league) == "LeagueCalendar(season=2025, date=2024-06-26, phase=draft, teams=8)"


def test_key_dates_default_to_season(small_league):
    assert small_league.key_dates == LeagueKeyDates.for_season(2025)
