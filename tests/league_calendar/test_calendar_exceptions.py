"""
Unit tests for Calendar Exceptions

Tests for all calendar exception classes including error messages,
error codes, and exception handling utilities.
"""

import pytest

from league_calendar.calendar_exceptions import (
    CalendarException,
    ConfigurationError,
    CapacityError,
    CalendarStateException,
    InvalidEventException,
    handle_calendar_exception
)


class TestCalendarException:
    """Test cases for the base CalendarException class."""

    def test_calendar_exception_basic(self):
        """Test basic CalendarException creation."""
        exception = CalendarException("Test error message")

        assert str(exception) == "Test error message"
        assert exception.message == "Test error message"
        assert exception.error_code is None

    def test_calendar_exception_with_error_code(self):
        """Test CalendarException with error code."""
        exception = CalendarException("Test error", "TEST_ERROR")

        assert str(exception) == "[TEST_ERROR] Test error"
        assert exception.error_code == "TEST_ERROR"

    def test_subclasses_share_base(self):
        """All calendar errors can be caught as CalendarException."""
        errors = [
            ConfigurationError("bad"),
            CapacityError("BOS", 82, 10),
            CalendarStateException("bad"),
            InvalidEventException("bad"),
        ]
        for error in errors:
            assert isinstance(error, CalendarException)


class TestConfigurationError:
    """Test cases for ConfigurationError."""

    def test_configuration_error_basic(self):
        exception = ConfigurationError("team has no division")

        assert "Calendar configuration error: team has no division" in str(exception)
        assert exception.error_code == "INVALID_CONFIG"

    def test_configuration_error_with_key_and_value(self):
        exception = ConfigurationError("bad quota", config_key="division_games", config_value=-1)

        assert "Key: 'division_games'" in str(exception)
        assert "Value: -1" in str(exception)
        assert exception.config_key == "division_games"
        assert exception.config_value == -1


class TestCapacityError:
    """Test cases for CapacityError."""

    def test_capacity_error_fields(self):
        exception = CapacityError("BOS", required_games=10, available_days=5)

        assert exception.error_code == "INSUFFICIENT_CAPACITY"
        assert exception.team_id == "BOS"
        assert exception.required_games == 10
        assert exception.available_days == 5
        assert exception.shortfall == 5
        assert "10 games for team BOS" in str(exception)


class TestCalendarStateException:
    """Test cases for CalendarStateException."""

    def test_calendar_state_basic(self):
        exception = CalendarStateException("no games remaining")

        assert "Calendar state error: no games remaining" in str(exception)
        assert exception.error_code == "INVALID_STATE"
        assert exception.state_info == {}

    def test_calendar_state_with_info(self):
        exception = CalendarStateException("bad", {"games_played": 82, "team_id": "BOS"})

        assert "games_played=82" in str(exception)
        assert "team_id=BOS" in str(exception)


class TestInvalidEventException:
    """Test cases for InvalidEventException."""

    def test_invalid_event_with_id(self):
        exception = InvalidEventException("team cannot play itself", event_id="2025-RS-BOS-NYK-1")

        assert exception.error_code == "INVALID_EVENT"
        assert "event_id=2025-RS-BOS-NYK-1" in str(exception)
        assert exception.event_id == "2025-RS-BOS-NYK-1"


class TestHandleCalendarException:
    """Test cases for the exception handling utility."""

    def test_capacity_recovery_hint(self):
        message = handle_calendar_exception(CapacityError("BOS", 10, 5))
        assert "Widen the season window by at least 5 days" in message

    def test_configuration_recovery_hint(self):
        message = handle_calendar_exception(ConfigurationError("missing division"))
        assert "check the league structure" in message

    def test_state_recovery_hint(self):
        message = handle_calendar_exception(CalendarStateException("corrupt"))
        assert "regenerated" in message

    def test_event_recovery_hint(self):
        message = handle_calendar_exception(InvalidEventException("bad date"))
        assert "event type, date and team ids" in message

    def test_base_exception(self):
        message = handle_calendar_exception(CalendarException("generic"))
        assert message == "Calendar error: generic"

    def test_exceptions_are_raisable(self):
        with pytest.raises(CalendarException):
            raise CapacityError("BOS", 82, 40)
