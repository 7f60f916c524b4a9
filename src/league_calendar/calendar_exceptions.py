"""
Calendar Exception Classes

Exception hierarchy for the season calendar system.
Provides specific error types with error codes and user-friendly messages.
"""

from typing import Optional, Dict, Any


class CalendarException(Exception):
    """
    Base exception for all calendar-related errors.

    Provides error code support and structured error messages.
    """

    def __init__(self, message: str, error_code: Optional[str] = None):
        """
        Initialize calendar exception.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
        """
        self.message = message
        self.error_code = error_code
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with optional error code."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class ConfigurationError(CalendarException):
    """
    Raised when league structure or schedule configuration is invalid.

    Covers missing conference/division classification, a team listed as
    its own opponent, duplicate team ids and out-of-range config values.
    Raised before any schedule generation starts.
    """

    def __init__(self, message: str, config_key: Optional[str] = None,
                 config_value: Optional[Any] = None):
        """
        Initialize configuration error.

        Args:
            message: Description of the configuration problem
            config_key: The configuration key (or team id) that caused the error
            config_value: The invalid configuration value
        """
        self.config_key = config_key
        self.config_value = config_value

        full_message = f"Calendar configuration error: {message}"

        if config_key:
            full_message += f". Key: '{config_key}'"
        if config_value is not None:
            full_message += f". Value: {config_value}"

        super().__init__(full_message, "INVALID_CONFIG")


class CapacityError(CalendarException):
    """
    Raised when a season window cannot hold a team's game quota.

    Only raised after compaction has been attempted.
    """

    def __init__(self, team_id: str, required_games: int, available_days: int):
        """
        Initialize capacity error.

        Args:
            team_id: Team whose schedule could not be placed
            required_games: Number of games the quota requires
            available_days: Number of schedulable days in the window
        """
        self.team_id = team_id
        self.required_games = required_games
        self.available_days = available_days

        message = (f"Cannot place {required_games} games for team {team_id} "
                   f"in a window of {available_days} schedulable days")

        super().__init__(message, "INSUFFICIENT_CAPACITY")

    @property
    def shortfall(self) -> int:
        """Number of games that do not fit."""
        return max(0, self.required_games - self.available_days)


class CalendarStateException(CalendarException):
    """
    Raised when a calendar operation would break calendar state.

    Handles result recording with no remaining games, unknown events and
    re-entrant day advancement.
    """

    def __init__(self, message: str, state_info: Optional[Dict[str, Any]] = None):
        """
        Initialize calendar state exception.

        Args:
            message: Description of the state problem
            state_info: Optional dictionary of current state information
        """
        self.state_info = state_info or {}

        full_message = f"Calendar state error: {message}"

        if self.state_info:
            state_details = ", ".join(f"{k}={v}" for k, v in self.state_info.items())
            full_message += f". Current state: {state_details}"

        super().__init__(full_message, "INVALID_STATE")


class InvalidEventException(CalendarException):
    """
    Raised when a calendar event violates its construction contract.

    Examples: missing event type, non-date event date, a game with a
    missing team or the same team on both sides.
    """

    def __init__(self, message: str, event_id: Optional[str] = None):
        self.event_id = event_id

        full_message = f"Invalid calendar event: {message}"
        if event_id:
            full_message += f" (event_id={event_id})"

        super().__init__(full_message, "INVALID_EVENT")


# Exception Handling Utilities

def handle_calendar_exception(exception: CalendarException) -> str:
    """
    Handle calendar exceptions with user-friendly recovery suggestions.

    Args:
        exception: The calendar exception to handle

    Returns:
        User-friendly error message with recovery suggestions
    """
    base_message = str(exception)

    if isinstance(exception, CapacityError):
        recovery_msg = (f"Widen the season window by at least {exception.shortfall} days "
                        f"or lower the game quotas.")
        return f"{base_message} {recovery_msg}"

    elif isinstance(exception, ConfigurationError):
        recovery_msg = "Please check the league structure and schedule configuration."
        return f"{base_message} {recovery_msg}"

    elif isinstance(exception, InvalidEventException):
        recovery_msg = "Please check the event type, date and team ids."
        return f"{base_message} {recovery_msg}"

    elif isinstance(exception, CalendarStateException):
        recovery_msg = "The calendar may need to be regenerated for the season."
        return f"{base_message} {recovery_msg}"

    else:
        return f"Calendar error: {base_message}"
