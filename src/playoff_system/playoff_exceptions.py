"""
Playoff System Exception Hierarchy

Exceptions raised while building and injecting playoff series, with error
codes, severity levels, recovery strategies and context information.

Exception Hierarchy:
    PlayoffException (base)
    ├── InvalidRoundException
    ├── InvalidSeedingException
    └── PlayoffSchedulingException

All exceptions include:
- error_code: Unique identifier for programmatic handling
- severity: CRITICAL, ERROR, WARNING, INFO
- recovery_strategy: ABORT, RETRY, SKIP, ROLLBACK, RESET
- context_dict: Relevant context (season, round, teams, etc.)
- original_exception: Wrapped exception if from try/except
"""

from enum import Enum
from typing import Any, Dict, Optional
from datetime import datetime

from season.season_constants import SeasonConstants


class ExceptionSeverity(Enum):
    """Severity levels for exceptions"""
    CRITICAL = "critical"  # System broken, immediate abort required
    ERROR = "error"        # Operation failed, cannot continue
    WARNING = "warning"    # Potential issue, can continue with caution
    INFO = "info"          # Informational only, no action required


class RecoveryStrategy(Enum):
    """Recovery strategies for exception handling"""
    ABORT = "abort"
    RETRY = "retry"
    SKIP = "skip"
    ROLLBACK = "rollback"
    RESET = "reset"
    MANUAL = "manual"


class PlayoffException(Exception):
    """
    Base exception for all playoff system errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error code (e.g., "PLAYOFF_000")
        severity: Exception severity level
        recovery_strategy: Recommended recovery action
        context_dict: Additional context (season, round, teams, etc.)
        original_exception: Original exception if wrapping another exception
        timestamp: When the exception was raised
    """

    def __init__(
        self,
        message: str,
        error_code: str = "PLAYOFF_000",
        severity: ExceptionSeverity = ExceptionSeverity.ERROR,
        recovery_strategy: RecoveryStrategy = RecoveryStrategy.ABORT,
        context_dict: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.recovery_strategy = recovery_strategy
        self.context_dict = context_dict or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now().isoformat()

        super().__init__(self._build_error_message())

    def _build_error_message(self) -> str:
        """Build error message with all context"""
        lines = [
            f"[{self.error_code}] {self.message}",
            f"Severity: {self.severity.value}",
            f"Recovery: {self.recovery_strategy.value}"
        ]

        if self.context_dict:
            lines.append("Context:")
            for key, value in self.context_dict.items():
                lines.append(f"  {key}: {value}")

        if self.original_exception:
            lines.append(f"Original Error: {type(self.original_exception).__name__}: "
                         f"{self.original_exception}")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "recovery_strategy": self.recovery_strategy.value,
            "context": self.context_dict,
            "timestamp": self.timestamp,
            "original_error": str(self.original_exception) if self.original_exception else None
        }


class InvalidRoundException(PlayoffException):
    """
    Raised when a playoff round outside 1-4 is requested.

    Rounds: 1 First Round, 2 Conference Semifinals, 3 Conference Finals,
    4 NBA Finals.
    """

    def __init__(self, playoff_round: Any, message: Optional[str] = None, **kwargs):
        context = {
            "invalid_round": playoff_round,
            "valid_rounds": list(range(1, SeasonConstants.PLAYOFF_ROUNDS + 1)),
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message or f"Invalid playoff round: {playoff_round!r}",
            error_code="PLAYOFF_ROUND_001",
            severity=ExceptionSeverity.ERROR,
            recovery_strategy=RecoveryStrategy.ABORT,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )


class InvalidSeedingException(PlayoffException):
    """
    Raised when a series matchup's seeds are invalid.

    Examples:
    - Seed below 1
    - The listed higher seed ranks below its opponent
    """

    def __init__(
        self,
        message: str,
        seed: Optional[int] = None,
        opponent_seed: Optional[int] = None,
        **kwargs
    ):
        context = {
            "seed": seed,
            "opponent_seed": opponent_seed,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message,
            error_code="PLAYOFF_SEED_002",
            severity=ExceptionSeverity.ERROR,
            recovery_strategy=RecoveryStrategy.ABORT,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )


class PlayoffSchedulingException(PlayoffException):
    """
    Raised when a playoff series cannot be injected into the calendars.

    Examples:
    - A team in the matchup has no season calendar
    - The series is already on one of the calendars
    """

    def __init__(
        self,
        message: str,
        playoff_round: Optional[int] = None,
        operation: Optional[str] = None,
        **kwargs
    ):
        context = {
            "round": playoff_round,
            "operation": operation,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message,
            error_code="PLAYOFF_SCHEDULE_005",
            severity=ExceptionSeverity.ERROR,
            recovery_strategy=RecoveryStrategy.RETRY,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )
