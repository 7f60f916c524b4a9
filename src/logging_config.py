"""
Logging Configuration for The Head Coach Sim

Application logging setup for the season calendar system:
- Rotating file handlers (prevents unbounded log growth)
- Separate main, debug and error logs
- Colored console output
- Per-package log levels (calendar, scheduling, playoffs)

Usage Example:
    from logging_config import setup_logging, get_logger

    # Setup logging at application startup
    setup_logging(level="INFO", log_dir="logs")

    # Get logger in any module
    logger = get_logger(__name__)
    logger.info("Season generated")

Log Files Created:
- logs/head_coach_sim.log: Main application log (INFO+)
- logs/head_coach_sim_debug.log: Debug log (DEBUG+)
- logs/head_coach_sim_error.log: Error log (ERROR+)

Each file rotates at 10MB with 5 backup files.
"""

import copy
import logging
import logging.handlers
import os
from pathlib import Path
from typing import Dict, Optional


# Log format templates
DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"
)

SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_PREFIX = "head_coach_sim"

# Packages of the calendar system, used by the per-package setup helpers
CALENDAR_MODULES = (
    "league_calendar",
    "league_calendar.season_calendar",
    "league_calendar.league_calendar",
    "league_calendar.calendar_serializer",
)

SCHEDULING_MODULES = (
    "scheduling",
    "scheduling.quota_assignment",
    "scheduling.schedule_generator",
    "team_registry",
)

PLAYOFF_MODULES = (
    "playoff_system",
    "playoff_system.playoff_series_builder",
)


class ColoredFormatter(logging.Formatter):
    """
    Colored formatter for console output.

    Adds ANSI color codes to log levels. The record is copied first so file
    handlers sharing the record keep the plain level name.
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        levelname = record.levelname
        if levelname in self.COLORS:
            record = copy.copy(record)
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        return super().format(record)


def _level(level: str) -> int:
    try:
        return getattr(logging, level.upper())
    except AttributeError:
        raise ValueError(f"Unknown log level: {level}") from None


def _rotating_handler(log_dir: str, suffix: str, level: int, log_format: str,
                      max_bytes: int, backup_count: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=os.path.join(log_dir, f"{LOG_FILE_PREFIX}{suffix}.log"),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    log_dir: str = "logs",
    enable_console: bool = True,
    enable_file: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    format_style: str = "detailed"
) -> None:
    """
    Setup application-wide logging configuration.

    Call once at application startup. Existing root handlers are replaced.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files
        enable_console: Whether to log to console
        enable_file: Whether to log to file
        max_bytes: Maximum size per log file before rotation (default: 10MB)
        backup_count: Number of backup files to keep (default: 5)
        format_style: "detailed" or "simple" format

    Raises:
        ValueError: If level is not a logging level name
    """
    root_level = _level(level)

    if enable_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    log_format = DETAILED_FORMAT if format_style == "detailed" else SIMPLE_FORMAT

    if enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(root_level)
        console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if enable_file:
        root_logger.addHandler(_rotating_handler(log_dir, "", logging.INFO, log_format,
                                                 max_bytes, backup_count))
        root_logger.addHandler(_rotating_handler(log_dir, "_debug", logging.DEBUG, DETAILED_FORMAT,
                                                 max_bytes, backup_count))
        root_logger.addHandler(_rotating_handler(log_dir, "_error", logging.ERROR, DETAILED_FORMAT,
                                                 max_bytes, backup_count))

    root_logger.info(
        f"Logging initialized - Level: {level}, "
        f"Console: {enable_console}, File: {enable_file}"
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module (typically __name__)"""
    return logging.getLogger(name)


def log_exception(
    logger: logging.Logger,
    exception: Exception,
    context: Optional[Dict] = None,
    level: str = "ERROR"
) -> None:
    """
    Log an exception with full traceback and context.

    Calendar and playoff exceptions carry an error code, which is included
    in the context.

    Example:
        >>> try:
        ...     league.advance_day()
        ... except CalendarException as e:
        ...     log_exception(logger, e, context={"season": 2025})
    """
    context = dict(context or {})

    error_code = getattr(exception, 'error_code', None)
    if error_code and 'error_code' not in context:
        context['error_code'] = error_code

    context_str = ""
    if context:
        context_str = f" [{', '.join(f'{k}={v}' for k, v in context.items())}]"

    logger.log(
        _level(level),
        f"Exception occurred{context_str}: {type(exception).__name__}: {exception}",
        exc_info=exception
    )


def configure_module_logger(
    module_name: str,
    level: Optional[str] = None,
    propagate: bool = True
) -> logging.Logger:
    """
    Configure logging for a specific module.

    Args:
        module_name: Module name (e.g., "scheduling.schedule_generator")
        level: Log level for this module (None = inherit from root)
        propagate: Whether to propagate to parent loggers

    Returns:
        Configured logger
    """
    logger = logging.getLogger(module_name)

    if level:
        logger.setLevel(_level(level))

    logger.propagate = propagate

    return logger


class LogContext:
    """
    Context manager for temporary log level changes.

    Example:
        >>> with LogContext(get_logger("scheduling"), "DEBUG"):
        ...     generator.generate_team_schedule("BOS", start, end)
    """

    def __init__(self, logger: logging.Logger, level: str):
        self.logger = logger
        self.new_level = _level(level)
        self.original_level = logger.level

    def __enter__(self):
        self.logger.setLevel(self.new_level)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logger.setLevel(self.original_level)


# Module-specific logger configurations

def setup_calendar_logging(level: str = "INFO") -> None:
    """Configure logging for the season and league calendars"""
    for module_name in CALENDAR_MODULES:
        configure_module_logger(module_name, level=level)


def setup_scheduling_logging(level: str = "INFO") -> None:
    """
    Configure logging for schedule generation.

    Placement detail is logged at DEBUG; generating a full league at DEBUG
    produces several hundred lines.
    """
    for module_name in SCHEDULING_MODULES:
        configure_module_logger(module_name, level=level)


def setup_playoff_logging(level: str = "INFO") -> None:
    """Configure logging for playoff series construction"""
    for module_name in PLAYOFF_MODULES:
        configure_module_logger(module_name, level=level)


# Quick setup presets

def setup_production_logging(log_dir: str = "logs") -> None:
    """
    Setup logging for production environment.

    Configuration:
    - Level: INFO
    - Console: No
    - File: Yes
    - Scheduling detail capped at WARNING
    """
    setup_logging(
        level="INFO",
        log_dir=log_dir,
        enable_console=False,
        enable_file=True,
        format_style="simple"
    )
    setup_scheduling_logging(level="WARNING")


def setup_development_logging(log_dir: str = "logs") -> None:
    """
    Setup logging for development environment.

    Configuration:
    - Level: DEBUG
    - Console: Yes (colored)
    - File: Yes
    - Detailed format with file/line numbers
    """
    setup_logging(
        level="DEBUG",
        log_dir=log_dir,
        enable_console=True,
        enable_file=True,
        format_style="detailed"
    )


def setup_testing_logging() -> None:
    """
    Setup logging for testing environment.

    Configuration:
    - Level: WARNING
    - Console: Yes
    - File: No
    """
    setup_logging(
        level="WARNING",
        log_dir="logs",
        enable_console=True,
        enable_file=False,
        format_style="simple"
    )
