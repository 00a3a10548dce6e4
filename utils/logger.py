# utils/logger.py
# This file is part of Cursorlog - A Resumable Commit History Walker
#
# Logging utility for commit walking with configurable levels

import logging
import sys
from enum import Enum
from typing import Optional


class LogLevel(Enum):
    """Log levels for commit walking diagnostics."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class CursorLogLogger:
    """Centralized logger for walk diagnostics.

    Diagnostics are written to stderr so that stdout carries nothing but
    walk lines and can be piped straight into other tools.
    """

    def __init__(self, name: str = "cursorlog", level: LogLevel = LogLevel.WARNING):
        """Initialize the walk logger.

        Args:
            name: Logger name
            level: Default logging level
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.value)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        console_handler = StderrHandler()
        console_handler.setLevel(level.value)
        console_handler.setFormatter(CursorLogFormatter())

        self.logger.addHandler(console_handler)

        # Prevent propagation to root logger
        self.logger.propagate = False

    def set_level(self, level: LogLevel):
        """Change the logging level."""
        self.logger.setLevel(level.value)
        for handler in self.logger.handlers:
            handler.setLevel(level.value)

    # Core logging methods
    def debug(self, message: str, **kwargs):
        """Log debug message (per-record walk state)."""
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message (general progress)."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message (unexpected but recoverable)."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message (fatal problems)."""
        self.logger.error(message, **kwargs)

    # Specialized methods for walk events
    def walk_start(self, start: str, cursor: str):
        """Log walker initialization."""
        self.info(f"Starting walk at {start}")
        self.info(f"Initial cursor: {cursor}")

    def record_popped(self, record: str, parent_count: int, cursor: str, pending: int):
        """Log a frontier pop and the cursor it produced."""
        self.debug(
            f"  pop {record} parents={parent_count} → cursor={cursor}, pending={pending}"
        )

    def parent_discovered(self, parent: str, child: str):
        """Log a newly discovered parent pushed onto the frontier."""
        self.debug(f"    push {parent} (parent of {child})")

    def parent_already_seen(self, parent: str, child: str):
        """Log a parent skipped because it was already pushed."""
        self.debug(f"    skip {parent} (parent of {child}, already seen)")

    def skip_complete(self, requested: int, skipped: int):
        """Log the result of discarding leading emissions."""
        if skipped < requested:
            self.info(f"Skipped {skipped} of {requested} records (history exhausted)")
        else:
            self.info(f"Skipped {skipped} records")

    def walk_complete(self, emitted: int):
        """Log the end of a walk."""
        self.info(f"Walk complete: {emitted} records emitted")


class StderrHandler(logging.StreamHandler):
    """Stream handler that always writes to the current sys.stderr.

    Looked up on every write so that redirecting sys.stderr after the
    logger is created (tests, embedding hosts) still captures diagnostics.
    """

    def __init__(self):
        logging.Handler.__init__(self)

    @property
    def stream(self):
        return sys.stderr


class CursorLogFormatter(logging.Formatter):
    """Formatter with clean output for diagnostics."""

    def format(self, record):
        # For INFO level, show message only (clean output)
        if record.levelno == logging.INFO:
            return record.getMessage()

        # For DEBUG level, show with level indicator
        if record.levelno == logging.DEBUG:
            return f"[DEBUG] {record.getMessage()}"

        return f"[{record.levelname}] {record.getMessage()}"


# Global logger instance
_global_logger: Optional[CursorLogLogger] = None


def get_logger(name: str = "cursorlog") -> CursorLogLogger:
    """Get or create the global walk logger instance.

    Args:
        name: Logger name (default: "cursorlog")

    Returns:
        CursorLogLogger instance
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = CursorLogLogger(name)
    return _global_logger


def set_log_level(level: LogLevel):
    """Set the global log level.

    Args:
        level: New log level
    """
    get_logger().set_level(level)


def configure_logging(verbose: bool = False, debug: bool = False):
    """Configure logging based on command line flags.

    Args:
        verbose: Enable verbose (INFO) output
        debug: Enable debug output (overrides verbose)
    """
    if debug:
        set_log_level(LogLevel.DEBUG)
    elif verbose:
        set_log_level(LogLevel.INFO)
    else:
        set_log_level(LogLevel.WARNING)
