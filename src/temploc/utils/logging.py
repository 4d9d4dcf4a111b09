"""Standardized logging system.

Provides three output modes:
- Human mode: [LEVEL] message (colored if TTY)
- Verbose mode: [LEVEL][HH:MM:SS] message
- CI/JSON mode: {"level":"...","ts":"...","msg":"..."}

Loaders report at three severities: TRACE for initialization progress,
INFO for root registration, ERROR for rejected template names.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from enum import Enum
from typing import Any, TextIO

# Finer than DEBUG; used for loader initialization progress
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class LogMode(Enum):
    """Logging output mode."""

    HUMAN = "human"
    VERBOSE = "verbose"
    JSON = "json"


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"
    CYAN = "\033[36m"
    GRAY = "\033[90m"


# Level to color mapping
LEVEL_COLORS = {
    TRACE: Colors.GRAY,
    logging.DEBUG: Colors.CYAN,
    logging.INFO: Colors.GREEN,
    logging.WARNING: Colors.YELLOW,
    logging.ERROR: Colors.RED,
    logging.CRITICAL: Colors.RED,
}


def _is_tty(stream: TextIO | None = None) -> bool:
    """Check if the stream is a TTY (supports colors)."""
    if stream is None:
        stream = sys.stderr
    return hasattr(stream, "isatty") and stream.isatty()


class HumanFormatter(logging.Formatter):
    """Formatter for human-readable output.

    Format: [LEVEL] message
    With optional colors when output is a TTY.
    """

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def _prefix(self, record: logging.LogRecord) -> str:
        tag = f"[{record.levelname}]"
        if self.use_colors:
            color = LEVEL_COLORS.get(record.levelno, Colors.RESET)
            return f"{color}{tag}{Colors.RESET}"
        return tag

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record."""
        return f"{self._prefix(record)} {record.getMessage()}"


class VerboseFormatter(HumanFormatter):
    """Formatter for verbose output with timestamps.

    Format: [LEVEL][HH:MM:SS] message
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record with timestamp."""
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        return f"{self._prefix(record)}[{timestamp}] {record.getMessage()}"


class JSONFormatter(logging.Formatter):
    """Formatter for JSON lines output (machine-readable).

    Format: {"level":"INFO","ts":"2026-01-31T19:45:23+00:00","logger":"...","msg":"..."}
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON."""
        return json.dumps(
            {
                "level": record.levelname,
                "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
                "logger": record.name,
                "msg": record.getMessage(),
            }
        )


class TemplocLogger(logging.Logger):
    """Logger with a TRACE level below DEBUG."""

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a message at TRACE level."""
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)


# Set custom logger class
logging.setLoggerClass(TemplocLogger)


def get_logger(name: str = "temploc") -> TemplocLogger:
    """Get a temploc logger instance.

    Args:
        name: Logger name

    Returns:
        Configured TemplocLogger instance
    """
    return logging.getLogger(name)  # type: ignore[return-value]


def setup_logging(
    mode: LogMode = LogMode.HUMAN,
    level: int = logging.INFO,
    stream: TextIO | None = None,
) -> None:
    """Configure logging with the specified mode.

    Args:
        mode: Output mode (human, verbose, json)
        level: Minimum log level
        stream: Output stream (default: stderr, keeping stdout for command output)
    """
    logger = logging.getLogger("temploc")
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    use_colors = _is_tty(stream)

    if mode == LogMode.JSON:
        formatter: logging.Formatter = JSONFormatter()
    elif mode == LogMode.VERBOSE:
        formatter = VerboseFormatter(use_colors=use_colors)
    else:
        formatter = HumanFormatter(use_colors=use_colors)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def configure_from_cli(
    verbose: bool = False,
    quiet: bool = False,
    ci: bool = False,
) -> None:
    """Configure logging based on CLI flags.

    Args:
        verbose: Enable verbose mode with timestamps and TRACE messages
        quiet: Suppress info messages (warnings and errors only)
        ci: Enable JSON output for CI/CD
    """
    if ci:
        mode = LogMode.JSON
    elif verbose:
        mode = LogMode.VERBOSE
    else:
        mode = LogMode.HUMAN

    if quiet:
        level = logging.WARNING
    elif verbose:
        level = TRACE
    else:
        level = logging.INFO

    setup_logging(mode=mode, level=level)
