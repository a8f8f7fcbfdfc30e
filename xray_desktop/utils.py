"""Logging and formatting utilities for xray-desktop.

All log output goes to stderr so that stdout stays reserved for command
results (the CLI may be piped into other tools with ``--json``).
"""

from __future__ import annotations

import logging
import os
import sys

from xray_desktop.constants import get_debug


# Color codes - respect TERM environment variable
def _should_use_colors() -> bool:
    """Check if colors should be used based on TERM environment variable."""
    term = os.environ.get("TERM", "")
    if not term or term == "dumb":
        return False
    return True


_USE_COLORS = _should_use_colors()

# ANSI color codes
BOLD = "\033[1m" if _USE_COLORS else ""
RESET = "\033[0m" if _USE_COLORS else ""


class DesktopFormatter(logging.Formatter):
    """Formatter that prefixes debug, warning and error records."""

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()

        if record.levelno == logging.DEBUG:
            return f"DEBUG: {msg}"
        elif record.levelno >= logging.ERROR:
            return f"Error: {msg}"
        elif record.levelno == logging.WARNING:
            return f"Warning: {msg}"

        # Info level has no prefix
        return msg


# Configure module-level logger
_logger = logging.getLogger("xray_desktop")
_logger.setLevel(logging.DEBUG)

# Only add handler if one doesn't exist
if not _logger.handlers:
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setLevel(logging.DEBUG)
    _handler.setFormatter(DesktopFormatter())
    _logger.addHandler(_handler)


def log_debug(msg: str) -> None:
    """Log a debug message (only if XRAY_DESKTOP_DEBUG=1).

    Args:
        msg: The message to log.
    """
    if get_debug():
        _logger.debug(msg)


def log_warn(msg: str) -> None:
    """Log a warning message to stderr."""
    _logger.warning(msg)


def format_kv(key: str, value: object) -> str:
    """Format a key-value pair with 2 spaces indent.

    Args:
        key: The key name.
        value: The value; None renders as "-".

    Returns:
        Formatted string "  {key}: {value}".
    """
    return f"  {key}: {'-' if value is None else value}"
