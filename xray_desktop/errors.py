"""Exception hierarchy for xray-desktop.

Provides a structured exception tree so callers can catch broad
categories (``DesktopError``, ``BridgeError``) or specific failure modes.
Every exception carries a human-readable message as ``str(exc)``.

This module is a base-layer module: it must NOT import from any
other ``xray_desktop`` submodule.
"""

from __future__ import annotations


class DesktopError(Exception):
    """Base exception for all xray-desktop errors."""


class ValidationError(DesktopError):
    """Input validation failures (missing arguments, bad deep links, etc.)."""


class BridgeError(DesktopError):
    """Base for failures of a single bridge call."""


class SerializationError(BridgeError):
    """Call payload could not be encoded as JSON."""


class SpawnError(BridgeError):
    """Backend executable could not be started."""


class BridgeTimeoutError(BridgeError):
    """Backend did not exit before the configured deadline."""


class OutputDecodeError(BridgeError):
    """Captured stdout was not valid UTF-8."""


class EmptyResponseError(BridgeError):
    """Backend wrote nothing to stdout or stderr."""


class DiagnosticError(BridgeError):
    """Backend wrote nothing to stdout; the message is its stderr text."""


class EnvelopeParseError(BridgeError):
    """Backend stdout was not a valid response envelope."""


class BackendError(BridgeError):
    """Backend replied with ``ok: false``."""

    def __init__(self, message: str, *, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode
