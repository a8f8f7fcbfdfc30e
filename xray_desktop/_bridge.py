"""Backend-side half of the bridge protocol.

Lets a Python backend answer desktop bridge calls by mapping action names
to handlers and emitting exactly one JSON envelope on stdout:

    <python> backend.py <action> <payload-json>
"""

from __future__ import annotations

import json
import sys
import traceback
from typing import Any, Callable

from xray_desktop.constants import get_debug


def bridge_main(dispatch: dict[str, Callable[[Any], Any]]) -> None:
    """Main entry point for a backend bridge script.

    Reads the action from sys.argv[1] and the JSON payload from sys.argv[2]
    (``{}`` when omitted), calls ``dispatch[action](payload)`` and writes
    the envelope.

    Exit codes:
        0: Success (envelope with ok=true)
        1: Handled error (envelope with ok=false)
        2: Crash (no JSON on stdout, traceback to stderr if XRAY_DESKTOP_DEBUG=1)

    JSON Envelopes:
        Success: {"ok": true, "data": <value>}
        Failure: {"ok": false, "error": <message>}
    """
    try:
        if not dispatch or not isinstance(dispatch, dict):
            _emit_error_envelope("Dispatch table must be a non-empty dictionary")
            sys.exit(1)

        if len(sys.argv) < 2:
            _emit_error_envelope("No action specified (expected: action [payload])")
            sys.exit(1)

        action = sys.argv[1]
        payload_raw = sys.argv[2] if len(sys.argv) > 2 else "{}"

        handler = dispatch.get(action)
        if handler is None:
            _emit_error_envelope(f"Unsupported bridge action: {action}")
            sys.exit(1)

        try:
            payload = json.loads(payload_raw)
        except json.JSONDecodeError as e:
            _emit_error_envelope(f"Invalid payload JSON: {e}")
            sys.exit(1)

        try:
            result = handler(payload)
        except Exception as e:
            _emit_error_envelope(str(e) or type(e).__name__)
            sys.exit(1)

        _emit_success_envelope(result)
        sys.exit(0)

    except Exception as e:
        _emit_crash(e)
        sys.exit(2)


def _emit_success_envelope(result: Any) -> None:
    """Emit a success envelope to stdout, omitting ``data`` for None."""
    envelope: dict[str, Any] = {"ok": True}
    if result is not None:
        envelope["data"] = result
    print(json.dumps(envelope), flush=True)


def _emit_error_envelope(message: str) -> None:
    """Emit an error envelope to stdout."""
    print(json.dumps({"ok": False, "error": message}), flush=True)


def _emit_crash(exc: Exception) -> None:
    """Write the traceback to stderr when XRAY_DESKTOP_DEBUG is set."""
    if get_debug():
        traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)
