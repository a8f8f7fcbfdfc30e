"""Bridge transport: one synchronous call to the backend process.

A call runs ``<node_binary> <script_path> <action> <payload-json>``, waits
for the process to exit, and classifies its output:

    stdout empty, stderr empty     -> EmptyResponseError
    stdout empty, stderr present   -> DiagnosticError(stderr)
    stdout not an envelope         -> EnvelopeParseError
    {"ok": true, "data": X}        -> X (None when data is omitted)
    {"ok": false, "error": E}      -> BackendError(E, even when empty)
    {"ok": false}                  -> BackendError(stderr or sentinel)

The exit code is never used for classification. There is no retry and no
state shared between calls, so concurrent calls spawn independent processes
and resolve independently, in no particular order.

Limitation: with ``BridgeConfig.timeout`` unset (the default) a call blocks
until the backend exits. A hung backend hangs the calling thread.
"""

from __future__ import annotations

import json
import subprocess
from typing import Any, Callable, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from xray_desktop.constants import (
    EMPTY_RESPONSE_MESSAGE,
    INVALID_JSON_PREFIX,
    SPAWN_ERROR_PREFIX,
    UNKNOWN_ERROR_MESSAGE,
)
from xray_desktop.errors import (
    BackendError,
    BridgeTimeoutError,
    DiagnosticError,
    EmptyResponseError,
    EnvelopeParseError,
    OutputDecodeError,
    SerializationError,
    SpawnError,
)
from xray_desktop.models import BridgeAction, BridgeCall, BridgeConfig, BridgeResponse
from xray_desktop.utils import log_debug

Runner = Callable[[list[str], Optional[float]], "subprocess.CompletedProcess[bytes]"]


def run_process(args: list[str], timeout: float | None) -> subprocess.CompletedProcess[bytes]:
    """Run the backend, capturing both streams as bytes.

    ``subprocess.run`` reaps the child and closes the pipes before returning,
    including on timeout, where the child is killed first.

    Raises:
        OSError: If the executable cannot be started.
        subprocess.TimeoutExpired: If ``timeout`` elapses.
    """
    return subprocess.run(
        args,
        stdin=subprocess.DEVNULL,
        capture_output=True,
        check=False,
        timeout=timeout,
    )


def encode_payload(payload: Any) -> str:
    """Serialize a call payload, rejecting values JSON cannot represent."""
    try:
        return json.dumps(payload, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Cannot serialize bridge payload: {exc}") from exc


def _describe(exc: PydanticValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err["loc"])
    return f"{loc}: {err['msg']}" if loc else err["msg"]


def parse_envelope(text: str) -> BridgeResponse:
    """Parse stripped stdout text as exactly one response envelope."""
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise EnvelopeParseError(f"{INVALID_JSON_PREFIX}: {exc}") from exc

    try:
        return BridgeResponse.model_validate(raw)
    except PydanticValidationError as exc:
        raise EnvelopeParseError(f"{INVALID_JSON_PREFIX}: {_describe(exc)}") from exc


def classify_output(
    stdout: bytes,
    stderr: bytes,
    returncode: int | None = None,
    *,
    action: str = "",
) -> Any:
    """Turn captured backend output into a value or a BridgeError.

    Args:
        stdout: Raw standard output. Must be UTF-8.
        stderr: Raw standard error. Invalid bytes are replaced.
        returncode: Exit status, kept on BackendError for diagnostics only.
        action: Action name, used in debug logging.

    Returns:
        The envelope's ``data`` value, or None when it is omitted.
    """
    try:
        out_text = stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise OutputDecodeError(f"Bridge output is not valid UTF-8: {exc}") from exc
    err_text = stderr.decode("utf-8", errors="replace").strip()
    out_text = out_text.strip()

    if not out_text:
        if not err_text:
            raise EmptyResponseError(EMPTY_RESPONSE_MESSAGE)
        raise DiagnosticError(err_text)

    response = parse_envelope(out_text)

    if response.ok:
        if err_text:
            log_debug(f"bridge {action}: discarded stderr on success: {err_text}")
        return response.data

    if response.error is not None:
        message = response.error
    else:
        message = err_text or UNKNOWN_ERROR_MESSAGE
    raise BackendError(message, returncode=returncode)


class BridgeTransport:
    """Performs bridge calls against the backend described by ``config``.

    Holds no per-call state; one instance may be shared across threads.
    """

    def __init__(self, config: BridgeConfig, runner: Runner = run_process) -> None:
        self.config = config
        self._runner = runner

    def build_argv(self, call: BridgeCall) -> list[str]:
        """Return ``[binary, script, action, payload_json]`` for a call."""
        return [
            self.config.node_binary,
            str(self.config.script_path),
            call.action,
            encode_payload(call.payload),
        ]

    def invoke(self, action: Union[BridgeAction, str], payload: Any = None) -> Any:
        """Run one call and return the envelope's ``data``.

        Raises:
            BridgeError: One of its subclasses, with a human-readable message.
        """
        name = action.value if isinstance(action, BridgeAction) else action
        return self.call(BridgeCall(action=name, payload=payload))

    def call(self, call: BridgeCall) -> Any:
        argv = self.build_argv(call)
        log_debug(f"bridge {call.action}: {argv[0]} {argv[1]}")

        try:
            completed = self._runner(argv, self.config.timeout)
        except subprocess.TimeoutExpired as exc:
            raise BridgeTimeoutError(
                f"Bridge timed out after {exc.timeout}s running {call.action}"
            ) from exc
        except OSError as exc:
            raise SpawnError(f"{SPAWN_ERROR_PREFIX}: {exc}") from exc

        log_debug(f"bridge {call.action}: exit {completed.returncode}")
        return classify_output(
            completed.stdout or b"",
            completed.stderr or b"",
            completed.returncode,
            action=call.action,
        )
