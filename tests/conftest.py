"""
Top-level pytest conftest.py -- shared fixtures for bridge tests.

Provides:
    fake_backend     - writes a throw-away Python backend script and returns
                       a BridgeConfig that runs it with the current interpreter
    fake_transport   - in-memory stand-in for BridgeTransport
    completed        - builds subprocess.CompletedProcess results for fake runners
"""

from __future__ import annotations

import json
import subprocess
import sys
import textwrap
from pathlib import Path
from typing import Any

import pytest

from xray_desktop.models import BridgeConfig

REPO_ROOT = Path(__file__).resolve().parent.parent


def completed(stdout: bytes | str = b"", stderr: bytes | str = b"", returncode: int = 0):
    """Build a CompletedProcess the way run_process returns it (bytes streams)."""
    if isinstance(stdout, str):
        stdout = stdout.encode("utf-8")
    if isinstance(stderr, str):
        stderr = stderr.encode("utf-8")
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class FakeTransport:
    """Records calls and answers with a canned result or error."""

    def __init__(self, result: Any = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple[str, Any]] = []

    def invoke(self, action, payload=None):
        name = getattr(action, "value", action)
        self.calls.append((name, payload))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def fake_backend(tmp_path, monkeypatch):
    """Return a factory that writes a fake backend script.

    The script records its arguments to ``argv.json`` next to itself, writes
    the given stdout/stderr (bytes allowed), optionally sleeps, and exits.

    Usage::

        config = fake_backend(stdout='{"ok": true}', stderr="", exit_code=0)
    """
    monkeypatch.setenv("PYTHONPATH", str(REPO_ROOT))
    counter = {"n": 0}

    def _make(
        stdout: bytes | str = b"",
        stderr: bytes | str = b"",
        exit_code: int = 0,
        sleep: float = 0.0,
        body: str | None = None,
        timeout: float | None = None,
    ) -> BridgeConfig:
        counter["n"] += 1
        script_dir = tmp_path / f"backend{counter['n']}"
        script_dir.mkdir()
        script = script_dir / "bridge.py"

        if body is None:
            out = stdout.encode("utf-8") if isinstance(stdout, str) else stdout
            err = stderr.encode("utf-8") if isinstance(stderr, str) else stderr
            body = textwrap.dedent(
                f"""
                import json, sys, time
                from pathlib import Path
                Path(__file__).with_name("argv.json").write_text(json.dumps(sys.argv[1:]))
                time.sleep({sleep!r})
                sys.stdout.buffer.write({out!r})
                sys.stderr.buffer.write({err!r})
                sys.exit({exit_code!r})
                """
            )
        script.write_text(body)
        return BridgeConfig(node_binary=sys.executable, script_path=script, timeout=timeout)

    return _make


def recorded_argv(config: BridgeConfig) -> list[str]:
    """Arguments the fake backend received (after the script path)."""
    return json.loads(config.script_path.with_name("argv.json").read_text())


@pytest.fixture
def make_completed():
    return completed


@pytest.fixture
def make_transport():
    return FakeTransport


@pytest.fixture
def backend_argv():
    return recorded_argv
