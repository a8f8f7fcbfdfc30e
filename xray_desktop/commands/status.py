"""Status command: show agent connection status."""

from __future__ import annotations

import json
from typing import Any

import click

from xray_desktop.commands._helpers import json_option, run_operation
from xray_desktop.utils import BOLD, RESET, format_kv


def _disguise_line(status: dict[str, Any]) -> str:
    imported = status.get("importedConfig")
    if isinstance(imported, dict):
        reality = imported.get("reality")
        if isinstance(reality, dict) and reality.get("serverName"):
            return f"Disguised as traffic from {reality['serverName']}"
    return "Disguised as traffic from -"


def render_status(status: Any) -> None:
    """Print the human-readable status summary."""
    if not isinstance(status, dict):
        click.echo(json.dumps(status, indent=2))
        return

    state = "Connected" if status.get("connected") else "Disconnected"
    click.echo(f"{BOLD}Status: {state}{RESET}")
    click.echo(format_kv("Mode", status.get("mode")))
    click.echo(format_kv("Imported", "yes" if status.get("imported") else "no"))
    click.echo(format_kv("PID", status.get("pid")))
    click.echo(format_kv("Supervisor PID", status.get("supervisorPid")))
    click.echo(format_kv("Last error", status.get("lastError")))
    click.echo(format_kv("Logs", status.get("logsPath")))
    click.echo(f"  {_disguise_line(status)}")


@click.command()
@json_option
@click.pass_context
def status(ctx: click.Context, json_output: bool) -> None:
    """Show connection status reported by the backend."""
    run_operation(ctx, "status", json_output=json_output, render=render_status)
