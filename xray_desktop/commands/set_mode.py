"""Set-mode command: switch between proxy and VPN mode."""

from __future__ import annotations

import click

from xray_desktop.commands._helpers import json_option, run_operation

MODES = ("proxy", "vpn")


@click.command("set-mode")
@click.argument("mode", type=click.Choice(MODES))
@json_option
@click.pass_context
def set_mode(ctx: click.Context, mode: str, json_output: bool) -> None:
    """Set the connection mode (proxy or vpn)."""
    run_operation(ctx, "set_mode", json_output=json_output, label="Mode change", mode=mode)
