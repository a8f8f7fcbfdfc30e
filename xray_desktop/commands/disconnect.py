"""Disconnect command: stop the tunnel."""

from __future__ import annotations

import click

from xray_desktop.commands._helpers import json_option, run_operation


@click.command()
@json_option
@click.pass_context
def disconnect(ctx: click.Context, json_output: bool) -> None:
    """Disconnect and restore system proxy settings."""
    run_operation(ctx, "disconnect", json_output=json_output, label="Disconnect")
