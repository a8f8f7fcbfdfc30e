"""Connect command: start the tunnel."""

from __future__ import annotations

import click

from xray_desktop.commands._helpers import json_option, run_operation


@click.command()
@json_option
@click.pass_context
def connect(ctx: click.Context, json_output: bool) -> None:
    """Connect using the imported configuration."""
    run_operation(ctx, "connect", json_output=json_output, label="Connect")
