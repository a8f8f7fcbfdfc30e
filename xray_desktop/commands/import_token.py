"""Import-token command: import a share token from the control panel."""

from __future__ import annotations

import click

from xray_desktop.commands._helpers import json_option, run_operation


@click.command("import-token")
@click.option("--base-url", required=True, help="Control panel base URL")
@click.option("--token", required=True, help="Share token issued by the panel")
@json_option
@click.pass_context
def import_token(ctx: click.Context, base_url: str, token: str, json_output: bool) -> None:
    """Import connection settings from a share token."""
    run_operation(
        ctx, "import_token", json_output=json_output, label="Import",
        base_url=base_url.strip(), token=token.strip(),
    )
