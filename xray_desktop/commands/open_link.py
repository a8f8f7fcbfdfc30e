"""Open-link command: handle ``xraycp://import`` deep links."""

from __future__ import annotations

import sys

import click

from xray_desktop.commands._helpers import emit_failure, json_option, run_operation
from xray_desktop.deeplink import first_valid_link
from xray_desktop.utils import log_warn

INVALID_LINKS_MESSAGE = "Deep link ignored: invalid format. Expected xraycp://import?..."


@click.command("open-link")
@click.argument("urls", nargs=-1, required=True)
@json_option
@click.pass_context
def open_link(ctx: click.Context, urls: tuple[str, ...], json_output: bool) -> None:
    """Import the token carried by the first valid deep link URL.

    The operating system may hand over several URLs at once; invalid ones
    are skipped with a warning.
    """
    link, rejected = first_valid_link(urls)

    if link is None:
        # A single URL keeps its specific reason.
        message = rejected[0][1] if len(rejected) == 1 else INVALID_LINKS_MESSAGE
        emit_failure(message, json_output)
        sys.exit(1)

    for url, reason in rejected:
        log_warn(f"Skipping deep link {url}: {reason}")

    run_operation(
        ctx, "import_token", json_output=json_output, label="Import",
        base_url=link.base_url, token=link.token,
    )
