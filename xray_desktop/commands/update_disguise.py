"""Update-disguise command: change the TLS camouflage of a server.

The disguise object comes from exactly one of ``--domain`` (builds the
standard serverName/dest/fingerprint object), ``--disguise`` (inline JSON)
or ``--disguise-file``.
"""

from __future__ import annotations

import json
import re
import sys
from pathlib import Path
from typing import Any, Optional

import click

from xray_desktop.commands._helpers import emit_failure, json_option, run_operation

_DOMAIN_RE = re.compile(r"^(?=.{1,253}$)(?!-)[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)+$")


def domain_disguise(domain: str) -> dict[str, Any]:
    """Build the disguise object for impersonating ``domain`` on port 443."""
    domain = domain.strip().lower()
    if not _DOMAIN_RE.match(domain):
        raise click.BadParameter("Invalid domain format", param_hint="--domain")
    return {"serverName": domain, "dest": f"{domain}:443", "fingerprint": "chrome"}


def _load_disguise(
    domain: Optional[str], raw: Optional[str], path: Optional[Path]
) -> dict[str, Any]:
    given = [value for value in (domain, raw, path) if value is not None]
    if len(given) != 1:
        raise click.UsageError("Pass exactly one of --domain, --disguise or --disguise-file")

    if domain is not None:
        return domain_disguise(domain)

    text = raw if raw is not None else path.read_text()
    try:
        disguise = json.loads(text)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}", param_hint="disguise") from exc
    if not isinstance(disguise, dict):
        raise click.BadParameter("must be a JSON object", param_hint="disguise")
    return disguise


@click.command("update-disguise")
@click.option("--base-url", required=True, help="Control panel base URL")
@click.option("--server-id", required=True, help="Server identifier")
@click.option(
    "--admin-api-key",
    required=True,
    envvar="XRAY_ADMIN_API_KEY",
    help="Admin API key (or XRAY_ADMIN_API_KEY)",
)
@click.option("--domain", default=None, help="Domain to impersonate")
@click.option("--disguise", "disguise_json", default=None, help="Disguise object as JSON")
@click.option(
    "--disguise-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="File containing the disguise object",
)
@json_option
@click.pass_context
def update_disguise(
    ctx: click.Context,
    base_url: str,
    server_id: str,
    admin_api_key: str,
    domain: Optional[str],
    disguise_json: Optional[str],
    disguise_file: Optional[Path],
    json_output: bool,
) -> None:
    """Apply a disguise configuration to a server."""
    try:
        disguise = _load_disguise(domain, disguise_json, disguise_file)
    except click.UsageError as exc:
        emit_failure(exc.format_message(), json_output)
        sys.exit(1)

    run_operation(
        ctx, "update_disguise", json_output=json_output, label="Apply disguise",
        base_url=base_url.strip(),
        server_id=server_id.strip(),
        admin_api_key=admin_api_key.strip(),
        disguise=disguise,
    )
