"""Shared helpers for the bridge subcommands.

Every subcommand runs one dispatcher operation and reports the outcome the
same way: the value (or a completion line) on stdout, or ``Error: <message>``
on stderr with exit status 1.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Callable

import click

from xray_desktop.dispatcher import CommandDispatcher
from xray_desktop.errors import DesktopError
from xray_desktop.utils import log_debug

json_option = click.option("--json", "json_output", is_flag=True, help="Output as JSON")


def get_dispatcher(ctx: click.Context) -> CommandDispatcher:
    """Return the dispatcher stored on the root context, building it on first use."""
    obj = ctx.find_root().ensure_object(dict)
    dispatcher = obj.get("dispatcher")
    if dispatcher is None:
        dispatcher = CommandDispatcher.from_config()
        obj["dispatcher"] = dispatcher
    return dispatcher


def emit_success(result: Any, json_output: bool, label: str) -> None:
    if json_output:
        click.echo(json.dumps({"ok": True, "data": result}))
    elif result is None:
        click.echo(f"{label} completed")
    else:
        click.echo(json.dumps(result, indent=2))


def emit_failure(message: str, json_output: bool) -> None:
    if json_output:
        click.echo(json.dumps({"ok": False, "error": message}))
    else:
        click.echo(f"Error: {message}", err=True)


def run_operation(
    ctx: click.Context,
    name: str,
    *,
    json_output: bool = False,
    label: str = "",
    render: Callable[[Any], None] | None = None,
    **kwargs: Any,
) -> Any:
    """Run dispatcher operation ``name`` and report the outcome.

    Args:
        ctx: Click context of the running subcommand.
        name: Dispatcher method name (see ``dispatcher.OPERATIONS``).
        json_output: Emit ``{"ok": ..., "data"/"error": ...}`` instead of text.
        label: Human name used in the "<label> completed" line.
        render: Optional text renderer for a successful result.
        **kwargs: Operation arguments.

    Returns:
        The operation result. Exits with status 1 on failure.
    """
    dispatcher = get_dispatcher(ctx)
    try:
        result = dispatcher.operation(name)(**kwargs)
    except DesktopError as exc:
        log_debug(f"{name} failed: {type(exc).__name__}")
        emit_failure(str(exc), json_output)
        sys.exit(1)

    if render is not None and not json_output:
        render(result)
    else:
        emit_success(result, json_output, label or name)
    return result
