"""Click-based CLI entrypoint for xray-desktop.

Each subcommand is one bridge operation, loaded lazily from
``xray_desktop.commands``. Unknown commands raise an error.
"""

from __future__ import annotations

import importlib
import sys

import click

from xray_desktop import __version__
from xray_desktop.utils import log_debug

# ---------------------------------------------------------------------------
# Aliases
# ---------------------------------------------------------------------------
# Each alias maps to (canonical_command, prepended_args). The invocation is
# rewritten before dispatch.

ALIASES: dict[str, tuple[str, list[str]]] = {
    "import": ("import-token", []),
    "up": ("connect", []),
    "down": ("disconnect", []),
}

# ---------------------------------------------------------------------------
# Custom Click Group
# ---------------------------------------------------------------------------


_LAZY_COMMANDS: dict[str, tuple[str, str]] = {
    "connect": ("xray_desktop.commands.connect", "connect"),
    "disconnect": ("xray_desktop.commands.disconnect", "disconnect"),
    "import-token": ("xray_desktop.commands.import_token", "import_token"),
    "open-link": ("xray_desktop.commands.open_link", "open_link"),
    "set-mode": ("xray_desktop.commands.set_mode", "set_mode"),
    "status": ("xray_desktop.commands.status", "status"),
    "update-disguise": ("xray_desktop.commands.update_disguise", "update_disguise"),
}


class DesktopGroup(click.Group):
    """Click group with alias resolution and lazy command loading.

    * Command modules are imported on first access, not at import time.
    * Aliases listed in ``ALIASES`` are rewritten to their canonical form
      before dispatch.
    * Unknown commands produce an error message.
    """

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return all available command names (eager + lazy)."""
        eager = set(self.commands or {})
        return sorted(eager | _LAZY_COMMANDS.keys())

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Look up a command, importing lazily if needed."""
        cmd = self.commands.get(cmd_name)
        if cmd is not None:
            return cmd

        entry = _LAZY_COMMANDS.get(cmd_name)
        if entry is None:
            return None

        module_path, attr_name = entry
        mod = importlib.import_module(module_path)
        loaded_cmd: click.Command = getattr(mod, attr_name)
        # Cache so subsequent lookups skip the import
        self.add_command(loaded_cmd, cmd_name)
        return loaded_cmd

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        """Resolve a command name, rewriting aliases first."""
        if not args:
            return super().resolve_command(ctx, args)

        cmd_name = args[0]
        remaining = list(args[1:])

        if cmd_name in ALIASES:
            canonical, prepended = ALIASES[cmd_name]
            log_debug(f"Alias '{cmd_name}' -> '{canonical}' with args {prepended}")
            cmd_name = canonical
            remaining = prepended + remaining

        cmd_obj = self.get_command(ctx, cmd_name)
        if cmd_obj is not None:
            return cmd_name, cmd_obj, remaining

        ctx.fail(
            f"Unknown command '{cmd_name}'. Run 'xray-desktop --help' for available commands."
        )


# ---------------------------------------------------------------------------
# Main CLI Group
# ---------------------------------------------------------------------------


@click.group(cls=DesktopGroup, invoke_without_command=True)
@click.version_option(__version__, prog_name="xray-desktop")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """xray-desktop - drive the connection agent through its bridge."""
    ctx.ensure_object(dict)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ---------------------------------------------------------------------------
# Entry Point
# ---------------------------------------------------------------------------


def main() -> None:
    """Entry point for the CLI.

    Uses ``standalone_mode=False`` so exit codes are managed here. Usage
    errors are normalised to exit code 1 (Click's default is 2).
    """
    try:
        cli(standalone_mode=False)
    except click.UsageError as exc:
        click.echo(f"Error: {exc.format_message()}", err=True)
        sys.exit(1)
    except click.Abort:
        sys.exit(1)
    except SystemExit as exc:
        code = exc.code if isinstance(exc.code, int) else 1
        sys.exit(1 if code == 2 else code)


if __name__ == "__main__":
    main()
