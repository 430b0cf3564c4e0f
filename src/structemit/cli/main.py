# topmark:header:start
#
#   project      : StructEmit
#   file         : main.py
#   file_relpath : src/structemit/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StructEmit command-line entry point.

Group-level options are resolved once and placed into ``ctx.obj``:

- ``console``: the [`ClickConsole`][structemit.cli.console.ClickConsole] for program output;
- ``settings``: the effective [`EmitterSettings`][structemit.config.settings.EmitterSettings];
- ``log_level``: the effective logging level (or None).
"""

from __future__ import annotations

from pathlib import Path

import click

from structemit.cli.commands.formats import formats_command
from structemit.cli.commands.render import render_command
from structemit.cli.commands.version import version_command
from structemit.cli.console import ClickConsole
from structemit.cli.errors import StructEmitConfigError
from structemit.cli.options import common_verbose_options, resolve_verbosity
from structemit.config.logging import get_logger, resolve_env_log_level, setup_logging
from structemit.config.settings import EmitterSettings, resolve_settings
from structemit.constants import DEFAULT_SETTINGS_FILE
from structemit.core.errors import SettingsError

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    config_path: Path | None,
    no_color: bool,
) -> None:
    """Initialize logging, settings and the console on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        config_path (Path | None): Explicit settings file; when None, a
            ``structemit.toml`` in the working directory is used if present.
        no_color (bool): Whether ``--no-color`` was passed.
    """
    ctx.obj = ctx.obj or {}

    level: int | None = resolve_verbosity(verbose, quiet)
    if level is None:
        level = resolve_env_log_level()
    ctx.obj["log_level"] = level
    setup_logging(level=level)

    if config_path is None:
        candidate = Path(DEFAULT_SETTINGS_FILE)
        if candidate.is_file():
            config_path = candidate
    try:
        settings: EmitterSettings = resolve_settings(config_path)
    except SettingsError as exc:
        raise StructEmitConfigError(str(exc)) from exc
    ctx.obj["settings"] = settings
    logger.debug("Effective settings: %s", settings)

    ctx.obj["console"] = ClickConsole(enable_color=not no_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="StructEmit CLI",
)
@common_verbose_options
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings file (structemit.toml or pyproject.toml).",
)
@click.option("--no-color", is_flag=True, default=False, help="Disable ANSI colors.")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    config_path: Path | None,
    no_color: bool,
) -> None:
    """Entry point for the StructEmit CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        config_path=config_path,
        no_color=no_color,
    )
    console: ClickConsole = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'structemit render [INPUT] --format NAME'.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(render_command)

cli.add_command(formats_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
