# topmark:header:start
#
#   project      : StructEmit
#   file         : version.py
#   file_relpath : src/structemit/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StructEmit `version` command.

Prints the current StructEmit version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from structemit.constants import STRUCTEMIT_VERSION

if TYPE_CHECKING:
    from structemit.cli.console import ClickConsole


@click.command(
    name="version",
    help="Show the current version of StructEmit.",
)
def version_command() -> None:
    """Show the current version of StructEmit."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    console.print(console.styled(STRUCTEMIT_VERSION, bold=True))
