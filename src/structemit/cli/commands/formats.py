# topmark:header:start
#
#   project      : StructEmit
#   file         : formats.py
#   file_relpath : src/structemit/cli/commands/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StructEmit `formats` command.

Lists the registered output formats, rendered with one of those formats.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from structemit.cli.errors import StructEmitUsageError
from structemit.cli.options import format_option
from structemit.core.errors import UnknownFormatError
from structemit.core.formats import OutputFormat
from structemit.core.walk import emit_value
from structemit.formatters.registry import FormatterRegistry, create_formatter

if TYPE_CHECKING:
    from structemit.cli.console import ClickConsole
    from structemit.config.settings import EmitterSettings
    from structemit.formatters.base import Formatter


def build_formats_payload() -> list[dict[str, str]]:
    """Return one ``{"name", "label"}`` mapping per registered format."""
    payload: list[dict[str, str]] = []
    for name in FormatterRegistry.names():
        fmt: OutputFormat | None = OutputFormat.parse(name)
        label: str = fmt.label if fmt is not None and fmt.value == name else ""
        payload.append({"name": name, "label": label})
    return payload


@click.command(
    name="formats",
    help="List the available output formats.",
)
@format_option(default=OutputFormat.TABLE.value)
def formats_command(*, format_name: str) -> None:
    """List registered output formats.

    Args:
        format_name (str): Format used to render the listing.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    settings: EmitterSettings = ctx.obj["settings"]

    try:
        formatter: Formatter = create_formatter(
            format_name, settings.default_format.value, settings=settings
        )
    except UnknownFormatError as exc:
        raise StructEmitUsageError(str(exc)) from exc

    emit_value(formatter, "formats", build_formats_payload())
    text: str = formatter.render()
    console.print(text, nl=bool(text) and not text.endswith("\n"))
