# topmark:header:start
#
#   project      : StructEmit
#   file         : render.py
#   file_relpath : src/structemit/cli/commands/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StructEmit `render` command.

Reads a JSON document and writes it through the selected formatter.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from structemit.cli.errors import (
    StructEmitEncodingError,
    StructEmitFileNotFoundError,
    StructEmitIOError,
    StructEmitSoftwareError,
    StructEmitUsageError,
)
from structemit.cli.options import format_option
from structemit.config.logging import StructEmitLogger, get_logger
from structemit.core.errors import FormatterContractError, UnknownFormatError
from structemit.core.walk import emit_value
from structemit.formatters.registry import create_formatter

if TYPE_CHECKING:
    from structemit.cli.console import ClickConsole
    from structemit.config.settings import EmitterSettings
    from structemit.formatters.base import Formatter

logger: StructEmitLogger = get_logger(__name__)


def read_json_input(input_path: str) -> Any:
    """Read and decode a JSON document from a path, or from STDIN when `input_path` is ``-``.

    Raises:
        StructEmitFileNotFoundError: If the path does not exist.
        StructEmitIOError: If the path cannot be read.
        StructEmitEncodingError: If the content is not valid UTF-8 JSON.
    """
    try:
        if input_path == "-":
            text: str = click.get_text_stream("stdin").read()
        else:
            text = Path(input_path).read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise StructEmitFileNotFoundError(f"Input not found: {input_path}") from exc
    except UnicodeDecodeError as exc:
        raise StructEmitEncodingError(f"Input is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise StructEmitIOError(f"Cannot read {input_path}: {exc}") from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise StructEmitEncodingError(f"Input is not valid JSON: {exc}") from exc


@click.command(
    name="render",
    help="Render a JSON document (file or '-' for STDIN) in the selected output format.",
)
@click.argument("input_path", metavar="[INPUT]", required=False, default="-")
@format_option()
@click.option(
    "--fallback",
    "fallback_name",
    type=str,
    default=None,
    help="Format to use when --format names an unknown format.",
)
@click.option(
    "--root",
    "root_name",
    type=str,
    default="root",
    show_default=True,
    help="Name of the top-level section (XML root tag, table column for scalar lists).",
)
def render_command(
    *,
    input_path: str,
    format_name: str | None,
    fallback_name: str | None,
    root_name: str,
) -> None:
    """Render a JSON document through a formatter.

    Args:
        input_path (str): Path of the JSON input, or ``-`` for STDIN.
        format_name (str | None): Requested format; defaults to the settings' default.
        fallback_name (str | None): Fallback format; defaults to the settings' fallback.
        root_name (str): Name given to the top-level value.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    settings: EmitterSettings = ctx.obj["settings"]

    data: Any = read_json_input(input_path)

    fallback: str | None = fallback_name
    if fallback is None and settings.fallback_format is not None:
        fallback = settings.fallback_format.value
    try:
        formatter: Formatter = create_formatter(
            format_name or "",
            settings.default_format.value,
            fallback,
            settings=settings,
        )
    except UnknownFormatError as exc:
        raise StructEmitUsageError(str(exc)) from exc

    try:
        emit_value(formatter, root_name, data)
    except FormatterContractError as exc:
        raise StructEmitSoftwareError(str(exc)) from exc

    text: str = formatter.render()
    logger.debug("Rendered %d bytes with %s", formatter.get_len(), type(formatter).__name__)
    console.print(text, nl=bool(text) and not text.endswith("\n"))
