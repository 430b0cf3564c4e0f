# topmark:header:start
#
#   project      : StructEmit
#   file         : test_formats_command.py
#   file_relpath : tests/cli/test_formats_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests: `formats` listing."""

from __future__ import annotations

import json

from structemit.cli.exit_codes import ExitCode
from structemit.core.formats import OutputFormat
from tests.cli.conftest import assert_exit, assert_SUCCESS, run_cli
from tests.conftest import mark_cli


@mark_cli
def test_formats_table_lists_every_builtin() -> None:
    """The default listing is a table with one row per format."""
    result = run_cli(["--no-color", "formats"])

    assert_SUCCESS(result)
    lines: list[str] = result.stdout.splitlines()
    assert lines[1].split() == ["|", "name", "|", "label", "|"]
    for fmt in OutputFormat:
        assert any(f"| {fmt.value} " in line and fmt.label in line for line in lines)


@mark_cli
def test_formats_as_json() -> None:
    """The listing can be rendered with any format."""
    result = run_cli(["formats", "--format", "json"])

    assert_SUCCESS(result)
    assert json.loads(result.stdout) == [
        {"name": fmt.value, "label": fmt.label} for fmt in OutputFormat
    ]


@mark_cli
def test_formats_unknown_format() -> None:
    """Unknown formats exit with USAGE_ERROR."""
    result = run_cli(["formats", "-f", "csv"])

    assert_exit(result, ExitCode.USAGE_ERROR)
