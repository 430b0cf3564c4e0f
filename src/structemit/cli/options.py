# topmark:header:start
#
#   project      : StructEmit
#   file         : options.py
#   file_relpath : src/structemit/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities for the Click-based StructEmit CLI.

This module centralizes reusable options (verbosity) and their resolution logic,
so commands and groups can stay thin.
"""

from __future__ import annotations

import logging
from typing import Callable, ParamSpec, TypeVar

import click

from structemit.cli.errors import StructEmitUsageError
from structemit.config.logging import TRACE_LEVEL

P = ParamSpec("P")
R = TypeVar("R")


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int | None:
    """Resolve the logging level from the verbose and quiet counts.

    Args:
        verbose_count: Number of times the verbose flag (-v) is passed.
        quiet_count: Number of times the quiet flag (-q) is passed.

    Returns:
        The logging level, or None when neither flag was given.

    Raises:
        StructEmitUsageError: If both verbose and quiet flags are used.

    Behavior:
        Three or more -v flags set TRACE level.
        Two -v flags set DEBUG level.
        One -v flag sets INFO level.
        One or more -q flags set ERROR level.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise StructEmitUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")

    if verbose_count >= 3:  # -vvv
        return TRACE_LEVEL
    if verbose_count == 2:  # -vv
        return logging.DEBUG
    if verbose_count == 1:  # -v
        return logging.INFO
    if quiet_count >= 1:  # -q
        return logging.ERROR
    return None


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --verbose and --quiet options to a command.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function with verbosity options added.
    """
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase log verbosity. Specify up to three times for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only log errors.",
    )(f)
    return f


def format_option(default: str | None = None) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Return a ``--format`` option decorator.

    Args:
        default: Default format name; None defers to the settings' default format.

    Returns:
        A decorator adding ``-f/--format`` as the ``format_name`` parameter.
    """
    return click.option(
        "-f",
        "--format",
        "format_name",
        type=str,
        default=default,
        help="Output format (see 'structemit formats').",
    )
