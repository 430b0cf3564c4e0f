# topmark:header:start
#
#   project      : StructEmit
#   file         : errors.py
#   file_relpath : src/structemit/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the StructEmit CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes. Click prints the message to stderr and exits with
    the class's ``exit_code``.
"""

from __future__ import annotations

import click

from structemit.cli.exit_codes import ExitCode


class StructEmitCliError(click.ClickException):
    """Base class for all StructEmit CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text."""
        return str(getattr(self, "message", ""))


class StructEmitUsageError(StructEmitCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class StructEmitConfigError(StructEmitCliError):
    """Error for settings errors (missing/invalid/malformed settings file)."""

    exit_code = ExitCode.CONFIG_ERROR


class StructEmitFileNotFoundError(StructEmitCliError):
    """Error when the input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class StructEmitIOError(StructEmitCliError):
    """Error for I/O errors reading input."""

    exit_code = ExitCode.IO_ERROR


class StructEmitEncodingError(StructEmitCliError):
    """Error for input that is not valid UTF-8 JSON."""

    exit_code = ExitCode.ENCODING_ERROR


class StructEmitSoftwareError(StructEmitCliError):
    """Error for formatter contract violations."""

    exit_code = ExitCode.SOFTWARE_ERROR
