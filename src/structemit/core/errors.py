# topmark:header:start
#
#   project      : StructEmit
#   file         : errors.py
#   file_relpath : src/structemit/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by StructEmit formatters, registry and settings.

Usage:
    Contract violations (unbalanced sections, missing names, writes to a committed
    pending value) are programmer errors: they derive from
    [`FormatterContractError`][structemit.core.errors.FormatterContractError], which is
    also a `RuntimeError`, and are not meant to be caught and retried.

    Lookup and configuration failures derive from `LookupError` / `ValueError` so
    callers can handle them with the built-in exception families they already use.

Click-aware CLI errors live in [`structemit.cli.errors`][structemit.cli.errors].
"""

from __future__ import annotations


class StructEmitError(Exception):
    """Base class for all StructEmit errors."""


class FormatterContractError(StructEmitError, RuntimeError):
    """A formatter was driven with an invalid call sequence."""


class SectionUnderflowError(FormatterContractError):
    """`close_section()` was called while no section is open."""

    def __init__(self, backend: str) -> None:
        super().__init__(f"{backend}: close_section() called with no open section")
        self.backend = backend


class MissingNameError(FormatterContractError):
    """A child requiring a name was emitted with an empty name."""

    def __init__(self, backend: str, operation: str) -> None:
        super().__init__(f"{backend}: {operation}() requires a non-empty name in this context")
        self.backend = backend
        self.operation = operation


class InvalidNameError(FormatterContractError):
    """A tag or attribute key cannot be written by the backend as given."""

    def __init__(self, backend: str, name: str, operation: str) -> None:
        super().__init__(f"{backend}: {operation}() got invalid name {name!r}")
        self.backend = backend
        self.name = name
        self.operation = operation


class PendingValueError(FormatterContractError):
    """A pending value was written to, or committed, after it was already committed."""


class UnknownFormatError(StructEmitError, LookupError):
    """No formatter is registered under the requested, default or fallback name.

    Attributes:
        tried (tuple[str, ...]): The names that were tried, in order.
    """

    def __init__(self, tried: tuple[str, ...]) -> None:
        shown = ", ".join(repr(t) for t in tried) or "<none>"
        super().__init__(f"Unknown output format (tried {shown})")
        self.tried = tried


class SettingsError(StructEmitError, ValueError):
    """Configuration could not be read or contains invalid values."""
