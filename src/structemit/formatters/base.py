# topmark:header:start
#
#   project      : StructEmit
#   file         : base.py
#   file_relpath : src/structemit/formatters/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The formatter capability contract shared by every output backend.

A formatter receives a sequence of structural calls (open an object or array
section, dump a named scalar, close the section) and accumulates the encoded
result in an internal buffer. `flush()` writes the buffer to a sink.

Call sequence rules:
    - Every ``open_*`` must be matched by exactly one later `close_section()`.
      Closing with no open section raises
      [`SectionUnderflowError`][structemit.core.errors.SectionUnderflowError].
    - Names label children of *object* sections; inside *array* sections they
      are ignored by backends that have positional children.
    - `dump_stream()` returns a [`PendingValue`][structemit.formatters.base.PendingValue].
      Text written to it is committed, exactly as if `dump_string()` had been
      called, by the next operation on the formatter, or by `render()`/`flush()`.
      `reset()` discards it.

Defaults provided here and shared by all backends:
    - `dump_bool()` delegates to `dump_format_unquoted()` with ``true``/``false``.
    - `dump_format()`, `dump_format_ns()` and `dump_format_unquoted()` delegate to
      the backend's `dump_format_va()`.
    - The ``*_with_attrs`` operations ignore the attributes.

Formatters are not thread-safe; one producer drives an instance at a time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, ClassVar

from structemit.config.logging import StructEmitLogger, get_logger
from structemit.core.errors import PendingValueError
from structemit.formatters.values import utf8_len, write_to_sink

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from structemit.core.attrs import FormatterAttrs

logger: StructEmitLogger = get_logger(__name__)


class PendingValue:
    """A stream-like sink collecting a scalar value before it is committed.

    Instances are created by `Formatter.dump_stream()`. They support `write()`
    and `writelines()`, so they can be passed to `print(..., file=...)`.

    Attributes:
        name (str): Name (or tag) the value is bound to.
        ns (str | None): Optional namespace the value is bound to.
    """

    name: str
    ns: str | None

    def __init__(self, name: str, ns: str | None = None) -> None:
        self.name = name
        self.ns = ns
        self._parts: list[str] = []
        self._committed: bool = False

    def __repr__(self) -> str:
        state = "committed" if self._committed else "pending"
        return f"PendingValue(name={self.name!r}, {state})"

    @property
    def closed(self) -> bool:
        """True once the value has been committed to its formatter."""
        return self._committed

    def write(self, text: str) -> int:
        """Append `text` to the value.

        Raises:
            PendingValueError: If the value was already committed.
        """
        if self._committed:
            raise PendingValueError(f"pending value {self.name!r} was already committed")
        text = str(text)
        self._parts.append(text)
        return len(text)

    def writelines(self, lines: Iterable[str]) -> None:
        """Append each item of `lines` (no separators are added)."""
        for line in lines:
            self.write(line)

    def flush(self) -> None:
        """No-op; present for file-object compatibility."""

    def getvalue(self) -> str:
        """Return the text accumulated so far."""
        return "".join(self._parts)

    @property
    def nbytes(self) -> int:
        """UTF-8 size of the accumulated text."""
        return utf8_len(self.getvalue())

    def commit(self) -> str:
        """Mark the value committed and return its text.

        Raises:
            PendingValueError: If the value was already committed.
        """
        if self._committed:
            raise PendingValueError(f"pending value {self.name!r} was already committed")
        self._committed = True
        return self.getvalue()


class Formatter(ABC):
    """Abstract base class for structured output formatters.

    Subclasses implement the section, scalar and buffer primitives; the
    conveniences defined here are expressed in terms of those primitives.

    Attributes:
        backend (str): Short backend name used in log and error messages.
    """

    backend: ClassVar[str] = "formatter"

    def __init__(self) -> None:
        self._pending: PendingValue | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(len={self.get_len()})"

    # --- Buffer lifecycle ---

    @abstractmethod
    def reset(self) -> None:
        """Discard the buffer, any pending value and all open sections."""

    @abstractmethod
    def render(self) -> str:
        """Commit any pending value and return the complete output text.

        The buffer is left intact; rendering twice yields the same text.
        """

    def flush(self, sink: Any) -> None:
        """Commit any pending value and write the complete output to `sink`.

        Args:
            sink (Any): A text stream, a binary stream or a `bytearray`. Binary
                sinks receive UTF-8 bytes.
        """
        text: str = self.render()
        logger.trace("%s: flush %d chars", self.backend, len(text))
        write_to_sink(sink, text)

    @abstractmethod
    def get_len(self) -> int:
        """Return the current size of the output, in UTF-8 bytes."""

    @abstractmethod
    def write_raw_data(self, data: str) -> None:
        """Append pre-encoded text verbatim, bypassing escaping."""

    # --- Sections ---

    @abstractmethod
    def open_array_section(self, name: str) -> None:
        """Open a section holding positional children."""

    @abstractmethod
    def open_array_section_in_ns(self, name: str, ns: str | None) -> None:
        """Open an array section labelled with a namespace."""

    @abstractmethod
    def open_object_section(self, name: str) -> None:
        """Open a section holding named children."""

    @abstractmethod
    def open_object_section_in_ns(self, name: str, ns: str | None) -> None:
        """Open an object section labelled with a namespace."""

    @abstractmethod
    def close_section(self) -> None:
        """Close the innermost open section."""

    def open_array_section_with_attrs(self, name: str, attrs: FormatterAttrs) -> None:
        """Open an array section; attributes are ignored unless the backend renders them."""
        self.open_array_section(name)

    def open_object_section_with_attrs(self, name: str, attrs: FormatterAttrs) -> None:
        """Open an object section; attributes are ignored unless the backend renders them."""
        self.open_object_section(name)

    @contextmanager
    def object_section(self, name: str, ns: str | None = None) -> Iterator[Formatter]:
        """Context manager wrapping `open_object_section_in_ns()` / `close_section()`."""
        self.open_object_section_in_ns(name, ns)
        yield self
        self.close_section()

    @contextmanager
    def array_section(self, name: str, ns: str | None = None) -> Iterator[Formatter]:
        """Context manager wrapping `open_array_section_in_ns()` / `close_section()`."""
        self.open_array_section_in_ns(name, ns)
        yield self
        self.close_section()

    # --- Scalars ---

    @abstractmethod
    def dump_unsigned(self, name: str, u: int) -> None:
        """Emit a non-negative integer."""

    @abstractmethod
    def dump_int(self, name: str, s: int) -> None:
        """Emit a signed integer."""

    @abstractmethod
    def dump_float(self, name: str, d: float) -> None:
        """Emit a float using a round-tripping representation."""

    @abstractmethod
    def dump_string(self, name: str, s: str) -> None:
        """Emit a string, quoted and escaped for the backend."""

    def dump_string_with_attrs(self, name: str, s: str, attrs: FormatterAttrs) -> None:
        """Emit a string; attributes are ignored unless the backend renders them."""
        self.dump_string(name, s)

    def dump_bool(self, name: str, b: bool) -> None:
        """Emit a boolean as the unquoted literal ``true`` or ``false``."""
        self.dump_format_unquoted(name, "%s", "true" if b else "false")

    @abstractmethod
    def dump_stream(self, name: str) -> PendingValue:
        """Return a sink whose text becomes the value of `name` once committed."""

    @abstractmethod
    def dump_format_va(
        self,
        name: str,
        ns: str | None,
        quoted: bool,
        fmt: str,
        args: tuple[Any, ...],
    ) -> None:
        """Emit ``fmt % args`` as a scalar.

        Args:
            name (str): Child name.
            ns (str | None): Optional namespace attached per backend rules.
            quoted (bool): Emit as a string (True) or as a raw literal (False).
            fmt (str): printf-style template.
            args (tuple[Any, ...]): Template arguments; a single mapping enables
                ``%(key)s`` placeholders.
        """

    def dump_format(self, name: str, fmt: str, *args: Any) -> None:
        """Emit a quoted, printf-style formatted scalar."""
        self.dump_format_va(name, None, True, fmt, args)

    def dump_format_ns(self, name: str, ns: str | None, fmt: str, *args: Any) -> None:
        """Emit a quoted, printf-style formatted scalar in a namespace."""
        self.dump_format_va(name, ns, True, fmt, args)

    def dump_format_unquoted(self, name: str, fmt: str, *args: Any) -> None:
        """Emit an unquoted, printf-style formatted scalar (numbers, booleans)."""
        self.dump_format_va(name, None, False, fmt, args)

    # --- Pending value bookkeeping ---

    def _start_pending(self, name: str, ns: str | None = None) -> PendingValue:
        pending = PendingValue(name, ns)
        self._pending = pending
        return pending

    def _pending_nbytes(self) -> int:
        return self._pending.nbytes if self._pending is not None else 0

    def _finish_pending(self) -> None:
        """Commit the pending value, if any, into the buffer."""
        pending: PendingValue | None = self._pending
        if pending is None:
            return
        self._pending = None
        self._commit_pending(pending.name, pending.ns, pending.commit())

    def _drop_pending(self) -> None:
        if self._pending is not None:
            # Make the orphaned sink reject further writes.
            self._pending.commit()
            self._pending = None

    @abstractmethod
    def _commit_pending(self, name: str, ns: str | None, text: str) -> None:
        """Write a committed pending value into the buffer."""
