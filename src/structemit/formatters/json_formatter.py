# topmark:header:start
#
#   project      : StructEmit
#   file         : json_formatter.py
#   file_relpath : src/structemit/formatters/json_formatter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""JSON backend.

Separators are driven by the per-section child count: a comma precedes every
child except the first. Keys are written only inside object sections; at the
top level (no open section) names are ignored, so ``open_object_section("root")``
followed by `close_section()` renders ``{}``.

Pretty mode puts one child per line, indented by the section depth, and ends the
document with a newline once the outermost section closes. It never changes the
parsed structure.

Non-finite floats are emitted as the strings ``"NaN"``, ``"Infinity"`` and
``"-Infinity"`` so that output stays valid for strict parsers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from structemit.config.logging import StructEmitLogger, get_logger
from structemit.core.errors import MissingNameError, SectionUnderflowError
from structemit.formatters.base import Formatter, PendingValue
from structemit.formatters.escaping import quote_json
from structemit.formatters.values import (
    format_float,
    format_integer,
    render_template,
    utf8_len,
)

logger: StructEmitLogger = get_logger(__name__)


@dataclass(slots=True)
class JsonSection:
    """One open JSON array or object.

    Attributes:
        is_array: True for ``[...]``, False for ``{...}``.
        child_count: Number of children written so far.
    """

    is_array: bool
    child_count: int = 0


def _ns_key(name: str, ns: str | None) -> str:
    return f"{name} {ns}" if name and ns else name


class JSONFormatter(Formatter):
    """Render the formatter contract as JSON text.

    Args:
        pretty (bool): Insert newlines and indentation.
        indent (int): Spaces per nesting level in pretty mode.
    """

    backend: ClassVar[str] = "json"

    pretty: bool

    def __init__(self, pretty: bool = False, *, indent: int = 4) -> None:
        super().__init__()
        self.pretty = pretty
        self._indent: str = " " * indent
        self._stack: list[JsonSection] = []
        self._chunks: list[str] = []
        self._nbytes: int = 0

    # --- Buffer ---

    def _write(self, text: str) -> None:
        self._chunks.append(text)
        self._nbytes += utf8_len(text)

    def reset(self) -> None:
        """Discard the buffer, any pending value and all open sections."""
        logger.trace("json: reset")
        self._drop_pending()
        self._stack.clear()
        self._chunks.clear()
        self._nbytes = 0

    def render(self) -> str:
        """Commit any pending value and return the JSON text."""
        self._finish_pending()
        return "".join(self._chunks)

    def get_len(self) -> int:
        """Return the UTF-8 size of the buffer plus any pending text."""
        return self._nbytes + self._pending_nbytes()

    def write_raw_data(self, data: str) -> None:
        """Append `data` verbatim."""
        self._finish_pending()
        self._write(data)

    # --- Structure ---

    def _newline_indent(self, depth: int) -> None:
        self._write("\n" + self._indent * depth)

    def _begin_child(self, name: str, operation: str) -> None:
        """Write the separator and key that precede a child in the current section."""
        self._finish_pending()
        if not self._stack:
            return
        entry: JsonSection = self._stack[-1]
        if entry.child_count:
            self._write(",")
        if self.pretty:
            self._newline_indent(len(self._stack))
        if not entry.is_array:
            if not name:
                raise MissingNameError(self.backend, operation)
            self._write(quote_json(name))
            self._write(": " if self.pretty else ":")
        entry.child_count += 1

    def _open_section(self, name: str, is_array: bool, operation: str) -> None:
        self._begin_child(name, operation)
        self._write("[" if is_array else "{")
        self._stack.append(JsonSection(is_array=is_array))
        logger.trace("json: open %s %r depth=%d", operation, name, len(self._stack))

    def open_array_section(self, name: str) -> None:
        """Open ``[``, keyed by `name` inside an object."""
        self._open_section(name, True, "open_array_section")

    def open_array_section_in_ns(self, name: str, ns: str | None) -> None:
        """Open ``[`` keyed by ``"<name> <ns>"`` inside an object."""
        self._open_section(_ns_key(name, ns), True, "open_array_section_in_ns")

    def open_object_section(self, name: str) -> None:
        """Open ``{``, keyed by `name` inside an object."""
        self._open_section(name, False, "open_object_section")

    def open_object_section_in_ns(self, name: str, ns: str | None) -> None:
        """Open ``{`` keyed by ``"<name> <ns>"`` inside an object."""
        self._open_section(_ns_key(name, ns), False, "open_object_section_in_ns")

    def close_section(self) -> None:
        """Close the innermost section.

        Raises:
            SectionUnderflowError: If no section is open.
        """
        if not self._stack:
            raise SectionUnderflowError(self.backend)
        self._finish_pending()
        entry: JsonSection = self._stack.pop()
        if self.pretty and entry.child_count:
            self._newline_indent(len(self._stack))
        self._write("]" if entry.is_array else "}")
        if self.pretty and not self._stack:
            self._write("\n")
        logger.trace("json: close depth=%d", len(self._stack))

    # --- Scalars ---

    def dump_unsigned(self, name: str, u: int) -> None:
        """Emit `u` as a JSON number."""
        text: str = format_integer(u, unsigned=True)
        self._begin_child(name, "dump_unsigned")
        self._write(text)

    def dump_int(self, name: str, s: int) -> None:
        """Emit `s` as a JSON number."""
        text: str = format_integer(s)
        self._begin_child(name, "dump_int")
        self._write(text)

    def dump_float(self, name: str, d: float) -> None:
        """Emit `d` as a JSON number, or as a string when not finite."""
        text, finite = format_float(d)
        self._begin_child(name, "dump_float")
        self._write(text if finite else quote_json(text))

    def dump_string(self, name: str, s: str) -> None:
        """Emit `s` as a JSON string."""
        self._begin_child(name, "dump_string")
        self._write(quote_json(s))

    def dump_stream(self, name: str) -> PendingValue:
        """Write the key for `name` now; the string value follows on commit."""
        self._begin_child(name, "dump_stream")
        return self._start_pending(name)

    def _commit_pending(self, name: str, ns: str | None, text: str) -> None:
        self._write(quote_json(text))

    def dump_format_va(
        self,
        name: str,
        ns: str | None,
        quoted: bool,
        fmt: str,
        args: tuple[Any, ...],
    ) -> None:
        """Emit the rendered template quoted as a string or verbatim as a literal."""
        text: str = render_template(fmt, args)
        self._begin_child(_ns_key(name, ns), "dump_format_va")
        self._write(quote_json(text) if quoted else text)
