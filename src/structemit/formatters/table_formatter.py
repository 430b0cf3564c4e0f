# topmark:header:start
#
#   project      : StructEmit
#   file         : table_formatter.py
#   file_relpath : src/structemit/formatters/table_formatter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Table backend: flattens nested sections into rows of named cells.

Rows and records:
    Scalars are collected as ``(column, value)`` cells in the current row.
    An object section opened directly inside an array section, while no record is
    already open, is a *record*: the current row is finalized before it opens and
    the record's cells form a row of their own, finalized when it closes. Scalars
    listed directly in a top-level array each form a one-cell row.

Column names:
    A column is the dot-joined path of labels from the enclosing record (or the
    top-level section) down to the scalar. Within one parent, a repeated label
    gets a numeric suffix: ``entry``, ``entry1``, ``entry2``. Positional children
    of an array reuse the array's own label with the same suffixing, so
    ``tags: ["a", "b"]`` yields the columns ``tags`` and ``tags1``. Counters are
    kept per open section and discarded when it closes.

Rendering:
    Columns are ordered by first appearance across all rows. Grid mode pads every
    cell to the widest of its header and values and leaves absent cells blank;
    key/value mode writes ``column=value`` lines, one blank line between rows.
    Line breaks in headers and cells are written as ``\\n`` and ``\\r``.
    Raw data is appended verbatim after the table.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Final

from structemit.config.logging import StructEmitLogger, get_logger
from structemit.core.errors import MissingNameError, SectionUnderflowError
from structemit.formatters.base import Formatter, PendingValue
from structemit.formatters.values import (
    format_float,
    format_integer,
    render_template,
    utf8_len,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from structemit.core.attrs import FormatterAttrs

logger: StructEmitLogger = get_logger(__name__)

DEFAULT_COLUMN: Final[str] = "value"
PATH_SEPARATOR: Final[str] = "."

_CELL_ESCAPES: Final[dict[str, str]] = {"\n": "\\n", "\r": "\\r"}
_CELL_ESCAPE_RE: Final[re.Pattern[str]] = re.compile("[\n\r\ud800-\udfff]")


@dataclass(slots=True)
class TableSection:
    """One open section.

    Attributes:
        name: Label given when the section was opened.
        is_array: True if children are positional.
        path: Column prefix applied to the section's children.
        is_record: True if closing this section finalizes a row.
        child_count: Number of children emitted so far.
        occurrences: Per-label counters used to suffix repeated labels.
    """

    name: str
    is_array: bool
    path: tuple[str, ...]
    is_record: bool = False
    child_count: int = 0
    occurrences: dict[str, int] = field(default_factory=dict)


def _claim(parent: TableSection, label: str, *, peek: bool = False) -> str:
    """Return `label`, suffixed if it was already used under `parent`."""
    n: int = parent.occurrences.get(label, 0)
    if not peek:
        parent.occurrences[label] = n + 1
    return label if n == 0 else f"{label}{n}"


def _cell_text(text: str) -> str:
    """Keep a cell on one line: line breaks become ``\\n``/``\\r``, lone surrogates U+FFFD."""
    return _CELL_ESCAPE_RE.sub(lambda m: _CELL_ESCAPES.get(m.group(0), "\ufffd"), text)


def render_table(
    rows: Sequence[Mapping[str, str]],
    columns: Sequence[str],
    *,
    keyval: bool = False,
) -> str:
    """Render rows of cells as an aligned grid or as ``column=value`` lines.

    Line breaks in headers and cells are written as ``\\n`` and ``\\r`` so each
    row stays on one line.

    Args:
        rows: Rows of ``column -> value`` cells; columns may be missing in a row.
        columns: Column order.
        keyval: Render ``column=value`` lines instead of a grid.

    Returns:
        The rendered text, ending with a newline, or ``""`` when there are no rows.
    """
    if not rows:
        return ""
    rows = [{_cell_text(col): _cell_text(value) for col, value in row.items()} for row in rows]
    columns = [_cell_text(col) for col in columns]

    if keyval:
        blocks: list[str] = [
            "\n".join(f"{col}={row[col]}" for col in columns if col in row) for row in rows
        ]
        return "\n\n".join(blocks) + "\n"

    widths: list[int] = [
        max([len(col)] + [len(row.get(col, "")) for row in rows]) for col in columns
    ]

    def _line(cells: Sequence[str]) -> str:
        return "| " + " | ".join(f"{cell:<{w}}" for cell, w in zip(cells, widths)) + " |"

    border: str = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
    lines: list[str] = [border, _line(columns), border]
    lines.extend(_line([row.get(col, "") for col in columns]) for row in rows)
    lines.append(border)
    return "\n".join(lines) + "\n"


class TableFormatter(Formatter):
    """Render the formatter contract as a text table.

    Args:
        keyval (bool): Render ``column=value`` lines instead of a grid.
    """

    backend: ClassVar[str] = "table"

    keyval: bool

    def __init__(self, keyval: bool = False) -> None:
        super().__init__()
        self.keyval = keyval
        self._stack: list[TableSection] = []
        self._rows: list[dict[str, str]] = []
        self._row: dict[str, str] = {}
        self._columns: dict[str, None] = {}
        self._raw: list[str] = []

    # --- Row bookkeeping ---

    def _in_record(self) -> bool:
        return any(s.is_record for s in self._stack)

    def _end_row(self) -> None:
        if self._row:
            self._rows.append(self._row)
            self._row = {}

    def _add_cell(self, column: str, value: str) -> None:
        if column in self._row:
            n = 1
            while f"{column}{n}" in self._row:
                n += 1
            column = f"{column}{n}"
        self._row[column] = value
        self._columns.setdefault(column, None)

    def _child_path(
        self,
        parent: TableSection,
        name: str,
        operation: str,
        *,
        peek: bool = False,
    ) -> tuple[str, ...]:
        if parent.is_array:
            label: str = parent.path[-1] if parent.path else (parent.name or DEFAULT_COLUMN)
            return parent.path[:-1] + (_claim(parent, label, peek=peek),)
        if not name:
            raise MissingNameError(self.backend, operation)
        return parent.path + (_claim(parent, name, peek=peek),)

    def _locate_scalar(
        self,
        name: str,
        operation: str,
        *,
        peek: bool = False,
    ) -> tuple[str, bool]:
        """Return the column for a scalar and whether it forms a row of its own."""
        if not self._stack:
            return name or DEFAULT_COLUMN, False
        parent: TableSection = self._stack[-1]
        if parent.is_array and len(self._stack) == 1:
            return parent.name or DEFAULT_COLUMN, True
        path = self._child_path(parent, name, operation, peek=peek)
        return PATH_SEPARATOR.join(path), False

    def _add_scalar(self, name: str, value: str, operation: str) -> None:
        self._finish_pending()
        column, standalone = self._locate_scalar(name, operation)
        if self._stack:
            self._stack[-1].child_count += 1
        if standalone:
            self._end_row()
            self._add_cell(column, value)
            self._end_row()
        else:
            self._add_cell(column, value)

    # --- Buffer ---

    def reset(self) -> None:
        """Discard rows, columns, raw data, any pending value and all open sections."""
        logger.trace("table: reset")
        self._drop_pending()
        self._stack.clear()
        self._rows.clear()
        self._row = {}
        self._columns.clear()
        self._raw.clear()

    def _render(self, rows: list[dict[str, str]], columns: Sequence[str]) -> str:
        return render_table(rows, columns, keyval=self.keyval) + "".join(self._raw)

    def _committed_rows(self) -> list[dict[str, str]]:
        return self._rows + [self._row] if self._row else list(self._rows)

    def render(self) -> str:
        """Commit any pending value and return the rendered table."""
        self._finish_pending()
        return self._render(self._committed_rows(), list(self._columns))

    def get_len(self) -> int:
        """Return the UTF-8 size of the table as it would render now.

        A pending value is counted as if it had been committed, without committing it.
        """
        rows: list[dict[str, str]] = [dict(r) for r in self._committed_rows()]
        columns: dict[str, None] = dict(self._columns)
        pending: PendingValue | None = self._pending
        if pending is not None:
            column, standalone = self._locate_scalar(pending.name, "dump_stream", peek=True)
            if standalone or not rows or not self._row:
                rows.append({})
            row: dict[str, str] = rows[-1]
            base, n = column, 1
            while column in row:
                column = f"{base}{n}"
                n += 1
            row[column] = pending.getvalue()
            columns.setdefault(column, None)
        return utf8_len(self._render(rows, list(columns)))

    def write_raw_data(self, data: str) -> None:
        """Append `data` verbatim after the table."""
        self._finish_pending()
        self._raw.append(data)

    # --- Structure ---

    def _open_section(self, name: str, is_array: bool, operation: str) -> None:
        self._finish_pending()
        if not self._stack:
            self._stack.append(TableSection(name=name, is_array=is_array, path=()))
            logger.trace("table: open top-level %r", name)
            return
        parent: TableSection = self._stack[-1]
        if parent.is_array and not is_array and not self._in_record():
            parent.child_count += 1
            self._end_row()
            self._stack.append(TableSection(name=name, is_array=False, path=(), is_record=True))
            logger.trace("table: open record %r (row %d)", name, len(self._rows))
            return
        path = self._child_path(parent, name, operation)
        parent.child_count += 1
        self._stack.append(TableSection(name=name or parent.name, is_array=is_array, path=path))
        logger.trace("table: open %r path=%s", name, PATH_SEPARATOR.join(path))

    def open_array_section(self, name: str) -> None:
        """Open a section whose children are positional."""
        self._open_section(name, True, "open_array_section")

    def open_array_section_in_ns(self, name: str, ns: str | None) -> None:
        """Open an array section; the namespace does not appear in the table."""
        self._open_section(name, True, "open_array_section_in_ns")

    def open_object_section(self, name: str) -> None:
        """Open a section whose children are named."""
        self._open_section(name, False, "open_object_section")

    def open_object_section_in_ns(self, name: str, ns: str | None) -> None:
        """Open an object section; the namespace does not appear in the table."""
        self._open_section(name, False, "open_object_section_in_ns")

    def close_section(self) -> None:
        """Close the innermost section, finalizing the row if it is a record.

        Raises:
            SectionUnderflowError: If no section is open.
        """
        if not self._stack:
            raise SectionUnderflowError(self.backend)
        self._finish_pending()
        entry: TableSection = self._stack.pop()
        if entry.is_record:
            self._end_row()
        logger.trace("table: close %r depth=%d", entry.name, len(self._stack))

    # --- Scalars ---

    def dump_unsigned(self, name: str, u: int) -> None:
        """Add a cell holding `u`."""
        self._add_scalar(name, format_integer(u, unsigned=True), "dump_unsigned")

    def dump_int(self, name: str, s: int) -> None:
        """Add a cell holding `s`."""
        self._add_scalar(name, format_integer(s), "dump_int")

    def dump_float(self, name: str, d: float) -> None:
        """Add a cell holding `d`."""
        text, _finite = format_float(d)
        self._add_scalar(name, text, "dump_float")

    def dump_string(self, name: str, s: str) -> None:
        """Add a cell holding `s` verbatim."""
        self._add_scalar(name, s, "dump_string")

    def dump_string_with_attrs(self, name: str, s: str, attrs: FormatterAttrs) -> None:
        """Add a cell holding `s` followed by ``key="value"`` tokens."""
        suffix: str = "".join(f' {key}="{value}"' for key, value in attrs)
        self._add_scalar(name, s + suffix, "dump_string_with_attrs")

    def dump_stream(self, name: str) -> PendingValue:
        """Return a sink whose text becomes a cell once committed."""
        self._finish_pending()
        # Validate the name now rather than at commit time.
        self._locate_scalar(name, "dump_stream", peek=True)
        return self._start_pending(name)

    def _commit_pending(self, name: str, ns: str | None, text: str) -> None:
        self.dump_string(name, text)

    def dump_format_va(
        self,
        name: str,
        ns: str | None,
        quoted: bool,
        fmt: str,
        args: tuple[Any, ...],
    ) -> None:
        """Add a cell holding the rendered template, prefixed by ``<ns>.`` if given."""
        text: str = render_template(fmt, args)
        self._add_scalar(name, f"{ns}.{text}" if ns else text, "dump_format_va")
