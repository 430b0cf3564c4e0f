# topmark:header:start
#
#   project      : StructEmit
#   file         : xml_formatter.py
#   file_relpath : src/structemit/formatters/xml_formatter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""XML backend.

Every section and scalar becomes an element named after its `name`. Each open
section keeps its tag on the stack so `close_section()` writes the matching end
tag. Positional children (empty name inside an array section) use the tag
``item``.

Text content is escaped with
[`escape_xml`][structemit.formatters.escaping.escape_xml]; attribute values and
namespaces with [`escape_xml_attr`][structemit.formatters.escaping.escape_xml_attr].
Tag names and attribute keys must be NCNames and attribute keys must be unique
within a tag; anything else raises
[`InvalidNameError`][structemit.core.errors.InvalidNameError] before output is
written.

Pretty mode writes one element per line, indented by the section depth.

A pending value (`dump_stream()`) writes its start tag immediately; the escaped
text and the end tag follow when it is committed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Final

from structemit.config.logging import StructEmitLogger, get_logger
from structemit.core.errors import InvalidNameError, MissingNameError, SectionUnderflowError
from structemit.formatters.base import Formatter, PendingValue
from structemit.formatters.escaping import escape_xml, escape_xml_attr, is_xml_name
from structemit.formatters.values import (
    format_float,
    format_integer,
    render_template,
    utf8_len,
)

if TYPE_CHECKING:
    from structemit.core.attrs import FormatterAttrs

logger: StructEmitLogger = get_logger(__name__)

XML_1_DTD: Final[str] = '<?xml version="1.0" encoding="UTF-8"?>'
ARRAY_ITEM_TAG: Final[str] = "item"


@dataclass(slots=True)
class XmlSection:
    """One open XML element.

    Attributes:
        tag: Element name, repeated in the end tag.
        is_array: True if children are positional.
        child_count: Number of child elements written so far.
    """

    tag: str
    is_array: bool
    child_count: int = 0


def _ns_str(ns: str | None) -> str:
    return f' xmlns="{escape_xml_attr(ns)}"' if ns else ""


class XMLFormatter(Formatter):
    """Render the formatter contract as XML text.

    Args:
        pretty (bool): Insert newlines and indentation.
        indent (int): Spaces per nesting level in pretty mode.
        declaration (bool): Prefix non-empty output with the XML 1.0 declaration.
    """

    backend: ClassVar[str] = "xml"

    pretty: bool
    declaration: bool

    def __init__(
        self,
        pretty: bool = False,
        *,
        indent: int = 4,
        declaration: bool = False,
    ) -> None:
        super().__init__()
        self.pretty = pretty
        self.declaration = declaration
        self._indent: str = " " * indent
        self._stack: list[XmlSection] = []
        self._chunks: list[str] = []
        self._nbytes: int = 0

    # --- Buffer ---

    def _write(self, text: str) -> None:
        self._chunks.append(text)
        self._nbytes += utf8_len(text)

    def _prolog(self) -> str:
        if not self.declaration or not self._chunks:
            return ""
        return XML_1_DTD + "\n"

    def reset(self) -> None:
        """Discard the buffer, any pending value and all open sections."""
        logger.trace("xml: reset")
        self._drop_pending()
        self._stack.clear()
        self._chunks.clear()
        self._nbytes = 0

    def render(self) -> str:
        """Commit any pending value and return the XML text."""
        self._finish_pending()
        return self._prolog() + "".join(self._chunks)

    def get_len(self) -> int:
        """Return the UTF-8 size of the output plus any pending text."""
        return utf8_len(self._prolog()) + self._nbytes + self._pending_nbytes()

    def write_raw_data(self, data: str) -> None:
        """Append `data` verbatim."""
        self._finish_pending()
        self._write(data)

    # --- Helpers ---

    def _tag_for(self, name: str, operation: str) -> str:
        if not name:
            if self._stack and self._stack[-1].is_array:
                return ARRAY_ITEM_TAG
            raise MissingNameError(self.backend, operation)
        if not is_xml_name(name):
            raise InvalidNameError(self.backend, name, operation)
        return name

    def _attrs_str(self, attrs: FormatterAttrs | None, operation: str) -> str:
        if not attrs:
            return ""
        seen: set[str] = set()
        for key, _value in attrs:
            if key in seen or not is_xml_name(key):
                raise InvalidNameError(self.backend, key, operation)
            seen.add(key)
        return "".join(f' {key}="{escape_xml_attr(value)}"' for key, value in attrs)

    def _begin_element(
        self,
        name: str,
        operation: str,
        attrs: FormatterAttrs | None = None,
    ) -> tuple[str, str]:
        """Commit pending text, then validate and indent for a new child element.

        Returns:
            tuple[str, str]: The tag and the rendered attribute list.
        """
        self._finish_pending()
        tag: str = self._tag_for(name, operation)
        attrs_text: str = self._attrs_str(attrs, operation)
        if self._stack:
            self._stack[-1].child_count += 1
        if self.pretty:
            self._write(self._indent * len(self._stack))
        return tag, attrs_text

    def _end_line(self) -> None:
        if self.pretty:
            self._write("\n")

    def _element(
        self,
        name: str,
        text: str,
        operation: str,
        *,
        ns: str | None = None,
        attrs: FormatterAttrs | None = None,
    ) -> None:
        tag, attrs_text = self._begin_element(name, operation, attrs)
        self._write(f"<{tag}{attrs_text}{_ns_str(ns)}>{escape_xml(text)}</{tag}>")
        self._end_line()

    # --- Structure ---

    def _open_section(
        self,
        name: str,
        ns: str | None,
        attrs: FormatterAttrs | None,
        is_array: bool,
        operation: str,
    ) -> None:
        tag, attrs_text = self._begin_element(name, operation, attrs)
        self._write(f"<{tag}{attrs_text}{_ns_str(ns)}>")
        self._end_line()
        self._stack.append(XmlSection(tag=tag, is_array=is_array))
        logger.trace("xml: open <%s> depth=%d", tag, len(self._stack))

    def open_array_section(self, name: str) -> None:
        """Open an element whose children are positional."""
        self._open_section(name, None, None, True, "open_array_section")

    def open_array_section_in_ns(self, name: str, ns: str | None) -> None:
        """Open an array element carrying an ``xmlns`` attribute."""
        self._open_section(name, ns, None, True, "open_array_section_in_ns")

    def open_object_section(self, name: str) -> None:
        """Open an element whose children are named."""
        self._open_section(name, None, None, False, "open_object_section")

    def open_object_section_in_ns(self, name: str, ns: str | None) -> None:
        """Open an object element carrying an ``xmlns`` attribute."""
        self._open_section(name, ns, None, False, "open_object_section_in_ns")

    def open_array_section_with_attrs(self, name: str, attrs: FormatterAttrs) -> None:
        """Open an array element with attributes on its start tag."""
        self._open_section(name, None, attrs, True, "open_array_section_with_attrs")

    def open_object_section_with_attrs(self, name: str, attrs: FormatterAttrs) -> None:
        """Open an object element with attributes on its start tag."""
        self._open_section(name, None, attrs, False, "open_object_section_with_attrs")

    def close_section(self) -> None:
        """Write the end tag of the innermost element.

        Raises:
            SectionUnderflowError: If no section is open.
        """
        if not self._stack:
            raise SectionUnderflowError(self.backend)
        self._finish_pending()
        entry: XmlSection = self._stack.pop()
        if self.pretty:
            self._write(self._indent * len(self._stack))
        self._write(f"</{entry.tag}>")
        self._end_line()
        logger.trace("xml: close </%s> depth=%d", entry.tag, len(self._stack))

    # --- Scalars ---

    def dump_unsigned(self, name: str, u: int) -> None:
        """Emit ``<name>u</name>``."""
        self._element(name, format_integer(u, unsigned=True), "dump_unsigned")

    def dump_int(self, name: str, s: int) -> None:
        """Emit ``<name>s</name>``."""
        self._element(name, format_integer(s), "dump_int")

    def dump_float(self, name: str, d: float) -> None:
        """Emit ``<name>d</name>``."""
        text, _finite = format_float(d)
        self._element(name, text, "dump_float")

    def dump_string(self, name: str, s: str) -> None:
        """Emit ``<name>escaped-s</name>``."""
        self._element(name, s, "dump_string")

    def dump_string_with_attrs(self, name: str, s: str, attrs: FormatterAttrs) -> None:
        """Emit ``<name key="value" ...>escaped-s</name>``."""
        self._element(name, s, "dump_string_with_attrs", attrs=attrs)

    def dump_stream(self, name: str) -> PendingValue:
        """Write the start tag now; text and end tag follow on commit."""
        tag, _attrs = self._begin_element(name, "dump_stream")
        self._write(f"<{tag}>")
        return self._start_pending(tag)

    def _commit_pending(self, name: str, ns: str | None, text: str) -> None:
        self._write(f"{escape_xml(text)}</{name}>")
        self._end_line()

    def dump_format_va(
        self,
        name: str,
        ns: str | None,
        quoted: bool,
        fmt: str,
        args: tuple[Any, ...],
    ) -> None:
        """Emit the rendered template as element text; `ns` becomes ``xmlns``.

        XML has no quoting, so `quoted` does not change the output.
        """
        self._element(name, render_template(fmt, args), "dump_format_va", ns=ns)
