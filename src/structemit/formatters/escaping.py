# topmark:header:start
#
#   project      : StructEmit
#   file         : escaping.py
#   file_relpath : src/structemit/formatters/escaping.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Escaping and quoting helpers for the JSON and XML backends.

All helpers are pure functions on `str`. Non-ASCII characters pass through
unchanged in both encodings; the output is meant to be encoded as UTF-8.

JSON:
    - ``"`` and ``\\`` are backslash-escaped.
    - ``\\b \\f \\n \\r \\t`` use their short escapes.
    - Any other character below U+0020, U+007F and lone surrogates
      (U+D800..U+DFFF) use ``\\uXXXX``.

XML:
    - The five reserved characters ``& < > " '`` become named entities.
    - CR is written as ``&#xd;`` so parsers do not fold it into LF.
    - Characters XML 1.0 cannot carry at all (controls other than TAB, LF and
      CR, lone surrogates, U+FFFE and U+FFFF) are replaced by U+FFFD.
    - [`escape_xml_attr`][structemit.formatters.escaping.escape_xml_attr]
      additionally writes TAB and LF as references, so attribute values survive
      attribute-value normalization.

XML names:
    Tags and attribute keys must be NCNames (an XML ``Name`` without colons);
    [`is_xml_name`][structemit.formatters.escaping.is_xml_name] checks that.
"""

from __future__ import annotations

import re
from typing import Final

REPLACEMENT_CHAR: Final[str] = "\ufffd"

_JSON_SHORT_ESCAPES: Final[dict[str, str]] = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
_JSON_ESCAPE_RE: Final[re.Pattern[str]] = re.compile('["\\\\\x00-\x1f\x7f\ud800-\udfff]')

_XML_ENTITIES: Final[dict[str, str]] = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
    "\r": "&#xd;",
}
_XML_ATTR_ENTITIES: Final[dict[str, str]] = {
    **_XML_ENTITIES,
    "\t": "&#x9;",
    "\n": "&#xa;",
}
_XML_ILLEGAL: Final[str] = "\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff"
_XML_ESCAPE_RE: Final[re.Pattern[str]] = re.compile(f"[&<>\"'\r{_XML_ILLEGAL}]")
_XML_ATTR_ESCAPE_RE: Final[re.Pattern[str]] = re.compile(f"[&<>\"'\t\n\r{_XML_ILLEGAL}]")
_XML_UNESCAPE_RE: Final[re.Pattern[str]] = re.compile(r"&(#x[0-9a-fA-F]+|#[0-9]+|[a-z]+);")
_XML_NAMED: Final[dict[str, str]] = {
    v[1:-1]: k for k, v in _XML_ENTITIES.items() if not v.startswith("&#")
}

_NAME_START: Final[str] = (
    "A-Z_a-z\u00c0-\u00d6\u00d8-\u00f6\u00f8-\u02ff\u0370-\u037d\u037f-\u1fff"
    "\u200c-\u200d\u2070-\u218f\u2c00-\u2fef\u3001-\ud7ff\uf900-\ufdcf\ufdf0-\ufffd"
    "\U00010000-\U000effff"
)
_NAME_CHAR: Final[str] = _NAME_START + "\\-.0-9\u00b7\u0300-\u036f\u203f-\u2040"
_NCNAME_RE: Final[re.Pattern[str]] = re.compile(f"[{_NAME_START}][{_NAME_CHAR}]*")


def _json_sub(match: re.Match[str]) -> str:
    ch: str = match.group(0)
    short: str | None = _JSON_SHORT_ESCAPES.get(ch)
    if short is not None:
        return short
    return f"\\u{ord(ch):04x}"


def escape_json(text: str) -> str:
    """Return `text` escaped for use inside a JSON string literal (no quotes)."""
    return _JSON_ESCAPE_RE.sub(_json_sub, text)


def quote_json(text: str) -> str:
    """Return `text` as a complete, double-quoted JSON string literal."""
    return f'"{escape_json(text)}"'


def _xml_sub(match: re.Match[str]) -> str:
    return _XML_ENTITIES.get(match.group(0), REPLACEMENT_CHAR)


def _xml_attr_sub(match: re.Match[str]) -> str:
    return _XML_ATTR_ENTITIES.get(match.group(0), REPLACEMENT_CHAR)


def escape_xml(text: str) -> str:
    """Return `text` escaped for XML character data."""
    return _XML_ESCAPE_RE.sub(_xml_sub, text)


def escape_xml_attr(text: str) -> str:
    """Return `text` escaped for a double-quoted XML attribute value."""
    return _XML_ATTR_ESCAPE_RE.sub(_xml_attr_sub, text)


def _xml_unsub(match: re.Match[str]) -> str:
    ref: str = match.group(1)
    if ref.startswith("#x"):
        return chr(int(ref[2:], 16))
    if ref.startswith("#"):
        return chr(int(ref[1:]))
    try:
        return _XML_NAMED[ref]
    except KeyError:
        return match.group(0)


def unescape_xml(text: str) -> str:
    """Invert [`escape_xml`][structemit.formatters.escaping.escape_xml] and `escape_xml_attr`.

    Unknown named entities are left untouched. Characters replaced by U+FFFD
    cannot be recovered.
    """
    return _XML_UNESCAPE_RE.sub(_xml_unsub, text)


def is_xml_name(name: str) -> bool:
    """Return True if `name` is usable as an XML tag or attribute key (an NCName)."""
    return _NCNAME_RE.fullmatch(name) is not None
