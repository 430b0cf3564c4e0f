# topmark:header:start
#
#   project      : StructEmit
#   file         : test_escaping.py
#   file_relpath : tests/formatters/test_escaping.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the JSON and XML escaping helpers."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET

from hypothesis import given, settings
from hypothesis import strategies as st

from structemit.formatters.escaping import (
    escape_json,
    escape_xml,
    escape_xml_attr,
    is_xml_name,
    quote_json,
    unescape_xml,
)
from tests.conftest import parametrize, utf16_normalized, xml_legal

SURROGATES = st.integers(min_value=0xD800, max_value=0xDFFF).map(chr)

# Any code point, including controls, lone surrogates and U+FFFE/U+FFFF.
ANY_TEXT = st.text(
    alphabet=st.characters() | SURROGATES | st.sampled_from("\x00\x0b\r\ufffe\uffff"),
)

# Characters XML 1.0 can carry.
XML_LEGAL_TEXT = st.text(
    alphabet=st.characters(exclude_categories=("Cs", "Cc", "Cn")) | st.sampled_from("\t\n\r"),
)


@parametrize(
    ("raw", "escaped"),
    [
        ("plain", "plain"),
        ('"', '\\"'),
        ("\\", "\\\\"),
        ("\b\f\n\r\t", "\\b\\f\\n\\r\\t"),
        ("\x00\x1f\x7f", "\\u0000\\u001f\\u007f"),
        ("\ud800x\udfff", "\\ud800x\\udfff"),
        ("é€", "é€"),
    ],
)
def test_escape_json(raw: str, escaped: str) -> None:
    """Short escapes where JSON has them, ``\\uXXXX`` for other controls and surrogates."""
    assert escape_json(raw) == escaped


def test_lone_surrogate_json_is_ascii_and_parses_back() -> None:
    """A lone surrogate decoded from JSON input is written back as an escape."""
    text: str = json.loads('"a\\ud800b"')

    quoted = quote_json(text)

    quoted.encode("utf-8")
    assert json.loads(quoted) == text


@parametrize(
    ("raw", "escaped"),
    [
        ("a & b", "a &amp; b"),
        ("<tag>", "&lt;tag&gt;"),
        ("\"it's\"", "&quot;it&apos;s&quot;"),
        ("tab\tline\n", "tab\tline\n"),
        ("cr\r", "cr&#xd;"),
        ("\x00\x0b", "\ufffd\ufffd"),
        ("\ud800\ufffe\uffff", "\ufffd\ufffd\ufffd"),
        ("ü", "ü"),
    ],
)
def test_escape_xml(raw: str, escaped: str) -> None:
    """Reserved characters become entities, characters XML cannot carry become U+FFFD."""
    assert escape_xml(raw) == escaped


def test_escape_xml_attr_keeps_whitespace() -> None:
    """TAB, LF and CR are written as references inside attribute values."""
    assert escape_xml_attr('a\tb\nc\r"') == "a&#x9;b&#xa;c&#xd;&quot;"
    value = escape_xml_attr("a\tb\nc")
    elem = ET.fromstring(f'<v k="{value}"/>')
    assert elem.get("k") == "a\tb\nc"


def test_unescape_xml_leaves_unknown_entities() -> None:
    """Only the five predefined entities and numeric references are decoded."""
    assert unescape_xml("&lt;&#65;&#x42;&nbsp;") == "<AB&nbsp;"


@parametrize(
    ("name", "valid"),
    [
        ("item", True),
        ("_x-1.2", True),
        ("größe", True),
        ("", False),
        ("1", False),
        ("-a", False),
        ("a b", False),
        ("a:b", False),
        ("a<b", False),
    ],
)
def test_is_xml_name(name: str, valid: bool) -> None:
    """Names follow the XML ``Name`` production without colons."""
    assert is_xml_name(name) is valid


@settings(max_examples=200)
@given(text=ANY_TEXT)
def test_quote_json_parses_back(text: str) -> None:
    """A quoted string is valid UTF-8 and parses back to the original text."""
    quoted = quote_json(text)

    quoted.encode("utf-8")
    assert json.loads(quoted) == utf16_normalized(text)


@settings(max_examples=200)
@given(text=XML_LEGAL_TEXT)
def test_unescape_xml_inverts_escape_xml(text: str) -> None:
    """Escaping is lossless for text XML can carry."""
    assert unescape_xml(escape_xml(text)) == text
    assert unescape_xml(escape_xml_attr(text)) == text


@settings(max_examples=200)
@given(text=ANY_TEXT)
def test_escaped_xml_text_parses_back(text: str) -> None:
    """Escaped text is well-formed element content; illegal characters read back as U+FFFD."""
    elem = ET.fromstring(f"<v>{escape_xml(text)}</v>")

    assert (elem.text or "") == xml_legal(text)


@settings(max_examples=200)
@given(text=ANY_TEXT)
def test_escaped_xml_attr_parses_back(text: str) -> None:
    """Escaped attribute values survive attribute-value normalization."""
    elem = ET.fromstring(f'<v k="{escape_xml_attr(text)}"/>')

    assert elem.get("k") == xml_legal(text)
