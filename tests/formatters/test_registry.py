# topmark:header:start
#
#   project      : StructEmit
#   file         : test_registry.py
#   file_relpath : tests/formatters/test_registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for formatter selection, fallback and registry overlays."""

from __future__ import annotations

import pytest

from structemit.config.settings import EmitterSettings
from structemit.core.errors import UnknownFormatError
from structemit.core.formats import OutputFormat
from structemit.formatters.json_formatter import JSONFormatter
from structemit.formatters.registry import (
    FormatterRegistry,
    create_formatter,
    create_from_settings,
)
from structemit.formatters.table_formatter import TableFormatter
from structemit.formatters.xml_formatter import XMLFormatter
from tests.conftest import parametrize


def test_builtin_names_in_declaration_order(clean_registry: type[FormatterRegistry]) -> None:
    """All six built-in formats are registered."""
    assert clean_registry.names() == tuple(f.value for f in OutputFormat)


@parametrize(
    ("raw", "resolved"),
    [
        ("json", "json"),
        ("PRETTY", "json-pretty"),
        ("xml_pretty", "xml-pretty"),
        ("Table KV", "table-kv"),
        ("text", "table"),
        ("yaml", None),
        ("", None),
    ],
)
def test_resolve_accepts_aliases(raw: str, resolved: str | None) -> None:
    """Names resolve by key, member name or alias, case-insensitively."""
    assert FormatterRegistry.resolve(raw) == resolved


def test_requested_name_wins() -> None:
    """The requested format is used when it is known."""
    f = create_formatter("xml", "json")

    assert isinstance(f, XMLFormatter)
    assert not f.pretty


def test_empty_name_selects_default() -> None:
    """An empty request selects the caller's default."""
    f = create_formatter("", "table-kv")

    assert isinstance(f, TableFormatter)
    assert f.keyval


def test_unknown_name_uses_fallback() -> None:
    """An unknown request falls back when a fallback is given."""
    f = create_formatter("yaml", "json", "json-pretty")

    assert isinstance(f, JSONFormatter)
    assert f.pretty


def test_unknown_without_fallback_raises() -> None:
    """There is no hidden default format."""
    with pytest.raises(UnknownFormatError) as excinfo:
        create_formatter("yaml", "json")

    assert excinfo.value.tried == ("yaml",)
    assert isinstance(excinfo.value, LookupError)


def test_unknown_fallback_reports_every_name() -> None:
    """Both the selected and the fallback name are reported."""
    with pytest.raises(UnknownFormatError) as excinfo:
        create_formatter("", "yaml", "toml")

    assert excinfo.value.tried == ("yaml", "toml")


def test_each_call_returns_a_fresh_instance() -> None:
    """Formatters are never shared between callers."""
    assert create_formatter("json", None) is not create_formatter("json", None)


def test_settings_configure_builtin_backends() -> None:
    """Indentation and the XML declaration come from the settings."""
    settings = EmitterSettings(
        default_format=OutputFormat.XML_PRETTY,
        xml_declaration=True,
        indent=2,
    )
    f = create_from_settings(settings)
    f.open_object_section("r")
    f.dump_unsigned("x", 1)
    f.close_section()

    assert f.render() == '<?xml version="1.0" encoding="UTF-8"?>\n<r>\n  <x>1</x>\n</r>\n'


def test_settings_fallback_is_used() -> None:
    """The fallback from the settings applies to unknown requests."""
    settings = EmitterSettings(fallback_format=OutputFormat.TABLE)

    assert isinstance(create_from_settings(settings, "yaml"), TableFormatter)
    assert isinstance(create_from_settings(settings), JSONFormatter)


def test_register_and_unregister(clean_registry: type[FormatterRegistry]) -> None:
    """Overlay entries are visible until removed; built-ins can be hidden."""
    clean_registry.register("json-compact", JSONFormatter)

    assert "json-compact" in clean_registry.names()
    assert isinstance(create_formatter("json-compact", None), JSONFormatter)
    with pytest.raises(ValueError):
        clean_registry.register("json-compact", JSONFormatter)
    with pytest.raises(ValueError):
        clean_registry.register("", JSONFormatter)

    assert clean_registry.unregister("json-compact")
    assert clean_registry.unregister("xml")
    assert not clean_registry.unregister("xml")
    assert "xml" not in clean_registry.names()
    with pytest.raises(UnknownFormatError):
        create_formatter("xml", None)

    clean_registry.restore_defaults()
    assert clean_registry.resolve("xml") == "xml"


def test_mapping_view_is_read_only(clean_registry: type[FormatterRegistry]) -> None:
    """The mapping view cannot be mutated."""
    mapping = clean_registry.as_mapping()

    with pytest.raises(TypeError):
        mapping["x"] = JSONFormatter  # type: ignore[index]
