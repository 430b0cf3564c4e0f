# topmark:header:start
#
#   project      : StructEmit
#   file         : formats.py
#   file_relpath : src/structemit/core/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared output format definitions used across StructEmit frontends.

This module centralizes the `OutputFormat` enum so the formatter registry, the
settings loader and the CLI agree on the same format vocabulary without
importing one another.
"""

from __future__ import annotations

from structemit.core.enum_mixins import KeyedStrEnum


class OutputFormat(KeyedStrEnum):
    """Built-in output formats.

    Attributes:
        JSON: Compact JSON, no insignificant whitespace.
        JSON_PRETTY: Indented JSON, one child per line.
        XML: Compact XML, tag-delimited, no whitespace between elements.
        XML_PRETTY: Indented XML, one element per line.
        TABLE: Aligned plain-text grid with a header row.
        TABLE_KV: One ``name=value`` line per cell.
    """

    JSON = ("json", "Compact JSON")
    JSON_PRETTY = ("json-pretty", "Indented JSON", ("pretty",))
    XML = ("xml", "Compact XML")
    XML_PRETTY = ("xml-pretty", "Indented XML")
    TABLE = ("table", "Aligned text table", ("plain", "text"))
    TABLE_KV = ("table-kv", "Key/value listing", ("keyval", "kv"))
