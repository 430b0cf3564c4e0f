# topmark:header:start
#
#   project      : StructEmit
#   file         : __init__.py
#   file_relpath : src/structemit/formatters/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Formatter backends.

Public modules:
    - structemit.formatters.base: the `Formatter` contract and `PendingValue`
    - structemit.formatters.json_formatter: compact and pretty JSON
    - structemit.formatters.xml_formatter: compact and pretty XML
    - structemit.formatters.table_formatter: grid and key/value tables
    - structemit.formatters.registry: name-based construction
"""

from __future__ import annotations

from structemit.formatters.base import Formatter, PendingValue
from structemit.formatters.json_formatter import JSONFormatter
from structemit.formatters.registry import (
    FormatterRegistry,
    create_formatter,
    create_from_settings,
)
from structemit.formatters.table_formatter import TableFormatter
from structemit.formatters.xml_formatter import XMLFormatter

__all__ = [
    "Formatter",
    "FormatterRegistry",
    "JSONFormatter",
    "PendingValue",
    "TableFormatter",
    "XMLFormatter",
    "create_formatter",
    "create_from_settings",
]
