# topmark:header:start
#
#   project      : StructEmit
#   file         : __init__.py
#   file_relpath : src/structemit/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StructEmit package.

StructEmit writes hierarchical data (objects, arrays and scalar fields) through
one formatter contract and renders it as JSON, XML or a text table. Producers
describe the structure once; the selected backend handles separators, quoting,
escaping and indentation.

Example:
    ```python
    import io
    from structemit import create_formatter

    f = create_formatter("json", default="json-pretty")
    f.open_object_section("")
    f.dump_unsigned("x", 5)
    f.close_section()
    out = io.StringIO()
    f.flush(out)
    assert out.getvalue() == '{"x":5}'
    ```
"""

from __future__ import annotations

from structemit.config.settings import EmitterSettings, load_settings, resolve_settings
from structemit.core.attrs import FormatterAttrs
from structemit.core.errors import (
    FormatterContractError,
    InvalidNameError,
    MissingNameError,
    PendingValueError,
    SectionUnderflowError,
    SettingsError,
    StructEmitError,
    UnknownFormatError,
)
from structemit.core.formats import OutputFormat
from structemit.core.walk import emit_document, emit_value
from structemit.formatters import (
    Formatter,
    FormatterRegistry,
    JSONFormatter,
    PendingValue,
    TableFormatter,
    XMLFormatter,
    create_formatter,
    create_from_settings,
)

__all__ = [
    "EmitterSettings",
    "Formatter",
    "FormatterAttrs",
    "FormatterContractError",
    "FormatterRegistry",
    "InvalidNameError",
    "JSONFormatter",
    "MissingNameError",
    "OutputFormat",
    "PendingValue",
    "PendingValueError",
    "SectionUnderflowError",
    "SettingsError",
    "StructEmitError",
    "TableFormatter",
    "UnknownFormatError",
    "XMLFormatter",
    "create_formatter",
    "create_from_settings",
    "emit_document",
    "emit_value",
    "load_settings",
    "resolve_settings",
]
