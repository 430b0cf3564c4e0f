# topmark:header:start
#
#   project      : StructEmit
#   file         : walk.py
#   file_relpath : src/structemit/core/walk.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Drive a formatter from a plain Python value tree.

Conversions:
  - Mapping -> object section (keys stringified, insertion order kept)
  - list/tuple/set/frozenset -> array section
  - bool -> `dump_bool`
  - int -> `dump_unsigned` (non-negative) or `dump_int`
  - float -> `dump_float`
  - str -> `dump_string`
  - None -> unquoted ``null``
  - Path -> str, Enum -> Enum.value (or Enum.name when the value is not a scalar)
  - object with callable .to_dict() -> walk of that mapping
  - anything else -> `dump_string(str(obj))`

Sets are walked in sorted order of their string form so output is deterministic.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from pathlib import PurePath
from typing import TYPE_CHECKING, Any, cast

if TYPE_CHECKING:
    from collections.abc import Iterable

    from structemit.formatters.base import Formatter


def _normalize_scalar(obj: object) -> object:
    if isinstance(obj, PurePath):
        return str(obj)
    if isinstance(obj, Enum):
        value: object = obj.value
        if isinstance(value, (str, int, float, bool)):
            return value
        return obj.name
    return obj


def emit_value(formatter: Formatter, name: str, obj: object) -> None:
    """Emit `obj` under `name` into `formatter`, recursing into containers.

    Args:
        formatter (Formatter): Target formatter.
        name (str): Name of the value in the enclosing section (ignored at top
            level and inside arrays by the backends that do so).
        obj (object): The value to emit.
    """
    obj = _normalize_scalar(obj)

    to_dict: Any | None = getattr(obj, "to_dict", None)
    if callable(to_dict):
        emit_value(formatter, name, to_dict())
        return

    if isinstance(obj, Mapping):
        mapping: Mapping[object, Any] = cast("Mapping[object, Any]", obj)
        formatter.open_object_section(name)
        for key, value in mapping.items():
            emit_value(formatter, str(key), value)
        formatter.close_section()
        return

    if isinstance(obj, (list, tuple, set, frozenset)):
        items: Iterable[object] = cast("Iterable[object]", obj)
        if isinstance(obj, (set, frozenset)):
            items = sorted(items, key=str)
        formatter.open_array_section(name)
        for item in items:
            emit_value(formatter, "", item)
        formatter.close_section()
        return

    if obj is None:
        formatter.dump_format_unquoted(name, "null")
    elif isinstance(obj, bool):
        formatter.dump_bool(name, obj)
    elif isinstance(obj, int):
        if obj >= 0:
            formatter.dump_unsigned(name, obj)
        else:
            formatter.dump_int(name, obj)
    elif isinstance(obj, float):
        formatter.dump_float(name, obj)
    elif isinstance(obj, str):
        formatter.dump_string(name, obj)
    else:
        formatter.dump_string(name, str(obj))


def emit_document(formatter: Formatter, name: str, obj: object) -> str:
    """Reset `formatter`, emit `obj` and return the rendered text."""
    formatter.reset()
    emit_value(formatter, name, obj)
    return formatter.render()
