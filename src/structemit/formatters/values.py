# topmark:header:start
#
#   project      : StructEmit
#   file         : values.py
#   file_relpath : src/structemit/formatters/values.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Scalar rendering helpers shared by all formatter backends.

These helpers turn Python scalars into their lexical form; quoting and escaping
stay with each backend.
"""

from __future__ import annotations

import io
import math
from collections.abc import Mapping
from typing import Any, Final

NAN_TEXT: Final[str] = "NaN"
INF_TEXT: Final[str] = "Infinity"
NEG_INF_TEXT: Final[str] = "-Infinity"


def format_integer(value: Any, *, unsigned: bool = False) -> str:
    """Render an integer in base 10.

    Args:
        value (Any): The integer to render. `bool` is rejected.
        unsigned (bool): If True, negative values are rejected.

    Returns:
        str: The decimal representation.

    Raises:
        TypeError: If `value` is not an `int`.
        ValueError: If `unsigned` is set and `value` is negative.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {type(value).__name__}")
    if unsigned and value < 0:
        raise ValueError(f"expected a non-negative integer, got {value}")
    return str(value)


def format_float(value: float) -> tuple[str, bool]:
    """Render a float so that parsing the text yields the same value.

    Returns:
        tuple[str, bool]: The text and whether the value is finite. Non-finite
            values render as ``NaN``, ``Infinity`` and ``-Infinity``.
    """
    d = float(value)
    if math.isnan(d):
        return NAN_TEXT, False
    if math.isinf(d):
        return (INF_TEXT if d > 0 else NEG_INF_TEXT), False
    return repr(d), True


def render_template(fmt: str, args: tuple[Any, ...]) -> str:
    """Apply printf-style `%` formatting.

    A single mapping argument enables ``%(name)s`` placeholders.
    """
    if len(args) == 1 and isinstance(args[0], Mapping):
        return fmt % args[0]
    return fmt % args


def write_to_sink(sink: Any, text: str) -> None:
    """Write `text` to a text stream, a binary stream or a `bytearray`.

    Binary destinations receive UTF-8 bytes.
    """
    if isinstance(sink, bytearray):
        sink.extend(text.encode("utf-8"))
    elif isinstance(sink, (io.RawIOBase, io.BufferedIOBase)):
        sink.write(text.encode("utf-8"))
    else:
        sink.write(text)


def utf8_len(text: str) -> int:
    """Return the number of bytes `text` occupies in UTF-8.

    Lone surrogates count as three bytes each, as they would if encoded.
    """
    return len(text.encode("utf-8", errors="surrogatepass"))
