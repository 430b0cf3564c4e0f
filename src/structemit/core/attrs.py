# topmark:header:start
#
#   project      : StructEmit
#   file         : attrs.py
#   file_relpath : src/structemit/core/attrs.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Ordered attribute lists passed to the attributed formatter operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@dataclass(frozen=True, slots=True)
class FormatterAttrs:
    """An ordered sequence of ``(key, value)`` string pairs.

    Order is preserved and duplicate keys are kept as given; backends render
    the pairs exactly in sequence.

    Attributes:
        attrs: The attribute pairs.
    """

    attrs: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> FormatterAttrs:
        """Build from an iterable of ``(key, value)`` pairs."""
        return cls(tuple((str(k), str(v)) for k, v in pairs))

    @classmethod
    def from_flat(cls, *items: str | None) -> FormatterAttrs:
        """Build from a flat ``key, value, key, value, ...`` argument list.

        A ``None`` item terminates the list early; anything after it is ignored.

        Raises:
            ValueError: If a key is given without a value.
        """
        flat: list[str] = []
        for item in items:
            if item is None:
                break
            flat.append(item)
        if len(flat) % 2:
            raise ValueError(f"attribute {flat[-1]!r} has no value")
        return cls(tuple(zip(flat[0::2], flat[1::2])))

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.attrs)

    def __len__(self) -> int:
        return len(self.attrs)

    def __bool__(self) -> bool:
        return bool(self.attrs)
