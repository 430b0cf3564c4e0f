# topmark:header:start
#
#   project      : StructEmit
#   file         : registry.py
#   file_relpath : src/structemit/formatters/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Formatter registry and factory.

The registry maps format names to zero-argument factories. The six built-in
[`OutputFormat`][structemit.core.formats.OutputFormat] members are always
present; plugins and tests may add or remove names through an overlay that never
mutates the built-in mapping.

Selection follows a fixed order: the requested name, then the caller's
`default` when the requested name is empty, then the `fallback` when neither
resolves. There is no hidden global default format: callers pass it explicitly,
typically from [`EmitterSettings`][structemit.config.settings.EmitterSettings].
"""

from __future__ import annotations

from threading import RLock
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, ClassVar

from structemit.config.logging import StructEmitLogger, get_logger
from structemit.core.errors import UnknownFormatError
from structemit.core.formats import OutputFormat
from structemit.formatters.json_formatter import JSONFormatter
from structemit.formatters.table_formatter import TableFormatter
from structemit.formatters.xml_formatter import XMLFormatter

if TYPE_CHECKING:
    from collections.abc import Mapping

    from structemit.config.settings import EmitterSettings
    from structemit.formatters.base import Formatter

logger: StructEmitLogger = get_logger(__name__)

FormatterFactory = Callable[[], "Formatter"]


def _builtin_factories(settings: EmitterSettings | None = None) -> dict[str, FormatterFactory]:
    indent: int = settings.indent if settings is not None else 4
    declaration: bool = settings.xml_declaration if settings is not None else False
    return {
        OutputFormat.JSON.value: lambda: JSONFormatter(pretty=False, indent=indent),
        OutputFormat.JSON_PRETTY.value: lambda: JSONFormatter(pretty=True, indent=indent),
        OutputFormat.XML.value: lambda: XMLFormatter(
            pretty=False, indent=indent, declaration=declaration
        ),
        OutputFormat.XML_PRETTY.value: lambda: XMLFormatter(
            pretty=True, indent=indent, declaration=declaration
        ),
        OutputFormat.TABLE.value: lambda: TableFormatter(keyval=False),
        OutputFormat.TABLE_KV.value: lambda: TableFormatter(keyval=True),
    }


class FormatterRegistry:
    """Process-global registry of formatter factories.

    Notes:
        - Mutation hooks are intended for plugin authors and test scaffolding.
        - Thread safe via RLock; do not mutate in long-lived multi-tenant processes.
    """

    _lock: ClassVar[RLock] = RLock()
    _overrides: ClassVar[dict[str, FormatterFactory]] = {}
    _removals: ClassVar[set[str]] = set()

    @classmethod
    def _compose(cls, settings: EmitterSettings | None = None) -> dict[str, FormatterFactory]:
        base: dict[str, FormatterFactory] = _builtin_factories(settings)
        base.update(cls._overrides)
        for name in cls._removals:
            base.pop(name, None)
        return base

    @classmethod
    def names(cls) -> tuple[str, ...]:
        """Return all registered format names, built-ins first in declaration order."""
        with cls._lock:
            return tuple(cls._compose())

    @classmethod
    def as_mapping(cls) -> Mapping[str, FormatterFactory]:
        """Return a read-only mapping of format name to factory."""
        with cls._lock:
            return MappingProxyType(cls._compose())

    @classmethod
    def resolve(cls, name: str | None) -> str | None:
        """Return the registered name matching `name`, or None.

        Exact names win; otherwise built-in keys, member names and aliases are
        matched via `OutputFormat.parse()`.
        """
        if not name:
            return None
        with cls._lock:
            composed = cls._compose()
            if name in composed:
                return name
            fmt: OutputFormat | None = OutputFormat.parse(name)
            if fmt is not None and fmt.value in composed:
                return fmt.value
            return None

    @classmethod
    def register(cls, name: str, factory: FormatterFactory) -> None:
        """Register a formatter factory under `name`.

        Raises:
            ValueError: If `name` is empty or already registered.
        """
        if not name:
            raise ValueError("format name must be a non-empty string")
        with cls._lock:
            if name in cls._compose():
                raise ValueError(f"Format '{name}' is already registered.")
            cls._removals.discard(name)
            cls._overrides[name] = factory
            logger.debug("Registered formatter %r", name)

    @classmethod
    def unregister(cls, name: str) -> bool:
        """Remove `name` from the composed view.

        Returns:
            bool: True if the name was registered.
        """
        with cls._lock:
            existed: bool = name in cls._compose()
            cls._overrides.pop(name, None)
            if name in _builtin_factories():
                cls._removals.add(name)
            return existed

    @classmethod
    def restore_defaults(cls) -> None:
        """Drop every overlay change."""
        with cls._lock:
            cls._overrides.clear()
            cls._removals.clear()

    @classmethod
    def create(
        cls,
        name: str,
        default: str | None,
        fallback: str | None = None,
        *,
        settings: EmitterSettings | None = None,
    ) -> Formatter:
        """Instantiate the formatter registered for `name`.

        Args:
            name (str): Requested format; may be empty to select `default`.
            default (str | None): Format used when `name` is empty.
            fallback (str | None): Format used when the selected one is unknown.
            settings (EmitterSettings | None): Indentation and XML declaration
                options for the built-in backends.

        Returns:
            Formatter: A fresh formatter instance.

        Raises:
            UnknownFormatError: If neither the selected nor the fallback name resolves.
        """
        selected: str = name or (default or "")
        tried: list[str] = [selected]
        with cls._lock:
            composed = cls._compose(settings)
            key: str | None = cls.resolve(selected)
            if key is None and fallback:
                logger.debug("Unknown format %r, trying fallback %r", selected, fallback)
                tried.append(fallback)
                key = cls.resolve(fallback)
            if key is None:
                raise UnknownFormatError(tuple(tried))
            logger.debug("Selected formatter %r", key)
            return composed[key]()


def create_formatter(
    name: str,
    default: str | None,
    fallback: str | None = None,
    *,
    settings: EmitterSettings | None = None,
) -> Formatter:
    """Create a formatter by name; see [`FormatterRegistry.create`][structemit.formatters.registry.FormatterRegistry.create]."""  # noqa: E501
    return FormatterRegistry.create(name, default, fallback, settings=settings)


def create_from_settings(settings: EmitterSettings, name: str = "") -> Formatter:
    """Create a formatter using the default and fallback formats from `settings`."""
    fallback: str | None = (
        settings.fallback_format.value if settings.fallback_format is not None else None
    )
    return FormatterRegistry.create(
        name,
        settings.default_format.value,
        fallback,
        settings=settings,
    )
