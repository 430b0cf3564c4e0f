# topmark:header:start
#
#   project      : StructEmit
#   file         : settings.py
#   file_relpath : src/structemit/config/settings.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Emitter settings and their TOML sources.

Settings are read from either:
- a ``structemit.toml`` file (top-level ``[structemit]`` table), or
- a ``pyproject.toml`` file (``[tool.structemit]`` table).

Parsing is done with `tomlkit`. Example:

```toml
[tool.structemit]
default_format = "json-pretty"
fallback_format = "json"
xml_declaration = true
indent = 2
```

The ``STRUCTEMIT_FORMAT`` environment variable overrides ``default_format``
when settings are obtained through
[`resolve_settings`][structemit.config.settings.resolve_settings].
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Final

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from structemit.config.logging import StructEmitLogger, get_logger
from structemit.core.errors import SettingsError
from structemit.core.formats import OutputFormat

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

logger: StructEmitLogger = get_logger(__name__)

FORMAT_ENV_VAR: Final[str] = "STRUCTEMIT_FORMAT"
SETTINGS_SECTION: Final[str] = "structemit"
PYPROJECT_NAME: Final[str] = "pyproject.toml"

KEY_DEFAULT_FORMAT: Final[str] = "default_format"
KEY_FALLBACK_FORMAT: Final[str] = "fallback_format"
KEY_XML_DECLARATION: Final[str] = "xml_declaration"
KEY_INDENT: Final[str] = "indent"

_KNOWN_KEYS: Final[frozenset[str]] = frozenset(
    {KEY_DEFAULT_FORMAT, KEY_FALLBACK_FORMAT, KEY_XML_DECLARATION, KEY_INDENT}
)


@dataclass(frozen=True)
class EmitterSettings:
    """Immutable emitter configuration.

    Attributes:
        default_format: Format selected when the caller names none.
        fallback_format: Format tried when the selected one is unknown.
        xml_declaration: Prefix XML output with the XML 1.0 declaration.
        indent: Spaces per nesting level in pretty modes.
    """

    default_format: OutputFormat = OutputFormat.JSON_PRETTY
    fallback_format: OutputFormat | None = None
    xml_declaration: bool = False
    indent: int = 4

    def to_dict(self) -> dict[str, object]:
        """Return a TOML-friendly mapping of the settings."""
        out: dict[str, object] = {
            KEY_DEFAULT_FORMAT: self.default_format.value,
            KEY_XML_DECLARATION: self.xml_declaration,
            KEY_INDENT: self.indent,
        }
        if self.fallback_format is not None:
            out[KEY_FALLBACK_FORMAT] = self.fallback_format.value
        return out


def _parse_format(key: str, raw: object) -> OutputFormat:
    fmt: OutputFormat | None = OutputFormat.parse(str(raw)) if isinstance(raw, str) else None
    if fmt is None:
        choices = ", ".join(f.value for f in OutputFormat)
        raise SettingsError(f"Invalid value for '{key}': {raw!r} (choose from {choices})")
    return fmt


def settings_from_mapping(table: Mapping[str, Any]) -> EmitterSettings:
    """Build settings from a plain mapping (e.g. a TOML table).

    Unknown keys are logged and ignored.

    Raises:
        SettingsError: If a known key holds an invalid value.
    """
    for key in table:
        if key not in _KNOWN_KEYS:
            logger.warning("Ignoring unknown setting '%s'", key)

    settings = EmitterSettings()
    if KEY_DEFAULT_FORMAT in table:
        settings = replace(
            settings,
            default_format=_parse_format(KEY_DEFAULT_FORMAT, table[KEY_DEFAULT_FORMAT]),
        )
    if KEY_FALLBACK_FORMAT in table:
        settings = replace(
            settings,
            fallback_format=_parse_format(KEY_FALLBACK_FORMAT, table[KEY_FALLBACK_FORMAT]),
        )
    if KEY_XML_DECLARATION in table:
        value = table[KEY_XML_DECLARATION]
        if not isinstance(value, bool):
            raise SettingsError(f"Invalid value for '{KEY_XML_DECLARATION}': {value!r}")
        settings = replace(settings, xml_declaration=value)
    if KEY_INDENT in table:
        value = table[KEY_INDENT]
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise SettingsError(f"Invalid value for '{KEY_INDENT}': {value!r}")
        settings = replace(settings, indent=int(value))
    return settings


def load_settings(path: Path) -> EmitterSettings:
    """Load settings from a TOML file.

    For ``pyproject.toml`` the ``[tool.structemit]`` table is used; for any other
    file the top-level ``[structemit]`` table. A file without the table yields
    the defaults.

    Raises:
        SettingsError: If the file cannot be read or parsed, or holds invalid values.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SettingsError(f"Cannot read settings file {path}: {exc}") from exc

    try:
        doc: dict[str, Any] = tomlkit.parse(text).unwrap()
    except TomlkitParseError as exc:
        raise SettingsError(f"Invalid TOML in {path}: {exc}") from exc

    if path.name == PYPROJECT_NAME:
        table: Any = doc.get("tool", {}).get(SETTINGS_SECTION, {})
    else:
        table = doc.get(SETTINGS_SECTION, {})
    if not isinstance(table, dict):
        raise SettingsError(f"[{SETTINGS_SECTION}] in {path} must be a table")

    logger.debug("Loaded settings from %s: %s", path, table)
    return settings_from_mapping(table)


def resolve_settings(path: Path | None = None) -> EmitterSettings:
    """Return settings from `path` (or defaults), then apply environment overrides.

    Raises:
        SettingsError: If the file or the ``STRUCTEMIT_FORMAT`` value is invalid.
    """
    settings: EmitterSettings = load_settings(path) if path is not None else EmitterSettings()
    env_format: str | None = os.environ.get(FORMAT_ENV_VAR)
    if env_format:
        settings = replace(settings, default_format=_parse_format(FORMAT_ENV_VAR, env_format))
    return settings


def dump_settings(settings: EmitterSettings) -> str:
    """Render `settings` as a ``[structemit]`` TOML document."""
    doc = tomlkit.document()
    doc.add(SETTINGS_SECTION, settings.to_dict())
    return tomlkit.dumps(doc)
