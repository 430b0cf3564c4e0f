# topmark:header:start
#
#   project      : StructEmit
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the StructEmit test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
ensuring formatter TRACE output is exercised during testing.

Notes:
    The formatter registry is process-global. Tests that register or unregister
    formats must use the `clean_registry` fixture so the built-in view is restored.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, TypeVar, cast

import pytest

from structemit.config import logging
from structemit.config.settings import FORMAT_ENV_VAR
from structemit.formatters.base import Formatter
from structemit.formatters.json_formatter import JSONFormatter
from structemit.formatters.registry import FormatterRegistry
from structemit.formatters.table_formatter import TableFormatter
from structemit.formatters.xml_formatter import XMLFormatter

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)
mark_hypothesis_slow: DecoratorType[Any] = as_typed_mark(pytest.mark.hypothesis_slow)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.hookimpl`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.hookimpl`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def xml_legal(text: str) -> str:
    """Replace every character outside the XML 1.0 ``Char`` production by U+FFFD."""

    def _ok(ch: str) -> bool:
        cp = ord(ch)
        return (
            ch in "\t\n\r"
            or 0x20 <= cp <= 0xD7FF
            or 0xE000 <= cp <= 0xFFFD
            or cp >= 0x10000
        )

    return "".join(ch if _ok(ch) else "\ufffd" for ch in text)


def utf16_normalized(text: str) -> str:
    """Join adjacent high/low surrogates into one character, as JSON decoders do."""
    return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")


# Factories for every built-in backend, keyed by a readable test id.
BACKEND_FACTORIES: dict[str, Callable[[], Formatter]] = {
    "json": lambda: JSONFormatter(),
    "json-pretty": lambda: JSONFormatter(pretty=True),
    "xml": lambda: XMLFormatter(),
    "xml-pretty": lambda: XMLFormatter(pretty=True),
    "table": lambda: TableFormatter(),
    "table-kv": lambda: TableFormatter(keyval=True),
}


@pytest.fixture(params=list(BACKEND_FACTORIES), ids=list(BACKEND_FACTORIES))
def backend_id(request: pytest.FixtureRequest) -> str:
    """Yield each built-in backend id in turn."""
    return str(request.param)


@pytest.fixture
def any_formatter(backend_id: str) -> Formatter:
    """Return a fresh formatter for the current backend id."""
    return BACKEND_FACTORIES[backend_id]()


@pytest.fixture(autouse=True)
def silence_structemit_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure StructEmit's environment overrides are not inherited during tests.

    This avoids accidental DEBUG/TRACE noise or a forced output format when the
    developer has exported STRUCTEMIT_LOG_LEVEL or STRUCTEMIT_FORMAT in their shell.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)
    monkeypatch.delenv(FORMAT_ENV_VAR, raising=False)


@pytest.fixture
def clean_registry() -> Iterator[type[FormatterRegistry]]:
    """Yield the registry and drop every overlay change afterwards."""
    FormatterRegistry.restore_defaults()
    yield FormatterRegistry
    FormatterRegistry.restore_defaults()


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Configure pytest settings and customize logging for the test suite.

    This function sets the logging level to TRACE for all tests, so every
    formatter trace call is formatted at least once.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)
