# pyright: reportExplicitAny=false
"""Shared CLI utilities for commands.

This module provides common utilities used across CLI command implementations:
- Standardized exit codes
- JSON output formatting
- Console utilities for error handling
- Renderer construction from command-line options
"""

from __future__ import annotations

from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Never

from .._context import CLIContext

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rich.console import Console

    from viewrender._renderer import Renderer

FormattableData = dict[str, Any]

__all__ = [
    "ExitCode",
    "FormattableData",
    "build_renderer",
    "exit_with_error",
    "format_json",
    "get_error_console",
    "parse_context",
    "parse_namespace_paths",
]


class ExitCode(IntEnum):
    """Standard exit codes for viewrender CLI commands."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    NOT_FOUND = 3
    IO_ERROR = 4
    INTERNAL_ERROR = 5


def format_json(data: FormattableData | list[Any], *, indent: bool = True) -> str:
    """Format data as JSON.

    Args:
        data: Data to format as JSON.
        indent: Whether to pretty-print with indentation.

    Returns:
        JSON-formatted string representation.
    """
    import orjson

    options = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(data, option=options).decode("utf-8")


def get_error_console() -> Console:
    """Get a Rich console configured for error output to stderr."""
    from rich.console import Console

    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display.
        code: The exit code to use (defaults to INTERNAL_ERROR).
        console: Optional Rich console for output. If not provided,
            a new stderr console will be created.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {message}", markup=True, highlight=False)
    raise SystemExit(code)


def parse_namespace_paths(values: Sequence[str] | None) -> dict[str, Path]:
    """Parse ``NAME=DIR`` pairs into a namespace table.

    Raises:
        ValueError: If a value has no ``=`` or an empty name.
    """
    namespace_paths: dict[str, Path] = {}
    for value in values or ():
        name, separator, directory = value.partition("=")
        if not separator or not name:
            msg = f"Invalid namespace '{value}', expected NAME=DIR"
            raise ValueError(msg)
        namespace_paths[name] = Path(directory)
    return namespace_paths


def parse_context(value: str | None) -> dict[str, object]:
    """Parse a JSON object given on the command line.

    Raises:
        ValueError: If the value is not valid JSON or not an object.
    """
    import orjson

    if not value:
        return {}
    try:
        data: object = orjson.loads(value)
    except orjson.JSONDecodeError as e:
        msg = f"Invalid JSON context: {e}"
        raise ValueError(msg) from e
    if not isinstance(data, dict):
        msg = "Context must be a JSON object"
        raise ValueError(msg)
    return data


def build_renderer(
    *,
    path: Path | None,
    namespaces: Sequence[str] | None,
    env: str | None,
) -> Renderer:
    """Create a Renderer from command-line options.

    Raises:
        ValueError: If a namespace option is malformed.
    """
    from viewrender._renderer import Renderer

    options: dict[str, object] = {"namespace_paths": parse_namespace_paths(namespaces)}
    if path is not None:
        options["path"] = path
    if env is not None:
        options["env"] = env
    return Renderer(options, logger=CLIContext.get_current().logger)
