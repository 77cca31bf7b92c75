"""viewrender CLI commands."""
# pyright: reportUnusedCallResult=false

from __future__ import annotations

from typing import TYPE_CHECKING

from ._render import app as render_app
from ._resolve import app as resolve_app
from ._shared import (
    ExitCode,
    FormattableData,
    build_renderer,
    exit_with_error,
    format_json,
    get_error_console,
    parse_context,
    parse_namespace_paths,
)

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "ExitCode",
    "FormattableData",
    "build_renderer",
    "exit_with_error",
    "format_json",
    "get_error_console",
    "parse_context",
    "parse_namespace_paths",
    "register_commands",
    "render_app",
    "resolve_app",
]


def register_commands(app: App) -> None:
    """Register all commands on the root app."""
    app.command(render_app)
    app.command(resolve_app)
