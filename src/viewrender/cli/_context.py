"""CLI context for global state management.

The CLIContext is set once at CLI startup by the meta command and made
available to all commands via contextvars.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rich.console import Console
    from structlog.typing import FilteringBoundLogger


class OutputFormat(StrEnum):
    """Supported output formats for commands."""

    JSON = "json"
    TABLE = "table"


_current_cli_context: contextvars.ContextVar[CLIContext | None] = (
    contextvars.ContextVar("viewrender_cli_context", default=None)
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI options shared by all commands.

    Attributes:
        verbose: Enable verbose output with additional details.
        quiet: Suppress non-essential output.
        logger: Structured logger handed to renderers created by commands.
        console: Console commands print their output to.
    """

    verbose: bool = False
    quiet: bool = False
    logger: FilteringBoundLogger | None = field(default=None, repr=False)
    console: Console | None = field(default=None, repr=False)

    @classmethod
    def get_current(cls) -> CLIContext:
        """Get the active CLIContext, or a default one if none is set."""
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx
        return cls()

    @classmethod
    def set_current(cls, ctx: CLIContext) -> None:
        """Set the active CLIContext."""
        _ = _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Clear the active CLIContext."""
        _ = _current_cli_context.set(None)
