"""Utilities used by the viewrender CLI."""

from ._app import app, create_app, main
from ._context import CLIContext, OutputFormat

__all__ = ["CLIContext", "OutputFormat", "app", "create_app", "main"]
