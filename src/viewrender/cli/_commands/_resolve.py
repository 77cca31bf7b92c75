# pyright: reportUnusedCallResult=false
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""Resolve command."""

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from viewrender._loader import find_template_file
from viewrender.exceptions import UnknownNamespaceError

from .._context import CLIContext, OutputFormat
from ._shared import ExitCode, build_renderer, exit_with_error, format_json

app = App(
    name="resolve",
    help="Show where template identifiers resolve to",
    help_on_error=True,
)


@app.default
def resolve(
    *names: Annotated[str, Parameter(help="Template identifiers to resolve.")],
    path: Annotated[
        Path | None, Parameter(help="Base directory of the default namespace.")
    ] = None,
    namespace: Annotated[
        list[str] | None,
        Parameter(help="Additional namespace as NAME=DIR. May be repeated."),
    ] = None,
    format: Annotated[  # noqa: A002
        OutputFormat, Parameter(help="Output format.")
    ] = OutputFormat.TABLE,
) -> None:
    """Resolve template identifiers and report which files exist.

    Args:
        names: Template identifiers to resolve. Defaults to "index".
        path: Base directory of the default namespace.
        namespace: Additional namespaces as NAME=DIR pairs.
        format: Output format.
    """
    try:
        renderer = build_renderer(path=path, namespaces=namespace, env=None)
    except (ValueError, ValidationError) as e:
        exit_with_error(str(e), ExitCode.VALIDATION_ERROR)

    identifiers = list(names) or ["index"]
    try:
        paths = renderer.resolve_template_paths(identifiers)
    except UnknownNamespaceError as e:
        exit_with_error(str(e), ExitCode.VALIDATION_ERROR)

    rows: list[dict[str, str | None]] = []
    for identifier, resolved in zip(identifiers, paths, strict=True):
        file_path = find_template_file(resolved)
        rows.append(
            {
                "identifier": identifier,
                "path": str(resolved),
                "file": str(file_path) if file_path is not None else None,
            }
        )

    if format == OutputFormat.JSON:
        print(format_json(rows))  # noqa: T201
        return

    table = Table("Identifier", "Path", "Template file")
    for row in rows:
        table.add_row(row["identifier"], row["path"], row["file"] or "[dim]missing[/dim]")
    console = CLIContext.get_current().console or Console()
    console.print(table)
