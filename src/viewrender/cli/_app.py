"""The command-line interface for viewrender."""

from typing import Annotated, Literal

from cyclopts import App, Parameter
from rich.console import Console

from viewrender._logging import create_logger

from ._commands import register_commands
from ._context import CLIContext

_HELP = "Render namespaced Python view templates to HTML."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="viewrender",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Enable debug logging")] = False,
        quiet: Annotated[bool, Parameter(help="Only log errors")] = False,
        log_format: Annotated[
            Literal["json", "text"], Parameter(help="Log output format")
        ] = "text",
    ) -> None:
        """Launch viewrender CLI with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Enable debug logging.
            quiet: Only log errors.
            log_format: Log output format.
        """
        level = "debug" if verbose else "error" if quiet else None
        ctx = CLIContext(
            verbose=verbose,
            quiet=quiet,
            logger=create_logger(level=level, log_format=log_format).bind(cli=True),
            console=console,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `viewrender` CLI."""
    create_app().meta()


if __name__ == "__main__":
    main()
