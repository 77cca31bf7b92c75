# pyright: reportUnusedCallResult=false
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""Render command."""

from pathlib import Path
from typing import Annotated

import anyio
from cyclopts import App, Parameter
from pydantic import ValidationError

from viewrender.exceptions import (
    InvalidTemplateExportError,
    InvalidTemplateOutputError,
    NoTemplateFoundError,
    UnknownNamespaceError,
)

from ._shared import ExitCode, build_renderer, exit_with_error, parse_context

app = App(name="render", help="Render a template to HTML", help_on_error=True)


@app.default
def render(
    *names: Annotated[str, Parameter(help="Template identifiers, in fallback order.")],
    path: Annotated[
        Path | None, Parameter(help="Base directory of the default namespace.")
    ] = None,
    namespace: Annotated[
        list[str] | None,
        Parameter(help="Additional namespace as NAME=DIR. May be repeated."),
    ] = None,
    context: Annotated[
        str | None, Parameter(help="Render context as a JSON object.")
    ] = None,
    env: Annotated[str | None, Parameter(help="Environment label.")] = None,
    doctype: Annotated[
        bool, Parameter(help="Prefix the output with the default doctype.")
    ] = True,
) -> None:
    """Render the first matching template and print the HTML.

    Args:
        names: Template identifiers, in fallback order. Defaults to "index".
        path: Base directory of the default namespace.
        namespace: Additional namespaces as NAME=DIR pairs.
        context: Render context as a JSON object.
        env: Environment label.
        doctype: Prefix the output with the default doctype.
    """
    try:
        renderer = build_renderer(path=path, namespaces=namespace, env=env)
        render_context = parse_context(context)
    except (ValueError, ValidationError) as e:
        exit_with_error(str(e), ExitCode.VALIDATION_ERROR)

    if not doctype:
        render_context["doctype"] = None

    identifiers = list(names) or ["index"]
    try:
        html = anyio.run(renderer.render, identifiers, render_context)
    except UnknownNamespaceError as e:
        exit_with_error(str(e), ExitCode.VALIDATION_ERROR)
    except NoTemplateFoundError as e:
        exit_with_error(str(e), ExitCode.NOT_FOUND)
    except (InvalidTemplateExportError, InvalidTemplateOutputError) as e:
        exit_with_error(str(e), ExitCode.LOAD_ERROR)
    except (ImportError, SyntaxError) as e:
        exit_with_error(f"Failed to load template: {e}", ExitCode.LOAD_ERROR)
    except OSError as e:
        exit_with_error(f"Failed to read template: {e}", ExitCode.IO_ERROR)
    except Exception as e:  # noqa: BLE001 - template code can raise anything
        exit_with_error(f"{type(e).__name__}: {e}", ExitCode.INTERNAL_ERROR)

    print(html)  # noqa: T201
