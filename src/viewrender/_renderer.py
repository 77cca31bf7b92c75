"""The render pipeline.

Renderer.render() runs, in order: context merging, path resolution,
first-match template loading, template invocation, output validation,
serialization, and doctype injection. Nothing after a failing step runs.
"""

from __future__ import annotations

import inspect
from types import MappingProxyType
from typing import TYPE_CHECKING

from ._context import DEFAULT_RENDER_CONTEXT, merge_default_context
from ._loader import FileSystemTemplateRegistry, load_first
from ._logging import get_logger
from ._markup import assert_is_markup_node, render_to_string
from ._options import apply_default_options
from ._paths import resolve_template_path, resolve_template_paths

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from starlette.types import ASGIApp
    from structlog.typing import FilteringBoundLogger

    from ._loader import TemplateFunction, TemplateRegistry
    from ._options import RendererOptions
    from .integrations import RequestMiddleware, ViewEngine, ViewRenderMiddleware

INVALID_OUTPUT_MESSAGE = "Templates must return an HTML element"


class Renderer:
    """Render namespaced Python templates to HTML strings.

    Example:
        renderer = Renderer(
            {"path": "view", "namespace_paths": {"admin": "admin-view"}}
        )
        html = await renderer.render(["posts", "admin:posts"], {"title": "Posts"})

    Attributes:
        env: Environment label from the options. Informational only.
        namespaces: Read-only namespace table, always containing the default
            namespace.
        render_context: Read-only default context applied to every render.
        registry: Registry used to load template modules.
    """

    def __init__(
        self,
        options: RendererOptions | Mapping[str, object] | None = None,
        *,
        render_context: Mapping[str, object] | None = None,
        registry: TemplateRegistry | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Create a renderer.

        Args:
            options: Renderer options (``env``, ``path``, ``namespace_paths``).
            render_context: Extra defaults merged over the built-in default
                context, which sets ``doctype`` to the HTML5 doctype.
            registry: Template registry. Defaults to a caching
                FileSystemTemplateRegistry rooted at the namespace directories.
            logger: Logger to use. Defaults to the library logger.
        """
        resolved = apply_default_options(options)
        self.env: str = resolved.env
        self.namespaces: Mapping[str, Path] = MappingProxyType(
            dict(resolved.namespace_paths)
        )
        self.render_context: Mapping[str, object] = MappingProxyType(
            merge_default_context(DEFAULT_RENDER_CONTEXT, render_context)
        )
        self.registry: TemplateRegistry = (
            registry
            if registry is not None
            else FileSystemTemplateRegistry(self.namespaces.values())
        )
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else get_logger()
        ).bind(env=self.env)

    def __repr__(self) -> str:
        namespaces = ", ".join(self.namespaces)
        return f"Renderer(env={self.env!r}, namespaces=[{namespaces}])"

    def apply_default_render_context(
        self, context: Mapping[str, object] | None = None
    ) -> dict[str, object]:
        """Merge ``context`` over the renderer's default context."""
        return merge_default_context(self.render_context, context)

    def resolve_template_path(self, identifier: str) -> Path:
        """Resolve a single template identifier against the namespace table."""
        return resolve_template_path(identifier, self.namespaces)

    def resolve_template_paths(self, identifiers: str | Sequence[str]) -> list[Path]:
        """Resolve one or more template identifiers, preserving order."""
        return resolve_template_paths(identifiers, self.namespaces)

    def load_template(self, identifiers: str | Sequence[str]) -> TemplateFunction:
        """Load the first template that exists among ``identifiers``.

        Raises:
            UnknownNamespaceError: If an identifier names an unknown namespace.
            NoTemplateFoundError: If none of the templates exist.
            InvalidTemplateExportError: If the template has no ``render``
                function.
        """
        paths = self.resolve_template_paths(identifiers)
        self._logger.debug("template_resolved", paths=[str(path) for path in paths])
        return load_first(paths, self.registry)

    @staticmethod
    def apply_string_transforms(
        html: str, context: Mapping[str, object] | None = None
    ) -> str:
        """Prepend ``context["doctype"]`` to ``html`` when it is truthy."""
        doctype = context.get("doctype") if context else None
        if doctype:
            return f"{doctype}{html}"
        return html

    async def render(
        self,
        identifiers: str | Sequence[str],
        context: Mapping[str, object] | None = None,
    ) -> str:
        """Render the first matching template to an HTML string.

        Args:
            identifiers: A template identifier, or several in fallback order.
            context: Data passed to the template, merged over the defaults.

        Returns:
            The rendered HTML, prefixed with the doctype when one is set.

        Raises:
            UnknownNamespaceError: If an identifier names an unknown namespace.
            NoTemplateFoundError: If none of the templates exist.
            InvalidTemplateExportError: If the template has no ``render``
                function.
            InvalidTemplateOutputError: If the template does not return markup.
        """
        log = self._logger.bind(identifiers=identifiers)
        render_context = self.apply_default_render_context(context)

        try:
            template = self.load_template(identifiers)
            log.debug("template_loaded", template=getattr(template, "__module__", None))

            output: object = template(render_context)
            if inspect.isawaitable(output):
                output = await output

            assert_is_markup_node(output, INVALID_OUTPUT_MESSAGE)
            html = render_to_string(output)
        except Exception as e:
            log.debug("render_failed", error=str(e), error_type=type(e).__name__)
            raise

        log.debug("template_rendered", length=len(html))
        return self.apply_string_transforms(html, render_context)

    def view_engine(self) -> ViewEngine:
        """Create a callback-style view engine bound to this renderer."""
        from .integrations import create_view_engine  # noqa: PLC0415

        return create_view_engine(self)

    def starlette(self) -> RequestMiddleware:
        """Create Starlette/FastAPI ``http`` middleware bound to this renderer.

        Example:
            app.middleware("http")(renderer.starlette())
        """
        from .integrations import create_starlette_middleware  # noqa: PLC0415

        return create_starlette_middleware(self)

    def asgi(self, app: ASGIApp) -> ViewRenderMiddleware:
        """Wrap an ASGI application so every request can render views."""
        from .integrations import ViewRenderMiddleware  # noqa: PLC0415

        return ViewRenderMiddleware(app, renderer=self)
