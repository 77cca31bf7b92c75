r"""viewrender: server-side rendering of Python view templates.

A template is a ``.py`` file defining ``render(context)``, which returns a
markup tree built with :func:`h`. Templates are looked up by identifier,
optionally prefixed with a namespace::

    # view/home.py
    from viewrender import h

    def render(context):
        return h("html", {"lang": "en"},
            h("head", h("title", context["title"])),
            h("body", h("h1", context["title"])),
        )

Rendering::

    from viewrender import Renderer

    renderer = Renderer(
        {"path": "view", "namespace_paths": {"admin": "admin-view"}}
    )

    await renderer.render("home", {"title": "Home"})         # view/home.py
    await renderer.render("admin:users", {"title": "Users"})  # admin-view/users.py
    await renderer.render(["posts", "admin:posts"])           # first that exists

Templates may be ``async def`` functions. The output is prefixed with
``<!DOCTYPE html>`` unless the context sets ``doctype`` to a falsy value.
"""

from ._context import (
    DEFAULT_RENDER_CONTEXT,
    HTML5_DOCTYPE,
    merge_default_context,
    merge_request_state,
)
from ._loader import (
    FileSystemTemplateRegistry,
    TemplateFunction,
    TemplateRegistry,
    find_template_file,
    load_first,
)
from ._markup import (
    Element,
    Fragment,
    assert_is_markup_node,
    h,
    is_markup_node,
    render_to_string,
)
from ._names import (
    DEFAULT_NAMESPACE,
    DEFAULT_TEMPLATE,
    ParsedTemplateName,
    parse_template_name,
)
from ._options import RendererOptions, ResolvedOptions, apply_default_options
from ._partial import Partial
from ._paths import resolve_template_path, resolve_template_paths
from ._renderer import Renderer
from .exceptions import (
    InvalidTemplateExportError,
    InvalidTemplateOutputError,
    NoTemplateFoundError,
    UnknownNamespaceError,
    ViewRenderError,
)

__all__ = [
    "DEFAULT_NAMESPACE",
    "DEFAULT_RENDER_CONTEXT",
    "DEFAULT_TEMPLATE",
    "HTML5_DOCTYPE",
    "Element",
    "FileSystemTemplateRegistry",
    "Fragment",
    "InvalidTemplateExportError",
    "InvalidTemplateOutputError",
    "NoTemplateFoundError",
    "ParsedTemplateName",
    "Partial",
    "Renderer",
    "RendererOptions",
    "ResolvedOptions",
    "TemplateFunction",
    "TemplateRegistry",
    "UnknownNamespaceError",
    "ViewRenderError",
    "apply_default_options",
    "assert_is_markup_node",
    "find_template_file",
    "h",
    "is_markup_node",
    "load_first",
    "merge_default_context",
    "merge_request_state",
    "parse_template_name",
    "render_to_string",
    "resolve_template_path",
    "resolve_template_paths",
]
