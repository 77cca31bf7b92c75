"""Framework integrations.

- create_view_engine(): callback-style ``(file_path, context, done)`` engine
- create_starlette_middleware(): ``(request, call_next)`` middleware for
  Starlette and FastAPI that adds ``request.state.render``
- ViewRenderMiddleware: the same behaviour as a pure ASGI middleware class
"""

from ._starlette import (
    RenderFunction,
    RequestMiddleware,
    ViewRenderMiddleware,
    create_render_function,
    create_starlette_middleware,
)
from ._view_engine import DoneCallback, ViewEngine, create_view_engine

__all__ = [
    "DoneCallback",
    "RenderFunction",
    "RequestMiddleware",
    "ViewEngine",
    "ViewRenderMiddleware",
    "create_render_function",
    "create_starlette_middleware",
    "create_view_engine",
]
