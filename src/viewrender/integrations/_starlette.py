"""Starlette and FastAPI integration.

Both forms store a ``render`` coroutine function on the request state::

    app = FastAPI()
    app.middleware("http")(renderer.starlette())

    @app.get("/")
    async def home(request: Request) -> HTMLResponse:
        return await request.state.render("home", {"title": "Home"})

Request state set by earlier middleware or dependencies is merged beneath
the context passed to ``render``, and renderer defaults sit beneath both.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, MutableMapping, Sequence
from typing import TYPE_CHECKING, Final

from starlette.responses import HTMLResponse

from viewrender._context import merge_request_state

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp, Receive, Scope, Send

    from viewrender._renderer import Renderer

# State keys owned by the integration, never passed to templates
RENDER_STATE_KEY: Final = "render"
BODY_STATE_KEY: Final = "body"

type RenderFunction = Callable[
    [str | Sequence[str], Mapping[str, object] | None], Awaitable[HTMLResponse]
]
type RequestMiddleware = Callable[
    ["Request", Callable[["Request"], Awaitable["Response"]]], Awaitable["Response"]
]


def create_render_function(
    renderer: Renderer, state: MutableMapping[str, object]
) -> RenderFunction:
    """Create a request-bound render function.

    Args:
        renderer: The renderer to use.
        state: The request's state mapping (``scope["state"]``).

    Returns:
        A coroutine function that renders a template, stores the HTML on the
        request state as ``body`` and returns it as an HTMLResponse.
    """

    async def render(
        identifiers: str | Sequence[str],
        context: Mapping[str, object] | None = None,
    ) -> HTMLResponse:
        request_state = {
            key: value
            for key, value in state.items()
            if key not in (RENDER_STATE_KEY, BODY_STATE_KEY)
        }
        html = await renderer.render(
            identifiers, merge_request_state(request_state, context)
        )
        state[BODY_STATE_KEY] = html
        return HTMLResponse(html)

    return render


def _scope_state(scope: MutableMapping[str, object]) -> MutableMapping[str, object]:
    state = scope.setdefault("state", {})
    if not isinstance(state, MutableMapping):
        msg = "ASGI scope state must be a mutable mapping"
        raise TypeError(msg)
    return state


def create_starlette_middleware(renderer: Renderer) -> RequestMiddleware:
    """Create ``http`` middleware that adds ``request.state.render``.

    Args:
        renderer: The renderer to use.

    Returns:
        Middleware for ``app.middleware("http")`` or BaseHTTPMiddleware.
    """

    async def middleware(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        state = _scope_state(request.scope)
        state[RENDER_STATE_KEY] = create_render_function(renderer, state)
        return await call_next(request)

    return middleware


class ViewRenderMiddleware:
    """Pure ASGI middleware that adds ``render`` to the request state.

    Example:
        app.add_middleware(ViewRenderMiddleware, renderer=renderer)
    """

    def __init__(self, app: ASGIApp, *, renderer: Renderer) -> None:
        self.app: ASGIApp = app
        self.renderer: Renderer = renderer

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] in ("http", "websocket"):
            state = _scope_state(scope)
            state[RENDER_STATE_KEY] = create_render_function(self.renderer, state)
        await self.app(scope, receive, send)
