"""Callback-style view engine.

Some frameworks plug template engines in as ``engine(file_path, context,
done)`` where ``done(error)`` reports a failure and ``done(None, html)``
reports success. The framework passes an absolute file path, which the
renderer uses as-is.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from viewrender._renderer import Renderer

type DoneCallback = Callable[..., object]
type ViewEngine = Callable[[str, Mapping[str, object], DoneCallback], Awaitable[object]]


def create_view_engine(renderer: Renderer) -> ViewEngine:
    """Create a view engine that renders through ``renderer``.

    Args:
        renderer: The renderer to use.

    Returns:
        An async engine function returning whatever ``done`` returns.
    """

    async def view_engine(
        file_path: str,
        context: Mapping[str, object],
        done: DoneCallback,
    ) -> object:
        try:
            html = await renderer.render(file_path, context)
        except Exception as e:  # noqa: BLE001 - reported through the callback
            return done(e)
        return done(None, html)

    return view_engine
