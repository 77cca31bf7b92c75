"""Render context composition.

Contexts are merged shallowly, later layers overriding earlier ones:

1. Renderer defaults (always present, e.g. ``doctype``)
2. Request-scoped state supplied by a framework adapter
3. Context passed to the individual render call

Every merge builds a new dict; the inputs are never mutated.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

HTML5_DOCTYPE: Final = "<!DOCTYPE html>"

DEFAULT_RENDER_CONTEXT: Final[Mapping[str, object]] = MappingProxyType(
    {"doctype": HTML5_DOCTYPE}
)


def merge_default_context(
    defaults: Mapping[str, object],
    context: Mapping[str, object] | None = None,
) -> dict[str, object]:
    """Merge a render call's context over the renderer defaults.

    Args:
        defaults: Renderer-wide default context.
        context: Context passed to the render call.

    Returns:
        A new merged context dictionary.
    """
    result: dict[str, object] = dict(defaults)
    if context:
        result = {**result, **context}
    return result


def merge_request_state(
    state: Mapping[str, object],
    context: Mapping[str, object] | None = None,
) -> dict[str, object]:
    """Merge a render call's context over framework request state.

    Renderer defaults are not applied here; the result is handed to the
    renderer, which applies them as the lowest layer.

    Args:
        state: Request-scoped state from the framework.
        context: Context passed to the render call.

    Returns:
        A new merged context dictionary.
    """
    result: dict[str, object] = dict(state)
    if context:
        result = {**result, **context}
    return result
