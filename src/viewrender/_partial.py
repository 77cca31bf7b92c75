"""Base class for reusable view logic."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


class Partial:
    """A piece of view logic that renders from a context.

    Subclasses override render() and read their data from ``self.context``.
    A Partial subclass can also be used directly as an element type with
    ``h(MyPartial, {...})``, in which case the element's props (including
    ``children``) become the context.

    Attributes:
        context: Data passed in when the partial was created.
    """

    def __init__(self, context: Mapping[str, object] | None = None) -> None:
        self.context: Mapping[str, object] = context if context is not None else {}

    def render(self) -> object:
        """Render the partial to a string or markup node."""
        return f"Unextended Partial ({type(self).__name__})"
