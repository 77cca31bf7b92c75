"""viewrender exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class ViewRenderError(Exception):
    """Base exception for viewrender errors."""


class UnknownNamespaceError(ViewRenderError, KeyError):
    """Raised when a template identifier names an unconfigured namespace.

    Attributes:
        namespace: The namespace that was not found in the namespace table.
    """

    def __init__(self, namespace: str) -> None:
        """Initialize with the offending namespace name.

        Args:
            namespace: The namespace that is not configured.
        """
        super().__init__(f'Renderer namespace "{namespace}" is not configured')
        self.namespace: str = namespace

    def __str__(self) -> str:
        # KeyError quotes its message otherwise
        return str(self.args[0])


class NoTemplateFoundError(ViewRenderError, LookupError):
    """Raised when none of the candidate template paths can be loaded.

    Attributes:
        paths: The candidate paths that were tried, in order.
    """

    def __init__(self, paths: Sequence[Path]) -> None:
        """Initialize with the candidate paths that were tried.

        Args:
            paths: Candidate template paths, in the order they were tried.
        """
        self.paths: tuple[Path, ...] = tuple(paths)
        tried = ", ".join(str(path) for path in self.paths) or "(none)"
        super().__init__(f"No template found, tried: {tried}")


class InvalidTemplateExportError(ViewRenderError, TypeError):
    """Raised when a loaded template module does not export a callable.

    Attributes:
        path: The file the template module was loaded from.
    """

    def __init__(
        self,
        message: str = "Templates must export a function",
        *,
        path: Path | None = None,
    ) -> None:
        """Initialize with error message and template location."""
        super().__init__(message)
        self.path: Path | None = path


class InvalidTemplateOutputError(ViewRenderError, TypeError):
    """Raised when a template returns something other than markup."""

    def __init__(self, message: str = "Templates must return an HTML element") -> None:
        super().__init__(message)
