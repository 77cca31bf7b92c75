"""Template path resolution against a namespace table."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Final

from viewrender.exceptions import UnknownNamespaceError

from ._names import parse_template_name

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

# Leading separators on the template segment never escape the namespace base
_SEPARATORS: Final = "".join(sep for sep in (os.sep, os.altsep, "/") if sep)


def resolve_template_path(identifier: str, namespaces: Mapping[str, Path]) -> Path:
    """Resolve a template identifier to a filesystem path.

    Absolute paths are returned unchanged. Anything else is parsed as
    ``[namespace:]template`` and joined onto the namespace's base directory.

    A leading separator on the template segment is dropped, so
    ``"admin:/users"`` resolves inside the ``admin`` directory. The segment
    is otherwise not sanitized, so ``"../secret"`` resolves outside
    the namespace directory. Identifiers must come from trusted code.

    Args:
        identifier: Template identifier or absolute path.
        namespaces: Namespace table mapping names to base directories.

    Returns:
        The resolved path, without any file extension applied.

    Raises:
        UnknownNamespaceError: If the namespace is not in ``namespaces``.
    """
    if Path(identifier).is_absolute():
        return Path(identifier)

    parsed = parse_template_name(identifier)
    try:
        base = namespaces[parsed.namespace]
    except KeyError:
        raise UnknownNamespaceError(parsed.namespace) from None
    return Path(base) / parsed.template.lstrip(_SEPARATORS)


def resolve_template_paths(
    identifiers: str | Sequence[str],
    namespaces: Mapping[str, Path],
) -> list[Path]:
    """Resolve one or more template identifiers, preserving order.

    Order matters: it is the fallback priority used by the loader.

    Args:
        identifiers: A single identifier or a sequence of them.
        namespaces: Namespace table mapping names to base directories.

    Returns:
        Resolved paths in the same order as ``identifiers``.

    Raises:
        UnknownNamespaceError: If any identifier names an unknown namespace.
    """
    if isinstance(identifiers, str):
        identifiers = [identifiers]
    return [resolve_template_path(identifier, namespaces) for identifier in identifiers]
