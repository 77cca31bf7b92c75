"""Renderer options and their defaults.

The single ``path`` option is folded into the namespace table under
DEFAULT_NAMESPACE when options are applied, so after construction the
namespace table is the only place base directories live.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from os import getenv
from pathlib import Path
from typing import ClassVar, Final

from pydantic import BaseModel, ConfigDict, Field

from ._names import DEFAULT_NAMESPACE

DEFAULT_ENV: Final = "development"
DEFAULT_VIEW_DIRECTORY: Final = "view"


def get_default_env() -> str:
    """Get the environment label from environment variables.

    Checks VIEWRENDER_ENV first, then PYTHON_ENV. Defaults to "development"
    if neither is set.

    Returns:
        The environment label.
    """
    return getenv("VIEWRENDER_ENV") or getenv("PYTHON_ENV") or DEFAULT_ENV


def get_default_view_path() -> Path:
    """Get the default view directory, ``<cwd>/view``."""
    return Path.cwd() / DEFAULT_VIEW_DIRECTORY


class RendererOptions(BaseModel):
    """User-facing renderer configuration.

    Attributes:
        env: Environment label. Informational only.
        path: Base directory of the default namespace.
        namespace_paths: Additional namespaces mapped to base directories.
            Also accepted as ``namespacePaths``.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True, extra="ignore", populate_by_name=True
    )

    env: str = Field(default_factory=get_default_env)
    path: Path = Field(default_factory=get_default_view_path)
    namespace_paths: dict[str, Path] = Field(
        default_factory=dict, alias="namespacePaths"
    )


@dataclass(slots=True, frozen=True)
class ResolvedOptions:
    """Options after defaults have been applied.

    Attributes:
        env: Environment label.
        namespace_paths: Namespace table, always containing DEFAULT_NAMESPACE.
    """

    env: str
    namespace_paths: dict[str, Path]


def _absolute(path: Path) -> Path:
    expanded = path.expanduser()
    return expanded if expanded.is_absolute() else Path.cwd() / expanded


def apply_default_options(
    options: RendererOptions | Mapping[str, object] | None = None,
) -> ResolvedOptions:
    """Merge user options over the defaults and build the namespace table.

    Args:
        options: User options, either a RendererOptions instance or a mapping
            of option names to values. Missing options use the defaults.

    Returns:
        ResolvedOptions with the default path stored under DEFAULT_NAMESPACE.

    Raises:
        pydantic.ValidationError: If an option has the wrong type.
    """
    if not isinstance(options, RendererOptions):
        options = RendererOptions.model_validate(dict(options or {}))

    namespace_paths = {DEFAULT_NAMESPACE: _absolute(options.path)}
    for namespace, path in options.namespace_paths.items():
        if namespace != DEFAULT_NAMESPACE:
            namespace_paths[namespace] = _absolute(path)

    return ResolvedOptions(env=options.env, namespace_paths=namespace_paths)
