"""Template module loading.

Templates are plain Python files that define a ``render(context)`` function.
A TemplateRegistry turns a resolved path into a loaded module, and
load_first() walks an ordered list of candidate paths until one loads.
"""

from __future__ import annotations

import hashlib
import importlib.machinery
import importlib.util
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Final, Protocol, cast, runtime_checkable

from viewrender.exceptions import InvalidTemplateExportError, NoTemplateFoundError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from types import ModuleType

TEMPLATE_EXPORT: Final = "render"
TEMPLATE_SUFFIX: Final = ".py"
PACKAGE_TEMPLATE: Final = "__init__.py"
TEMPLATE_PACKAGE_PREFIX: Final = "_viewrender_templates_"

# Template functions take a render context and return markup or an awaitable
# resolving to markup.
type TemplateFunction = Callable[[dict[str, object]], object]


@runtime_checkable
class TemplateRegistry(Protocol):
    """Protocol for anything that can load a template module by path."""

    def load_by_path(self, path: Path) -> ModuleType | None:
        """Load the template module for a resolved path.

        Args:
            path: Resolved template path, usually without a file extension.

        Returns:
            The loaded module, or None if no template exists at ``path``.
        """
        ...


def template_file_candidates(path: Path) -> Iterable[Path]:
    """Yield the files a resolved template path may refer to, in order.

    1. ``path`` itself, when it already names a ``.py`` file
    2. ``path`` with ``.py`` appended
    3. ``path/__init__.py`` for package-style templates
    """
    if path.suffix == TEMPLATE_SUFFIX:
        yield path
    yield path.with_name(path.name + TEMPLATE_SUFFIX)
    yield path / PACKAGE_TEMPLATE


def find_template_file(path: Path) -> Path | None:
    """Find the first existing template file for a resolved path."""
    for candidate in template_file_candidates(path):
        if candidate.is_file():
            return candidate
    return None


def _package_name(root: Path) -> str:
    digest = hashlib.sha256(str(root).encode("utf-8")).hexdigest()[:16]
    return f"{TEMPLATE_PACKAGE_PREFIX}{digest}"


def _module_parts(relative: Path) -> list[str]:
    parts = list(relative.with_suffix("").parts)
    if parts and parts[-1] == PACKAGE_TEMPLATE.removesuffix(TEMPLATE_SUFFIX):
        parts.pop()
    return parts


class FileSystemTemplateRegistry:
    """Load template modules from ``.py`` files on disk.

    Each import root (usually a namespace base directory) becomes a synthetic
    package, and templates are loaded as its submodules. Templates can
    therefore split layouts and partials into sibling files and import them
    relatively::

        # view/home.py
        from .layout.default import layout

    Files outside every import root are rooted at their own directory.

    Loaded modules are cached by file path, so repeated loads of the same
    template return the same module object until clear() is called.
    """

    def __init__(self, roots: Iterable[Path] = ()) -> None:
        """Create a registry.

        Args:
            roots: Directories that act as import roots for templates.
        """
        self.roots: tuple[Path, ...] = tuple(Path(root).resolve() for root in roots)
        self._modules: dict[Path, ModuleType] = {}
        self._packages: set[str] = set()

    def load_by_path(self, path: Path) -> ModuleType | None:
        """Load the template module for a resolved path.

        Errors raised while executing the module propagate unchanged; only a
        missing file counts as "not found".

        Args:
            path: Resolved template path.

        Returns:
            The loaded module, or None if no template file exists.

        Raises:
            ImportError: If the file exists but cannot be imported.
        """
        file_path = find_template_file(path)
        if file_path is None:
            return None

        file_path = file_path.resolve()
        module = self._modules.get(file_path)
        if module is None:
            module = self._exec_module(file_path)
            self._modules[file_path] = module
        return module

    def clear(self) -> None:
        """Forget every loaded template so the next load re-reads the files.

        Modules the templates imported from their import roots are dropped
        too.
        """
        prefixes = tuple(f"{package}." for package in self._packages)
        for name in list(sys.modules):
            if name in self._packages or name.startswith(prefixes):
                _ = sys.modules.pop(name, None)
        self._packages.clear()
        self._modules.clear()
        importlib.invalidate_caches()

    def __len__(self) -> int:
        return len(self._modules)

    def _import_root(self, file_path: Path) -> Path:
        owners = [
            root
            for root in self.roots
            if file_path.is_relative_to(root)
            and _module_parts(file_path.relative_to(root))
        ]
        if owners:
            return max(owners, key=lambda root: len(root.parts))
        if file_path.name == PACKAGE_TEMPLATE:
            return file_path.parent.parent
        return file_path.parent

    def _ensure_package(self, root: Path) -> str:
        name = _package_name(root)
        if name not in sys.modules:
            spec = importlib.machinery.ModuleSpec(name, None, is_package=True)
            spec.submodule_search_locations = [str(root)]
            sys.modules[name] = importlib.util.module_from_spec(spec)
        self._packages.add(name)
        return name

    def _exec_module(self, file_path: Path) -> ModuleType:
        root = self._import_root(file_path)
        package = self._ensure_package(root)
        name = ".".join([package, *_module_parts(file_path.relative_to(root))])

        module = sys.modules.get(name)
        if module is not None and getattr(module, "__file__", None) == str(file_path):
            # Already imported by another template
            return module

        spec = importlib.util.spec_from_file_location(name, file_path)
        if spec is None or spec.loader is None:
            msg = f"Could not load template from {file_path}"
            raise ImportError(msg)

        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            _ = sys.modules.pop(name, None)
            raise
        return module


def get_template_function(module: ModuleType) -> TemplateFunction:
    """Get the render function exported by a template module.

    Raises:
        InvalidTemplateExportError: If the module has no callable ``render``.
    """
    func: object = getattr(module, TEMPLATE_EXPORT, None)
    if not callable(func):
        file = getattr(module, "__file__", None)
        raise InvalidTemplateExportError(path=Path(file) if file else None)
    return cast("TemplateFunction", func)


def load_first(paths: Sequence[Path], registry: TemplateRegistry) -> TemplateFunction:
    """Load the first template that exists among ``paths``.

    Candidates are tried strictly in order and the first one that loads wins,
    even if later candidates exist too.

    Args:
        paths: Candidate template paths, highest priority first.
        registry: Registry used to load each candidate.

    Returns:
        The template's render function.

    Raises:
        NoTemplateFoundError: If no candidate can be loaded.
        InvalidTemplateExportError: If the winning module has no callable
            ``render``.
    """
    for path in paths:
        module = registry.load_by_path(path)
        if module is not None:
            return get_template_function(module)
    raise NoTemplateFoundError(paths)
