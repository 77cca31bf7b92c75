"""Unit tests for template loading."""

import sys
from collections.abc import Callable
from pathlib import Path
from types import ModuleType

import pytest

from viewrender import (
    FileSystemTemplateRegistry,
    InvalidTemplateExportError,
    NoTemplateFoundError,
    TemplateRegistry,
    find_template_file,
    load_first,
)
from viewrender._loader import TEMPLATE_PACKAGE_PREFIX, template_file_candidates


def _module(name: str, **attrs: object) -> ModuleType:
    module = ModuleType(name)
    for key, value in attrs.items():
        setattr(module, key, value)
    return module


class DictRegistry:
    """In-memory registry keyed by path."""

    def __init__(self, modules: dict[Path, ModuleType]) -> None:
        self.modules = modules
        self.requested: list[Path] = []

    def load_by_path(self, path: Path) -> ModuleType | None:
        self.requested.append(path)
        return self.modules.get(path)


class TestTemplateFileCandidates:
    def test_bare_path(self) -> None:
        assert list(template_file_candidates(Path("/views/home"))) == [
            Path("/views/home.py"),
            Path("/views/home/__init__.py"),
        ]

    def test_path_with_py_suffix_is_tried_first(self) -> None:
        assert list(template_file_candidates(Path("/views/home.py"))) == [
            Path("/views/home.py"),
            Path("/views/home.py.py"),
            Path("/views/home.py/__init__.py"),
        ]


class TestFindTemplateFile:
    def test_finds_module_file(
        self, tmp_path: Path, write_template: Callable[[Path, str], Path]
    ) -> None:
        file = write_template(tmp_path / "home.py", "def render(context): ...\n")
        assert find_template_file(tmp_path / "home") == file

    def test_finds_package_template(
        self, tmp_path: Path, write_template: Callable[[Path, str], Path]
    ) -> None:
        file = write_template(
            tmp_path / "home" / "__init__.py", "def render(context): ...\n"
        )
        assert find_template_file(tmp_path / "home") == file

    def test_module_file_wins_over_package(
        self, tmp_path: Path, write_template: Callable[[Path, str], Path]
    ) -> None:
        file = write_template(tmp_path / "home.py", "def render(context): ...\n")
        _ = write_template(tmp_path / "home" / "__init__.py", "def render(context): ...\n")
        assert find_template_file(tmp_path / "home") == file

    def test_missing_returns_none(self, tmp_path: Path) -> None:
        assert find_template_file(tmp_path / "missing") is None


class TestFileSystemTemplateRegistry:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(FileSystemTemplateRegistry(), TemplateRegistry)

    def test_loads_module(
        self, tmp_path: Path, write_template: Callable[[Path, str], Path]
    ) -> None:
        _ = write_template(tmp_path / "home.py", "VALUE = 42\n")
        module = FileSystemTemplateRegistry().load_by_path(tmp_path / "home")
        assert module is not None
        assert module.VALUE == 42

    def test_missing_returns_none(self, tmp_path: Path) -> None:
        assert FileSystemTemplateRegistry().load_by_path(tmp_path / "missing") is None

    def test_caches_loaded_modules(
        self, tmp_path: Path, write_template: Callable[[Path, str], Path]
    ) -> None:
        _ = write_template(tmp_path / "home.py", "VALUE = 1\n")
        registry = FileSystemTemplateRegistry()

        first = registry.load_by_path(tmp_path / "home")
        second = registry.load_by_path(tmp_path / "home.py")

        assert first is second
        assert len(registry) == 1

    def test_clear_reloads_from_disk(
        self, tmp_path: Path, write_template: Callable[[Path, str], Path]
    ) -> None:
        _ = write_template(tmp_path / "home.py", "VALUE = 1\n")
        registry = FileSystemTemplateRegistry()
        first = registry.load_by_path(tmp_path / "home")

        _ = write_template(tmp_path / "home.py", "VALUE = 20\n")
        registry.clear()
        second = registry.load_by_path(tmp_path / "home")

        assert first is not None
        assert second is not None
        assert second is not first
        assert second.VALUE == 20
        assert len(registry) == 1

    def test_registers_module_while_cached(
        self, tmp_path: Path, write_template: Callable[[Path, str], Path]
    ) -> None:
        _ = write_template(tmp_path / "home.py", "VALUE = 1\n")
        registry = FileSystemTemplateRegistry()
        module = registry.load_by_path(tmp_path / "home")

        assert module is not None
        assert sys.modules[module.__name__] is module

        registry.clear()
        assert module.__name__ not in sys.modules

    def test_errors_in_template_propagate(
        self, tmp_path: Path, write_template: Callable[[Path, str], Path]
    ) -> None:
        _ = write_template(tmp_path / "broken.py", "raise RuntimeError('boom')\n")
        registry = FileSystemTemplateRegistry()

        with pytest.raises(RuntimeError, match="boom"):
            _ = registry.load_by_path(tmp_path / "broken")
        assert len(registry) == 0

    def test_dataclasses_work_in_templates(
        self, tmp_path: Path, write_template: Callable[[Path, str], Path]
    ) -> None:
        _ = write_template(
            tmp_path / "card.py",
            """\
            from dataclasses import dataclass

            @dataclass
            class Card:
                title: str
            """,
        )
        module = FileSystemTemplateRegistry().load_by_path(tmp_path / "card")
        assert module is not None
        assert module.Card("x").title == "x"


class TestLoadFirst:
    def test_first_existing_candidate_wins(self) -> None:
        def render_a(context: dict[str, object]) -> str:
            return "a"

        def render_b(context: dict[str, object]) -> str:
            return "b"

        registry = DictRegistry(
            {
                Path("/a"): _module("a", render=render_a),
                Path("/b"): _module("b", render=render_b),
            }
        )

        assert load_first([Path("/a"), Path("/b")], registry) is render_a
        assert registry.requested == [Path("/a")]

    def test_falls_back_to_later_candidate(self) -> None:
        def render_b(context: dict[str, object]) -> str:
            return "b"

        registry = DictRegistry({Path("/b"): _module("b", render=render_b)})

        assert load_first([Path("/a"), Path("/b")], registry) is render_b
        assert registry.requested == [Path("/a"), Path("/b")]

    def test_no_candidates_found(self) -> None:
        registry = DictRegistry({})

        with pytest.raises(NoTemplateFoundError) as exc_info:
            _ = load_first([Path("/a"), Path("/b")], registry)

        assert exc_info.value.paths == (Path("/a"), Path("/b"))
        assert "/a" in str(exc_info.value)

    def test_empty_candidate_list(self) -> None:
        with pytest.raises(NoTemplateFoundError):
            _ = load_first([], DictRegistry({}))

    def test_missing_render_function(self) -> None:
        registry = DictRegistry({Path("/a"): _module("a")})

        with pytest.raises(InvalidTemplateExportError, match="must export a function"):
            _ = load_first([Path("/a")], registry)

    def test_render_not_callable(self) -> None:
        registry = DictRegistry({Path("/a"): _module("a", render="<p>nope</p>")})

        with pytest.raises(InvalidTemplateExportError):
            _ = load_first([Path("/a")], registry)

    def test_invalid_export_does_not_fall_back(self) -> None:
        def render_b(context: dict[str, object]) -> str:
            return "b"

        registry = DictRegistry(
            {
                Path("/a"): _module("a"),
                Path("/b"): _module("b", render=render_b),
            }
        )

        with pytest.raises(InvalidTemplateExportError):
            _ = load_first([Path("/a"), Path("/b")], registry)

    def test_invalid_export_reports_file(
        self, tmp_path: Path, write_template: Callable[[Path, str], Path]
    ) -> None:
        file = write_template(tmp_path / "home.py", "render = None\n")

        with pytest.raises(InvalidTemplateExportError) as exc_info:
            _ = load_first([tmp_path / "home"], FileSystemTemplateRegistry())

        assert exc_info.value.path == file.resolve()


class TestTemplateImports:
    def test_imports_sibling_module(
        self, tmp_path: Path, write_template: Callable[[Path, str], Path]
    ) -> None:
        _ = write_template(tmp_path / "layout" / "default.py", "TITLE = 'layout'\n")
        _ = write_template(
            tmp_path / "home.py", "from .layout.default import TITLE\n"
        )
        registry = FileSystemTemplateRegistry([tmp_path])

        module = registry.load_by_path(tmp_path / "home")

        assert module is not None
        assert module.TITLE == "layout"

    def test_nested_template_imports_from_root(
        self, tmp_path: Path, write_template: Callable[[Path, str], Path]
    ) -> None:
        _ = write_template(tmp_path / "partial" / "footer.py", "TEXT = 'footer'\n")
        _ = write_template(
            tmp_path / "users" / "list.py", "from ..partial.footer import TEXT\n"
        )
        registry = FileSystemTemplateRegistry([tmp_path])

        module = registry.load_by_path(tmp_path / "users" / "list")

        assert module is not None
        assert module.TEXT == "footer"

    def test_deepest_root_wins(
        self, tmp_path: Path, write_template: Callable[[Path, str], Path]
    ) -> None:
        admin = tmp_path / "admin"
        _ = write_template(admin / "shared.py", "WHERE = 'admin'\n")
        _ = write_template(tmp_path / "shared.py", "WHERE = 'default'\n")
        _ = write_template(admin / "home.py", "from .shared import WHERE\n")
        registry = FileSystemTemplateRegistry([tmp_path, admin])

        module = registry.load_by_path(admin / "home")

        assert module is not None
        assert module.WHERE == "admin"

    def test_file_outside_roots_imports_siblings(
        self, tmp_path: Path, write_template: Callable[[Path, str], Path]
    ) -> None:
        _ = write_template(tmp_path / "helpers.py", "VALUE = 3\n")
        _ = write_template(tmp_path / "page.py", "from .helpers import VALUE\n")

        module = FileSystemTemplateRegistry().load_by_path(tmp_path / "page.py")

        assert module is not None
        assert module.VALUE == 3

    def test_package_template_imports_siblings(
        self, tmp_path: Path, write_template: Callable[[Path, str], Path]
    ) -> None:
        _ = write_template(tmp_path / "profile" / "card.py", "NAME = 'card'\n")
        _ = write_template(
            tmp_path / "profile" / "__init__.py", "from .card import NAME\n"
        )
        registry = FileSystemTemplateRegistry([tmp_path])

        module = registry.load_by_path(tmp_path / "profile")

        assert module is not None
        assert module.NAME == "card"

    def test_clear_reloads_imported_modules(
        self, tmp_path: Path, write_template: Callable[[Path, str], Path]
    ) -> None:
        _ = write_template(tmp_path / "layout.py", "TITLE = 'v1'\n")
        _ = write_template(tmp_path / "home.py", "from .layout import TITLE\n")
        registry = FileSystemTemplateRegistry([tmp_path])
        first = registry.load_by_path(tmp_path / "home")

        _ = write_template(tmp_path / "layout.py", "TITLE = 'second'\n")
        registry.clear()
        second = registry.load_by_path(tmp_path / "home")

        assert first is not None
        assert first.TITLE == "v1"
        assert second is not None
        assert second.TITLE == "second"
        assert not any(
            name.startswith(TEMPLATE_PACKAGE_PREFIX) and module is first
            for name, module in sys.modules.items()
        )

    def test_import_errors_propagate(
        self, tmp_path: Path, write_template: Callable[[Path, str], Path]
    ) -> None:
        _ = write_template(tmp_path / "home.py", "from .missing import LAYOUT\n")
        registry = FileSystemTemplateRegistry([tmp_path])

        with pytest.raises(ImportError):
            _ = registry.load_by_path(tmp_path / "home")
        assert len(registry) == 0
