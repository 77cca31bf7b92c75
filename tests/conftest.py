"""Shared test fixtures for viewrender tests."""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from textwrap import dedent

import pytest
from rich.console import Console


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def console() -> Console:
    return Console(
        width=120,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@dataclass(frozen=True, slots=True)
class ViewDirs:
    """Template directories for a test project."""

    root: Path
    view: Path
    admin: Path


type WriteTemplate = Callable[[Path, str], Path]


@pytest.fixture
def write_template() -> WriteTemplate:
    """Write a template module, creating parent directories as needed.

    The source is dedented so tests can use indented triple-quoted strings.
    """

    def _write(path: Path, source: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_text(dedent(source), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def view_dirs(tmp_path: Path) -> ViewDirs:
    """Create default and admin view directories.

    Structure:
        tmp_path/
            view/
            admin-view/
    """
    view = tmp_path / "view"
    view.mkdir()
    admin = tmp_path / "admin-view"
    admin.mkdir()
    return ViewDirs(root=tmp_path, view=view, admin=admin)
