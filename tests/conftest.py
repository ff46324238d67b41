"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from collections.abc import Callable
from pathlib import Path

import pytest
from ignorectl.rules.models import PathKind
from ignorectl.rules.probe import PathProbe


class FakeProbe(PathProbe):
    """In-memory probe returning preset kinds, NOT_FOUND otherwise."""

    def __init__(self, kinds: dict[str, PathKind] | None = None) -> None:
        self.kinds = dict(kinds or {})
        self.calls: list[str] = []

    def probe(self, relative_path: str) -> PathKind:
        self.calls.append(relative_path)
        return self.kinds.get(relative_path, PathKind.NOT_FOUND)


@pytest.fixture
def fake_probe() -> Callable[..., FakeProbe]:
    """Factory for in-memory probes."""

    def _make(kinds: dict[str, PathKind] | None = None) -> FakeProbe:
        return FakeProbe(kinds)

    return _make


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path_factory: pytest.TempPathFactory, monkeypatch) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so user settings never leak in."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """An empty workspace directory."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def write_gitignore(workspace: Path) -> Callable[[str], Path]:
    """Write raw content to the workspace .gitignore."""

    def _write(content: str) -> Path:
        path = workspace / ".gitignore"
        path.write_bytes(content.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def read_gitignore(workspace: Path) -> Callable[[], str]:
    """Read the workspace .gitignore as text."""

    def _read() -> str:
        return (workspace / ".gitignore").read_bytes().decode("utf-8")

    return _read


@pytest.fixture
def make_symlink() -> Callable[[Path, Path], None]:
    """Create a symlink, skipping the test where symlinks are unsupported."""

    def _link(link: Path, target: Path) -> None:
        link.parent.mkdir(parents=True, exist_ok=True)
        try:
            os.symlink(target, link, target_is_directory=target.is_dir())
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported on this platform")

    return _link
