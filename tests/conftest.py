"""Shared fixtures: isolated environment and on-disk Unity projects."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

REVISION_PROJECT_VERSION = "m_EditorVersion: 2021.3.4f1\nm_EditorVersionWithRevision: 2021.3.4f1 (abc1234def5)\n"


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the runner's own Actions/tool variables out of the tests."""
    for key in list(os.environ):
        if key.startswith(("INPUT_", "GITHUB_", "UNITY_PROJECT_VERSION_")) or key in ("RUNNER_DEBUG", "NO_COLOR"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Create ``tmp_path/<relpath>`` as a Unity project and return its root.

    Args (of the returned factory):
        relpath: Project directory relative to tmp_path ("" for tmp_path itself).
        content: ProjectVersion.txt text.
        library: Also create a Library/ folder.
    """

    def _make(relpath: str = "MyGame", content: str = REVISION_PROJECT_VERSION, library: bool = False) -> Path:
        root = tmp_path / relpath if relpath else tmp_path
        settings = root / "ProjectSettings"
        settings.mkdir(parents=True, exist_ok=True)
        (settings / "ProjectVersion.txt").write_text(content, encoding="utf-8", newline="")
        (root / "Assets").mkdir(exist_ok=True)
        if library:
            (root / "Library").mkdir(exist_ok=True)
        return root

    return _make


@pytest.fixture(autouse=True)
def _isolate_root_logger() -> Generator[None]:
    """The CLI callback reconfigures root logging; restore it after each test."""
    root = logging.getLogger()
    original_level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
            handler.close()
    root.level = original_level
