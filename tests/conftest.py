"""Shared fixtures for flatsync tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def src_dir(tmp_path: Path) -> Path:
    """Create an empty source directory."""
    path = tmp_path / "src"
    path.mkdir()
    return path


@pytest.fixture
def dest_dir(tmp_path: Path) -> Path:
    """Create an empty destination directory."""
    path = tmp_path / "dest"
    path.mkdir()
    return path


@pytest.fixture
def make_file() -> Callable[[Path, str, int], Path]:
    """Return a helper writing a file of the given size."""

    def _make_file(directory: Path, name: str, size: int = 1) -> Path:
        path = directory / name
        path.write_bytes(b"x" * size)
        return path

    return _make_file
