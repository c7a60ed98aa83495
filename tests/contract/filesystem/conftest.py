"""Pytest fixtures for FileSystem contract tests.

Provided fixtures
-----------------
- **fs**: Parametrized backend factory that returns a **fresh** `FileSystem`
  per test. Supports `"memory"` (`MemoryFileSystem`) and `"local"`
  (`LocalFileSystem`, confined to pytest's `tmp_path`).
- **base**: An existing, empty directory on `fs` (a normalized path string).
- **join**: Joins names onto a path with the separator of its root.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from pathkit.adapters.filesystem.local import LocalFileSystem
from pathkit.adapters.filesystem.memory import MemoryFileSystem
from pathkit.domain import syntax
from pathkit.interfaces.filesystem import FileSystem

# pylint: disable=redefined-outer-name


@pytest.fixture(params=["memory", "local"])
def fs(request: pytest.FixtureRequest) -> FileSystem:
    """Return a fresh filesystem instance for the requested backend."""
    match request.param:
        case "memory":
            return MemoryFileSystem()
        case "local":
            return LocalFileSystem()
        case _:
            raise ValueError(f"unknown filesystem type: {request.param}")


@pytest.fixture
def base(fs: FileSystem, tmp_path) -> str:
    """Root directory for the test; memory trees live below ``/base``."""
    root = str(tmp_path) if isinstance(fs, LocalFileSystem) else "/base"
    root = syntax.normalize(root)
    fs.create_directory(root)
    return root


@pytest.fixture
def join() -> Callable[..., str]:
    def _join(path: str, *names: str) -> str:
        for name in names:
            path = syntax.combine(path, name)
        return path

    return _join
