"""Global pytest fixtures for PATHKIT."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timedelta, timezone

import pytest

from pathkit.adapters.filesystem.memory import MemoryFileSystem
from pathkit.config import reset_defaults
from pathkit.domain.absolute_path import AbsolutePath

# pylint: disable=redefined-outer-name


class FakeClock:
    """Controllable clock for `MemoryFileSystem` timestamps.

    Every call returns the current instant; `advance` moves it forward.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 60) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


@pytest.fixture(autouse=True)
def _restore_defaults() -> Iterator[None]:
    """Reset the process-wide defaults after every test."""
    yield
    reset_defaults()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_fs(clock: FakeClock) -> MemoryFileSystem:
    """A fresh in-memory filesystem stamped by `clock`."""
    return MemoryFileSystem(clock=clock)


@pytest.fixture
def unix_root(memory_fs: MemoryFileSystem) -> AbsolutePath:
    """An existing ``/work`` directory on the in-memory filesystem."""
    root = AbsolutePath("/work", filesystem=memory_fs)
    return root.directory.create()


@pytest.fixture
def windows_root(memory_fs: MemoryFileSystem) -> AbsolutePath:
    """An existing ``C:\\Work`` directory on the in-memory filesystem."""
    root = AbsolutePath("C:\\Work", filesystem=memory_fs)
    return root.directory.create()
