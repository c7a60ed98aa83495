"""Fixtures for tests running path operations against the host file system."""

import pytest

from pathkit.domain.absolute_path import AbsolutePath


@pytest.fixture
def workdir(tmp_path) -> AbsolutePath:
    """`tmp_path` as an `AbsolutePath` on the default (local) file system."""
    return AbsolutePath(str(tmp_path))
