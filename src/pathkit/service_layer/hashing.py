"""Deterministic MD5 content hashes for files, file sets and directory trees.

The digests are change-detection fingerprints for build caches, not security
primitives. A file-set digest feeds, for every file, the UTF-8 bytes of its
``/``-separated path relative to the base directory followed by the raw file
bytes into one streaming MD5. Files are ordered by that relative path, so two
trees with the same relative layout and content hash identically on every
platform.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from typing import TYPE_CHECKING

from pathkit.config import get_defaults
from pathkit.domain import syntax
from pathkit.domain.errors import FileNotFound

if TYPE_CHECKING:
    from pathkit.domain.absolute_path import AbsolutePath
    from pathkit.interfaces.filesystem import FileSystem

CHUNK_SIZE = 1024 * 1024  # 1 MiB


def _new_digest() -> hashlib._Hash:
    return hashlib.md5(usedforsecurity=False)


def _feed_file(digest: hashlib._Hash, filesystem: FileSystem, path: str) -> None:
    with filesystem.open_read(path) as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            digest.update(chunk)


def _unix_relative(base_directory: AbsolutePath, path: AbsolutePath) -> str:
    relative = syntax.relative_to(str(base_directory), str(path))
    return syntax.normalize(relative, syntax.UNIX_SEPARATOR)


def hash_file(filesystem: FileSystem, path: str) -> str:
    """Return the lower-case hex MD5 of the file at `path`.

    Raises:
        FileNotFound: If `path` is not an existing file.
    """
    if not filesystem.file_exists(path):
        raise FileNotFound(path)
    digest = _new_digest()
    _feed_file(digest, filesystem, path)
    return digest.hexdigest()


def get_file_set_hash(
    paths: Iterable[AbsolutePath],
    base_directory: AbsolutePath,
    filesystem: FileSystem | None = None,
) -> str:
    """Hash a set of files relative to `base_directory`.

    Duplicates are collapsed and the input order is irrelevant.

    Args:
        paths: Files to include.
        base_directory: Directory the recorded relative paths start from.
        filesystem: Filesystem to read from. Defaults to the one attached to
            `base_directory`, then the process default.

    Returns:
        str: Lower-case hex MD5 digest.

    Raises:
        FileNotFound: If any of `paths` is not an existing file.
    """
    if filesystem is None:
        filesystem = base_directory.filesystem or get_defaults().filesystem

    entries = sorted(
        (_unix_relative(base_directory, path), path) for path in set(paths)
    )
    digest = _new_digest()
    for relative, path in entries:
        if not filesystem.file_exists(str(path)):
            raise FileNotFound(str(path))
        digest.update(relative.encode("utf-8"))
        _feed_file(digest, filesystem, str(path))

    return digest.hexdigest()
