"""In-memory filesystem backend.

This module provides a small, dependency-free `FileSystem` implementation meant
for **tests**, examples and dry runs. The whole tree lives in RAM and is lost
when the instance is garbage-collected.

Key behaviors
-------------
- **Both root kinds**: Windows-rooted (``C:\\...``) and Unix-rooted (``/...``)
  paths can coexist, which makes it possible to exercise Windows semantics on a
  POSIX host. Every root exists implicitly.
- **Case rules**: lookups ignore case below Windows roots and respect it below
  the Unix root, mirroring `AbsolutePath` equality. Listings report the
  spelling used when the entry was created.
- **Timestamps**: every write stamps the entry with `clock()`; moves and copies
  keep the source timestamp, like the host filesystem does.
- **Thread-safety**: table access happens under an `RLock`.

Typical usage
-------------
    fs = MemoryFileSystem()
    fs.create_directory("C:\\build")
    fs.write_bytes("C:\\build\\out.bin", b"data")
    path = AbsolutePath("C:\\build", filesystem=fs)
"""

from __future__ import annotations

import fnmatch
import io
import threading
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from pathkit.domain import syntax
from pathkit.domain.value_objects import FileAttributes
from pathkit.interfaces.filesystem import FileSystem

__all__ = ["MemoryFileSystem"]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class _Entry:
    """A file (``data`` is bytes) or a directory (``data`` is None)."""

    path: str
    data: bytes | None
    modified: datetime
    attributes: FileAttributes

    @property
    def is_file(self) -> bool:
        return self.data is not None


class MemoryFileSystem(FileSystem):
    """In-memory `FileSystem` backend.

    Args:
        clock: Source of last-write timestamps for new writes. Defaults to the
            current UTC time; tests inject a controllable clock.
    """

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.RLock()

    # ---- Queries ----

    def file_exists(self, path: str) -> bool:
        entry = self._lookup(path)
        return entry is not None and entry.is_file

    def directory_exists(self, path: str) -> bool:
        if self._is_root(path):
            return True
        entry = self._lookup(path)
        return entry is not None and not entry.is_file

    def list_files(
        self, path: str, pattern: str = "*", recursive: bool = False
    ) -> list[str]:
        return self._list(path, pattern, recursive, files=True)

    def list_directories(
        self, path: str, pattern: str = "*", recursive: bool = False
    ) -> list[str]:
        return self._list(path, pattern, recursive, files=False)

    def get_last_write_time(self, path: str) -> datetime:
        return self._require(path).modified

    def get_attributes(self, path: str) -> FileAttributes:
        if self._is_root(path):
            return FileAttributes.DIRECTORY
        return self._require(path).attributes

    # ---- Reading ----

    def open_read(self, path: str) -> io.BytesIO:
        return io.BytesIO(self.read_bytes(path))

    def read_bytes(self, path: str) -> bytes:
        entry = self._require(path)
        if entry.data is None:
            raise IsADirectoryError(path)
        return entry.data

    def read_text(self, path: str, encoding: str) -> str:
        return self.read_bytes(path).decode(encoding)

    # ---- Mutations ----

    def write_bytes(self, path: str, data: bytes) -> None:
        with self._lock:
            self._store_file(path, bytes(data))

    def write_text(self, path: str, text: str, encoding: str) -> None:
        self.write_bytes(path, text.encode(encoding))

    def append_text(self, path: str, text: str, encoding: str) -> None:
        with self._lock:
            existing = self._lookup(path)
            prefix = existing.data if existing is not None and existing.data else b""
            self._store_file(path, prefix + text.encode(encoding))

    def set_last_write_time(self, path: str, time: datetime) -> None:
        if time.tzinfo is None:
            time = time.astimezone()
        with self._lock:
            entry = self._require(path)
            self._entries[self._key(path)] = replace(
                entry, modified=time.astimezone(timezone.utc)
            )

    def set_attributes(self, path: str, attributes: FileAttributes) -> None:
        with self._lock:
            entry = self._require(path)
            if not entry.is_file:
                attributes |= FileAttributes.DIRECTORY
            self._entries[self._key(path)] = replace(entry, attributes=attributes)

    def delete_file(self, path: str) -> None:
        with self._lock:
            entry = self._require(path)
            if not entry.is_file:
                raise IsADirectoryError(path)
            if FileAttributes.READ_ONLY in entry.attributes:
                raise PermissionError(f"File {path!r} is read-only")
            del self._entries[self._key(path)]

    def create_directory(self, path: str) -> None:
        with self._lock:
            chain: list[str] = []
            current: str | None = path
            while current is not None and not self._is_root(current):
                chain.append(current)
                current = self._parent(current)

            for directory in reversed(chain):
                entry = self._lookup(directory)
                if entry is None:
                    self._entries[self._key(directory)] = _Entry(
                        path=syntax.normalize(directory),
                        data=None,
                        modified=self._clock(),
                        attributes=FileAttributes.DIRECTORY,
                    )
                elif entry.is_file:
                    raise FileExistsError(directory)

    def delete_directory(self, path: str) -> None:
        with self._lock:
            if not self.directory_exists(path):
                raise FileNotFoundError(f"Directory {path!r} not found")
            prefix = self._child_prefix(path)
            doomed = [key for key in self._entries if key.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
            if not self._is_root(path):
                del self._entries[self._key(path)]

    def move_file(self, source: str, target: str) -> None:
        with self._lock:
            entry = self._require_file(source)
            if self._key(target) != self._key(source) and self._lookup(target) is not None:
                raise FileExistsError(target)
            self._require_parent(target)
            del self._entries[self._key(source)]
            self._entries[self._key(target)] = replace(
                entry, path=syntax.normalize(target)
            )

    def copy_file(self, source: str, target: str, overwrite: bool = False) -> None:
        with self._lock:
            entry = self._require_file(source)
            existing = self._lookup(target)
            if existing is not None:
                if not overwrite or not existing.is_file:
                    raise FileExistsError(target)
            self._require_parent(target)
            self._entries[self._key(target)] = replace(
                entry, path=syntax.normalize(target)
            )

    # ---- Internal Helpers ----

    @staticmethod
    def _key(path: str) -> str:
        normalized = syntax.normalize(path)
        if syntax.has_windows_root(normalized):
            return normalized.casefold()
        return normalized

    @staticmethod
    def _is_root(path: str) -> bool:
        normalized = syntax.normalize(path)
        return syntax.is_unix_root(normalized) or syntax.is_windows_root(
            normalized.rstrip(syntax.WINDOWS_SEPARATOR)
        )

    @classmethod
    def _parent(cls, path: str) -> str | None:
        if cls._is_root(path):
            return None
        normalized = syntax.normalize(path)
        head, _, _ = normalized.rpartition(syntax.get_separator(normalized))
        return syntax.normalize(head or syntax.get_root(normalized))

    @classmethod
    def _child_prefix(cls, path: str) -> str:
        key = cls._key(path)
        separator = syntax.get_separator(key)
        return key if key.endswith(separator) else f"{key}{separator}"

    def _lookup(self, path: str) -> _Entry | None:
        with self._lock:
            return self._entries.get(self._key(path))

    def _require(self, path: str) -> _Entry:
        entry = self._lookup(path)
        if entry is None:
            raise FileNotFoundError(f"{path!r} not found")
        return entry

    def _require_file(self, path: str) -> _Entry:
        entry = self._require(path)
        if not entry.is_file:
            raise IsADirectoryError(path)
        return entry

    def _require_parent(self, path: str) -> None:
        parent = self._parent(path)
        if parent is None or not self.directory_exists(parent):
            raise FileNotFoundError(f"Parent directory of {path!r} not found")

    def _store_file(self, path: str, data: bytes) -> None:
        existing = self._lookup(path)
        if existing is not None and not existing.is_file:
            raise IsADirectoryError(path)
        if existing is not None and FileAttributes.READ_ONLY in existing.attributes:
            raise PermissionError(f"File {path!r} is read-only")
        self._require_parent(path)
        self._entries[self._key(path)] = _Entry(
            path=existing.path if existing is not None else syntax.normalize(path),
            data=data,
            modified=self._clock(),
            attributes=(
                existing.attributes if existing is not None else FileAttributes.NORMAL
            ),
        )

    def _list(
        self, path: str, pattern: str, recursive: bool, *, files: bool
    ) -> list[str]:
        if not self.directory_exists(path):
            raise FileNotFoundError(f"Directory {path!r} not found")

        prefix = self._child_prefix(path)
        separator = syntax.get_separator(prefix)
        ignore_case = syntax.has_windows_root(prefix)
        if ignore_case:
            pattern = pattern.casefold()

        with self._lock:
            entries = list(self._entries.items())

        found: list[str] = []
        for key, entry in entries:
            if entry.is_file != files or not key.startswith(prefix):
                continue
            remainder = key[len(prefix) :]
            if not recursive and separator in remainder:
                continue
            name = entry.path.rpartition(separator)[2]
            if fnmatch.fnmatchcase(name.casefold() if ignore_case else name, pattern):
                found.append(entry.path)
        return found
