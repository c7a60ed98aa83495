"""Local filesystem adapter backed by `os`, `shutil` and `pathlib`."""

import fnmatch
import logging
import os
import shutil
import stat
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO

from pathkit.domain.value_objects import FileAttributes
from pathkit.interfaces.filesystem import FileSystem

logger = logging.getLogger(__name__)

_WRITE_BITS = stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH


def _same_entry(source: str, target: str) -> bool:
    """True for a case-only rename on a case-insensitive volume."""
    return source.casefold() == target.casefold() and os.path.samefile(source, target)


class LocalFileSystem(FileSystem):
    """FileSystem implementation that uses the host filesystem.

    Wildcards are matched with `fnmatch.fnmatch`, so they follow the host case
    rules (case-insensitive on Windows, case-sensitive elsewhere). Mutations are
    logged at DEBUG level.
    """

    # --- Queries ---

    def file_exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def directory_exists(self, path: str) -> bool:
        return os.path.isdir(path)

    def list_files(
        self, path: str, pattern: str = "*", recursive: bool = False
    ) -> list[str]:
        return self._list(path, pattern, recursive, files=True)

    def list_directories(
        self, path: str, pattern: str = "*", recursive: bool = False
    ) -> list[str]:
        return self._list(path, pattern, recursive, files=False)

    def get_last_write_time(self, path: str) -> datetime:
        return datetime.fromtimestamp(os.stat(path).st_mtime, tz=timezone.utc)

    def get_attributes(self, path: str) -> FileAttributes:
        info = os.stat(path)
        attributes = FileAttributes(0)

        # st_file_attributes only exists on Windows
        native = getattr(info, "st_file_attributes", None)
        if native is not None:
            return FileAttributes(native)

        if not info.st_mode & _WRITE_BITS:
            attributes |= FileAttributes.READ_ONLY
        if Path(path).name.startswith("."):
            attributes |= FileAttributes.HIDDEN
        if stat.S_ISDIR(info.st_mode):
            attributes |= FileAttributes.DIRECTORY
        return attributes or FileAttributes.NORMAL

    # --- Reading ---

    def open_read(self, path: str) -> BinaryIO:
        return open(path, "rb")  # pylint: disable=consider-using-with

    def read_bytes(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def read_text(self, path: str, encoding: str) -> str:
        with open(path, encoding=encoding, newline="") as f:
            return f.read()

    # --- Mutations ---

    def write_bytes(self, path: str, data: bytes) -> None:
        logger.debug("Writing %d bytes to %s", len(data), path)
        Path(path).write_bytes(data)

    def write_text(self, path: str, text: str, encoding: str) -> None:
        logger.debug("Writing text (%s) to %s", encoding, path)
        with open(path, "w", encoding=encoding, newline="") as f:
            f.write(text)

    def append_text(self, path: str, text: str, encoding: str) -> None:
        logger.debug("Appending text (%s) to %s", encoding, path)
        with open(path, "a", encoding=encoding, newline="") as f:
            f.write(text)

    def set_last_write_time(self, path: str, time: datetime) -> None:
        logger.debug("Setting last-write time of %s to %s", path, time.isoformat())
        modified = time.timestamp()
        os.utime(path, (os.stat(path).st_atime, modified))

    def set_attributes(self, path: str, attributes: FileAttributes) -> None:
        # Only the read-only bit maps onto POSIX permissions.
        mode = os.stat(path).st_mode
        if FileAttributes.READ_ONLY in attributes:
            mode &= ~_WRITE_BITS
        else:
            mode |= stat.S_IWUSR
        os.chmod(path, stat.S_IMODE(mode))

    def delete_file(self, path: str) -> None:
        logger.debug("Deleting file %s", path)
        os.remove(path)

    def create_directory(self, path: str) -> None:
        if not os.path.isdir(path):
            logger.debug("Creating directory %s", path)
        os.makedirs(path, exist_ok=True)

    def delete_directory(self, path: str) -> None:
        logger.debug("Deleting directory tree %s", path)
        shutil.rmtree(path)

    def move_file(self, source: str, target: str) -> None:
        logger.debug("Moving %s -> %s", source, target)
        if os.path.exists(target) and not _same_entry(source, target):
            raise FileExistsError(target)
        shutil.move(source, target)

    def copy_file(self, source: str, target: str, overwrite: bool = False) -> None:
        logger.debug("Copying %s -> %s (overwrite=%s)", source, target, overwrite)
        if os.path.exists(target):
            if not overwrite:
                raise FileExistsError(target)
            # copy2 cannot replace a read-only target
            os.chmod(target, stat.S_IMODE(os.stat(target).st_mode) | stat.S_IWUSR)
        shutil.copy2(source, target)

    # --- Internal Helpers ---

    @staticmethod
    def _list(path: str, pattern: str, recursive: bool, *, files: bool) -> list[str]:
        if not os.path.isdir(path):
            raise FileNotFoundError(f"Directory {path!r} not found")

        found: list[str] = []
        pending = [path]
        while pending:
            current = pending.pop()
            with os.scandir(current) as entries:
                for entry in entries:
                    is_dir = entry.is_dir()
                    if is_dir == (not files) and fnmatch.fnmatch(entry.name, pattern):
                        found.append(os.path.join(current, entry.name))
                    if is_dir and recursive:
                        pending.append(os.path.join(current, entry.name))
        return found
