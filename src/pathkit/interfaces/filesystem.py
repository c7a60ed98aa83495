"""File-system interface definitions.

This module defines the primitive, synchronous operations the path layer
delegates to. Paths cross this boundary as plain, already-normalized strings;
adapters never need to normalize or validate them.

Adapters:
    - `LocalFileSystem`: the host file system (`pathkit.adapters.filesystem.local`).
    - `MemoryFileSystem`: an in-RAM tree for tests and dry runs
      (`pathkit.adapters.filesystem.memory`).

Conventions:
    - Listing methods return full path strings in no particular order; callers
      sort when order matters.
    - `pattern` arguments are simple wildcards (``*`` and ``?``) matched
      against entry names, never against whole paths.
    - Timestamps are timezone-aware UTC datetimes. Naive datetimes passed to
      `set_last_write_time` are interpreted as local time.
    - Text is read and written without newline translation.
"""

import abc
import io
from collections.abc import Iterable
from datetime import datetime
from typing import BinaryIO

from pathkit.domain.value_objects import FileAttributes


class FileSystem(abc.ABC):
    """Abstract base class for primitive file-system access."""

    # --- Queries ---

    @abc.abstractmethod
    def file_exists(self, path: str) -> bool:
        """Return True if `path` is an existing regular file."""

    @abc.abstractmethod
    def directory_exists(self, path: str) -> bool:
        """Return True if `path` is an existing directory."""

    @abc.abstractmethod
    def list_files(
        self, path: str, pattern: str = "*", recursive: bool = False
    ) -> list[str]:
        """List files below the directory `path` whose names match `pattern`.

        Args:
            path (str): Directory to list.
            pattern (str): Wildcard matched against file names.
            recursive (bool): Descend into all subdirectories when True.

        Returns:
            list[str]: Full paths of the matching files.

        Raises:
            FileNotFoundError: If `path` is not an existing directory.
        """

    @abc.abstractmethod
    def list_directories(
        self, path: str, pattern: str = "*", recursive: bool = False
    ) -> list[str]:
        """List subdirectories of `path` whose names match `pattern`.

        Raises:
            FileNotFoundError: If `path` is not an existing directory.
        """

    @abc.abstractmethod
    def get_last_write_time(self, path: str) -> datetime:
        """Return the last-write time of `path` as an aware UTC datetime."""

    @abc.abstractmethod
    def get_attributes(self, path: str) -> FileAttributes:
        """Return the attribute bits of `path`."""

    # --- Reading ---

    @abc.abstractmethod
    def open_read(self, path: str) -> BinaryIO:
        """Open `path` for binary reading. The caller must close the stream.

        Raises:
            FileNotFoundError: If `path` is not an existing file.
        """

    @abc.abstractmethod
    def read_bytes(self, path: str) -> bytes:
        """Return the full content of `path`."""

    @abc.abstractmethod
    def read_text(self, path: str, encoding: str) -> str:
        """Return the decoded content of `path`, line endings untouched."""

    # --- Mutations ---

    @abc.abstractmethod
    def write_bytes(self, path: str, data: bytes) -> None:
        """Create or truncate `path` and write `data`. The parent must exist."""

    @abc.abstractmethod
    def write_text(self, path: str, text: str, encoding: str) -> None:
        """Create or truncate `path` and write `text` verbatim."""

    @abc.abstractmethod
    def append_text(self, path: str, text: str, encoding: str) -> None:
        """Append `text` to `path`, creating the file if needed."""

    @abc.abstractmethod
    def set_last_write_time(self, path: str, time: datetime) -> None:
        """Set the last-write time of `path`."""

    @abc.abstractmethod
    def set_attributes(self, path: str, attributes: FileAttributes) -> None:
        """Replace the attribute bits of `path` (as far as the adapter supports)."""

    @abc.abstractmethod
    def delete_file(self, path: str) -> None:
        """Delete the file `path`."""

    @abc.abstractmethod
    def create_directory(self, path: str) -> None:
        """Create `path` and any missing parents. Existing directories are fine."""

    @abc.abstractmethod
    def delete_directory(self, path: str) -> None:
        """Delete the directory `path` with all of its content."""

    @abc.abstractmethod
    def move_file(self, source: str, target: str) -> None:
        """Move the file `source` to `target`. `target` must not exist."""

    @abc.abstractmethod
    def copy_file(self, source: str, target: str, overwrite: bool = False) -> None:
        """Copy the file `source` to `target`, replacing it when `overwrite` is set.

        Raises:
            FileExistsError: If `target` exists and `overwrite` is False.
        """

    # --- Convenience Methods ---

    def exists(self, path: str) -> bool:
        """Return True if `path` is an existing file or directory."""
        return self.file_exists(path) or self.directory_exists(path)

    def read_lines(self, path: str, encoding: str) -> list[str]:
        """Return the lines of `path` without their terminators.

        Only CR, LF and CRLF end a line; a final terminator does not start an
        extra empty line.
        """
        text = io.StringIO(self.read_text(path, encoding), newline="")
        return [line.rstrip("\r\n") for line in text]

    def append_lines(
        self, path: str, lines: Iterable[str], encoding: str, line_break: str
    ) -> None:
        """Append each of `lines` followed by `line_break`."""
        text = "".join(f"{line}{line_break}" for line in lines)
        self.append_text(path, text, encoding)
