"""Operations on an `AbsolutePath` that denotes a file.

`FileOperations` is a stateless view obtained through ``path.file``. It never
owns the path; it only forwards primitive I/O to the filesystem the path
refers to (or the process default). Methods that produce a path return an
`AbsolutePath`; "mutations" such as rename return the new value.

Text defaults (encoding, end-of-file line break, line terminator) come from
`pathkit.config.get_defaults()` at call time.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timezone

from pathkit.config import get_defaults
from pathkit.domain import syntax
from pathkit.domain.absolute_path import AbsolutePath
from pathkit.domain.errors import FileNotFound, InvalidTargetError
from pathkit.domain.policy import ExistsPolicy, Resolution, file_policy, resolve_file_conflict
from pathkit.domain.value_objects import FileAttributes, LineBreak
from pathkit.interfaces.filesystem import FileSystem

from .hashing import hash_file

NameSource = str | Callable[[AbsolutePath], str]

_LINE_BREAK_CHARS = "\r\n"


@dataclass(frozen=True)
class FileOperations:
    """Methods for file operations on `path`."""

    path: AbsolutePath

    @property
    def filesystem(self) -> FileSystem:
        return self.path.filesystem or get_defaults().filesystem

    @property
    def name_without_extension(self) -> str:
        return self.path.stem

    @property
    def extension(self) -> str:
        """The extension including its leading dot, or ``""``."""
        return self.path.extension

    # --- Queries ---

    def exists(self) -> bool:
        """Return True if the path is an existing file."""
        return self.filesystem.file_exists(str(self.path))

    def has_extension(self, extension: str, *alternatives: str) -> bool:
        """Return True if the path ends with any of the given extensions (ignoring case)."""
        value = str(self.path).casefold()
        return any(value.endswith(candidate.casefold()) for candidate in (extension, *alternatives))

    def with_extension(self, extension: str | None) -> AbsolutePath | None:
        """Return the path with its extension replaced, or None for a root."""
        parent = self.path.parent
        if parent is None:
            return None
        return parent / syntax.change_extension(self.path.name, extension)

    def get_hash(self) -> str:
        """Return the lower-case hex MD5 digest of the file content.

        Raises:
            FileNotFound: If the file does not exist.
        """
        return hash_file(self.filesystem, str(self.path))

    def find_parent(self, predicate: Callable[[AbsolutePath], bool]) -> AbsolutePath | None:
        """Return the nearest ancestor fulfilling `predicate`.

        Returns None if the file does not exist or no ancestor up to the root
        matches.
        """
        if not self.exists():
            return None
        return next(filter(predicate, self.path.ancestors()), None)

    def find_parent_or_self(
        self, predicate: Callable[[AbsolutePath], bool]
    ) -> AbsolutePath | None:
        """Like `find_parent`, but the file itself is tested first."""
        if not self.exists():
            return None
        return next(filter(predicate, self.path.ancestors(include_self=True)), None)

    # --- Lifecycle ---

    def touch(self, time: datetime | None = None, create_parents: bool = True) -> AbsolutePath:
        """Create the file if needed and set its last-write time (default: now)."""
        if create_parents:
            self._create_parent()
        if not self.exists():
            self.filesystem.write_bytes(str(self.path), b"")
        self.filesystem.set_last_write_time(str(self.path), time or datetime.now(timezone.utc))
        return self.path

    def remove(self) -> None:
        """Delete the file, clearing its read-only attribute first. No-op if absent."""
        if not self.exists():
            return
        self.filesystem.set_attributes(str(self.path), FileAttributes.NORMAL)
        self.filesystem.delete_file(str(self.path))

    # --- Reading ---

    def read_all_text(self, encoding: str | None = None) -> str:
        """Return the decoded file content.

        Raises:
            FileNotFound: If the file does not exist.
        """
        self._require_exists()
        return self.filesystem.read_text(str(self.path), encoding or get_defaults().encoding)

    def read_all_lines(self, encoding: str | None = None) -> list[str]:
        """Return the file content split into lines.

        Raises:
            FileNotFound: If the file does not exist.
        """
        self._require_exists()
        return self.filesystem.read_lines(str(self.path), encoding or get_defaults().encoding)

    def read_all_bytes(self) -> bytes:
        """Return the raw file content.

        Raises:
            FileNotFound: If the file does not exist.
        """
        self._require_exists()
        return self.filesystem.read_bytes(str(self.path))

    # --- Writing ---

    def write_all_text(
        self,
        content: str,
        encoding: str | None = None,
        eof_line_break: bool | None = None,
    ) -> AbsolutePath:
        """Write `content`, replacing the file.

        With an end-of-file line break (the default), trailing line breaks are
        replaced by exactly one: CRLF if `content` contains CRLF, LF otherwise.
        """
        defaults = get_defaults()
        self._create_parent()

        if defaults.eof_line_break if eof_line_break is None else eof_line_break:
            windows = LineBreak.WINDOWS.value in content
            content = content.rstrip(_LINE_BREAK_CHARS)
            content += LineBreak.WINDOWS.value if windows else LineBreak.UNIX.value

        self.filesystem.write_text(str(self.path), content, encoding or defaults.encoding)
        return self.path

    def write_all_lines(
        self,
        lines: Iterable[str],
        encoding: str | None = None,
        line_break: LineBreak | None = None,
        eof_line_break: bool | None = None,
    ) -> AbsolutePath:
        """Write `lines` joined by the terminator of `line_break` (or the default)."""
        defaults = get_defaults()
        lines = list(lines)
        if defaults.eof_line_break if eof_line_break is None else eof_line_break:
            lines.append("")

        newline = line_break.value if line_break is not None else defaults.newline
        return self.write_all_text(newline.join(lines), encoding, eof_line_break=False)

    def write_all_bytes(self, data: bytes) -> AbsolutePath:
        """Write raw bytes, replacing the file."""
        self._create_parent()
        self.filesystem.write_bytes(str(self.path), data)
        return self.path

    def append_all_text(self, content: str, encoding: str | None = None) -> AbsolutePath:
        """Append `content` as is."""
        self._create_parent()
        self.filesystem.append_text(str(self.path), content, encoding or get_defaults().encoding)
        return self.path

    def append_all_lines(
        self,
        lines: Iterable[str],
        encoding: str | None = None,
        line_break: LineBreak | None = None,
    ) -> AbsolutePath:
        """Append each line followed by a terminator."""
        defaults = get_defaults()
        self._create_parent()
        newline = line_break.value if line_break is not None else defaults.newline
        self.filesystem.append_lines(str(self.path), lines, encoding or defaults.encoding, newline)
        return self.path

    def update_text(
        self, transform: Callable[[str], str], encoding: str | None = None
    ) -> AbsolutePath:
        """Read the text, apply `transform` and write the result back (not atomic)."""
        return self.write_all_text(transform(self.read_all_text(encoding)), encoding)

    # --- Moving & copying ---

    def move(
        self,
        target: AbsolutePath,
        policy: ExistsPolicy = ExistsPolicy.FAIL,
        create_parents: bool = True,
    ) -> AbsolutePath:
        """Move the file to `target`, resolving conflicts with `policy`.

        Moving a file onto itself leaves it in place. Under a Windows root a
        target differing only in case renames the file in place.

        Returns:
            AbsolutePath: `target` when moved (or already up to date), the
            unchanged source when skipped.

        Raises:
            FileNotFound: If the file does not exist.
            AlreadyExists: If `target` exists and the file policy is FAIL.
            InvalidConfigurationError: If the file axis of `policy` is invalid.
        """
        if target == self.path:
            file_policy(policy)
            self._require_exists()
            if str(target) != str(self.path):
                self.filesystem.move_file(str(self.path), str(target))
            return target

        def action() -> None:
            target.file.remove()
            self.filesystem.move_file(str(self.path), str(target))

        return self._transfer(target, policy, create_parents, action)

    def copy(
        self,
        target: AbsolutePath,
        policy: ExistsPolicy = ExistsPolicy.FAIL,
        create_parents: bool = True,
    ) -> AbsolutePath:
        """Copy the file to `target`, resolving conflicts with `policy`.

        Returns and raises as `move`, and also raises `InvalidTargetError`
        when `target` is the file itself.
        """
        if target == self.path:
            file_policy(policy)
            self._require_exists()
            raise InvalidTargetError(
                str(self.path), str(target), f"Cannot copy '{self.path}' onto itself"
            )

        def action() -> None:
            if target.file.exists():
                target.file.filesystem.set_attributes(str(target), FileAttributes.NORMAL)
            self.filesystem.copy_file(str(self.path), str(target), overwrite=True)

        return self._transfer(target, policy, create_parents, action)

    def move_to(
        self,
        target_directory: AbsolutePath,
        policy: ExistsPolicy = ExistsPolicy.FAIL,
        create_parents: bool = True,
    ) -> AbsolutePath:
        """Move the file into `target_directory`, keeping its name."""
        return self.move(target_directory / self.path.name, policy, create_parents)

    def copy_to(
        self,
        target_directory: AbsolutePath,
        policy: ExistsPolicy = ExistsPolicy.FAIL,
        create_parents: bool = True,
    ) -> AbsolutePath:
        """Copy the file into `target_directory`, keeping its name."""
        return self.copy(target_directory / self.path.name, policy, create_parents)

    def rename(self, name: NameSource, policy: ExistsPolicy = ExistsPolicy.FAIL) -> AbsolutePath:
        """Rename the file within its directory.

        Args:
            name: The new name, or a function computing it from the current path.
            policy: Conflict policy.
        """
        new_name = name(self.path) if callable(name) else name
        return self.move(self._sibling(new_name), policy)

    def rename_without_extension(
        self, name: NameSource, policy: ExistsPolicy = ExistsPolicy.FAIL
    ) -> AbsolutePath:
        """Rename the file, keeping its current extension."""
        new_name = name(self.path) if callable(name) else name
        return self.move(self._sibling(new_name) + self.extension, policy)

    # --- Internal Helpers ---

    def _sibling(self, name: str) -> AbsolutePath:
        parent = self.path.parent
        if parent is None:
            raise FileNotFound(str(self.path))
        return parent / name

    def _require_exists(self) -> None:
        if not self.exists():
            raise FileNotFound(str(self.path))

    def _create_parent(self) -> None:
        parent = self.path.parent
        if parent is not None:
            parent.directory.create()

    def _transfer(
        self,
        target: AbsolutePath,
        policy: ExistsPolicy,
        create_parents: bool,
        action: Callable[[], None],
    ) -> AbsolutePath:
        file_policy(policy)
        self._require_exists()

        target_fs = target.file.filesystem
        if target_fs.file_exists(str(target)):
            resolution = resolve_file_conflict(
                policy,
                target,
                source_modified=self.filesystem.get_last_write_time(str(self.path)),
                target_modified=target_fs.get_last_write_time(str(target)),
            )
            if resolution is Resolution.SKIP:
                return self.path
            if resolution is Resolution.UP_TO_DATE:
                return target

        if create_parents:
            target.file._create_parent()  # pylint: disable=protected-access

        action()
        return target
