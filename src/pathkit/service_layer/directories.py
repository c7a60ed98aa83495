"""Operations on an `AbsolutePath` that denotes a directory.

`DirectoryOperations` is obtained through ``path.directory``. Enumeration is
lazy: `get_files` walks the tree depth-first with an explicit stack and
`get_directories` advances a breadth-first frontier one level at a time. Both
are generator functions, so every call starts a fresh traversal.

Move and copy mirror the tree into the target recursively, applying the same
`ExistsPolicy` at every level.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from pathkit.config import get_defaults
from pathkit.domain.absolute_path import AbsolutePath
from pathkit.domain.errors import AlreadyExists, DirectoryNotFound, InvalidTargetError
from pathkit.domain.policy import ExistsPolicy, allows_directory_merge, file_policy
from pathkit.domain.value_objects import FileAttributes
from pathkit.interfaces.filesystem import FileSystem

from . import hashing

PathPredicate = Callable[[AbsolutePath], bool]
NameSource = str | Callable[[AbsolutePath], str]


def _check_depth(depth: int) -> None:
    if depth < 0:
        raise ValueError(f"depth must be greater than or equal to zero, got {depth}")


def _has_attributes(
    filesystem: FileSystem, path: str, attributes: FileAttributes
) -> bool:
    if not attributes:
        return True
    return (filesystem.get_attributes(path) & attributes) == attributes


@dataclass(frozen=True)
class DirectoryOperations:
    """Methods for directory operations on `path`."""

    path: AbsolutePath

    @property
    def filesystem(self) -> FileSystem:
        return self.path.filesystem or get_defaults().filesystem

    # --- Enumeration ---

    def get_files(
        self,
        pattern: str = "*",
        depth: int = 1,
        attributes: FileAttributes = FileAttributes(0),
    ) -> Iterator[AbsolutePath]:
        """Yield the files below this directory, up to `depth` levels deep.

        Files of a directory come first, sorted by path, followed by the files
        of each of its subdirectories in sorted order (depth-first).

        Args:
            pattern: Shell-style wildcard matched against file names.
            depth: Number of directory levels to visit; 0 yields nothing.
            attributes: Attributes every yielded file must carry.

        Raises:
            ValueError: If `depth` is negative.
        """
        _check_depth(depth)
        fs = self.filesystem
        stack: list[tuple[str, int]] = [(str(self.path), depth)] if depth else []

        while stack:
            directory, remaining = stack.pop()
            files = sorted(
                name
                for name in fs.list_files(directory, pattern)
                if _has_attributes(fs, name, attributes)
            )
            for name in files:
                yield self.path.bind(name)

            if remaining > 1:
                subdirectories = sorted(fs.list_directories(directory))
                stack.extend((sub, remaining - 1) for sub in reversed(subdirectories))

    def get_directories(
        self,
        pattern: str = "*",
        depth: int = 1,
        attributes: FileAttributes = FileAttributes(0),
    ) -> Iterator[AbsolutePath]:
        """Yield the subdirectories of this directory level by level.

        Each level's matches are yielded sorted before the next level is
        listed. The frontier advances through every subdirectory, matching
        `pattern` or not.

        Raises:
            ValueError: If `depth` is negative.
        """
        _check_depth(depth)
        fs = self.filesystem
        frontier = [str(self.path)]

        while frontier and depth > 0:
            matches = sorted(
                name
                for directory in frontier
                for name in fs.list_directories(directory, pattern)
                if _has_attributes(fs, name, attributes)
            )
            for name in matches:
                yield self.path.bind(name)

            depth -= 1
            if depth:
                frontier = [
                    name for directory in frontier for name in fs.list_directories(directory)
                ]

    # --- Queries ---

    def exists(self) -> bool:
        return self.filesystem.directory_exists(str(self.path))

    def contains_file(self, pattern: str, recursive: bool = False) -> bool:
        """Return True if a file matching `pattern` exists in this directory."""
        return self.exists() and bool(
            self.filesystem.list_files(str(self.path), pattern, recursive)
        )

    def contains_directory(self, pattern: str, recursive: bool = False) -> bool:
        """Return True if a subdirectory matching `pattern` exists."""
        return self.exists() and bool(
            self.filesystem.list_directories(str(self.path), pattern, recursive)
        )

    def get_directory_hash(self, include: PathPredicate | None = None) -> str:
        """Return the MD5 of every file below this directory.

        Args:
            include: Optional filter; files for which it returns False are
                left out of the digest.

        Raises:
            DirectoryNotFound: If the directory does not exist.
        """
        if not self.exists():
            raise DirectoryNotFound(str(self.path))

        paths = (
            self.path.bind(name)
            for name in self.filesystem.list_files(str(self.path), "*", recursive=True)
        )
        if include is not None:
            paths = (path for path in paths if include(path))
        return hashing.get_file_set_hash(paths, self.path, self.filesystem)

    @staticmethod
    def get_file_set_hash(paths: Iterable[AbsolutePath], base_directory: AbsolutePath) -> str:
        """See `pathkit.service_layer.hashing.get_file_set_hash`."""
        return hashing.get_file_set_hash(paths, base_directory)

    def find_parent(self, predicate: PathPredicate) -> AbsolutePath | None:
        """Return the nearest ancestor fulfilling `predicate`, or None."""
        if not self.exists():
            return None
        return next(filter(predicate, self.path.ancestors()), None)

    def find_parent_or_self(self, predicate: PathPredicate) -> AbsolutePath | None:
        """Like `find_parent`, but the directory itself is tested first."""
        if not self.exists():
            return None
        return next(filter(predicate, self.path.ancestors(include_self=True)), None)

    # --- Lifecycle ---

    def create(self) -> AbsolutePath:
        """Create the directory and any missing parents. Idempotent."""
        self.filesystem.create_directory(str(self.path))
        return self.path

    def remove(self) -> None:
        """Delete the directory tree, clearing read-only files first. No-op if absent."""
        if not self.exists():
            return
        fs = self.filesystem
        for name in fs.list_files(str(self.path), "*", recursive=True):
            fs.set_attributes(name, FileAttributes.NORMAL)
        fs.delete_directory(str(self.path))

    def clean_and_recreate(self) -> AbsolutePath:
        """Remove the directory with all its content and create it empty."""
        self.remove()
        return self.create()

    # --- Moving & copying ---

    def move(
        self,
        target: AbsolutePath,
        policy: ExistsPolicy = ExistsPolicy.FAIL,
        create_parents: bool = True,
        delete_remaining_files: bool = False,
    ) -> AbsolutePath:
        """Move the tree into `target`.

        Subdirectories are moved recursively, then the files. The source is
        removed afterwards if nothing is left in it (files skipped by the
        policy stay behind) or if `delete_remaining_files` is set.

        Returns:
            AbsolutePath: `target`.

        Raises:
            DirectoryNotFound: If this directory, or the parent of `target`
                without `create_parents`, does not exist.
            InvalidTargetError: If `target` is this directory or lies inside it.
            AlreadyExists: If `target` exists and the directory policy is FAIL,
                or a file conflicts and the file policy is FAIL.
            InvalidConfigurationError: If either axis of `policy` is invalid.
        """

        def action() -> None:
            for subdirectory in list(self.get_directories()):
                subdirectory.directory.move(
                    target / subdirectory.name, policy, True, delete_remaining_files
                )
            for file in list(self.get_files()):
                file.file.move(target / file.name, policy)

            if delete_remaining_files or self._is_empty():
                self.remove()

        return self._handle(target, policy, create_parents, action)

    def copy(
        self,
        target: AbsolutePath,
        policy: ExistsPolicy = ExistsPolicy.FAIL,
        exclude_directory: PathPredicate | None = None,
        exclude_file: PathPredicate | None = None,
        create_parents: bool = True,
    ) -> AbsolutePath:
        """Copy the tree into `target`.

        Excluded directories are not descended into. Both predicates receive
        source paths.

        Returns and raises as `move`.
        """

        def action() -> None:
            for subdirectory in self.get_directories():
                if exclude_directory is not None and exclude_directory(subdirectory):
                    continue
                subdirectory.directory.copy(
                    target / subdirectory.name, policy, exclude_directory, exclude_file
                )
            for file in self.get_files():
                if exclude_file is not None and exclude_file(file):
                    continue
                file.file.copy(target / file.name, policy)

        return self._handle(target, policy, create_parents, action)

    def move_to(
        self,
        target_directory: AbsolutePath,
        policy: ExistsPolicy = ExistsPolicy.FAIL,
        create_parents: bool = True,
    ) -> AbsolutePath:
        """Move this directory into `target_directory`, keeping its name."""
        return self.move(target_directory / self.path.name, policy, create_parents)

    def copy_to(
        self,
        target_directory: AbsolutePath,
        policy: ExistsPolicy = ExistsPolicy.FAIL,
        exclude_directory: PathPredicate | None = None,
        exclude_file: PathPredicate | None = None,
        create_parents: bool = True,
    ) -> AbsolutePath:
        """Copy this directory into `target_directory`, keeping its name."""
        return self.copy(
            target_directory / self.path.name,
            policy,
            exclude_directory,
            exclude_file,
            create_parents,
        )

    def rename(self, name: NameSource, policy: ExistsPolicy = ExistsPolicy.FAIL) -> AbsolutePath:
        """Move this directory to a sibling called `name` (or ``name(path)``)."""
        parent = self.path.parent
        if parent is None:
            raise InvalidTargetError(str(self.path), str(name))
        new_name = name(self.path) if callable(name) else name
        return self.move(parent / new_name, policy)

    # --- Internal Helpers ---

    def _is_empty(self) -> bool:
        here = str(self.path)
        return not (self.filesystem.list_files(here) or self.filesystem.list_directories(here))

    def _handle(
        self,
        target: AbsolutePath,
        policy: ExistsPolicy,
        create_parents: bool,
        action: Callable[[], None],
    ) -> AbsolutePath:
        merge = allows_directory_merge(policy)
        file_policy(policy)

        if not self.exists():
            raise DirectoryNotFound(str(self.path))
        if self.path.contains(target):
            raise InvalidTargetError(str(self.path), str(target))
        if target.directory.exists() and not merge:
            raise AlreadyExists(str(target))

        parent = target.parent
        if not create_parents and parent is not None and not parent.directory.exists():
            raise DirectoryNotFound(str(parent))
        target.directory.create()

        action()
        return target
