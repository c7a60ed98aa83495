"""Immutable absolute-path value type.

An `AbsolutePath` wraps a normalized, rooted path string (see
`pathkit.domain.syntax`). Equality ignores case for Windows-rooted values and
is ordinal otherwise. Every value may carry the `FileSystem` it refers to;
derived values (parent, combinations, listing results) inherit it, and the
process default filesystem is used when none is attached.

Examples:
    ```py
    root = AbsolutePath("/srv/app")
    config = root / "etc" / "app.toml"
    config.parent            # AbsolutePath('/srv/app/etc')
    config.file.exists()
    (root / "build").directory.clean_and_recreate()
    ```
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from functools import total_ordering
from typing import TYPE_CHECKING

from . import syntax
from .errors import MalformedPathError

if TYPE_CHECKING:
    from pathkit.interfaces.filesystem import FileSystem
    from pathkit.service_layer.directories import DirectoryOperations
    from pathkit.service_layer.files import FileOperations


@total_ordering
@dataclass(frozen=True, eq=False)
class AbsolutePath:
    """A normalized absolute path.

    Args:
        value: Raw rooted path string; normalized on construction.
        filesystem: Optional filesystem the path refers to. Not part of the
            value: two paths on different filesystems still compare equal.

    Raises:
        MalformedPathError: If `value` has no root.
        RootBoundaryExceededError: If `value` climbs above its root.
    """

    value: str
    filesystem: FileSystem | None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        raw = os.fspath(self.value)
        if not syntax.has_root(raw):
            raise MalformedPathError(f"Path '{raw}' must be rooted")
        object.__setattr__(self, "value", syntax.normalize(raw))

    # --- Construction ---

    @classmethod
    def parse(cls, raw: str, filesystem: FileSystem | None = None) -> AbsolutePath:
        """Parse a rooted path string."""
        return cls(raw, filesystem=filesystem)

    @classmethod
    def resolve(
        cls,
        raw: str,
        base: AbsolutePath | str | None = None,
        filesystem: FileSystem | None = None,
    ) -> AbsolutePath:
        """Parse `raw`, anchoring relative input at `base` (default: the CWD)."""
        if syntax.has_root(raw):
            return cls(raw, filesystem=filesystem)
        anchor = base if base is not None else os.getcwd()
        return cls(syntax.combine(str(anchor), raw), filesystem=filesystem)

    def bind(self, raw: str) -> AbsolutePath:
        """Return a new path for `raw` on the same filesystem as this one."""
        return AbsolutePath(raw, filesystem=self.filesystem)

    # --- Derived properties ---

    @property
    def root(self) -> str:
        """The root prefix (``/`` or a drive such as ``C:``)."""
        root = syntax.get_root(self.value)
        assert root is not None  # guaranteed by __post_init__
        return root

    @property
    def is_windows(self) -> bool:
        """True if the path carries a Windows drive root."""
        return syntax.has_windows_root(self.value)

    @property
    def separator(self) -> str:
        return syntax.get_separator(self.value)

    @property
    def is_root(self) -> bool:
        return syntax.is_unix_root(self.value) or syntax.is_windows_root(
            self.value.rstrip(syntax.WINDOWS_SEPARATOR)
        )

    @property
    def name(self) -> str:
        """The last path component, or ``""`` for a root."""
        if self.is_root:
            return ""
        return self.value.rpartition(self.separator)[2]

    @property
    def stem(self) -> str:
        """The name without its extension."""
        return os.path.splitext(self.name)[0]

    @property
    def extension(self) -> str:
        """The extension of the name including its dot, or ``""``."""
        return os.path.splitext(self.name)[1]

    @property
    def parent(self) -> AbsolutePath | None:
        """The containing directory, or None for a root."""
        if self.is_root:
            return None
        head = self.value.rpartition(self.separator)[0]
        return self.bind(head or self.root)

    @property
    def file(self) -> FileOperations:
        """Operations treating this path as a file."""
        # pylint: disable=import-outside-toplevel
        from pathkit.service_layer.files import FileOperations

        return FileOperations(self)

    @property
    def directory(self) -> DirectoryOperations:
        """Operations treating this path as a directory."""
        # pylint: disable=import-outside-toplevel
        from pathkit.service_layer.directories import DirectoryOperations

        return DirectoryOperations(self)

    # --- Arithmetic ---

    def combine(self, other: str | None) -> AbsolutePath:
        """Append the relative path `other`.

        Raises:
            MalformedPathError: If `other` is rooted.
        """
        if other is None:
            return self
        if syntax.has_root(other):
            raise MalformedPathError(f"Cannot combine with rooted path '{other}'")
        return self.bind(syntax.combine(self.value, other))

    def concat(self, suffix: str | None) -> AbsolutePath:
        """Append `suffix` verbatim, e.g. an extension, then normalize."""
        return self.bind(self.value + (suffix or ""))

    def relative_to(self, other: AbsolutePath | str) -> str:
        """Return the relative path leading from `other` to this path."""
        return syntax.relative_to(str(other), self.value)

    def contains(self, other: AbsolutePath) -> bool:
        """Return True if `other` is this path or lies below it."""
        mine, theirs = self._key(), other._key()  # pylint: disable=protected-access
        if mine == theirs:
            return True
        prefix = mine if mine.endswith(self.separator) else mine + self.separator
        return theirs.startswith(prefix)

    def ancestors(self, include_self: bool = False) -> Iterator[AbsolutePath]:
        """Yield the parents of this path up to its root."""
        current: AbsolutePath | None = self if include_self else self.parent
        while current is not None:
            yield current
            current = current.parent

    def __truediv__(self, other: str | None) -> AbsolutePath:
        return self.combine(other)

    def __add__(self, suffix: str | None) -> AbsolutePath:
        return self.concat(suffix)

    # --- Comparison ---

    def _key(self) -> str:
        return self.value.casefold() if self.is_windows else self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AbsolutePath):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, AbsolutePath):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    # --- Conversion ---

    def __str__(self) -> str:
        return self.value

    def __fspath__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"AbsolutePath({self.value!r})"
