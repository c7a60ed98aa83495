"""Module including value objects used across the domain layer."""

import os
from enum import Enum, IntFlag


class FileAttributes(IntFlag):
    """File-system attribute bits reported by a `FileSystem` adapter.

    The numeric values follow the conventional Windows attribute bits so masks
    stay portable; POSIX adapters derive what they can (read-only, hidden,
    directory) and report ``NORMAL`` otherwise.
    """

    READ_ONLY = 1
    HIDDEN = 2
    SYSTEM = 4
    DIRECTORY = 16
    ARCHIVE = 32
    NORMAL = 128


class LineBreak(Enum):
    """Line terminator conventions."""

    WINDOWS = "\r\n"
    UNIX = "\n"

    @classmethod
    def host(cls) -> "LineBreak":
        """Return the convention of the running platform."""
        return cls.WINDOWS if os.linesep == "\r\n" else cls.UNIX  # pylint: disable=magic-value-comparison

    @classmethod
    def from_name(cls, name: str) -> "LineBreak":
        """Look up a convention by case-insensitive name (``windows``/``unix``)."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown line break style: {name!r}") from None
