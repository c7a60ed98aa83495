"""Configuration utilities for pathkit.

This module holds the process-wide defaults that file operations read at call
time: the text encoding, whether text writes end with a line break, which line
terminator joined lines use, and the filesystem paths refer to when none is
attached. Treat them as startup configuration; changing them while other
threads run file operations is not safe.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from pathkit.adapters.filesystem.local import LocalFileSystem
from pathkit.domain.value_objects import LineBreak
from pathkit.interfaces.filesystem import FileSystem

ENCODING_ENV = "PATHKIT_ENCODING"  # pragma: no mutate
EOF_LINE_BREAK_ENV = "PATHKIT_EOF_LINE_BREAK"  # pragma: no mutate
LINE_BREAK_ENV = "PATHKIT_LINE_BREAK"  # pragma: no mutate

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class InvalidSettingError(Exception):
    """Raised when a PATHKIT_* environment variable holds an unusable value."""

    def __init__(self, name: str, value: str, reason: str) -> None:
        super().__init__(f"Invalid value {value!r} for {name}: {reason}")
        self.name = name
        self.value = value


@dataclass(frozen=True)
class Defaults:
    """Process-wide defaults for file operations.

    Attributes:
        encoding: Codec used when no explicit encoding is passed.
        eof_line_break: Whether text writes end with exactly one line break.
        line_break: Terminator used to join lines; None means the host's.
        filesystem: Filesystem used by paths that carry none.
    """

    encoding: str = "utf-8"
    eof_line_break: bool = True
    line_break: LineBreak | None = None
    filesystem: FileSystem = field(default_factory=LocalFileSystem)

    @property
    def newline(self) -> str:
        """The effective line terminator."""
        return (self.line_break or LineBreak.host()).value


_defaults = Defaults()


def get_defaults() -> Defaults:
    """Return the current process-wide defaults."""
    return _defaults


def configure(**changes: Any) -> Defaults:
    """Replace selected process-wide defaults and return the new instance.

    Example:
        ```py
        configure(encoding="latin-1", line_break=LineBreak.WINDOWS)
        ```
    """
    global _defaults  # pylint: disable=global-statement
    _defaults = replace(_defaults, **changes)
    return _defaults


def reset_defaults() -> Defaults:
    """Restore the built-in defaults."""
    global _defaults  # pylint: disable=global-statement
    _defaults = Defaults()
    return _defaults


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise InvalidSettingError(name, value, "expected a boolean (true/false)")


def load_defaults_from_env(environ: Mapping[str, str] | None = None) -> Defaults:
    """Build defaults from ``PATHKIT_*`` environment variables.

    Unset variables keep the built-in defaults. The result is not installed;
    use `apply_env_defaults` for that.

    Args:
        environ: Mapping to read from; defaults to `os.environ`.

    Returns:
        Defaults: The parsed settings.

    Raises:
        InvalidSettingError: If a variable holds an unusable value.
    """
    environ = os.environ if environ is None else environ
    changes: dict[str, Any] = {}

    if encoding := environ.get(ENCODING_ENV):
        try:
            "".encode(encoding)
        except LookupError as e:
            raise InvalidSettingError(ENCODING_ENV, encoding, "unknown codec") from e
        changes["encoding"] = encoding

    if eof := environ.get(EOF_LINE_BREAK_ENV):
        changes["eof_line_break"] = _parse_bool(EOF_LINE_BREAK_ENV, eof)

    if line_break := environ.get(LINE_BREAK_ENV):
        try:
            changes["line_break"] = LineBreak.from_name(line_break)
        except ValueError as e:
            raise InvalidSettingError(
                LINE_BREAK_ENV, line_break, "expected 'windows' or 'unix'"
            ) from e

    return replace(Defaults(), **changes)


def apply_env_defaults(environ: Mapping[str, str] | None = None) -> Defaults:
    """Load defaults from the environment and install them process-wide."""
    loaded = load_defaults_from_env(environ)
    return configure(
        encoding=loaded.encoding,
        eof_line_break=loaded.eof_line_break,
        line_break=loaded.line_break,
    )
