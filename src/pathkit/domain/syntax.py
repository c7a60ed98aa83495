"""String-level path syntax: roots, normalization, combination, relativization.

Everything here is a pure function of its string inputs. Two root kinds are
recognized:

- **Windows roots**: a drive letter followed by a colon (``C:``). Paths with a
  Windows root always use ``\\`` as separator once normalized.
- **Unix roots**: a single leading ``/``. Such paths always use ``/``.

Paths without a root are relative; they normalize with the host separator
unless one is requested explicitly. Both separator characters are accepted on
input regardless of the root kind.

Examples:
    ```py
    normalize("/a/b/../c")          # "/a/c"
    normalize("C:/foo/./bar")       # "C:\\foo\\bar"
    combine("C:", "foo")            # "C:\\foo"
    relative_to("/a/b", "/a/c/d")   # "../c/d"
    ```
"""

from __future__ import annotations

import os

from .errors import (
    MalformedPathError,
    RootBoundaryExceededError,
    SeparatorConflictError,
)

WINDOWS_SEPARATOR = "\\"
UNIX_SEPARATOR = "/"
SEPARATORS = (WINDOWS_SEPARATOR, UNIX_SEPARATOR)

CURRENT_DIRECTORY = "."
PARENT_DIRECTORY = ".."

_WINDOWS_ROOT_LENGTH = 2


def _is_ascii_letter(char: str) -> bool:
    return char.isascii() and char.isalpha()


def is_windows_root(value: str | None) -> bool:
    """Return True if `value` is exactly a drive root such as ``C:``."""
    return (
        value is not None
        and len(value) == _WINDOWS_ROOT_LENGTH
        and _is_ascii_letter(value[0])
        and value[1] == ":"
    )


def is_unix_root(value: str | None) -> bool:
    """Return True if `value` is exactly ``/``."""
    return value == UNIX_SEPARATOR


def has_windows_root(path: str | None) -> bool:
    """Return True if `path` starts with a drive root."""
    return is_windows_root((path or "")[:_WINDOWS_ROOT_LENGTH])


def has_unix_root(path: str | None) -> bool:
    """Return True if `path` starts with ``/``."""
    return is_unix_root((path or "")[:1])


def get_root(path: str | None) -> str | None:
    """Return the root prefix of `path`, or None for relative/empty input.

    A leading ``/`` takes precedence; otherwise the first two characters are
    checked for a drive root.
    """
    if not path:
        return None
    if has_unix_root(path):
        return path[:1]
    if has_windows_root(path):
        return path[:_WINDOWS_ROOT_LENGTH]
    return None


def has_root(path: str | None) -> bool:
    """Return True if `path` is rooted (absolute)."""
    return get_root(path) is not None


def get_separator(path: str | None) -> str:
    """Return the separator implied by the root of `path`, else the host default."""
    root = get_root(path)
    if is_windows_root(root):
        return WINDOWS_SEPARATOR
    if is_unix_root(root):
        return UNIX_SEPARATOR
    return os.sep


def _check_separator(path: str | None, separator: str | None) -> None:
    """Raise SeparatorConflictError if `separator` does not fit the root kind of `path`."""
    if separator is None:
        return
    root = get_root(path)
    if is_windows_root(root) and separator != WINDOWS_SEPARATOR:
        raise SeparatorConflictError(
            f"For Windows-rooted paths the separator must be '{WINDOWS_SEPARATOR}'"
        )
    if is_unix_root(root) and separator != UNIX_SEPARATOR:
        raise SeparatorConflictError(
            f"For Unix-rooted paths the separator must be '{UNIX_SEPARATOR}'"
        )


def _split(value: str) -> list[str]:
    """Split on both separator characters, discarding empty segments."""
    unified = value.replace(WINDOWS_SEPARATOR, UNIX_SEPARATOR)
    return [part for part in unified.split(UNIX_SEPARATOR) if part]


def _trim(path: str | None) -> str:
    if not path:
        return ""
    if is_unix_root(path):
        return path
    return path.rstrip(WINDOWS_SEPARATOR + UNIX_SEPARATOR)


def normalize(path: str | None, separator: str | None = None) -> str:
    """Canonicalize `path` to one separator with no ``.`` or resolvable ``..`` segments.

    Leading ``..`` segments are kept on relative paths, since there is nothing
    to cancel them against. On rooted paths they would escape the root and
    raise instead.

    Args:
        path: The path to normalize. ``None`` is treated as empty.
        separator: Optional separator to use. Must match the root kind.

    Returns:
        str: The normalized path. A bare Windows root normalizes to ``C:\\``.

    Raises:
        SeparatorConflictError: If `separator` does not match the root kind.
        RootBoundaryExceededError: If a ``..`` would climb above the root.
    """
    _check_separator(path, separator)

    path = path or ""
    separator = separator or get_separator(path)
    root = get_root(path)

    tail = path[len(root) :] if root is not None else path
    parts = _split(tail)

    i = 0
    while i < len(parts):
        part = parts[i]
        if part == PARENT_DIRECTORY:
            if all(previous == PARENT_DIRECTORY for previous in parts[:i]):
                if root is not None:
                    raise RootBoundaryExceededError(path)
                i += 1
                continue
            del parts[i - 1 : i + 1]
            i -= 1
            continue

        if part == CURRENT_DIRECTORY:
            del parts[i]
            continue

        i += 1

    return combine(root, separator.join(parts), separator)


def combine(left: str | None, right: str | None, separator: str | None = None) -> str:
    """Join two path fragments without duplicating separators.

    Args:
        left: Base fragment; may be rooted, relative or empty.
        right: Fragment to append; must not be rooted.
        separator: Optional separator. Must match the root kind of `left`.

    Returns:
        str: The joined (not normalized) path.

    Raises:
        MalformedPathError: If `right` is rooted.
        SeparatorConflictError: If `separator` does not match the root of `left`.
    """
    left = _trim(left)
    right = _trim(right)

    if has_root(right):
        raise MalformedPathError(f"Second path '{right}' must not be rooted")

    if not left.strip():
        return right

    if not right.strip():
        return f"{left}{WINDOWS_SEPARATOR}" if is_windows_root(left) else left

    _check_separator(left, separator)
    separator = separator or get_separator(left)

    if is_windows_root(left):
        return f"{left}{WINDOWS_SEPARATOR}{right}"
    if is_unix_root(left):
        return f"{left}{right}"
    return f"{left}{separator}{right}"


def relative_to(base_path: str, destination_path: str) -> str:
    """Return the relative path leading from `base_path` to `destination_path`.

    Both inputs are normalized first. Segment comparison ignores case for
    Windows-rooted paths.

    Raises:
        SeparatorConflictError: If the separators or roots differ, or if
            `base_path` is a bare Windows root.
    """
    base_path = normalize(base_path)
    destination_path = normalize(destination_path)

    separator = get_separator(base_path)
    if separator != get_separator(destination_path):
        raise SeparatorConflictError("Separators do not match")

    base_root = get_root(base_path)
    destination_root = get_root(destination_path)
    windows = is_windows_root(base_root)
    if windows:
        roots_match = (destination_root or "").casefold() == (base_root or "").casefold()
    else:
        roots_match = destination_root == base_root
    if not roots_match or is_windows_root(base_path.rstrip(WINDOWS_SEPARATOR)):
        raise SeparatorConflictError(
            f"Roots of '{base_path}' and '{destination_path}' do not match"
        )

    base_parts = [part for part in base_path.split(separator) if part]
    destination_parts = [part for part in destination_path.split(separator) if part]

    same = 0
    for base_part, destination_part in zip(base_parts, destination_parts):
        if windows:
            matches = base_part.casefold() == destination_part.casefold()
        else:
            matches = base_part == destination_part
        if not matches:
            break
        same += 1

    parts = [PARENT_DIRECTORY] * (len(base_parts) - same) + destination_parts[same:]
    return separator.join(parts)


def change_extension(name: str, extension: str | None) -> str:
    """Replace the extension of a file `name`.

    `extension` may be given with or without its leading dot; an empty value
    strips the extension. Dot-files such as ``.gitignore`` have no extension.
    """
    stem, _ = os.path.splitext(name)
    if not extension:
        return stem
    if not extension.startswith("."):
        extension = f".{extension}"
    return f"{stem}{extension}"
