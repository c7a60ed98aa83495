"""Domain-layer error definitions."""

# ============================================================================
#                           General path errors
# ============================================================================


class PathError(Exception):
    """Base class for path and file-system operation errors."""


class MalformedPathError(PathError, ValueError):
    """Raised when a path lacks a root where one is required, or has one where it must not."""


class SeparatorConflictError(PathError, ValueError):
    """Raised when separators or roots of the involved paths are incompatible."""


class RootBoundaryExceededError(PathError, ValueError):
    """Raised when a parent reference would resolve past the path root."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Cannot normalize '{path}' beyond path root")
        self.path = path


class InvalidConfigurationError(PathError, ValueError):
    """Raised when mutually exclusive policy bits are set (or none at all)."""


# ============================================================================
#                        File-system state errors
# ============================================================================


class NotFound(PathError, FileNotFoundError):
    """Raised when an operation requires an existing target that is absent."""

    kind = "Path"

    def __init__(self, path: str) -> None:
        super().__init__(f"{self.kind} '{path}' not found")
        self.path = path


class FileNotFound(NotFound):
    """Raised when a file is required but missing."""

    kind = "File"


class DirectoryNotFound(NotFound):
    """Raised when a directory is required but missing."""

    kind = "Directory"


class AlreadyExists(PathError, FileExistsError):
    """Raised when the conflict policy is FAIL and the target is present."""

    def __init__(self, path: str) -> None:
        super().__init__(f"'{path}' already exists")
        self.path = path


class InvalidTargetError(PathError, ValueError):
    """Raised when a copy/move targets its own source or a descendant of it."""

    def __init__(self, source: str, target: str, message: str | None = None) -> None:
        super().__init__(
            message
            or f"Target directory '{target}' is located inside source directory '{source}'"
        )
        self.source = source
        self.target = target
