"""File-system adapters."""

from .local import LocalFileSystem
from .memory import MemoryFileSystem

__all__ = ["LocalFileSystem", "MemoryFileSystem"]
