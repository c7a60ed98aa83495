"""PATHKIT

Normalized absolute paths with file and directory operations, conflict
policies for move/copy, and deterministic content hashes for build caches.
"""

from .domain.absolute_path import AbsolutePath
from .domain.policy import ExistsPolicy

__all__ = ["__version__", "AbsolutePath", "ExistsPolicy"]
__version__ = "0.1.0"
