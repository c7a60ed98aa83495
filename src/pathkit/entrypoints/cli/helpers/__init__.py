"""CLI helpers for PATHKIT.

Utilities used by the command-line interface: parsing of per-logger level
overrides and message emitters that write to stderr with emoji→ASCII fallbacks.
"""

from .messages import success, warn

__all__ = ["success", "warn"]
