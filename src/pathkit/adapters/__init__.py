"""Adapters (infrastructure) for PATHKIT.

Provide concrete implementations of the `FileSystem` port.

Dependency rule: may import `pathkit.domain` and `pathkit.interfaces`; the
domain must not import this package.
"""
