"""Service layer for PATHKIT.

Implements the operations scoped to a path: file operations, directory
operations and content hashing. Primitive I/O goes through the `FileSystem`
port.

Dependency rule: may import `pathkit.domain`, `pathkit.interfaces` and
`pathkit.config`, but not `pathkit.entrypoints`.
"""
