"""Domain layer for PATHKIT.

Contains the pure rules: path syntax, the `AbsolutePath` value type, conflict
policies, value objects and errors. Nothing here touches a file system.

Dependency rule: do not import from `pathkit.adapters` or `pathkit.entrypoints`.
"""
