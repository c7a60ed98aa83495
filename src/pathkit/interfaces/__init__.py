"""Interfaces (application boundary) for PATHKIT.

Defines the `FileSystem` port the service layer delegates primitive I/O to.
Business rules stay out of this package.

Dependency rule: may import `pathkit.domain` value objects only. It may be
imported by `pathkit.service_layer` and `pathkit.adapters`.
"""
