"""Entrypoints (inbound adapters) for PATHKIT.

Expose the library on the command line. Parse and validate inputs, call the
path operations, and present results.
"""
