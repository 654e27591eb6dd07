"""Bilisp Language Server package.

This package provides a pygls-based Language Server for the Bilisp dialect.
Each top-level form of a buffer is evaluated on its own to report Error
values as diagnostics and to show results on hover.
"""

__all__ = [
    "server",
]
