"""Apply JSON Patch (RFC 6902) documents to plain Python JSON values.

The ``patch`` module provides ``apply_patch`` and ``PatchError``.
"""

__version__ = "0.1.0"
__all__ = ["patch"]