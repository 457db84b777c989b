from __future__ import annotations

"""
Domain Exception Hierarchy.

Only the query resolver raises to its caller. Filesystem failures are
absorbed inside the search core and never reach the public API.
"""


class FuzzyPathError(Exception):
    """Base class for all application errors."""


class FilesystemAccessError(FuzzyPathError, OSError):
    """
    A directory could not be listed (permission denied, missing, I/O error).

    Attributes:
        path: Directory whose listing failed.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot list '{path}': {reason}")
        self.path = path
        self.reason = reason


class InvalidQueryError(FuzzyPathError, ValueError):
    """The raw query leaves nothing to match after prefix normalization."""
