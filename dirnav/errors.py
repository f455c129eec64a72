"""Exception taxonomy for directory-history operations.

Persistence errors are recovered inside the store and only logged.
Navigation errors are converted into outcomes by the controller.
"""

from __future__ import annotations


class DirNavError(Exception):
    """Base class for every error raised by dirnav."""


class OutOfRangeIndex(DirNavError, IndexError):
    """History index outside ``[0, len - 1]``."""

    def __init__(self, index: int, length: int) -> None:
        self.index = index
        self.length = length
        if length == 0:
            message = f"index {index} is out of range: history is empty"
        else:
            message = f"index {index} is out of range (valid: 0..{length - 1})"
        super().__init__(message)


class InvalidArgument(DirNavError, ValueError):
    """Malformed navigation argument."""


class PersistenceReadError(DirNavError):
    """History document is missing, unreadable, or structurally invalid."""


class MissingDocument(PersistenceReadError):
    """History document does not exist yet."""


class PersistenceWriteError(DirNavError):
    """History document could not be written."""


class RelocationFailure(DirNavError):
    """The host could not change to the requested location."""

    def __init__(self, location: str, reason: str) -> None:
        self.location = location
        self.reason = reason
        super().__init__(f"cannot change to {location}: {reason}")
