"""
Exceptions raised by the multi-file cursor.
"""

from typing import Optional


class MultiFileCursorError(Exception):
    """Base class for all cursor errors."""
    pass


class OpenError(MultiFileCursorError, OSError):
    """Exception raised when a path cannot be opened for reading."""

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        self.reason = reason
        message = f"Cannot open '{path}' for reading"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidOperation(MultiFileCursorError):
    """Exception raised when an operation does not match how the cursor was built.

    Path arguments are only accepted by cursors built from paths, handle
    arguments only by cursors built from handles.
    """
    pass


class ClosedCursorError(MultiFileCursorError):
    """Exception raised when an operation needs handles released by close()."""
    pass
