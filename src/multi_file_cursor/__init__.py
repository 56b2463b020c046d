"""
Multi-File Cursor package.
"""

__version__ = "1.0.0"

from multi_file_cursor.config_models import CursorConfig
from multi_file_cursor.cursor import MultiFileCursor
from multi_file_cursor.errors import ClosedCursorError, InvalidOperation, MultiFileCursorError, OpenError
from multi_file_cursor.models import CLOSED, Active, Closed, CursorState, EntryKind, SourceMode

__all__ = [
    "MultiFileCursor",
    "CursorConfig",
    "Active",
    "Closed",
    "CLOSED",
    "CursorState",
    "SourceMode",
    "EntryKind",
    "MultiFileCursorError",
    "OpenError",
    "InvalidOperation",
    "ClosedCursorError",
]
