"""
State and classification types for the multi-file cursor.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


@dataclass(frozen=True)
class Active:
    """Cursor positioned on a file."""
    file_index: int
    line_index: int = 0


class Closed:
    """Cursor ended: every file consumed, or closed explicitly."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CLOSED"

    def __bool__(self) -> bool:
        return False


CLOSED = Closed()

CursorState = Union[Active, Closed]


class SourceMode(str, Enum):
    """How the cursor's file list was supplied, fixed for its lifetime."""
    PATHS = "paths"
    HANDLES = "handles"


class EntryKind(str, Enum):
    """Kind of items in a list passed to a mutation or removal."""
    EMPTY = "empty"
    POSITION = "position"
    PATH = "path"
    HANDLE = "handle"
    MIXED = "mixed"
    UNKNOWN = "unknown"
