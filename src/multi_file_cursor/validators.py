"""
Validation functions for mutation arguments.
"""

from typing import Iterable, List, Optional, Tuple

from multi_file_cursor.line_utils import is_handle_like, is_path_like
from multi_file_cursor.models import EntryKind


def classify_entry(item) -> EntryKind:
    """Classify one item of a file list or removal selector."""
    # bool is an int subclass but never a meaningful position
    if isinstance(item, int) and not isinstance(item, bool):
        return EntryKind.POSITION
    if is_path_like(item):
        return EntryKind.PATH
    if is_handle_like(item):
        return EntryKind.HANDLE
    return EntryKind.UNKNOWN


def as_entry_list(items) -> List:
    """Turn a file list or selector into a list, wrapping a lone position, path or handle.

    A str would otherwise split into characters and a stream into its lines.
    """
    if isinstance(items, int) or is_path_like(items) or callable(getattr(items, "readline", None)):
        return [items]
    return list(items)


def classify_entries(items: Iterable) -> EntryKind:
    """Classify a whole list: EMPTY, a single kind, MIXED or UNKNOWN."""
    kinds = {classify_entry(item) for item in items}
    if not kinds:
        return EntryKind.EMPTY
    if EntryKind.UNKNOWN in kinds:
        return EntryKind.UNKNOWN
    if len(kinds) > 1:
        return EntryKind.MIXED
    return kinds.pop()


def validate_insert_position(position: int, length: int) -> Tuple[bool, Optional[str]]:
    """Validate an insertion point against the current list length.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if isinstance(position, bool) or not isinstance(position, int):
        return False, f"Insert position must be an integer, got {type(position).__name__}"
    if position < 0 or position > length:
        return False, f"Insert position {position} out of range 0..{length}"
    return True, None


def validate_positions(positions: Iterable[int], length: int) -> List[str]:
    """Validate removal positions against the current list length.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []
    for position in positions:
        if classify_entry(position) is not EntryKind.POSITION:
            errors.append(f"Position {position!r} is not an integer")
        elif position < 0 or position >= length:
            errors.append(f"Position {position} out of range 0..{length - 1}")
    return errors
