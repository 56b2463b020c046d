"""
Helpers over single text handles and batches of paths.

Every helper that inspects a handle restores its read position before
returning, so the cursor's line bookkeeping is never disturbed.
"""

import io
import logging
import os
from typing import IO, List, Optional, Sequence

from multi_file_cursor.config_models import CursorConfig
from multi_file_cursor.errors import OpenError

logger = logging.getLogger(__name__)


def is_path_like(obj) -> bool:
    """Check if an object names a file rather than being an open handle."""
    return isinstance(obj, (str, os.PathLike))


def is_handle_like(obj) -> bool:
    """Check if an object can be read line by line as text.

    Binary streams have readline() too but yield bytes, so they are rejected.
    """
    if is_path_like(obj) or isinstance(obj, (io.RawIOBase, io.BufferedIOBase)):
        return False
    return callable(getattr(obj, "readline", None))


def count_lines(handle: IO[str]) -> int:
    """Count the lines in a handle from its first byte.

    A line is one readline() result, so a missing final terminator does not
    lose the last line and an empty file has no lines.

    Args:
        handle: Seekable text handle

    Returns:
        Number of lines in the whole file
    """
    position = handle.tell()
    try:
        handle.seek(0)
        count = 0
        while handle.readline():
            count += 1
        return count
    finally:
        handle.seek(position)


def at_end_of_file(handle: IO[str]) -> bool:
    """Check whether a handle has no more lines after its current position."""
    position = handle.tell()
    try:
        return handle.readline() == ""
    finally:
        handle.seek(position)


def read_whole(handle: IO[str]) -> str:
    """Read a handle's entire content from byte 0 and rewind it to byte 0."""
    handle.seek(0)
    try:
        return handle.read()
    finally:
        handle.seek(0)


def strip_line_ending(line: str) -> str:
    """Remove exactly one trailing line terminator."""
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith(("\n", "\r")):
        return line[:-1]
    return line


def open_paths(paths: Sequence, config: Optional[CursorConfig] = None) -> List[IO[str]]:
    """Open every path for reading, in order.

    The batch is all-or-nothing: if any path fails, the handles already
    opened for this batch are closed before the error is raised.

    Args:
        paths: Paths to open
        config: Options passed to open()

    Returns:
        List of open text handles, parallel to paths

    Raises:
        OpenError: When a path cannot be opened
    """
    config = config or CursorConfig()
    handles: List[IO[str]] = []
    for path in paths:
        try:
            handle = open(path, "r", **config.open_kwargs())
        except OSError as e:
            close_handles(handles)
            raise OpenError(os.fspath(path), e.strerror or str(e)) from e
        handles.append(handle)
        logger.debug(f"Opened {os.fspath(path)}")
    return handles


def close_handles(handles: Sequence[IO[str]]) -> None:
    """Close every handle, attempting all of them even when one fails.

    Raises:
        OSError: The first close failure, after all handles were attempted
    """
    first_error = None
    for handle in handles:
        try:
            handle.close()
        except OSError as e:
            logger.warning(f"Error closing {getattr(handle, 'name', handle)!r}: {e}")
            if first_error is None:
                first_error = e
    if first_error is not None:
        raise first_error
