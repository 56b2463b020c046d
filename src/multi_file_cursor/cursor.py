"""
Multi-file cursor: read an ordered list of text files as one line stream.

The cursor tracks the current file and the current line within it, and
exposes navigation, reading, list mutation and position queries. Every
navigation, read and mutation call changes the cursor in place; the value
it returns describes the state it left behind.

A cursor is built either from paths (it opens them) or from already open
handles. That choice is fixed for the cursor's lifetime and decides which
arguments the mutation operations accept.

The cursor is not thread-safe. Use one cursor per worker or serialize
access externally.
"""

import logging
import os
from typing import IO, Callable, Iterable, Iterator, List, Optional, Sequence, Tuple

from multi_file_cursor.config_models import CursorConfig
from multi_file_cursor.errors import ClosedCursorError, InvalidOperation
from multi_file_cursor.line_utils import (
    at_end_of_file,
    close_handles,
    count_lines,
    open_paths,
    read_whole,
    strip_line_ending,
)
from multi_file_cursor.models import CLOSED, Active, CursorState, EntryKind, SourceMode
from multi_file_cursor.validators import (
    as_entry_list,
    classify_entries,
    validate_insert_position,
    validate_positions,
)

logger = logging.getLogger(__name__)


class MultiFileCursor:
    """Sequential line reader over an ordered list of files.

    Build instances with from_paths() or from_handles(). Reads and
    navigation on an ended cursor return None; None never stands for an
    empty line, which is returned as "".

    Example:
        >>> with MultiFileCursor.from_paths(["hello", "world"]) as cursor:
        ...     for line in cursor:
        ...         print(line)
    """

    def __init__(self, handles: Sequence[IO[str]], paths: Optional[Sequence[str]] = None,
                 config: Optional[CursorConfig] = None):
        """Initialize cursor over handles, optionally parallel to the paths they came from.

        Args:
            handles: Open readable, seekable text handles, owned by the cursor from now on
            paths: Paths the handles were opened from (path-sourced cursors only)
            config: Opening and line options
        """
        if paths is not None and len(paths) != len(handles):
            raise ValueError(f"Got {len(handles)} handles for {len(paths)} paths")

        self.config = config or CursorConfig()
        self._handles: List[IO[str]] = list(handles)
        self._paths: Optional[List[str]] = list(paths) if paths is not None else None
        self._mode = SourceMode.PATHS if paths is not None else SourceMode.HANDLES
        self._state: CursorState = CLOSED
        self._current_path: Optional[str] = None
        self._released = False

        self._restart()

    @classmethod
    def from_handles(cls, handles: Iterable[IO[str]],
                     config: Optional[CursorConfig] = None) -> "MultiFileCursor":
        """Wrap already open handles; the cursor takes ownership of them.

        Raises:
            InvalidOperation: When an item is not a readable handle
        """
        handles = as_entry_list(handles)
        kind = classify_entries(handles)
        if kind not in (EntryKind.EMPTY, EntryKind.HANDLE):
            raise InvalidOperation("from_handles() expects open handles; use from_paths() for paths")

        logger.debug(f"Creating cursor over {len(handles)} handle(s)")
        return cls(handles, config=config)

    @classmethod
    def from_paths(cls, paths, config: Optional[CursorConfig] = None) -> "MultiFileCursor":
        """Open every path for reading, in order, and wrap the handles.

        Args:
            paths: Paths to open (a single path is accepted too)
            config: Opening and line options

        Returns:
            Cursor positioned on the first file

        Raises:
            OpenError: When a path cannot be opened; handles already opened are closed
            InvalidOperation: When an item is not a path
        """
        paths = as_entry_list(paths)
        kind = classify_entries(paths)
        if kind not in (EntryKind.EMPTY, EntryKind.PATH):
            raise InvalidOperation("from_paths() expects paths; use from_handles() for open handles")

        config = config or CursorConfig()
        paths = [os.fspath(p) for p in paths]
        handles = open_paths(paths, config)

        logger.debug(f"Creating cursor over {len(paths)} path(s)")
        return cls(handles, paths=paths, config=config)

    def _enter_file(self, index: int) -> int:
        """Move onto a file at its first line and rewind its handle."""
        self._handles[index].seek(0)
        self._state = Active(index)
        if self._paths is not None:
            self._current_path = self._paths[index]
        return index

    def _end(self) -> None:
        self._state = CLOSED
        self._current_path = None

    def _restart(self) -> None:
        if self._handles:
            self._enter_file(0)
        else:
            self._end()

    def _ensure_not_released(self, operation: str) -> None:
        if self._released:
            raise ClosedCursorError(f"Cannot {operation}: handles were released by close()")

    def _require_mode(self, mode: SourceMode, operation: str) -> None:
        if self._mode is not mode:
            raise InvalidOperation(
                f"{operation} requires a cursor built from {mode.value}, "
                f"this one was built from {self._mode.value}"
            )

    @property
    def state(self) -> CursorState:
        """Active(file_index, line_index) or CLOSED."""
        return self._state

    def is_closed(self) -> bool:
        """Check whether the cursor has ended or was closed."""
        return self._state is CLOSED

    @property
    def released(self) -> bool:
        """True once close() has released the handles."""
        return self._released

    @property
    def current_file_index(self) -> Optional[int]:
        """Index of the current file, or None when closed."""
        return None if self._state is CLOSED else self._state.file_index

    @property
    def current_line_index(self) -> Optional[int]:
        """Zero-based line offset within the current file, or None when closed."""
        return None if self._state is CLOSED else self._state.line_index

    @property
    def current_path(self) -> Optional[str]:
        """Path of the current file; None when closed or built from handles."""
        return self._current_path

    @property
    def source_mode(self) -> SourceMode:
        return self._mode

    @property
    def sourced_from_paths(self) -> bool:
        return self._mode is SourceMode.PATHS

    @property
    def handles(self) -> Tuple[IO[str], ...]:
        return tuple(self._handles)

    @property
    def paths(self) -> Optional[Tuple[str, ...]]:
        """Paths parallel to handles, or None for a cursor built from handles."""
        return tuple(self._paths) if self._paths is not None else None

    def __len__(self) -> int:
        return len(self._handles)

    def __repr__(self) -> str:
        return (f"MultiFileCursor(files={len(self._handles)}, mode={self._mode.value}, "
                f"state={self._state!r})")

    def cumulative_line_number(self) -> Optional[int]:
        """Get the number of lines consumed across all files so far.

        Unlike current_line_index, this counts lines of every file before the
        current one. The earlier files are re-read on each call; nothing is
        cached, so the cost grows with the bytes before the current file.

        Returns:
            Cumulative line number, or None when closed
        """
        if self._state is CLOSED:
            return None

        previous = sum(count_lines(self._handles[i]) for i in range(self._state.file_index))
        return previous + self._state.line_index

    def advance_file(self) -> Optional[int]:
        """Move to the next file, at its first line. Mutates the cursor.

        On the last file the cursor ends instead.

        Returns:
            New file index, or None if the cursor was or became closed
        """
        if self._state is CLOSED:
            return None

        if self._state.file_index == len(self._handles) - 1:
            logger.debug("Last file finished, cursor ended")
            self._end()
            return None

        index = self._enter_file(self._state.file_index + 1)
        logger.debug(f"Advanced to file {index}")
        return index

    def retreat_file(self) -> Optional[int]:
        """Move to the previous file, at its first line. Mutates the cursor.

        On the first file only the line position is reset; the cursor never
        closes here.

        Returns:
            New file index, or None if the cursor is closed
        """
        if self._state is CLOSED:
            return None

        index = self._enter_file(max(self._state.file_index - 1, 0))
        logger.debug(f"Retreated to file {index}")
        return index

    def advance_filename(self) -> Optional[str]:
        """Same as advance_file() but return the new file's path.

        Raises:
            InvalidOperation: When the cursor was built from handles
        """
        self._require_mode(SourceMode.PATHS, "advance_filename()")
        index = self.advance_file()
        return None if index is None else self._paths[index]

    def retreat_filename(self) -> Optional[str]:
        """Same as retreat_file() but return the new file's path.

        Raises:
            InvalidOperation: When the cursor was built from handles
        """
        self._require_mode(SourceMode.PATHS, "retreat_filename()")
        index = self.retreat_file()
        return None if index is None else self._paths[index]

    def reset(self) -> None:
        """Return to the first line of the first file, reactivating an ended cursor.

        Raises:
            ClosedCursorError: When close() already released the handles
        """
        self._ensure_not_released("reset")
        self._restart()
        logger.debug("Cursor reset")

    def read_current_line(self) -> Optional[str]:
        """Read the current line and move past it. Mutates the cursor.

        Files with no lines left are skipped, so an empty file never yields
        an empty line. Reading the last line of a file moves to the next
        file, and reading the last line of the last file ends the cursor.

        Returns:
            The line (terminator stripped unless keep_line_endings), or None when closed
        """
        while self._state is not CLOSED:
            state = self._state
            handle = self._handles[state.file_index]

            line = handle.readline()
            if line == "":
                self.advance_file()
                continue

            if at_end_of_file(handle):
                self.advance_file()
            else:
                self._state = Active(state.file_index, state.line_index + 1)

            return line if self.config.keep_line_endings else strip_line_ending(line)

        return None

    def read_current_file(self) -> Optional[str]:
        """Read the whole current file from its first byte, then advance. Mutates the cursor.

        The current line position is disregarded: lines already read from
        this file are included in the result.

        Returns:
            File content, or None when closed
        """
        if self._state is CLOSED:
            return None

        content = read_whole(self._handles[self._state.file_index])
        self.advance_file()
        return content

    def iter_lines(self) -> Iterator[str]:
        """Yield lines until the cursor ends."""
        while True:
            line = self.read_current_line()
            if line is None:
                return
            yield line

    def iter_files(self) -> Iterator[str]:
        """Yield whole file contents until the cursor ends."""
        while True:
            content = self.read_current_file()
            if content is None:
                return
            yield content

    def __iter__(self) -> Iterator[str]:
        return self.iter_lines()

    def _admit(self, files: List, operation: str) -> Tuple[List[IO[str]], Optional[List[str]]]:
        """Check items against the cursor's mode and open them if they are paths."""
        self._ensure_not_released(operation)
        kind = classify_entries(files)
        if kind is EntryKind.EMPTY:
            return [], ([] if self._paths is not None else None)

        if self._mode is SourceMode.PATHS:
            if kind is not EntryKind.PATH:
                raise InvalidOperation(f"{operation}() on a cursor built from paths accepts only paths")
            paths = [os.fspath(p) for p in files]
            return open_paths(paths, self.config), paths

        if kind is not EntryKind.HANDLE:
            raise InvalidOperation(f"{operation}() on a cursor built from handles accepts only handles")
        return list(files), None

    def _splice(self, position: int, handles: List[IO[str]], paths: Optional[List[str]]) -> None:
        self._handles[position:position] = handles
        if self._paths is not None:
            self._paths[position:position] = paths
        self._restart()

    def append_files(self, files: Iterable) -> None:
        """Add files after the existing ones and reset the cursor.

        Args:
            files: Paths for a cursor built from paths, handles otherwise

        Raises:
            InvalidOperation: When the items do not match the cursor's mode
            OpenError: When a path cannot be opened; the cursor is left unchanged
        """
        handles, paths = self._admit(as_entry_list(files), "append_files")
        self._splice(len(self._handles), handles, paths)
        logger.debug(f"Appended {len(handles)} file(s), now {len(self._handles)}")

    def prepend_files(self, files: Iterable) -> None:
        """Add files before the existing ones and reset the cursor."""
        handles, paths = self._admit(as_entry_list(files), "prepend_files")
        self._splice(0, handles, paths)
        logger.debug(f"Prepended {len(handles)} file(s), now {len(self._handles)}")

    def insert_files(self, files: Iterable, position: int) -> None:
        """Insert files so the first one lands at position, then reset the cursor.

        Args:
            files: Paths for a cursor built from paths, handles otherwise
            position: Insertion point, 0 <= position <= len(cursor)

        Raises:
            IndexError: When position is out of range
            InvalidOperation: When the items do not match the cursor's mode
            OpenError: When a path cannot be opened; the cursor is left unchanged
        """
        self._ensure_not_released("insert_files")
        is_valid, error = validate_insert_position(position, len(self._handles))
        if not is_valid:
            raise IndexError(error)

        handles, paths = self._admit(as_entry_list(files), "insert_files")
        self._splice(position, handles, paths)
        logger.debug(f"Inserted {len(handles)} file(s) at {position}, now {len(self._handles)}")

    def remove_files(self, selector: Iterable) -> int:
        """Remove files chosen by position, path or handle identity, then reset the cursor.

        The selector's items decide how it is matched: integers are positions,
        paths match stored paths (cursors built from paths), handles match by
        identity (cursors built from handles). Removed handles are closed.

        Returns:
            Number of files removed

        Raises:
            IndexError: When a position is out of range
            InvalidOperation: When the selector mixes kinds or does not match the cursor's mode
        """
        selector = as_entry_list(selector)
        kind = classify_entries(selector)

        if kind is EntryKind.EMPTY:
            self._ensure_not_released("remove_files")
            self._restart()
            return 0
        if kind is EntryKind.POSITION:
            return self.remove_positions(selector)
        if kind is EntryKind.PATH:
            return self.remove_paths(selector)
        if kind is EntryKind.HANDLE:
            return self.remove_handles(selector)
        raise InvalidOperation(
            "remove_files() selector must be all positions, all paths or all handles"
        )

    def _selector(self, items, expected: EntryKind, operation: str) -> List:
        """Listify a removal selector and check every item is of the expected kind."""
        items = as_entry_list(items)
        if classify_entries(items) not in (EntryKind.EMPTY, expected):
            raise InvalidOperation(f"{operation} accepts only {expected.value} items")
        return items

    def remove_positions(self, positions: Iterable[int]) -> int:
        """Remove the files at the given positions and reset the cursor."""
        self._ensure_not_released("remove_positions")
        positions = set(self._selector(positions, EntryKind.POSITION, "remove_positions()"))
        errors = validate_positions(positions, len(self._handles))
        if errors:
            raise IndexError("; ".join(sorted(errors)))
        return self._remove_where(lambda i: i in positions)

    def remove_paths(self, paths: Iterable) -> int:
        """Remove every file whose path is one of paths and reset the cursor."""
        self._require_mode(SourceMode.PATHS, "remove_paths()")
        self._ensure_not_released("remove_paths")
        paths = self._selector(paths, EntryKind.PATH, "remove_paths()")
        targets = {os.fspath(p) for p in paths}
        return self._remove_where(lambda i: self._paths[i] in targets)

    def remove_handles(self, handles: Iterable[IO[str]]) -> int:
        """Remove the given handles (matched by identity) and reset the cursor."""
        self._require_mode(SourceMode.HANDLES, "remove_handles()")
        self._ensure_not_released("remove_handles")
        handles = self._selector(handles, EntryKind.HANDLE, "remove_handles()")
        targets = {id(h) for h in handles}
        return self._remove_where(lambda i: id(self._handles[i]) in targets)

    def _remove_where(self, predicate: Callable[[int], bool]) -> int:
        removed = [i for i in range(len(self._handles)) if predicate(i)]
        removed_set = set(removed)
        dropped = [self._handles[i] for i in removed]

        self._handles = [h for i, h in enumerate(self._handles) if i not in removed_set]
        if self._paths is not None:
            self._paths = [p for i, p in enumerate(self._paths) if i not in removed_set]
        self._restart()

        # A handle listed twice may survive at another position
        kept = {id(h) for h in self._handles}
        close_handles([h for h in dropped if id(h) not in kept])

        logger.debug(f"Removed {len(dropped)} file(s), now {len(self._handles)}")
        return len(dropped)

    def close(self) -> None:
        """End the cursor and close every handle it holds. Safe to call twice."""
        if self._released:
            return

        self._released = True
        self._end()
        logger.debug(f"Closing {len(self._handles)} handle(s)")
        close_handles(self._handles)

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - ensures handles are closed."""
        self.close()
        return False  # Don't suppress exceptions
