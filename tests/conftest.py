"""Pytest configuration and shared fixtures."""

import io
import json
from pathlib import Path

import pytest

from multi_file_cursor.cursor import MultiFileCursor

HELLO_CONTENT = "this is an\nexample file"
WORLD_CONTENT = "fileinput can read lines\nacross files\n1234\nabcd"


@pytest.fixture
def hello_file(tmp_path) -> Path:
    """Create the two-line "hello" file (no trailing newline)."""
    path = tmp_path / "hello"
    path.write_text(HELLO_CONTENT)
    return path


@pytest.fixture
def world_file(tmp_path) -> Path:
    """Create the four-line "world" file (no trailing newline)."""
    path = tmp_path / "world"
    path.write_text(WORLD_CONTENT)
    return path


@pytest.fixture
def empty_file(tmp_path) -> Path:
    """Create an empty file."""
    path = tmp_path / "empty"
    path.write_text("")
    return path


@pytest.fixture
def extra_file(tmp_path) -> Path:
    """Create a file with a trailing newline."""
    path = tmp_path / "extra"
    path.write_text("first extra\nsecond extra\n")
    return path


@pytest.fixture
def path_cursor(hello_file, world_file):
    """Cursor built from the hello and world paths."""
    cursor = MultiFileCursor.from_paths([hello_file, world_file])
    yield cursor
    cursor.close()


@pytest.fixture
def handle_cursor():
    """Cursor built from in-memory handles with the hello and world content."""
    handles = [io.StringIO(HELLO_CONTENT), io.StringIO(WORLD_CONTENT)]
    cursor = MultiFileCursor.from_handles(handles)
    yield cursor
    cursor.close()


@pytest.fixture
def sample_config_file(tmp_path) -> Path:
    """Create a sample cursor configuration."""
    config = {
        "encoding": "latin-1",
        "errors": "replace",
        "keep_line_endings": True
    }
    config_file = tmp_path / "cursor_config.json"
    config_file.write_text(json.dumps(config, indent=2))
    return config_file
