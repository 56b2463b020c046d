"""
Tests for Pydantic-based cursor configuration.
"""

import pytest
from pydantic import ValidationError

from multi_file_cursor.config_models import CursorConfig
from multi_file_cursor.cursor import MultiFileCursor


class TestConfigValidation:
    """Test configuration validation."""

    def test_defaults(self):
        """Test default configuration values."""
        config = CursorConfig()
        assert config.encoding == "utf-8"
        assert config.errors == "strict"
        assert config.newline is None
        assert config.keep_line_endings is False

    def test_unknown_encoding(self):
        """Test that an unknown encoding raises validation error."""
        with pytest.raises(ValidationError) as exc_info:
            CursorConfig.from_dict({"encoding": "no-such-codec"})
        assert "encoding" in str(exc_info.value).lower()

    def test_unknown_error_handler(self):
        """Test that an unknown decode error handler raises validation error."""
        with pytest.raises(ValidationError):
            CursorConfig.from_dict({"errors": "shrug"})

    def test_invalid_newline(self):
        """Test that newline must be one of the modes open() accepts."""
        with pytest.raises(ValidationError):
            CursorConfig.from_dict({"newline": "\n\n"})

    @pytest.mark.parametrize("newline", [None, "", "\n", "\r", "\r\n"])
    def test_valid_newlines(self, newline):
        """Test every open() newline mode is accepted."""
        assert CursorConfig(newline=newline).newline == newline

    def test_config_is_frozen(self):
        """Test configuration cannot be changed after creation."""
        config = CursorConfig()
        with pytest.raises(ValidationError):
            config.encoding = "latin-1"


class TestConfigLoading:
    """Test loading configuration from files."""

    def test_from_json_file(self, sample_config_file):
        """Test loading a JSON configuration."""
        config = CursorConfig.from_json_file(str(sample_config_file))
        assert config.encoding == "latin-1"
        assert config.errors == "replace"
        assert config.keep_line_endings is True

    def test_from_json_file_missing(self, tmp_path):
        """Test a missing configuration file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            CursorConfig.from_json_file(str(tmp_path / "missing.json"))


def test_encoding_applies_to_opened_paths(tmp_path):
    """Test the configured encoding is used when opening paths."""
    path = tmp_path / "latin"
    path.write_bytes("caf\xe9\n".encode("latin-1"))
    with MultiFileCursor.from_paths([path], CursorConfig(encoding="latin-1")) as cursor:
        assert cursor.read_current_line() == "caf\xe9"


def test_error_handler_applies_to_opened_paths(tmp_path):
    """Test undecodable bytes are replaced when configured."""
    path = tmp_path / "broken"
    path.write_bytes(b"ok\xff\n")
    config = CursorConfig(errors="replace")
    with MultiFileCursor.from_paths([path], config) as cursor:
        assert cursor.read_current_line() == "ok\ufffd"


def test_appended_paths_use_cursor_config(tmp_path, hello_file):
    """Test paths added later are opened with the cursor's configuration."""
    path = tmp_path / "latin"
    path.write_bytes("na\xefve".encode("latin-1"))
    with MultiFileCursor.from_paths([hello_file], CursorConfig(encoding="latin-1")) as cursor:
        cursor.append_files([path])
        cursor.advance_file()
        assert cursor.read_current_line() == "na\xefve"


class TestConfigFileShape:
    """Test configuration file contents beyond option values."""

    def test_unknown_option_rejected(self):
        """Test that misspelled options are not silently ignored."""
        with pytest.raises(ValidationError):
            CursorConfig.from_dict({"encodng": "latin-1"})

    def test_json_must_be_object(self, tmp_path):
        """Test that a JSON file holding a list is refused."""
        config_file = tmp_path / "list.json"
        config_file.write_text("[]")
        with pytest.raises(ValueError):
            CursorConfig.from_json_file(config_file)

    def test_json_file_encoding(self, tmp_path):
        """Test the config file's own encoding can be given."""
        config_file = tmp_path / "utf16.json"
        config_file.write_bytes('{"encoding": "latin-1"}'.encode("utf-16"))
        config = CursorConfig.from_json_file(config_file, encoding="utf-16")
        assert config.encoding == "latin-1"
