"""
Pydantic models for cursor configuration.

This module holds the options applied when the cursor opens paths and
returns lines.
"""

import codecs
import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, field_validator

VALID_NEWLINES = (None, "", "\n", "\r", "\r\n")


class CursorConfig(BaseModel):
    """Options for opening and reading the cursor's files."""
    encoding: str = Field("utf-8", description="Text encoding used when opening paths")
    errors: str = Field("strict", description="Decode error handler used when opening paths")
    newline: Optional[str] = Field(None, description="Newline mode passed to open()")
    keep_line_endings: bool = Field(
        False,
        description="Return lines with their terminator instead of stripping it"
    )

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator('encoding')
    @classmethod
    def validate_encoding(cls, value):
        """Ensure the encoding is known to the codec registry."""
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"Unknown encoding: {value}")
        return value

    @field_validator('errors')
    @classmethod
    def validate_errors(cls, value):
        """Ensure the decode error handler is registered."""
        try:
            codecs.lookup_error(value)
        except LookupError:
            raise ValueError(f"Unknown error handler: {value}")
        return value

    @field_validator('newline')
    @classmethod
    def validate_newline(cls, value):
        if value not in VALID_NEWLINES:
            raise ValueError(f"Invalid newline mode: {value!r}")
        return value

    def open_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for open() when the cursor opens a path."""
        return {"encoding": self.encoding, "errors": self.errors, "newline": self.newline}

    @classmethod
    def from_dict(cls, config_dict: dict) -> "CursorConfig":
        """Create CursorConfig from a dictionary such as a loaded JSON document.

        Raises:
            ValidationError: If a value is invalid or an unknown key is given
        """
        return cls.model_validate(config_dict)

    @classmethod
    def from_json_file(cls, config_path: Union[str, Path], encoding: str = "utf-8") -> "CursorConfig":
        """
        Load cursor options from a JSON object file.

        Args:
            config_path: Path to the JSON file
            encoding: Encoding of the JSON file itself, not of the files the cursor reads

        Returns:
            Validated CursorConfig instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file does not hold a JSON object
            ValidationError: If an option is invalid
        """
        with open(config_path, encoding=encoding) as f:
            config_dict = json.load(f)

        if not isinstance(config_dict, dict):
            raise ValueError(f"Cursor config in {config_path} must be a JSON object, "
                             f"got {type(config_dict).__name__}")
        return cls.from_dict(config_dict)
