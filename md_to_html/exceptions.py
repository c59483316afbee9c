"""Package-specific exception types."""

from __future__ import annotations


class RenderError(ValueError):
    """Base class for errors raised around Markdown conversion.

    Parsing and rendering a string never fail; these errors come from reading
    input files and applying limits to them.
    """


class FileTooLargeError(RenderError):
    """Raised when an input file exceeds the configured maximum size.

    Args:
        limit: Maximum allowed size in bytes.
        size: Actual size of the file in bytes.
    """

    def __init__(self, limit: int, size: int):
        self.limit = limit
        self.size = size
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"File is {self.size} bytes, exceeding the maximum allowed size of {self.limit} bytes"


class ParseFileError(Exception):
    """Raised when reading or parsing a Markdown file fails."""
