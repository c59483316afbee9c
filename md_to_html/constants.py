"""Constants used across the md-to-html package."""

from __future__ import annotations

from .config import RenderConfig

DEFAULT_CONFIG = RenderConfig()

# Markdown markers
HEADER_MARKER = "#"
BOLD_MARKER = "*"
ITALIC_MARKER = "_"
CODE_MARKER = "`"
QUOTE_MARKER = ">"
DASH_MARKER = "-"
TABLE_MARKER = "|"
IMAGE_MARKER = "!"
WHITESPACE = " \t"

MAX_HEADER_LEVEL = 6
CODE_FENCE_MIN_RUN = 3
HORIZONTAL_RULE_MIN_DASHES = 3
ADVISORY_BULLET = "** "

# File handling defaults
MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd")
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
