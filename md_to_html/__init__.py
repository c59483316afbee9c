"""
md-to-html: single-pass Markdown to HTML converter.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    md-to-html advisory.md

Library Usage:
    from md_to_html import parse, render, to_html

    elements = parse("# Service Alert\\nRoute 15 is delayed.\\n")
    html = render(elements)  # "<h1>Service Alert</h1><p>Route 15 is delayed.</p>"
"""

from .advisory import ServiceAdvisory, format_advisories, format_advisory
from .config import ConfigError, RenderConfig
from .exceptions import FileTooLargeError, ParseFileError, RenderError
from .models import (
    Bold,
    Code,
    CodeBlock,
    Element,
    Header,
    HorizontalRule,
    Image,
    Italic,
    Link,
    List,
    Paragraph,
    Quote,
)
from .parser import iter_elements, parse, parse_file
from .renderer import escape_elements, render, render_element, to_html

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "parse",
    "iter_elements",
    "parse_file",
    "render",
    "render_element",
    "to_html",
    "escape_elements",
    # Service advisories
    "ServiceAdvisory",
    "format_advisory",
    "format_advisories",
    # Data models
    "Element",
    "Header",
    "List",
    "Paragraph",
    "Bold",
    "Italic",
    "Link",
    "Image",
    "Code",
    "CodeBlock",
    "Quote",
    "HorizontalRule",
    # Configuration
    "RenderConfig",
    # Exceptions
    "ConfigError",
    "FileTooLargeError",
    "ParseFileError",
    "RenderError",
    # Version
    "__version__",
]
