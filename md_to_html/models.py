"""Data models for md-to-html."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union


@dataclass(frozen=True)
class Header:
    """A heading line such as ``# Title``.

    Attributes:
        level: Number of leading ``#`` markers, between 1 and 6.
        text: Heading text without markers.
    """

    level: int
    text: str


@dataclass(frozen=True)
class List:
    """A run of consecutive ``- item`` lines.

    Attributes:
        items: Item texts in document order.
    """

    items: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class Paragraph:
    text: str


@dataclass(frozen=True)
class Bold:
    text: str


@dataclass(frozen=True)
class Italic:
    text: str


@dataclass(frozen=True)
class Link:
    text: str
    url: str


@dataclass(frozen=True)
class Image:
    alt_text: str
    url: str


@dataclass(frozen=True)
class Code:
    """An inline code span."""

    text: str


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code block, without its fences."""

    text: str


@dataclass(frozen=True)
class Quote:
    text: str


@dataclass(frozen=True)
class HorizontalRule:
    pass


Element = Union[
    Header,
    List,
    Paragraph,
    Bold,
    Italic,
    Link,
    Image,
    Code,
    CodeBlock,
    Quote,
    HorizontalRule,
]


class ParserMode(Enum):
    """Parser modes used while scanning Markdown content.

    Exactly one mode is active at a time.

    Attributes:
        NONE: Between constructs; nothing is being accumulated.
        PARAGRAPH: Collecting bare paragraph text.
        HEADER: Collecting ``#`` markers and heading text.
        BOLD: Inside a ``*`` span.
        ITALIC: Inside a ``_`` span.
        LINK_TEXT: Between ``[`` and ``]``.
        LINK_CLOSE: Right after ``]``, waiting for ``(``.
        LINK_URL: Between ``(`` and ``)``.
        BACKTICK_RUN: Counting an opening run of backticks.
        INLINE_CODE: Inside an inline code span.
        FENCE_INFO: On the opening line of a fenced code block.
        CODE_BLOCK: Inside a fenced code block.
        QUOTE: Collecting a ``>`` line.
        DASH_RUN: Counting leading dashes (list item or horizontal rule).
        LIST_ITEM: Collecting a ``- item`` line.
        TABLE_ROW: Collecting a ``|`` line.
    """

    NONE = auto()
    PARAGRAPH = auto()
    HEADER = auto()
    BOLD = auto()
    ITALIC = auto()
    LINK_TEXT = auto()
    LINK_CLOSE = auto()
    LINK_URL = auto()
    BACKTICK_RUN = auto()
    INLINE_CODE = auto()
    FENCE_INFO = auto()
    CODE_BLOCK = auto()
    QUOTE = auto()
    DASH_RUN = auto()
    LIST_ITEM = auto()
    TABLE_ROW = auto()


class LinkKind(Enum):
    LINK = auto()
    IMAGE = auto()


class ColumnAlignment(Enum):
    """Alignment declared by one cell of a table separator row."""

    DEFAULT = auto()
    LEFT = auto()
    CENTER = auto()
    RIGHT = auto()


@dataclass
class LinkCapture:
    """Link or image being captured across ``[...](...)``.

    Attributes:
        kind: Whether the capture renders as a link or an image.
        text: Display text (or alt text for images).
        url: Target captured between the parentheses.
    """

    kind: LinkKind = LinkKind.LINK
    text: str = ""
    url: str = ""


@dataclass
class ParserContext:
    """Encapsulate parser state while scanning Markdown text.

    Attributes:
        mode: Current parser mode.
        buffer: Characters accumulated for the open construct.
        at_line_start: True until a non-whitespace character is seen on the line.
        header_level: Number of ``#`` markers seen for the open header.
        list_items: Items of the list currently being collected.
        link: Link or image capture, if one is open.
        delimiter: Emphasis marker (``*`` or ``_``) that opened the span.
        delimiter_run: Number of markers in the opening run.
        skip_char: Marker still to be consumed after a span closed.
        skip_count: How many ``skip_char`` characters remain to be consumed.
        backtick_run: Length of the opening backtick run.
        closing_run: Length of the backtick run seen inside a code span.
        run_at_line_start: Whether the opening backtick run began a line.
        fence_info: Info string following an opening code fence.
        code_line_start: Buffer index where the current code block line begins.
        after_carriage_return: True when the previous character was a ``\\r``.
        column_alignments: Alignments recorded from the last table separator row.
        pending: Elements emitted but not yet handed to the caller.
    """

    mode: ParserMode = ParserMode.NONE
    buffer: list[str] = field(default_factory=list)
    at_line_start: bool = True
    header_level: int = 0
    list_items: list[str] = field(default_factory=list)
    link: LinkCapture | None = None
    delimiter: str | None = None
    delimiter_run: int = 0
    skip_char: str | None = None
    skip_count: int = 0
    backtick_run: int = 0
    closing_run: int = 0
    run_at_line_start: bool = False
    fence_info: str = ""
    code_line_start: int = 0
    after_carriage_return: bool = False
    column_alignments: list[ColumnAlignment] = field(default_factory=list)
    pending: list[Element] = field(default_factory=list)

    @property
    def text(self) -> str:
        """Current accumulator contents."""
        return "".join(self.buffer)
