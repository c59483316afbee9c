"""Markdown parsing utilities.

The scanner reads the source once, left to right, one character at a time.
All state lives in a `ParserContext` owned by a single call, so independent
inputs can be parsed concurrently.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from .config import ConfigError, RenderConfig, validate_config
from .constants import (
    BOLD_MARKER,
    CODE_FENCE_MIN_RUN,
    CODE_MARKER,
    DASH_MARKER,
    HEADER_MARKER,
    HORIZONTAL_RULE_MIN_DASHES,
    IMAGE_MARKER,
    ITALIC_MARKER,
    MAX_HEADER_LEVEL,
    QUOTE_MARKER,
    TABLE_MARKER,
    WHITESPACE,
)
from .exceptions import ParseFileError, RenderError
from .filesystem import collect_file_stat, enforce_file_size, safe_read
from .models import (
    Bold,
    Code,
    CodeBlock,
    ColumnAlignment,
    Element,
    Header,
    HorizontalRule,
    Image,
    Italic,
    Link,
    LinkCapture,
    LinkKind,
    List,
    Paragraph,
    ParserContext,
    ParserMode,
    Quote,
)

logger = logging.getLogger(__name__)

LINK_MODES = frozenset({ParserMode.LINK_TEXT, ParserMode.LINK_CLOSE, ParserMode.LINK_URL})


def _emit(ctx: ParserContext, element: Element) -> None:
    ctx.pending.append(element)


def _take_text(ctx: ParserContext) -> str:
    text = ctx.text
    ctx.buffer.clear()
    return text


def _flush_paragraph(ctx: ParserContext) -> None:
    """Emit pending paragraph text, if any, and return to `NONE`."""
    if ctx.mode is not ParserMode.PARAGRAPH:
        return
    text = _take_text(ctx)
    if text:
        _emit(ctx, Paragraph(text))
    ctx.mode = ParserMode.NONE


def _close_list(ctx: ParserContext) -> bool:
    """Emit the open list as a single `List` element.

    Args:
        ctx: Parser context holding collected list items.

    Returns:
        bool: True when a list was emitted.
    """
    if not ctx.list_items:
        return False
    _emit(ctx, List(ctx.list_items))
    ctx.list_items = []
    return True


def _reset_line_state(ctx: ParserContext) -> None:
    ctx.mode = ParserMode.NONE
    ctx.buffer.clear()
    ctx.at_line_start = True
    ctx.header_level = 0
    ctx.link = None
    ctx.delimiter = None
    ctx.delimiter_run = 0
    ctx.skip_char = None
    ctx.skip_count = 0
    ctx.backtick_run = 0
    ctx.closing_run = 0
    ctx.run_at_line_start = False


def _link_literal(ctx: ParserContext) -> str:
    """Rebuild the source text of an incomplete link or image capture."""
    link = ctx.link or LinkCapture()
    prefix = IMAGE_MARKER if link.kind is LinkKind.IMAGE else ""
    if ctx.mode is ParserMode.LINK_TEXT:
        return f"{prefix}[{ctx.text}"
    if ctx.mode is ParserMode.LINK_CLOSE:
        return f"{prefix}[{link.text}]"
    return f"{prefix}[{link.text}]({ctx.text}"


def _degrade_link(ctx: ParserContext) -> None:
    literal = _link_literal(ctx)
    logger.debug("Incomplete link %r kept as paragraph text", literal)
    ctx.buffer = list(literal)
    ctx.link = None
    ctx.mode = ParserMode.PARAGRAPH


def _is_fence_line(line: str) -> bool:
    stripped = line.strip()
    return len(stripped) >= CODE_FENCE_MIN_RUN and not stripped.strip(CODE_MARKER)


def _strip_final_newline(text: str) -> str:
    return text[:-1] if text.endswith("\n") else text


def _classify_separator_cell(cell: str) -> ColumnAlignment | None:
    """Classify one cell of a table separator row.

    Args:
        cell: Cell text without surrounding pipes or whitespace.

    Returns:
        ColumnAlignment | None: Alignment declared by the cell, or None when the
            cell is not a separator cell.

    Examples:
        _classify_separator_cell(":---:")  # ColumnAlignment.CENTER
        _classify_separator_cell("text")  # None
    """
    left = cell.startswith(":")
    right = cell.endswith(":") and len(cell) > 1
    dashes = cell[int(left) : len(cell) - int(right)]
    if not dashes or dashes.strip(DASH_MARKER):
        return None

    if left and right:
        return ColumnAlignment.CENTER
    if left:
        return ColumnAlignment.LEFT
    if right:
        return ColumnAlignment.RIGHT
    return ColumnAlignment.DEFAULT


def _parse_separator_row(row: str) -> list[ColumnAlignment] | None:
    """Parse a table separator row such as ``|---|:---:|---:|``.

    Args:
        row: Full row text, starting with a pipe.

    Returns:
        list[ColumnAlignment] | None: One alignment per cell, or None when the
            row is an ordinary table row.
    """
    cells = row.strip().strip(TABLE_MARKER).split(TABLE_MARKER)
    alignments = []
    for cell in cells:
        alignment = _classify_separator_cell(cell.strip())
        if alignment is None:
            return None
        alignments.append(alignment)
    return alignments


def _end_line(ctx: ParserContext, at_eof: bool = False) -> None:
    """Flush the open construct at a newline or at the end of input.

    Args:
        ctx: Parser context to flush.
        at_eof: True when called because the input ended.
    """
    mode = ctx.mode

    if mode is ParserMode.CODE_BLOCK:
        line = "".join(ctx.buffer[ctx.code_line_start :])
        if _is_fence_line(line):
            logger.debug("Closed code block with info string %r", ctx.fence_info)
            _emit(ctx, CodeBlock(_strip_final_newline("".join(ctx.buffer[: ctx.code_line_start]))))
        elif at_eof:
            logger.debug("Unclosed code fence %r flushed at end of input", ctx.fence_info)
            _emit(ctx, CodeBlock(_strip_final_newline(ctx.text)))
        else:
            ctx.buffer.append("\n")
            ctx.code_line_start = len(ctx.buffer)
            return
        ctx.fence_info = ""
        ctx.code_line_start = 0
        _reset_line_state(ctx)
        return

    if mode in LINK_MODES:
        _degrade_link(ctx)
        mode = ctx.mode

    if mode in (ParserMode.INLINE_CODE, ParserMode.FENCE_INFO) and ctx.closing_run:
        if ctx.closing_run == ctx.backtick_run:
            _emit(ctx, Code(_take_text(ctx)))
            _reset_line_state(ctx)
            return
        ctx.buffer.append(CODE_MARKER * ctx.closing_run)
        ctx.closing_run = 0

    if mode is ParserMode.NONE:
        if ctx.at_line_start:
            _close_list(ctx)
    elif mode is ParserMode.PARAGRAPH:
        _flush_paragraph(ctx)
    elif mode is ParserMode.HEADER:
        _emit(ctx, Header(ctx.header_level, ctx.text.rstrip()))
    elif mode is ParserMode.QUOTE:
        _emit(ctx, Quote(ctx.text.rstrip()))
    elif mode is ParserMode.LIST_ITEM:
        ctx.list_items.append(ctx.text.rstrip())
    elif mode is ParserMode.DASH_RUN:
        _close_list(ctx)
        text = ctx.text.rstrip()
        if text.count(DASH_MARKER) >= HORIZONTAL_RULE_MIN_DASHES:
            _emit(ctx, HorizontalRule())
        else:
            _emit(ctx, Paragraph(text))
    elif mode is ParserMode.TABLE_ROW:
        row = ctx.text.strip()
        alignments = _parse_separator_row(row)
        if alignments is None:
            _emit(ctx, Paragraph(row))
        else:
            ctx.column_alignments = alignments
    elif mode is ParserMode.FENCE_INFO:
        ctx.fence_info = _take_text(ctx).strip()
        if at_eof:
            logger.debug("Code fence %r cut off by the end of input", ctx.fence_info)
            _emit(ctx, CodeBlock(""))
        else:
            ctx.code_line_start = 0
            ctx.mode = ParserMode.CODE_BLOCK
            ctx.at_line_start = True
            return
    elif mode is ParserMode.BACKTICK_RUN:
        # Only reached at the end of input.
        if ctx.run_at_line_start and ctx.backtick_run >= CODE_FENCE_MIN_RUN:
            _emit(ctx, CodeBlock(""))
        else:
            _emit(ctx, Paragraph(CODE_MARKER * ctx.backtick_run))
    else:
        # Unterminated bold, italic, or code span.
        text = ctx.text
        if text:
            logger.debug("Unterminated %s span kept as paragraph text", mode.name.lower())
            _emit(ctx, Paragraph(text))

    _reset_line_state(ctx)


def _handle_inline(ctx: ParserContext, char: str, line_start: bool) -> None:
    """Open an inline construct, or add paragraph text, from `NONE`/`PARAGRAPH`."""
    if char in (BOLD_MARKER, ITALIC_MARKER):
        _flush_paragraph(ctx)
        ctx.mode = ParserMode.BOLD if char == BOLD_MARKER else ParserMode.ITALIC
        ctx.delimiter = char
        ctx.delimiter_run = 1
    elif char == "[":
        kind = LinkKind.LINK
        if ctx.mode is ParserMode.PARAGRAPH and ctx.buffer and ctx.buffer[-1] == IMAGE_MARKER:
            ctx.buffer.pop()
            kind = LinkKind.IMAGE
        _flush_paragraph(ctx)
        ctx.mode = ParserMode.LINK_TEXT
        ctx.link = LinkCapture(kind=kind)
    elif char == CODE_MARKER:
        _flush_paragraph(ctx)
        ctx.mode = ParserMode.BACKTICK_RUN
        ctx.backtick_run = 1
        ctx.closing_run = 0
        ctx.run_at_line_start = line_start
    else:
        ctx.mode = ParserMode.PARAGRAPH
        ctx.buffer.append(char)


def _handle_none(ctx: ParserContext, char: str) -> None:
    if char == "\n":
        _end_line(ctx)
        return
    if char in WHITESPACE:
        return

    line_start = ctx.at_line_start
    if line_start:
        if char == DASH_MARKER:
            ctx.mode = ParserMode.DASH_RUN
            ctx.buffer.append(char)
            ctx.at_line_start = False
            return

        _close_list(ctx)
        if char == HEADER_MARKER:
            # Stays at line start while the marker run continues.
            ctx.mode = ParserMode.HEADER
            ctx.header_level = 1
            return
        if char == QUOTE_MARKER:
            ctx.mode = ParserMode.QUOTE
            ctx.at_line_start = False
            return
        if char == TABLE_MARKER:
            ctx.mode = ParserMode.TABLE_ROW
            ctx.buffer.append(char)
            ctx.at_line_start = False
            return

    ctx.at_line_start = False
    _handle_inline(ctx, char, line_start)


def _handle_paragraph(ctx: ParserContext, char: str) -> None:
    if char == "\n":
        _end_line(ctx)
    elif char in WHITESPACE:
        ctx.buffer.append(char)
    else:
        _handle_inline(ctx, char, False)


def _handle_header(ctx: ParserContext, char: str) -> None:
    if char == "\n":
        _end_line(ctx)
        return
    if ctx.at_line_start and char == HEADER_MARKER:
        ctx.header_level = min(ctx.header_level + 1, MAX_HEADER_LEVEL)
        return
    ctx.at_line_start = False
    if char in WHITESPACE and not ctx.buffer:
        return
    ctx.buffer.append(char)


def _handle_line_text(ctx: ParserContext, char: str) -> None:
    """Collect quote and list-item text, dropping leading whitespace."""
    if char == "\n":
        _end_line(ctx)
    elif char in WHITESPACE and not ctx.buffer:
        return
    else:
        ctx.buffer.append(char)


def _handle_list_item(ctx: ParserContext, char: str) -> None:
    """Collect list-item text; a `-` after item text starts the next item."""
    if char == DASH_MARKER and ctx.buffer:
        ctx.list_items.append(ctx.text.rstrip())
        ctx.buffer.clear()
        return
    _handle_line_text(ctx, char)


def _handle_emphasis(ctx: ParserContext, char: str) -> None:
    if char == "\n":
        _end_line(ctx)
        return
    if char != ctx.delimiter:
        ctx.buffer.append(char)
        return
    if not ctx.buffer:
        ctx.delimiter_run += 1
        return

    text = _take_text(ctx)
    _emit(ctx, Bold(text) if ctx.mode is ParserMode.BOLD else Italic(text))
    ctx.skip_char = ctx.delimiter
    ctx.skip_count = ctx.delimiter_run - 1
    ctx.mode = ParserMode.NONE
    ctx.delimiter = None
    ctx.delimiter_run = 0


def _handle_link_text(ctx: ParserContext, char: str) -> None:
    if char == "\n":
        _end_line(ctx)
    elif char == "]":
        ctx.link.text = _take_text(ctx)
        ctx.mode = ParserMode.LINK_CLOSE
    else:
        ctx.buffer.append(char)


def _handle_link_close(ctx: ParserContext, char: str) -> None:
    if char == "(":
        ctx.mode = ParserMode.LINK_URL
        return
    _degrade_link(ctx)
    _dispatch(ctx, char)


def _handle_link_url(ctx: ParserContext, char: str) -> None:
    if char == "\n":
        _end_line(ctx)
        return
    if char != ")":
        ctx.buffer.append(char)
        return

    link = ctx.link
    link.url = _take_text(ctx).strip()
    if link.kind is LinkKind.IMAGE:
        _emit(ctx, Image(link.text, link.url))
    else:
        _emit(ctx, Link(link.text, link.url))
    ctx.link = None
    ctx.mode = ParserMode.NONE


def _handle_backtick_run(ctx: ParserContext, char: str) -> None:
    if char == CODE_MARKER:
        ctx.backtick_run += 1
        return
    if ctx.run_at_line_start and ctx.backtick_run >= CODE_FENCE_MIN_RUN:
        ctx.mode = ParserMode.FENCE_INFO
    else:
        ctx.mode = ParserMode.INLINE_CODE
    _dispatch(ctx, char)


def _handle_code_span(ctx: ParserContext, char: str) -> None:
    """Collect an inline code span or the info string of a fence line.

    A backtick run matching the opening run closes the span as `Code`.
    """
    if char == CODE_MARKER:
        ctx.closing_run += 1
        return
    if ctx.closing_run:
        if ctx.closing_run == ctx.backtick_run:
            _emit(ctx, Code(_take_text(ctx)))
            ctx.mode = ParserMode.NONE
            ctx.backtick_run = 0
            ctx.closing_run = 0
            _dispatch(ctx, char)
            return
        ctx.buffer.append(CODE_MARKER * ctx.closing_run)
        ctx.closing_run = 0
    if char == "\n":
        _end_line(ctx)
    else:
        ctx.buffer.append(char)


def _handle_code_block(ctx: ParserContext, char: str) -> None:
    if char == "\n":
        _end_line(ctx)
    else:
        ctx.buffer.append(char)


def _handle_dash_run(ctx: ParserContext, char: str) -> None:
    """Decide between a list item, a horizontal rule, and plain text."""
    if char == "\n":
        _end_line(ctx)
        return

    last = ctx.buffer[-1]
    if char == DASH_MARKER and last == DASH_MARKER:
        ctx.buffer.append(char)
        return
    if char in WHITESPACE:
        if len(ctx.buffer) == 1:
            ctx.buffer.clear()
            ctx.mode = ParserMode.LIST_ITEM
            return
        if last in WHITESPACE or len(ctx.buffer) >= HORIZONTAL_RULE_MIN_DASHES:
            ctx.buffer.append(char)
            return

    _close_list(ctx)
    ctx.mode = ParserMode.PARAGRAPH
    _handle_paragraph(ctx, char)


def _handle_table_row(ctx: ParserContext, char: str) -> None:
    if char == "\n":
        _end_line(ctx)
    else:
        ctx.buffer.append(char)


_HANDLERS = {
    ParserMode.NONE: _handle_none,
    ParserMode.PARAGRAPH: _handle_paragraph,
    ParserMode.HEADER: _handle_header,
    ParserMode.BOLD: _handle_emphasis,
    ParserMode.ITALIC: _handle_emphasis,
    ParserMode.LINK_TEXT: _handle_link_text,
    ParserMode.LINK_CLOSE: _handle_link_close,
    ParserMode.LINK_URL: _handle_link_url,
    ParserMode.BACKTICK_RUN: _handle_backtick_run,
    ParserMode.INLINE_CODE: _handle_code_span,
    ParserMode.FENCE_INFO: _handle_code_span,
    ParserMode.CODE_BLOCK: _handle_code_block,
    ParserMode.QUOTE: _handle_line_text,
    ParserMode.DASH_RUN: _handle_dash_run,
    ParserMode.LIST_ITEM: _handle_list_item,
    ParserMode.TABLE_ROW: _handle_table_row,
}


def _dispatch(ctx: ParserContext, char: str) -> None:
    _HANDLERS[ctx.mode](ctx, char)


def _feed(ctx: ParserContext, char: str) -> None:
    """Advance the scanner by one character.

    A ``\\r\\n`` pair and a bare ``\\r`` both end a line.

    Args:
        ctx: Parser context to update.
        char: Next character of the source.
    """
    if ctx.after_carriage_return:
        ctx.after_carriage_return = False
        if char != "\n":
            _advance(ctx, "\n")
    if char == "\r":
        ctx.after_carriage_return = True
        return
    _advance(ctx, char)


def _advance(ctx: ParserContext, char: str) -> None:
    if ctx.skip_count:
        if char == ctx.skip_char:
            ctx.skip_count -= 1
            return
        ctx.skip_char = None
        ctx.skip_count = 0
    _dispatch(ctx, char)


def _finish(ctx: ParserContext) -> None:
    """Flush whatever is still open once the input is exhausted."""
    if ctx.after_carriage_return:
        ctx.after_carriage_return = False
        _advance(ctx, "\n")
    _end_line(ctx, at_eof=True)
    _close_list(ctx)


def _drain(ctx: ParserContext) -> list[Element]:
    elements, ctx.pending = ctx.pending, []
    return elements


def iter_elements(source: str) -> Iterator[Element]:
    """Lazily parse Markdown text into elements.

    Elements are yielded as soon as the scanner emits them, so the caller can
    stop early on large documents.

    Args:
        source: Markdown text to parse.

    Yields:
        Element: Parsed elements in document order.

    Examples:
        next(iter_elements("# Title\\nBody\\n"))  # Header(level=1, text="Title")
    """
    ctx = ParserContext()
    for char in source:
        _feed(ctx, char)
        if ctx.pending:
            yield from _drain(ctx)
    _finish(ctx)
    yield from _drain(ctx)


def parse(source: str) -> list[Element]:
    """Parse Markdown text into a flat list of elements.

    Never raises: malformed constructs degrade to `Paragraph` text and
    unterminated spans are flushed at the end of the line or input.

    Args:
        source: Markdown text to parse.

    Returns:
        list[Element]: Elements in document order.

    Examples:
        parse("# Service Alert\\nRoute 15 is delayed.\\n")
        # [Header(1, "Service Alert"), Paragraph("Route 15 is delayed.")]
    """
    return list(iter_elements(source))


def read_markdown_file(filepath: Path, config: RenderConfig | None = None) -> str:
    """Read a Markdown file after applying the configured safety checks.

    Args:
        filepath: Path to the Markdown file to read.
        config: Configuration providing the file size limit; defaults to a new
            `RenderConfig` when omitted.

    Returns:
        str: File contents.

    Raises:
        ParseFileError: If configuration is invalid, the file is too large, or
            the file cannot be read or decoded.

    Examples:
        body = read_markdown_file(Path("advisory.md"))
    """
    config = config or RenderConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ParseFileError(str(error)) from error

    try:
        enforce_file_size(collect_file_stat(filepath), config.max_file_size, filepath)
        with safe_read(filepath) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ParseFileError(error_message) from error
    except RenderError as error:
        raise ParseFileError(f"{filepath}: {error}") from error
    except IOError as error:
        raise ParseFileError(str(error)) from error

    logger.debug("Read %s (%d characters)", filepath, len(content))
    return content


def parse_file(filepath: Path, config: RenderConfig | None = None) -> list[Element]:
    """Read a Markdown file and parse it into elements.

    Args:
        filepath: Path to the Markdown file to parse.
        config: Configuration providing the file size limit.

    Returns:
        list[Element]: Elements parsed from the file.

    Raises:
        ParseFileError: If the file cannot be read; see `read_markdown_file`.
    """
    return parse(read_markdown_file(filepath, config))
