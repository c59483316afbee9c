from dataclasses import FrozenInstanceError

import pytest

from md_to_html.models import (
    Header,
    HorizontalRule,
    List,
    ParserContext,
    ParserMode,
    Paragraph,
)


def test_parser_mode_members():
    assert list(ParserMode) == [
        ParserMode.NONE,
        ParserMode.PARAGRAPH,
        ParserMode.HEADER,
        ParserMode.BOLD,
        ParserMode.ITALIC,
        ParserMode.LINK_TEXT,
        ParserMode.LINK_CLOSE,
        ParserMode.LINK_URL,
        ParserMode.BACKTICK_RUN,
        ParserMode.INLINE_CODE,
        ParserMode.FENCE_INFO,
        ParserMode.CODE_BLOCK,
        ParserMode.QUOTE,
        ParserMode.DASH_RUN,
        ParserMode.LIST_ITEM,
        ParserMode.TABLE_ROW,
    ]


def test_parser_context_defaults():
    ctx = ParserContext()

    assert ctx.mode is ParserMode.NONE
    assert ctx.buffer == []
    assert ctx.at_line_start is True
    assert ctx.header_level == 0
    assert ctx.list_items == []
    assert ctx.link is None
    assert ctx.column_alignments == []
    assert ctx.pending == []


def test_parser_contexts_do_not_share_buffers():
    first = ParserContext()
    second = ParserContext()

    first.buffer.append("x")
    first.list_items.append("item")

    assert second.buffer == []
    assert second.list_items == []


def test_parser_context_text_joins_buffer():
    ctx = ParserContext(buffer=list("Route 15"))

    assert ctx.text == "Route 15"


def test_list_items_are_stored_as_tuple():
    element = List(["one", "two"])

    assert element.items == ("one", "two")
    assert element == List(("one", "two"))


def test_elements_are_immutable():
    header = Header(1, "Title")

    with pytest.raises(FrozenInstanceError):
        header.text = "Changed"


def test_elements_compare_by_value():
    assert Paragraph("a") == Paragraph("a")
    assert Paragraph("a") != Paragraph("b")
    assert HorizontalRule() == HorizontalRule()
