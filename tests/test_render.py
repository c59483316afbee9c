from __future__ import annotations

import pytest

from md_to_html.models import (
    Bold,
    Code,
    CodeBlock,
    Header,
    HorizontalRule,
    Image,
    Italic,
    Link,
    List,
    Paragraph,
    Quote,
)
from md_to_html.parser import parse
from md_to_html.renderer import escape_elements, render, render_element, to_html


@pytest.mark.parametrize(
    "element, expected",
    [
        (Header(1, "Title"), "<h1>Title</h1>"),
        (Header(4, "Minor"), "<h4>Minor</h4>"),
        (List(("one", "two")), "<ul><li>one</li><li>two</li></ul>"),
        (List(()), "<ul></ul>"),
        (Paragraph("text"), "<p>text</p>"),
        (Bold("strong"), "<b>strong</b>"),
        (Italic("soft"), "<i>soft</i>"),
        (Link("Transit", "https://example.com"), '<a href="https://example.com">Transit</a>'),
        (Image("Map", "map.png"), '<img src="map.png" alt="Map" />'),
        (Code("x"), "<code>x</code>"),
        (CodeBlock("a\nb"), "<pre><code>a\nb</code></pre>"),
        (Quote("said"), "<blockquote>said</blockquote>"),
        (HorizontalRule(), "<hr />"),
    ],
)
def test_render_element_templates(element, expected: str):
    assert render_element(element) == expected


def test_render_element_rejects_unknown_types():
    with pytest.raises(TypeError):
        render_element(object())


def test_render_concatenates_in_order():
    elements = [Paragraph("b"), Header(1, "a"), Paragraph("b")]

    assert render(elements) == "<p>b</p><h1>a</h1><p>b</p>"


def test_render_empty_sequence():
    assert render([]) == ""


def test_header_round_trip():
    assert render(parse("# Title\n")) == "<h1>Title</h1>"


def test_to_html_end_to_end():
    html = to_html("# Service Alert\nRoute 15 is delayed.\n")

    assert html == "<h1>Service Alert</h1><p>Route 15 is delayed.</p>"


def test_to_html_code_block():
    assert to_html("```\nx < y\n```\n") == "<pre><code>x < y</code></pre>"


def test_to_html_does_not_escape_by_default():
    assert to_html("<script>x</script>\n") == "<p><script>x</script></p>"


def test_to_html_escapes_on_request():
    html = to_html("<script>x</script>\n", escape=True)

    assert html == "<p>&lt;script&gt;x&lt;/script&gt;</p>"


def test_escape_elements_escapes_attributes():
    escaped = escape_elements([Link('say "hi"', 'x" onclick="y'), Image("a&b", "<img>")])

    assert escaped == [
        Link("say &quot;hi&quot;", "x&quot; onclick=&quot;y"),
        Image("a&amp;b", "&lt;img&gt;"),
    ]


def test_escape_elements_escapes_list_items_and_keeps_levels():
    escaped = escape_elements([List(("<a>", "b")), Header(2, "R&D"), HorizontalRule()])

    assert escaped == [List(("&lt;a&gt;", "b")), Header(2, "R&amp;D"), HorizontalRule()]


def test_escape_elements_leaves_input_unchanged():
    original = [Paragraph("<b>")]

    escape_elements(original)

    assert original == [Paragraph("<b>")]
