"""HTML rendering for parsed Markdown elements."""

from __future__ import annotations

import html
from collections.abc import Iterable
from dataclasses import fields, replace

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
from .parser import parse


def render_element(element: Element) -> str:
    """Render a single element to its HTML fragment.

    Content is inserted verbatim; run `escape_elements` first when the text is
    untrusted.

    Args:
        element: Element to render.

    Returns:
        str: HTML fragment for the element.

    Raises:
        TypeError: If `element` is not one of the element types.

    Examples:
        render_element(Header(2, "Detours"))  # "<h2>Detours</h2>"
    """
    if isinstance(element, Header):
        return f"<h{element.level}>{element.text}</h{element.level}>"
    if isinstance(element, List):
        items = "".join(f"<li>{item}</li>" for item in element.items)
        return f"<ul>{items}</ul>"
    if isinstance(element, Paragraph):
        return f"<p>{element.text}</p>"
    if isinstance(element, Bold):
        return f"<b>{element.text}</b>"
    if isinstance(element, Italic):
        return f"<i>{element.text}</i>"
    if isinstance(element, Link):
        return f'<a href="{element.url}">{element.text}</a>'
    if isinstance(element, Image):
        return f'<img src="{element.url}" alt="{element.alt_text}" />'
    if isinstance(element, Code):
        return f"<code>{element.text}</code>"
    if isinstance(element, CodeBlock):
        return f"<pre><code>{element.text}</code></pre>"
    if isinstance(element, Quote):
        return f"<blockquote>{element.text}</blockquote>"
    if isinstance(element, HorizontalRule):
        return "<hr />"
    raise TypeError(f"Cannot render {type(element).__name__!r} as HTML")


def render(elements: Iterable[Element]) -> str:
    """Render elements to HTML, concatenated in order with no separators.

    Args:
        elements: Elements to render, typically the result of `parse`.

    Returns:
        str: Concatenated HTML fragments.
    """
    return "".join(render_element(element) for element in elements)


def _escape_value(value: object) -> object:
    if isinstance(value, str):
        return html.escape(value, quote=True)
    if isinstance(value, tuple):
        return tuple(html.escape(item, quote=True) for item in value)
    return value


def escape_elements(elements: Iterable[Element]) -> list[Element]:
    """Return copies of `elements` with every text payload HTML-escaped.

    This pass is kept apart from parsing so the grammar and the escaping can be
    tested independently. Escaped text is safe inside element bodies and
    quoted attribute values.

    Args:
        elements: Elements to escape.

    Returns:
        list[Element]: Escaped elements in the same order.

    Examples:
        escape_elements([Paragraph("<b>")])  # [Paragraph("&lt;b&gt;")]
    """
    escaped = []
    for element in elements:
        changes = {
            field.name: _escape_value(getattr(element, field.name)) for field in fields(element)
        }
        escaped.append(replace(element, **changes))
    return escaped


def to_html(source: str, escape: bool = False) -> str:
    """Convert Markdown text to an HTML fragment.

    Args:
        source: Markdown text.
        escape: HTML-escape element text before rendering.

    Returns:
        str: Rendered HTML.

    Examples:
        to_html("# Service Alert\\nRoute 15 is delayed.\\n")
        # "<h1>Service Alert</h1><p>Route 15 is delayed.</p>"
    """
    elements = parse(source)
    if escape:
        elements = escape_elements(elements)
    return render(elements)
