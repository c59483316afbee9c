"""Service advisory formatting.

Advisories arrive as a title plus a Markdown body. Each one is rendered as a
collapsible ``<details>`` block whose summary is the title.
"""

from __future__ import annotations

import html
from collections.abc import Iterable
from dataclasses import dataclass

from .config import RenderConfig, validate_config
from .constants import ADVISORY_BULLET, DASH_MARKER
from .renderer import to_html


@dataclass(frozen=True)
class ServiceAdvisory:
    """A transit service advisory.

    Attributes:
        title: Short headline shown in the summary line.
        body: Markdown-formatted advisory text.
    """

    title: str
    body: str


def normalize_advisory_body(body: str) -> str:
    """Rewrite ``** `` bullet lines as Markdown list items.

    Args:
        body: Raw advisory body.

    Returns:
        str: Body where every line starting with ``** `` starts with ``- ``.

    Examples:
        normalize_advisory_body("Detours:\\n** Main St\\n")  # "Detours:\\n- Main St\\n"
    """
    lines = body.splitlines(keepends=True)
    return "".join(
        f"{DASH_MARKER} {line[len(ADVISORY_BULLET):]}" if line.startswith(ADVISORY_BULLET) else line
        for line in lines
    )


def format_advisory(advisory: ServiceAdvisory, config: RenderConfig | None = None) -> str:
    """Render one advisory as a ``<details>`` block.

    Args:
        advisory: Advisory to render.
        config: Classes, separator, and escaping settings. Defaults to a new
            `RenderConfig` when omitted.

    Returns:
        str: HTML for the advisory followed by the configured separator.

    Raises:
        ConfigError: If the configuration fails validation.
    """
    config = config or RenderConfig()
    validate_config(config)

    title = html.escape(advisory.title) if config.escape_html else advisory.title
    body_html = to_html(normalize_advisory_body(advisory.body), escape=config.escape_html)
    return (
        f'<details class="{config.advisory_class}">'
        f'<summary class="{config.summary_class}">{title}</summary>'
        f"{body_html}"
        "</details>"
        f"{config.separator}"
    )


def format_advisories(
    advisories: Iterable[ServiceAdvisory], config: RenderConfig | None = None
) -> str:
    """Render several advisories, in order, as one HTML string."""
    config = config or RenderConfig()
    return "".join(format_advisory(advisory, config) for advisory in advisories)
