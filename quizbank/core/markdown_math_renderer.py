"""Markdown rendering for question text and explanations.

Text is passed through as written; ``$...$`` delimiters are not interpreted.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownMathRenderer:
    """Converts markdown into HTML fragments."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_optional(self, markdown_text: str | None) -> str | None:
        if markdown_text is None or not markdown_text.strip():
            return None
        return self.render_fragment(markdown_text)


renderer = MarkdownMathRenderer()
# MarkdownIt is safe for concurrent read-only renders, so the API shares this instance.
