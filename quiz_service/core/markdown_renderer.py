"""Markdown rendering for question text served to API clients.

Question text in the CSV is plain text that may carry inline markdown
(emphasis, code spans). The API returns the raw text and an HTML fragment
so browser clients do not each need a markdown parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownRenderer:
    """Converts markdown question text into HTML fragments."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = MarkdownIt("commonmark", {"html": self.enable_html}).enable("strikethrough")

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_inline(self, markdown_text: str) -> str:
        """Render without the wrapping paragraph, for option labels."""

        return self._markdown.renderInline(markdown_text.strip())


# Request threads share this instance; rendering does not mutate it.
renderer = MarkdownRenderer()
