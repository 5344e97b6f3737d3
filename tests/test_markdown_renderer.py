"""Tests for markdown rendering of question text."""

from __future__ import annotations

from quiz_service.core.markdown_renderer import MarkdownRenderer


def test_render_fragment_wraps_paragraph() -> None:
    html = MarkdownRenderer().render_fragment("What is **2+2**?")

    assert html.strip() == "<p>What is <strong>2+2</strong>?</p>"


def test_render_fragment_placeholder_for_blank_text() -> None:
    assert MarkdownRenderer().render_fragment("   ") == "<p><em>No content provided.</em></p>"


def test_render_inline_has_no_paragraph() -> None:
    assert MarkdownRenderer().render_inline(" `print()` ") == "<code>print()</code>"


def test_raw_html_is_escaped_by_default() -> None:
    html = MarkdownRenderer().render_fragment("<script>alert(1)</script>")

    assert "<script>" not in html
