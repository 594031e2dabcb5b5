"""HTML to Markdown conversion for Curated Reader."""

from bs4 import BeautifulSoup
from markdownify import ATX, MarkdownConverter


class GFMConverter(MarkdownConverter):
    """markdownify converter with GitHub-flavoured task list checkboxes.

    Tables and strikethrough are handled by markdownify itself; this adds
    ``<input type="checkbox">`` rendering as ``[ ]`` / ``[x]``.
    """

    def convert_input(self, el, text, parent_tags):
        if el.get("type", "").lower() != "checkbox":
            return text
        return "[x] " if el.has_attr("checked") else "[ ] "


class HtmlToMarkdown:
    """Stateless HTML to Markdown converter."""

    def __init__(self, heading_style: str = ATX):
        self.options = {
            "heading_style": heading_style.lower(),
            "bullets": "-",
            "strong_em_symbol": "*",
        }

    def convert(self, html: str) -> str:
        """Convert an HTML fragment to Markdown.

        Args:
            html: Raw HTML, possibly empty

        Returns:
            Markdown text; empty for empty input
        """
        if not html or not html.strip():
            return ""

        soup = BeautifulSoup(html, "html.parser")

        # Remove script and style elements
        for element in soup(["script", "style"]):
            element.decompose()

        # A fresh converter per call keeps conversions independent
        return GFMConverter(**self.options).convert_soup(soup)


def html_to_markdown(html: str, heading_style: str = ATX) -> str:
    """Convert HTML to Markdown with the default converter settings."""
    return HtmlToMarkdown(heading_style=heading_style).convert(html)
