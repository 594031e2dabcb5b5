"""Property-based tests for HTML to Markdown conversion."""

from hypothesis import given
from hypothesis import strategies as st

from curated_reader.convert import HtmlToMarkdown

words = st.text(
    alphabet=st.characters(whitelist_categories=("Lu", "Ll", "Nd")),
    min_size=1,
    max_size=20,
)


class TestHtmlToMarkdownProperties:
    """Property-based tests for HtmlToMarkdown."""

    @given(st.text(max_size=300))
    def test_conversion_is_idempotent_property(self, html):
        """Converting the same HTML twice yields byte-identical Markdown."""
        converter = HtmlToMarkdown()

        assert converter.convert(html) == converter.convert(html)

    @given(words)
    def test_bold_maps_to_strong_emphasis_property(self, word):
        """<b>word</b> always becomes **word**."""
        assert HtmlToMarkdown().convert(f"<b>{word}</b>") == f"**{word}**"

    @given(st.lists(words, min_size=1, max_size=5))
    def test_paragraph_text_preserved_property(self, paragraphs):
        """Plain paragraph text survives conversion."""
        html = "".join(f"<p>{text}</p>" for text in paragraphs)

        markdown = HtmlToMarkdown().convert(html)

        for text in paragraphs:
            assert text in markdown
