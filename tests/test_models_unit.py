"""Unit tests for data models."""

from datetime import datetime

from curated_reader.models import (
    CONVERSION_ERROR_MARKDOWN,
    ConversionResult,
    Feed,
    FeedItem,
)


def make_item(**overrides) -> FeedItem:
    fields = {
        "guid": "post-1",
        "title": "Title",
        "description": "<p>Body</p>",
        "link": "https://example.com/post-1",
        "pub_date": "Mon, 01 Jan 2024 10:00:00 GMT",
    }
    fields.update(overrides)
    return FeedItem(**fields)


class TestFeedItem:
    """Unit tests for FeedItem."""

    def test_markdown_body_unset_before_conversion(self):
        item = make_item()

        assert item.markdown_body == ""
        assert not item.conversion_failed

    def test_successful_conversion(self):
        item = make_item(conversion=ConversionResult.success("Body"))

        assert item.markdown_body == "Body"
        assert not item.conversion_failed

    def test_failed_conversion_reads_as_sentinel(self):
        item = make_item(conversion=ConversionResult.failure("refused"))

        assert item.markdown_body == CONVERSION_ERROR_MARKDOWN
        assert item.conversion_failed
        assert item.conversion.error == "refused"

    def test_display_creator(self):
        assert make_item(creator="Alice").display_creator == "Alice"
        assert make_item(creator=None).display_creator == "Unknown Author"
        assert make_item(creator="").display_creator == "Unknown Author"

    def test_published_at_parses_rfc_822(self):
        published = make_item().published_at

        assert isinstance(published, datetime)
        assert (published.year, published.month, published.day) == (2024, 1, 1)

    def test_published_at_unparseable_is_none(self):
        assert make_item(pub_date="sometime last week").published_at is None


class TestFeed:
    """Unit tests for Feed."""

    def test_defaults(self):
        feed = Feed()

        assert feed.items == []
        assert feed.title == ""

    def test_items_not_shared_between_instances(self):
        first = Feed()
        first.items.append(make_item())

        assert Feed().items == []
