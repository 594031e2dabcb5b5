"""Data models for Curated Reader."""

from dataclasses import dataclass, field
from datetime import datetime

from dateutil import parser as date_parser

CONVERSION_ERROR_MARKDOWN = "Error converting HTML to Markdown"
UNKNOWN_AUTHOR = "Unknown Author"


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of converting one post's HTML to Markdown."""

    ok: bool
    markdown: str = ""
    error: str | None = None

    @classmethod
    def success(cls, markdown: str) -> "ConversionResult":
        return cls(ok=True, markdown=markdown)

    @classmethod
    def failure(cls, error: str) -> "ConversionResult":
        return cls(ok=False, markdown=CONVERSION_ERROR_MARKDOWN, error=error)


@dataclass
class FeedItem:
    """Represents a single post from the RSS feed."""

    guid: str
    title: str
    description: str  # Raw HTML
    link: str
    pub_date: str  # Feed-native format, e.g. RFC 822
    creator: str | None = None
    conversion: ConversionResult | None = None

    @property
    def markdown_body(self) -> str:
        """Markdown for display; the sentinel text if conversion failed."""
        if self.conversion is None:
            return ""
        return self.conversion.markdown

    @property
    def conversion_failed(self) -> bool:
        return self.conversion is not None and not self.conversion.ok

    @property
    def display_creator(self) -> str:
        return self.creator or UNKNOWN_AUTHOR

    @property
    def published_at(self) -> datetime | None:
        """Parsed publication date, or None when the feed value is unparseable."""
        try:
            return date_parser.parse(self.pub_date)
        except (ValueError, TypeError, OverflowError):
            return None


@dataclass
class Feed:
    """An RSS channel and its items, in feed order."""

    title: str = ""
    description: str = ""
    link: str = ""
    last_build_date: str = ""
    items: list[FeedItem] = field(default_factory=list)
