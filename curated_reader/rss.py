"""RSS feed fetching and Markdown conversion for Curated Reader."""

import xml.etree.ElementTree as ET

import feedparser
import requests

from .config import FetcherConfig
from .errors import ConversionError, NetworkError, ParseError
from .logging_config import create_execution_logger
from .models import ConversionResult, Feed, FeedItem

# Elements every <item> must carry; dc:creator is optional
REQUIRED_ELEMENTS = ("guid", "title", "description", "link", "pubDate")

# bozo conditions that do not mean the document failed to parse
_BENIGN_BOZO = (feedparser.CharacterEncodingOverride, feedparser.NonXMLContentType)


class FeedProcessor:
    """Fetches the curated feed and converts each post to Markdown."""

    def __init__(
        self, config: FetcherConfig | None = None, execution_id: str | None = None
    ):
        """Initialize FeedProcessor with configuration.

        Args:
            config: Feed and converter endpoints, User-Agent and timeout
            execution_id: Execution ID for logging context
        """
        self.config = config or FetcherConfig()
        self.logger = create_execution_logger("feed_processor", execution_id)
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": self.config.user_agent})

        self.logger.info(
            "FeedProcessor initialized",
            feed_url=self.config.feed_url,
            converter_url=self.config.converter_url,
            timeout=self.config.timeout,
        )

    def fetch_posts(self) -> list[FeedItem]:
        """Fetch the feed and attach Markdown to every post.

        Returns:
            Posts in feed order, each with a conversion result

        Raises:
            NetworkError: If the feed cannot be downloaded
            ParseError: If the feed document is invalid
        """
        return self.fetch_feed_with_posts().items

    def fetch_feed_with_posts(self) -> Feed:
        """Fetch the feed and convert its posts, keeping channel metadata."""
        self.logger.log_execution_start(feed_url=self.config.feed_url)

        try:
            feed = self.parse_feed(self.fetch_feed())
        except (NetworkError, ParseError) as e:
            self.logger.error(
                f"Failed to fetch posts: {e}",
                feed_url=self.config.feed_url,
                error=str(e),
            )
            self.logger.log_execution_end(success=False)
            raise

        failed = self.convert_items(feed.items)

        self.logger.log_execution_end(
            success=True,
            total_items=len(feed.items),
            failed_conversions=failed,
        )
        return feed

    def fetch_feed(self) -> bytes:
        """Download the raw feed document.

        Raises:
            NetworkError: On invalid URL, connection failure or non-2xx status
        """
        feed_url = self.config.feed_url
        self.logger.info("Downloading feed content", feed_url=feed_url)
        try:
            response = self.session.get(feed_url, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError(f"Failed to download feed {feed_url}: {e}") from e

        self.logger.info(
            "Feed downloaded successfully",
            feed_url=feed_url,
            status_code=response.status_code,
            content_length=len(response.content),
        )
        return response.content

    def parse_feed(self, content: bytes) -> Feed:
        """Parse an RSS 2.0 document into a Feed.

        The item HTML is kept exactly as published: feedparser's sanitizer
        and relative URI resolution are disabled.

        Args:
            content: Raw XML bytes

        Returns:
            Feed with channel metadata and items in document order

        Raises:
            ParseError: If the XML is malformed, has no channel, or an item
                lacks a required element
        """
        parsed = feedparser.parse(
            content, sanitize_html=False, resolve_relative_uris=False
        )

        if parsed.bozo and not isinstance(parsed.get("bozo_exception"), _BENIGN_BOZO):
            raise ParseError(f"Malformed feed XML: {parsed.get('bozo_exception')}")

        # feedparser fills gaps from other elements (guid into link,
        # content:encoded into summary), so presence is checked on the raw tree
        elements = self.validate_structure(content)
        if len(elements) != len(parsed.entries):
            raise ParseError(
                f"Found {len(elements)} <item> elements but parsed {len(parsed.entries)} entries"
            )

        items = [
            self.normalize_item(entry, element)
            for entry, element in zip(parsed.entries, elements)
        ]

        channel = parsed.feed
        feed = Feed(
            title=channel.get("title", ""),
            description=channel.get("subtitle", ""),
            link=channel.get("link", ""),
            last_build_date=channel.get("updated", ""),
            items=items,
        )
        self.logger.info(
            "Successfully parsed feed",
            channel_title=feed.title,
            items_count=len(items),
        )
        return feed

    def validate_structure(self, content: bytes) -> list[ET.Element]:
        """Check the document is <rss><channel> and every item has its required elements.

        Returns:
            The channel's <item> elements in document order

        Raises:
            ParseError: On invalid XML, a missing channel, or a missing element
        """
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise ParseError(f"Malformed feed XML: {e}") from e

        if root.tag != "rss":
            raise ParseError(f"Not an RSS document (root element: {root.tag})")

        channel = root.find("channel")
        if channel is None:
            raise ParseError("RSS document missing <channel> element")

        elements = channel.findall("item")
        for index, item in enumerate(elements):
            missing = [tag for tag in REQUIRED_ELEMENTS if item.find(tag) is None]
            if missing:
                raise ParseError(
                    f"Feed item {index} is missing required field(s): {', '.join(missing)}"
                )
        return elements

    def normalize_item(self, entry: dict, element: ET.Element) -> FeedItem:
        """Build a FeedItem from a feedparser entry and its raw <item> element.

        Description and link come from the raw element: the HTML reaches the
        converter exactly as published, and a permalink guid never stands in
        for a missing link.
        """
        # dc:creator is exposed by feedparser as author
        creator = entry.get("author") or None

        return FeedItem(
            guid=entry.get("id", ""),
            title=entry.get("title", ""),
            description=element.findtext("description", default=""),
            link=element.findtext("link", default="").strip(),
            pub_date=entry.get("published", ""),
            creator=creator,
        )

    def convert_items(self, items: list[FeedItem]) -> int:
        """Convert each item's HTML in order, one request at a time.

        A failed conversion marks that item and moves on to the next.

        Returns:
            Number of failed conversions
        """
        failed = 0
        for item in items:
            try:
                item.conversion = ConversionResult.success(
                    self.convert_html(item.description)
                )
            except ConversionError as e:
                item.conversion = ConversionResult.failure(str(e))
                failed += 1
            self.logger.log_item_conversion(
                item.guid, item.title, success=not item.conversion_failed
            )
        return failed

    def convert_html(self, html: str) -> str:
        """Convert HTML through the conversion service.

        Args:
            html: Raw HTML body of a post

        Returns:
            Markdown text returned by the service

        Raises:
            ConversionError: If the service is unreachable, answers with a
                non-2xx status, or returns a body that is not UTF-8
        """
        try:
            response = self.session.post(
                self.config.converter_url,
                data=html.encode("utf-8"),
                headers={"Content-Type": "text/plain"},
                timeout=self.config.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise ConversionError(f"Conversion request failed: {e}") from e

        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ConversionError(f"Conversion response is not UTF-8: {e}") from e
