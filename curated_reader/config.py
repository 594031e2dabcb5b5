"""Configuration management for Curated Reader."""

import os
from dataclasses import dataclass

DEFAULT_FEED_URL = "https://www.lesswrong.com/feed.xml?view=curated-rss"
DEFAULT_CONVERTER_URL = "http://localhost:3000/"

# Some feed hosts reject the default requests agent
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/16.0 Safari/605.1.15"
)


@dataclass
class FetcherConfig:
    """Configuration for the feed fetcher."""

    feed_url: str = DEFAULT_FEED_URL
    converter_url: str = DEFAULT_CONVERTER_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 30.0


@dataclass
class ServerConfig:
    """Configuration for the HTML to Markdown conversion service."""

    host: str = "localhost"
    port: int = 3000
    heading_style: str = "ATX"

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"


class Config:
    """Main configuration manager."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.feed_url = os.getenv("CURATED_FEED_URL", DEFAULT_FEED_URL)
        self.converter_url = os.getenv("CONVERTER_URL", DEFAULT_CONVERTER_URL)
        self.converter_host = os.getenv("CONVERTER_HOST", "localhost")
        self.converter_port = self._read_number("CONVERTER_PORT", "3000", int)
        self.timeout = self._read_number("FETCH_TIMEOUT", "30", float)
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

    @staticmethod
    def _read_number(name: str, default: str, cast):
        raw = os.getenv(name, default)
        try:
            return cast(raw)
        except ValueError:
            raise ValueError(f"Invalid value for {name}: {raw!r}") from None

    def get_fetcher_config(self) -> FetcherConfig:
        """Get feed fetcher configuration."""
        return FetcherConfig(
            feed_url=self.feed_url,
            converter_url=self.converter_url,
            timeout=self.timeout,
        )

    def get_server_config(self) -> ServerConfig:
        """Get conversion service configuration."""
        return ServerConfig(host=self.converter_host, port=self.converter_port)
