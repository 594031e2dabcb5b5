"""Exception hierarchy for Curated Reader."""


class ReaderError(Exception):
    """Base class for all reader errors."""


class NetworkError(ReaderError):
    """Feed endpoint unreachable, returned a non-2xx status, or the URL is invalid."""


class ParseError(ReaderError):
    """Feed document is not valid RSS or an item lacks a required field."""


class ConversionError(ReaderError):
    """A single post's HTML could not be converted to Markdown."""
