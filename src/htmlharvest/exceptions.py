"""Exceptions raised by htmlharvest."""

from typing import Optional


class HarvestError(Exception):
    """Base class for all htmlharvest errors."""


class FetchError(HarvestError):
    """Raised when a document cannot be retrieved from a URL."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        detail = f"{message} (HTTP {status_code})" if status_code else message
        super().__init__(f"Failed to fetch {url}: {detail}")


class ParseError(HarvestError):
    """Raised when input cannot be parsed as HTML at all."""


class NoTableFound(HarvestError, LookupError):
    """Raised when table extraction finds no <table> under the node."""


class InvalidSelector(HarvestError, ValueError):
    """Raised when a CSS selector cannot be compiled."""

    def __init__(self, selector: str, message: str):
        self.selector = selector
        super().__init__(f"Invalid selector {selector!r}: {message}")
