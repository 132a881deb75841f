"""
Base Fetcher Module

This module defines the abstract base class for all fetchers in htmlharvest.
All fetcher implementations should inherit from BaseFetcher and implement its abstract methods.
"""

from abc import ABC, abstractmethod
from typing import NamedTuple, Optional


class FetchedPage(NamedTuple):
    """Raw markup retrieved from a URL, before parsing."""
    url: str
    content: bytes
    encoding: Optional[str] = None
    status_code: Optional[int] = None


class BaseFetcher(ABC):
    """
    Abstract base class for all fetcher implementations.

    This class defines the common interface that all fetchers must implement.
    """

    @abstractmethod
    def fetch(self, url: str) -> FetchedPage:
        """
        Fetch raw markup from a given URL.

        Args:
            url (str): The URL to fetch content from

        Returns:
            FetchedPage: The final URL, the raw bytes and the declared encoding

        Raises:
            FetchError: If the page cannot be retrieved
        """
        pass

    def close(self) -> None:
        """Release any resources held by the fetcher."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
