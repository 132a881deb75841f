"""
HTTP Fetcher Module

This module retrieves HTML over plain HTTP GET requests.
It uses a requests Session, so cookies set by one page are sent with the next.
"""

import logging
from typing import Optional

import requests

from ..config import FetchConfig
from ..exceptions import FetchError
from .base_fetcher import BaseFetcher, FetchedPage


class HttpFetcher(BaseFetcher):
    """
    HTTP Fetcher Implementation

    Fetches pages with a single GET request each. No retries are attempted;
    the caller decides whether to fetch again.
    """

    def __init__(self, config: Optional[FetchConfig] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the HTTP fetcher.

        Args:
            config (Optional[FetchConfig]): Configuration options for the fetcher
            session (Optional[requests.Session]): Session to reuse; a new one is created otherwise
        """
        self.config = config or FetchConfig()
        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(logging.DEBUG if self.config.debug else logging.INFO)
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.session.headers.update(self.config.request_headers())

    def fetch(self, url: str) -> FetchedPage:
        """
        Fetch a page with an HTTP GET request.

        Args:
            url (str): The URL to fetch

        Returns:
            FetchedPage: Final URL after redirects, body bytes and the encoding
            declared in the Content-Type header (None if the server sent none)

        Raises:
            FetchError: On connection errors, timeouts and non-success status codes
        """
        self.logger.info(f"Fetching {url}")
        try:
            response = self.session.get(
                url,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            self.logger.error(f"Timed out fetching {url} after {self.config.timeout}s")
            raise FetchError(url, f"timed out after {self.config.timeout}s") from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            self.logger.error(f"Error status fetching {url}: {status}")
            raise FetchError(url, str(e), status_code=status) from e
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Error fetching {url}: {str(e)}")
            raise FetchError(url, str(e)) from e

        # requests guesses ISO-8859-1 for text/* without a charset; leave
        # detection to the parser in that case.
        content_type = response.headers.get('Content-Type', '')
        encoding = response.encoding if 'charset' in content_type.lower() else None

        self.logger.debug(f"Fetched {len(response.content)} bytes from {response.url}")
        return FetchedPage(
            url=response.url or url,
            content=response.content,
            encoding=encoding,
            status_code=response.status_code,
        )

    def close(self) -> None:
        if self._owns_session:
            self.session.close()
