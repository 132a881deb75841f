"""
Pagination Module

Walks multi-page listings either by following a "next page" link or by
loading numbered pages built from a URL pattern.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, List, Optional, Sequence
from urllib.parse import parse_qsl, urldefrag, urlencode, urljoin, urlparse, urlunparse

from .config import FetchConfig
from .document import Document, load
from .extractor import attribute
from .fetchers.base_fetcher import BaseFetcher
from .fetchers.http_fetcher import HttpFetcher
from .selector import select_first

logger = logging.getLogger(__name__)

# Query parameters that usually carry the page number, most likely first.
PAGE_PARAMS = ('page', 'p', 'pg', 'pagenum', 'page_num', 'pageno', 'start', 'offset')

_PAGE_SLOT = '{page}'
_RANGE = re.compile(r'^(\d+)\s*-\s*(\d+)$')


class PageSequence:
    """
    Lazy, finite sequence of Documents.

    Pages are found either by following a "next page" selector from ``start``,
    or, for sequences built with ``numbered``, from a fixed list of URLs.
    Nothing is fetched until iteration starts, and every new iteration starts
    again from the first page. A next-link walk ends when a page has no usable
    next link (missing, or not an http(s) URL), when the link points to a page
    already visited, or after ``max_pages``. Fetch and parse errors propagate
    to the caller.

    Example::

        for doc in PageSequence(url, "a.next"):
            titles.extend(texts(select_all(doc, "h2")))

        for doc in PageSequence.numbered("https://shop.example/list?page=1", "1-5"):
            ...
    """

    def __init__(self, start: str, next_selector: Optional[str] = None,
                 config: Optional[FetchConfig] = None,
                 fetcher: Optional[BaseFetcher] = None,
                 max_pages: Optional[int] = None,
                 urls: Optional[Sequence[str]] = None):
        if next_selector is None and urls is None:
            raise ValueError("PageSequence needs a next_selector or a list of urls")
        self.start = start
        self.next_selector = next_selector
        self.config = config or FetchConfig()
        self.fetcher = fetcher
        self.max_pages = max_pages
        self.urls = list(urls) if urls is not None else None

    @classmethod
    def numbered(cls, base_url: str, pages: Optional[str] = None,
                 url_pattern: Optional[str] = None, **kwargs) -> 'PageSequence':
        """
        Sequence over numbered pages, e.g. ``pages="1-3,5"``.

        ``url_pattern`` is detected from ``base_url`` when not given; see
        ``detect_url_pattern``. Without a pattern only ``base_url`` is loaded.
        """
        return cls(base_url, urls=page_urls(base_url, pages, url_pattern), **kwargs)

    def __iter__(self) -> Iterator[Document]:
        # One session per walk so cookies carry from page to page.
        if self.fetcher is not None:
            yield from self._walk(self.fetcher)
        else:
            with HttpFetcher(self.config) as fetcher:
                yield from self._walk(fetcher)

    def _walk(self, fetcher: BaseFetcher) -> Iterator[Document]:
        if self.urls is not None:
            for count, url in enumerate(self.urls[:self.max_pages]):
                logger.info(f"Scraping page {count + 1}: {url}")
                yield load(url, config=self.config, fetcher=fetcher)
            return

        visited = set()
        url: Optional[str] = self.start
        count = 0

        while url is not None and urldefrag(url)[0] not in visited:
            if self.max_pages is not None and count >= self.max_pages:
                logger.debug(f"Reached max_pages={self.max_pages}")
                return
            visited.add(urldefrag(url)[0])
            logger.info(f"Scraping page {count + 1}: {url}")
            document = load(url, config=self.config, fetcher=fetcher)
            count += 1
            yield document
            url = self.next_url(document)

    def next_url(self, document: Document) -> Optional[str]:
        """Absolute http(s) URL of the next page, or None on the last page."""
        link = select_first(document, self.next_selector)
        if link is None:
            return None
        href = (attribute(link, 'href') or '').strip()
        if not href:
            return None
        resolved = urldefrag(urljoin(document.url or self.start, href))[0]
        if urlparse(resolved).scheme not in ('http', 'https'):
            logger.debug(f"Ignoring next link {href!r}: not an http(s) URL")
            return None
        return resolved


def detect_url_pattern(url: str) -> Optional[str]:
    """
    Work out where the page number sits in a URL.

    A numeric query parameter gives ``"name={page}"``, preferring the names in
    PAGE_PARAMS over any other numeric parameter (so ``?id=42&page=2`` picks
    ``page``). Failing that, the last numeric path segment becomes ``{page}``,
    giving a path pattern such as ``"/list/{page}/"``.

    Returns:
        The pattern, or None if the URL carries no number
    """
    parsed_url = urlparse(url)
    numeric = [name for name, value in parse_qsl(parsed_url.query) if value.isdigit()]
    if numeric:
        preferred = [name for name in PAGE_PARAMS if name in numeric]
        return f"{(preferred or numeric)[0]}={_PAGE_SLOT}"

    segments = parsed_url.path.split('/')
    for i in reversed(range(len(segments))):
        if segments[i].isdigit():
            segments[i] = _PAGE_SLOT
            return '/'.join(segments)

    return None


def apply_url_pattern(base_url: str, pattern: str, page_num: int) -> str:
    """
    Build the URL of one page from a pattern made by detect_url_pattern.

    Query patterns (``"page={page}"``) replace or add that parameter and keep
    the others; path patterns (``"/list/{page}/"``) replace the path.

    Raises:
        ValueError: If the pattern has no ``{page}`` slot
    """
    if _PAGE_SLOT not in pattern:
        raise ValueError(f"URL pattern {pattern!r} has no {_PAGE_SLOT} slot")

    parsed_url = urlparse(base_url)
    value = pattern.replace(_PAGE_SLOT, str(page_num))
    if '=' not in pattern:
        return urlunparse(parsed_url._replace(path=value))

    name, number = value.split('=', 1)
    query = parse_qsl(parsed_url.query, keep_blank_values=True)
    if any(k == name for k, _ in query):
        query = [(k, number if k == name else v) for k, v in query]
    else:
        query.append((name, number))
    return urlunparse(parsed_url._replace(query=urlencode(query)))


def parse_page_numbers(pages: Optional[str]) -> List[int]:
    """
    Parse a page list such as ``"1-5"`` or ``"1,3,5"`` into sorted unique numbers.

    An empty list means ``[1]``.

    Raises:
        ValueError: For parts that are not a number or an ascending range
    """
    if not pages or not pages.strip():
        return [1]

    numbers = set()
    for part in (p.strip() for p in pages.split(',')):
        match = _RANGE.match(part)
        if match:
            first, last = int(match.group(1)), int(match.group(2))
            if first > last:
                raise ValueError(f"Page range {part!r} runs backwards")
            numbers.update(range(first, last + 1))
        elif part.isdigit():
            numbers.add(int(part))
        else:
            raise ValueError(f"Invalid page number {part!r}")

    return sorted(numbers)


def page_urls(base_url: str, pages: Optional[str] = None,
              url_pattern: Optional[str] = None) -> List[str]:
    """
    List the URLs of numbered pages.

    Without a detectable pattern only ``base_url`` itself is returned.
    """
    url_pattern = url_pattern or detect_url_pattern(base_url)
    if not url_pattern:
        return [base_url]
    return [apply_url_pattern(base_url, url_pattern, n) for n in parse_page_numbers(pages)]
