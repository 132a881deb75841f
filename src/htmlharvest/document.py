"""
Document Loader Module

Turns a URL, a file or raw markup into a parsed, queryable Document.
"""

from __future__ import annotations

import codecs
import logging
from pathlib import Path
from urllib.parse import urlparse

from bs4 import BeautifulSoup, FeatureNotFound, ParserRejectedMarkup, Tag

from .config import FetchConfig
from .exceptions import FetchError, ParseError
from .fetchers.base_fetcher import BaseFetcher
from .fetchers.http_fetcher import HttpFetcher

logger = logging.getLogger(__name__)

_UNICODE_BOMS = (
    codecs.BOM_UTF32_LE,
    codecs.BOM_UTF32_BE,
    codecs.BOM_UTF16_LE,
    codecs.BOM_UTF16_BE,
)
_SNIFF_BYTES = 1024


class Document:
    """One parsed HTML resource. Read-only once built."""

    __slots__ = ('_soup', '_url')

    def __init__(self, soup: BeautifulSoup, url: str | None = None):
        self._soup = soup
        self._url = url

    @property
    def root(self) -> BeautifulSoup:
        return self._soup

    @property
    def url(self) -> str | None:
        return self._url

    @property
    def title(self) -> str | None:
        title = self._soup.title
        return title.get_text() if title is not None else None

    def __repr__(self) -> str:
        return f"<Document url={self._url!r}>"


def _looks_binary(markup: str | bytes) -> bool:
    if isinstance(markup, str):
        return '\x00' in markup[:_SNIFF_BYTES]
    if markup.startswith(_UNICODE_BOMS):
        return False
    return b'\x00' in markup[:_SNIFF_BYTES]


def parse(markup: str | bytes, url: str | None = None, parser: str = 'lxml',
          from_encoding: str | None = None) -> Document:
    """
    Parse markup into a Document.

    Malformed HTML is repaired by the parser, not rejected. ParseError is
    reserved for input that is not HTML text at all.
    """
    if not isinstance(markup, (str, bytes)):
        raise ParseError(f"Expected str or bytes markup, got {type(markup).__name__}")
    if not markup.strip():
        raise ParseError("Markup is empty")
    if _looks_binary(markup):
        raise ParseError("Markup looks like binary data, not HTML")

    kwargs = {'multi_valued_attributes': None}
    if from_encoding and isinstance(markup, bytes):
        # lxml ignores aliases such as "latin-1"; pass the codec's own name.
        try:
            kwargs['from_encoding'] = codecs.lookup(from_encoding).name
        except LookupError as e:
            raise ParseError(f"Unknown encoding {from_encoding!r}") from e
    try:
        soup = BeautifulSoup(markup, parser, **kwargs)
    except FeatureNotFound as e:
        raise ParseError(f"Parser {parser!r} is not installed") from e
    except ParserRejectedMarkup as e:
        raise ParseError(f"Parser rejected markup: {e}") from e

    if soup.find(True) is None:
        raise ParseError("No elements found in markup")

    logger.debug(f"Parsed {len(markup)} characters of markup with {parser}")
    return Document(soup, url=url)


def is_url(source) -> bool:
    return isinstance(source, str) and urlparse(source.strip()).scheme in ('http', 'https')


def load(source: str | bytes | Path, config: FetchConfig | None = None,
         fetcher: BaseFetcher | None = None) -> Document:
    """
    Load a Document from a URL, a file path or raw markup.

    Strings starting with http:// or https:// are fetched; anything else that
    is a str or bytes is parsed as markup. Use a Path to read from disk.

    Raises:
        FetchError: If a URL or file cannot be retrieved
        ParseError: If the retrieved content is not HTML
    """
    config = config or FetchConfig()

    if isinstance(source, Path):
        try:
            content = source.read_bytes()
        except OSError as e:
            raise FetchError(str(source), str(e)) from e
        return parse(content, url=source.resolve().as_uri(), parser=config.parser)

    if is_url(source):
        url = source.strip()
        if fetcher is not None:
            page = fetcher.fetch(url)
        else:
            with HttpFetcher(config) as http:
                page = http.fetch(url)
        return parse(page.content, url=page.url, parser=config.parser,
                     from_encoding=page.encoding)

    return parse(source, parser=config.parser)


def as_tag(scope: Document | Tag) -> Tag:
    """Return the tree node to query for a Document or a Node."""
    if isinstance(scope, Document):
        return scope.root
    if isinstance(scope, Tag):
        return scope
    raise TypeError(f"Expected a Document or a Tag, got {type(scope).__name__}")
