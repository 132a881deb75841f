"""
Node Selector Module

CSS selection over a Document or a Node subtree.

Selecting all matches and selecting the first match are separate operations.
``select_first`` returns None when nothing matches, so a missing sub-field in
one repeated record never raises and never shifts the results of the others.
"""

from __future__ import annotations

import logging
from typing import List

import soupsieve
from bs4 import BeautifulSoup, Tag

from .document import Document, as_tag
from .exceptions import InvalidSelector

logger = logging.getLogger(__name__)


def _compile(selector: str):
    try:
        return soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as e:
        raise InvalidSelector(selector, str(e)) from e


def select_all(scope: Document | Tag, selector: str) -> List[Tag]:
    """
    Return every node matching ``selector`` under ``scope``, in document order.

    An empty list is a normal result.
    """
    matches = _compile(selector).select(as_tag(scope))
    logger.debug(f"Selector {selector!r} matched {len(matches)} nodes")
    return matches


def select_first(scope: Document | Tag, selector: str) -> Tag | None:
    """Return the first node matching ``selector``, or None if there is none."""
    return _compile(selector).select_one(as_tag(scope))


def select_within(node: Tag, selector: str) -> List[Tag]:
    """
    Return matches among the descendants of ``node`` only.

    Used to walk one repeated record at a time, e.g.::

        for card in select_all(doc, ".listing"):
            size = select_first(card, ".lot-size")   # None when missing
    """
    if not isinstance(node, Tag) or isinstance(node, BeautifulSoup):
        raise TypeError("select_within needs a Node inside a Document, not a Document")
    return [match for match in _compile(selector).select(node) if match is not node]
