"""
Record Extraction Module

Batch extraction over repeated structures: many record nodes on one page, or
many pages loaded together. Every record and every document is handled on its
own, so a missing field or a failed fetch never shifts or aborts the others.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Iterable, List, Mapping, Optional, Sequence, TypeVar

from bs4 import Tag

from .config import FetchConfig
from .document import Document, load
from .exceptions import HarvestError
from .extractor import attribute, text
from .fetchers.base_fetcher import BaseFetcher
from .selector import select_all, select_first
from .utils.text_normalizer import DEFAULT_RULES, Rule, normalize

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass(frozen=True)
class Field:
    """
    How to pull one value out of a record node.

    Attributes:
        selector: CSS selector for the sub-element, relative to the record.
            None targets the record node itself.
        attr: Attribute to read. None reads the element's text.
        normalize: Run the extracted text through the normalization rules.
    """
    selector: Optional[str] = None
    attr: Optional[str] = None
    normalize: bool = False


def extract_record(node: Tag, fields: Mapping[str, Field],
                   rules: Sequence[Rule] = DEFAULT_RULES) -> Dict[str, Optional[str]]:
    """Extract every field from one record; fields with no match are None."""
    record: Dict[str, Optional[str]] = {}
    for name, field in fields.items():
        target = node if field.selector is None else select_first(node, field.selector)
        if target is None:
            record[name] = None
            continue
        value = text(target) if field.attr is None else attribute(target, field.attr)
        if value is not None and field.normalize:
            value = normalize(value, rules)
        record[name] = value
    return record


def extract_records(scope: Document | Tag, record_selector: str,
                    fields: Mapping[str, Field],
                    rules: Sequence[Rule] = DEFAULT_RULES,
                    max_workers: Optional[int] = None) -> List[Dict[str, Optional[str]]]:
    """
    Extract one dict per node matching ``record_selector``, in document order.

    Args:
        scope: Document or Node containing the records
        record_selector: CSS selector matching each record node
        fields: Output field name -> Field
        rules: Normalization rules for fields with ``normalize=True``
        max_workers: Spread records over this many threads when greater than 1

    Returns:
        A list with exactly one entry per record node
    """
    nodes = select_all(scope, record_selector)
    logger.debug(f"Extracting {len(fields)} fields from {len(nodes)} records")

    if not max_workers or max_workers <= 1 or len(nodes) <= 1:
        return [extract_record(node, fields, rules) for node in nodes]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(lambda node: extract_record(node, fields, rules), nodes))


@dataclass
class BatchResult(Generic[T]):
    """Outcome for one source in a batch: a value or the error that replaced it."""
    source: Any
    value: Optional[T] = None
    error: Optional[HarvestError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _load_one(source, config: FetchConfig, fetcher: Optional[BaseFetcher]) -> BatchResult[Document]:
    try:
        return BatchResult(source, value=load(source, config=config, fetcher=fetcher))
    except HarvestError as e:
        logger.warning(f"Skipping {source!r}: {e}")
        return BatchResult(source, error=e)


def load_many(sources: Iterable[Any], config: Optional[FetchConfig] = None,
              fetcher: Optional[BaseFetcher] = None,
              max_workers: Optional[int] = None) -> List[BatchResult[Document]]:
    """
    Load several documents, keeping going past failures.

    Results come back in the order of ``sources``. A source that cannot be
    fetched or parsed yields a BatchResult carrying the FetchError/ParseError
    instead of a Document.
    """
    config = config or FetchConfig()
    sources = list(sources)

    if not max_workers or max_workers <= 1:
        results = [_load_one(source, config, fetcher) for source in sources]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(lambda s: _load_one(s, config, fetcher), sources))

    failed = sum(1 for result in results if not result.ok)
    if failed:
        logger.warning(f"{failed} of {len(results)} documents failed to load")
    return results


def map_documents(results: Iterable[BatchResult[Document]],
                  func: Callable[[Document], T]) -> List[BatchResult[T]]:
    """
    Apply an extraction function to every loaded document.

    Load failures are passed through unchanged; a HarvestError raised by
    ``func`` (for instance NoTableFound) is recorded for that document only.
    """
    mapped: List[BatchResult[T]] = []
    for result in results:
        if not result.ok:
            mapped.append(BatchResult(result.source, error=result.error))
            continue
        try:
            mapped.append(BatchResult(result.source, value=func(result.value)))
        except HarvestError as e:
            logger.error(f"Extraction failed for {result.source!r}: {e}")
            mapped.append(BatchResult(result.source, error=e))
    return mapped
