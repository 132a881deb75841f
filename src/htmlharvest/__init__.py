"""
htmlharvest

Extract text, attributes and tables from HTML documents:
- load / parse: turn a URL, file or markup into a Document
- select_all / select_first / select_within: CSS selection
- text / attribute / attributes / table / tag_name: extraction
- normalize: whitespace and punctuation cleanup of extracted text
"""

from .config import FetchConfig
from .document import Document, load, parse
from .exceptions import FetchError, HarvestError, InvalidSelector, NoTableFound, ParseError
from .extractor import (
    attribute,
    attribute_values,
    attributes,
    split_lines,
    table,
    table_to_dataframe,
    tag_name,
    text,
    texts,
)
from .pagination import PageSequence, page_urls
from .records import BatchResult, Field, extract_record, extract_records, load_many, map_documents
from .selector import select_all, select_first, select_within
from .utils.text_normalizer import DEFAULT_RULES, Rule, normalize, normalize_table

__version__ = "0.1.0"
