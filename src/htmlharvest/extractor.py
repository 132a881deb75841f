"""
Content Extractor Module

This module extracts values from selected nodes: text, attributes, tag names
and tables. Nothing here modifies the parsed tree.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

import pandas as pd
from bs4 import Tag

from .document import Document, as_tag
from .exceptions import NoTableFound

logger = logging.getLogger(__name__)

Table = List[List[str]]

_MAX_SPAN = 1000


def text(node: Document | Tag) -> str:
    """
    Concatenate all descendant text of a node in document order.

    Newlines are returned exactly as the parser produced them; use
    ``normalize`` for display-ready text.
    """
    return as_tag(node).get_text()


def texts(nodes: Iterable[Tag]) -> List[str]:
    """Extract the text of every node in a selection."""
    return [text(node) for node in nodes]


def attribute(node: Tag, name: str) -> str | None:
    """Return the value of one attribute, or None when the node lacks it."""
    return as_tag(node).attrs.get(name)


def attribute_values(nodes: Iterable[Tag], name: str) -> List[str | None]:
    """Extract one attribute from every node in a selection, None where missing."""
    return [attribute(node, name) for node in nodes]


def attributes(node: Tag) -> Dict[str, str]:
    """Return all attributes of a node, in the order they appear in the source."""
    return dict(as_tag(node).attrs)


def tag_name(node: Tag) -> str:
    """Return the element name of a node, e.g. ``"li"``."""
    return as_tag(node).name


def split_lines(raw: str) -> List[str]:
    """Split extracted text on newlines, dropping blank entries."""
    return [line for line in raw.split('\n') if line.strip()]


def _span(cell: Tag, name: str) -> int:
    try:
        value = int(cell.get(name, 1))
    except (TypeError, ValueError):
        return 1
    return min(max(value, 1), _MAX_SPAN)


def _own_rows(table_tag: Tag) -> List[Tag]:
    # Rows of nested tables belong to those tables.
    return [tr for tr in table_tag.find_all('tr') if tr.find_parent('table') is table_tag]


def _build_grid(table_tag: Tag, trim: bool) -> Table:
    grid: Table = []
    # column index -> [rows still to fill, value] for cells with rowspan > 1
    carried: Dict[int, list] = {}

    for tr in _own_rows(table_tag):
        row: List[str] = []
        filled = set()

        def place_carried(col: int):
            remaining, value = carried[col]
            row.append(value)
            filled.add(col)
            if remaining <= 1:
                del carried[col]
            else:
                carried[col][0] = remaining - 1

        for cell in tr.find_all(['td', 'th'], recursive=False):
            while len(row) in carried:
                place_carried(len(row))
            value = cell.get_text()
            if trim:
                value = value.strip()
            rowspan = _span(cell, 'rowspan')
            for _ in range(_span(cell, 'colspan')):
                col = len(row)
                row.append(value)
                if rowspan > 1:
                    carried[col] = [rowspan - 1, value]
                    filled.add(col)

        for col in sorted(carried):
            if col in filled:
                continue
            if col >= len(row):
                row.extend([''] * (col - len(row)))
                place_carried(col)
            elif carried[col][0] <= 1:
                # overlapped by a colspan in this row
                del carried[col]
            else:
                carried[col][0] -= 1

        grid.append(row)

    return grid


def table(node: Document | Tag, trim: bool = True) -> Table:
    """
    Parse the first table at or under a node into rows of cell strings.

    If ``node`` is itself a ``<table>`` it is used directly; otherwise its first
    ``<table>`` descendant is. The header row, if any, is simply the first row.
    Cells spanning several rows or columns are repeated into every position
    they cover. Pass a narrower node to reach a table that is not the first.

    Args:
        node: Document or Node to search
        trim: Strip surrounding whitespace from each cell

    Returns:
        List of rows, each a list of cell strings

    Raises:
        NoTableFound: If there is no table at or under the node
    """
    tag = as_tag(node)
    table_tag = tag if tag.name == 'table' else tag.find('table')
    if table_tag is None:
        raise NoTableFound(f"No <table> found under <{tag.name}>")

    grid = _build_grid(table_tag, trim)
    logger.debug(f"Extracted table with {len(grid)} rows")
    return grid


def table_to_dataframe(grid: Table, header: bool = True) -> pd.DataFrame:
    """
    Convert a table grid into a DataFrame.

    Short rows are padded with empty strings. With ``header`` the first row
    names the columns; unnamed columns are called X1, X2, ...
    """
    width = max((len(row) for row in grid), default=0)
    rows = [row + [''] * (width - len(row)) for row in grid]

    if not header or not rows:
        return pd.DataFrame(rows)

    columns = [name or f"X{i + 1}" for i, name in enumerate(rows[0])]
    return pd.DataFrame(rows[1:], columns=columns)
