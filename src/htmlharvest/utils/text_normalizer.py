"""Text normalization for extracted HTML text."""

import re
from typing import List, NamedTuple, Sequence, Tuple, Union

PatternLike = Union[str, re.Pattern]


class Rule(NamedTuple):
    """
    One substitution step: every match of ``pattern`` becomes ``replacement``.

    ``pattern`` may be a regex string or a compiled pattern.
    """
    pattern: PatternLike
    replacement: str

    @classmethod
    def of(cls, pattern: PatternLike, replacement: str) -> 'Rule':
        return cls(re.compile(pattern) if isinstance(pattern, str) else pattern, replacement)


RuleLike = Union[Rule, Tuple[PatternLike, str]]

# Applied in order; later rules see the output of earlier ones.
DEFAULT_RULES = (
    Rule.of(r'\n', ' '),
    Rule.of(r'\^', ' '),        # footnote markers
    Rule.of(r'"', ' '),
    Rule.of(r'\s+', ' '),
    Rule.of(r'^\s+|\s+$', ''),
)


def normalize(raw: str, rules: Sequence[RuleLike] = DEFAULT_RULES) -> str:
    """
    Run ``raw`` through each rule in turn and return the display-ready string.

    Rules are ``(pattern, replacement)`` pairs; string patterns are compiled
    as regular expressions (``re`` caches them).

    >>> normalize('a\\n^b"c   d')
    'a b c d'
    >>> normalize('a-b', [('-', ' ')])
    'a b'
    """
    text = raw
    for pattern, replacement in rules:
        text = re.sub(pattern, replacement, text)
    return text


def normalize_table(grid: Sequence[Sequence[str]],
                    rules: Sequence[RuleLike] = DEFAULT_RULES) -> List[List[str]]:
    """Normalize every cell of a table grid."""
    return [[normalize(cell, rules) for cell in row] for row in grid]
