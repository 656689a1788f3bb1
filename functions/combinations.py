"""
Phrase Combination Index Module

Utilities for the two-word inverted index used to find stored words:
- normalize_phrase: Canonical form of a request / document phrase
- make_combinations: All ordered two-word pairs of a phrase
- unique_combinations: Pairs with repeats collapsed (stored / queried form)
- divide_into_batches: Chunk values to fit Firestore's query value limit

A document is findable by a phrase when the phrase's combinations intersect
the document's stored ``combinations`` array, so the same functions run when
a document is written and when it is searched.

Note: This module has no Cloud Function entry points.
"""

import re
from typing import Sequence, TypeVar

from common import ARRAY_QUERY_LIMIT

T = TypeVar("T")

_DISALLOWED_CHARS = re.compile(r"[^\w\s'-]")
_WHITESPACE = re.compile(r"\s+")


def normalize_phrase(text: str) -> str:
    """
    Canonical phrase: lowercased, trimmed, single-spaced, without adjacent
    duplicate words.

    Characters outside word characters, apostrophes and hyphens are dropped,
    and so are underscores around words (Firestore reserves ids matching
    `__.*__`), so the phrase is always a valid Firestore document id.
    e.g., '  Hot   under the the COLLAR! ' -> 'hot under the collar'
    """
    text = _DISALLOWED_CHARS.sub("", text.lower())
    words: list[str] = []
    for word in _WHITESPACE.split(text.strip()):
        word = word.strip("_")
        if word and (not words or words[-1] != word):
            words.append(word)
    return " ".join(words)


def make_combinations(phrase: str) -> list[str]:
    """
    Make every ordered pair of two words within a phrase.

    For N words this yields N*(N-1)/2 pairs "word_i word_j" with i < j, in
    position order. Pairs are not limited to adjacent words. An empty or
    single-word phrase has no combinations.
    """
    words = phrase.split()
    return [
        f"{first} {second}"
        for i, first in enumerate(words)
        for second in words[i + 1:]
    ]


def unique_combinations(phrase: str) -> list[str]:
    """Combinations with repeats removed, keeping first-seen order."""
    return list(dict.fromkeys(make_combinations(phrase)))


def divide_into_batches(items: Sequence[T], batch_size: int = ARRAY_QUERY_LIMIT) -> list[list[T]]:
    """
    Split items into consecutive chunks of at most batch_size.

    Firestore's array_contains_any only accepts 10 values per query, so the
    combinations of a phrase are queried in chunks of 10.
    """
    if batch_size <= 0:
        raise ValueError("batch_size must be positive")
    return [list(items[i:i + batch_size]) for i in range(0, len(items), batch_size)]
