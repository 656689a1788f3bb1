"""
Text Cleaning Module

Parsing helpers that turn Gemini's free-text answers into dictionary fields:
- clean_text / clean_array: Normalize one answer fragment / many
- type_alternation: Regex alternation naming the given grammatical types
- split_by_types: Tag every item of an answer with its grammatical type
- sort_by_type: Pick the items tagged with one type
- parse_singular_plural: Read "singular: x plural: y" answers

Note: This module has no Cloud Function entry points.
"""

from __future__ import annotations

import re
from typing import Iterable

# Labels the model may use for each type (English and Spanish answers)
TYPE_LABELS = {
    "noun": "noun|nombre|sustantivo",
    "verb": "verbo?",
    "adjective": "adjec?tiv[eo]",
    "adverb": "adverbi?o?",
    "pronoun": "pronoun|pronombre",
    "preposition": "preposi[ct]i[oó]n",
    "conjunction": "conjunct?i[oó]n",
    "interjection": "interjec[tc]i[oó]n",
    "idiom": "idiom|modismo|expresi[oó]n",
}

_LINE_BREAKS = re.compile(r"(?:\r?\n)+|\r+|\t+")
_REPEATED_WORD = re.compile(r"\b(\w+)(?=\W\1\b)\W?", re.IGNORECASE)
_TAGS_AND_ASSIGNMENTS = re.compile(r"<[^>]*>|[\s\S]*=+")
_STRAY_CHARS = re.compile(r"[^\w\s',;()?!]")
_LETTER_LISTING = re.compile(r"^\w\s?$|^[b-hj-z]\s+", re.IGNORECASE | re.MULTILINE)
_LEADING_AND = re.compile(r"^and\s")
_LEADING_SPANISH_FILLER = re.compile(
    r"^(?:a|[eé]l|las?|los|un[oa]?s?|[mt][ei]|[ts][ue]|n?os|(?:nue|vue)str[ao]s?) "
)
_HAS_WORD = re.compile(r"\w")
_ITEM_SEPARATORS = re.compile(r"\W*\d\W*|\s{2,}|;\s?")
_LINE_SEPARATORS = re.compile(r"(?:\r?\n)+|\r+|\n+")
_SINGULAR_PLURAL = re.compile(r"singular:\s?|plural:\s?", re.IGNORECASE)


def clean_text(text: str) -> str:
    """
    Clean one fragment of a model answer (or a raw request).

    Joins lines, drops repeated words, markup, stray punctuation, list
    letters and leading English/Spanish fillers; trims and lowercases.
    """
    text = _LINE_BREAKS.sub("  ", text)
    text = _REPEATED_WORD.sub("", text)
    text = _TAGS_AND_ASSIGNMENTS.sub("", text)
    text = _STRAY_CHARS.sub("", text)
    text = _LETTER_LISTING.sub("", text)
    text = text.strip().lower()
    text = _LEADING_AND.sub("", text)
    text = _LEADING_SPANISH_FILLER.sub("", text)
    return text.strip()


def clean_array(items: Iterable[str | None]) -> list[str]:
    """Clean every item, dropping items without word characters before and after."""
    cleaned = (clean_text(item) for item in items if item and _HAS_WORD.search(item))
    return [item for item in cleaned if _HAS_WORD.search(item)]


def type_alternation(types: Iterable[str]) -> str:
    return "|".join(TYPE_LABELS[t] for t in types if t in TYPE_LABELS)


def _canonical_type(label: str, types: list[str]) -> str | None:
    label = label.strip()
    for t in types:
        pattern = TYPE_LABELS.get(t)
        if pattern and re.fullmatch(pattern, label, re.IGNORECASE):
            return t
    return None


def split_by_types(text: str, types: list[str]) -> list[str]:
    """
    Split an answer covering several grammatical types into tagged items.

    Each returned item reads "content (type)". Answers are expected to label
    each group with its type ("Noun: a; b"). When the labels are missing or
    mangled ("noun; verb; ..."), each line is assumed to hold the items of
    the type at the same position in ``types``.
    """
    alternation = type_alternation(types)
    if not alternation:
        return []

    split_regex = re.compile(rf"\(?({alternation})\)?:?", re.IGNORECASE)
    mangled_regex = re.compile(rf"(?:(?:{alternation});\s?)+", re.IGNORECASE)

    merged: list[str] = []

    if not split_regex.search(text) or mangled_regex.search(text):
        text = mangled_regex.sub("", text, count=1)
        for i, line in enumerate(clean_array(_LINE_SEPARATORS.split(text))):
            if i >= len(types):
                break
            for content in clean_array(_ITEM_SEPARATORS.split(line)):
                merged.append(f"{content} ({types[i]})")
        return merged

    # re.split keeps the captured labels, so parts alternate label / content
    parts = clean_array(split_regex.split(text))
    for i in range(0, len(parts) - 1, 2):
        first, second = parts[i], parts[i + 1]
        label = _canonical_type(first, types)
        content = second
        if label is None:
            label = _canonical_type(second, types)
            content = first
        if label is None:
            continue
        for item in clean_array(_ITEM_SEPARATORS.split(content)):
            merged.append(f"{item} ({label})")
    return merged


def sort_by_type(items: Iterable[str], type_name: str) -> list[str]:
    """Items tagged "(type_name)", with the tag removed."""
    tag = re.compile(rf"\s\({re.escape(type_name)}\)", re.IGNORECASE)
    return [tag.sub("", item) for item in items if tag.search(item)]


def parse_singular_plural(text: str) -> tuple[str, str]:
    """
    Parse an answer to "Write the singular and plural for ...".

    The prompt already ends in "singular: ", so the answer usually reads
    "cat\\nplural: cats". Missing parts come back empty.
    """
    parts = clean_array(_SINGULAR_PLURAL.split(text))
    singular = parts[0] if parts else ""
    plural = parts[1] if len(parts) > 1 else ""
    return singular, plural
