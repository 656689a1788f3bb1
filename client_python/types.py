"""
Typed response models for the dictionary lookup functions.

These mirror the JSON bodies returned by find_words and dictionary_generator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional


SUCCESS_CODE = -1


@dataclass
class WordVariety:
    """Dictionary content for one grammatical type."""

    type: str
    meanings: List[str] = field(default_factory=list)
    translations: List[str] = field(default_factory=list)
    synonyms: List[str] = field(default_factory=list)
    antonyms: List[str] = field(default_factory=list)
    examples: List[str] = field(default_factory=list)
    variants: List[str] = field(default_factory=list)


@dataclass
class WordDocument:
    """A dictionary record as returned by the functions."""

    words: str
    word_count: int = 0
    plural: str = ""
    types: List[str] = field(default_factory=list)
    varieties: List[WordVariety] = field(default_factory=list)
    image_url: str = ""
    combinations: List[str] = field(default_factory=list)

    def variety(self, type_name: str) -> Optional[WordVariety]:
        """Get the variety for a grammatical type, if the word has it."""
        for variety in self.varieties:
            if variety.type == type_name:
                return variety
        return None


@dataclass
class LookupResponse:
    """Response of find_words / dictionary_generator."""

    docs: List[WordDocument] = field(default_factory=list)
    error: str = ""
    error_code: int = SUCCESS_CODE
    exact_match: bool = False

    @property
    def success(self) -> bool:
        return self.error_code == SUCCESS_CODE


# =============================================================================
# Conversion helpers
# =============================================================================

def word_variety_from_dict(data: dict[str, Any]) -> WordVariety:
    return WordVariety(
        type=data.get("type", ""),
        meanings=list(data.get("meanings", [])),
        translations=list(data.get("translations", [])),
        synonyms=list(data.get("synonyms", [])),
        antonyms=list(data.get("antonyms", [])),
        examples=list(data.get("examples", [])),
        variants=list(data.get("variants", [])),
    )


def word_document_from_dict(data: dict[str, Any]) -> WordDocument:
    words = data.get("words", "")
    return WordDocument(
        words=words,
        word_count=data.get("wordCount", len(words.split())),
        plural=data.get("plural", ""),
        types=list(data.get("types", [])),
        varieties=[word_variety_from_dict(v) for v in data.get("varieties", [])],
        image_url=data.get("imageUrl", ""),
        combinations=list(data.get("combinations", [])),
    )


def lookup_response_from_dict(data: dict[str, Any]) -> LookupResponse:
    return LookupResponse(
        docs=[word_document_from_dict(d) for d in data.get("docs", [])],
        error=data.get("error", ""),
        error_code=data.get("errorCode", SUCCESS_CODE),
        exact_match=data.get("exactMatch", False),
    )
