"""
Word Types Module

Data types shared by the search, cache-fill and generator modules:
- WordVariety / WordDocument: the stored dictionary record
- ErrorKind / Failure / DictionaryError: typed lookup failures
- SearchResult: documents deduplicated by their phrase key

Note: This module has no Cloud Function entry points.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Failure categories reported to clients.

    The value is the numeric ``errorCode`` used on the wire.
    """

    INVALID_WORD = 1
    INVALID_PHRASE = 2
    EMPTY_REQUEST = 3
    LIMIT_EXCEEDED = 4
    INVALID_FORMAT = 5
    INTERNAL = 6
    CALL_FAILED = 7
    PERSIST_FAILED = 8

    @property
    def code(self) -> int:
        return self.value

    @classmethod
    def from_code(cls, code: Any) -> ErrorKind:
        """Map a wire code back to a kind; unknown codes count as call failures."""
        try:
            return cls(int(code))
        except (TypeError, ValueError):
            return cls.CALL_FAILED


SUCCESS_CODE = -1


@dataclass(frozen=True)
class Failure:
    """
    A typed failure.

    ``code`` keeps a wire code reported by the generator that has no
    ErrorKind of its own; it is passed through to clients unchanged.
    """

    kind: ErrorKind
    message: str
    code: int | None = None

    @property
    def error_code(self) -> int:
        return self.code if self.code is not None else self.kind.code

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "errorCode": self.error_code}


class DictionaryError(Exception):
    """Raised by generators and validators with a typed failure kind."""

    def __init__(self, kind: ErrorKind, message: str, code: int | None = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.code = code

    @property
    def failure(self) -> Failure:
        return Failure(self.kind, self.message, self.code)


_VARIETY_LISTS = ("meanings", "translations", "synonyms", "antonyms", "examples", "variants")


@dataclass
class WordVariety:
    """Dictionary content for one grammatical type of a word."""

    type: str
    meanings: list[str] = field(default_factory=list)
    translations: list[str] = field(default_factory=list)
    synonyms: list[str] = field(default_factory=list)
    antonyms: list[str] = field(default_factory=list)
    examples: list[str] = field(default_factory=list)
    variants: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        for name in _VARIETY_LISTS:
            data[name] = list(getattr(self, name))
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WordVariety:
        return cls(
            type=data.get("type", ""),
            **{name: list(data.get(name) or []) for name in _VARIETY_LISTS},
        )


@dataclass
class WordDocument:
    """
    A stored dictionary record.

    ``words`` is the canonical phrase and doubles as the Firestore document id.
    ``combinations`` holds the two-word index tokens computed when the
    document is stored.
    """

    words: str
    plural: str = ""
    types: list[str] = field(default_factory=list)
    varieties: list[WordVariety] = field(default_factory=list)
    image_url: str = ""
    combinations: list[str] = field(default_factory=list)

    @property
    def word_count(self) -> int:
        return len(self.words.split())

    def to_dict(self) -> dict[str, Any]:
        return {
            "words": self.words,
            "wordCount": self.word_count,
            "plural": self.plural,
            "types": list(self.types),
            "varieties": [variety.to_dict() for variety in self.varieties],
            "imageUrl": self.image_url,
            "combinations": list(self.combinations),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WordDocument:
        """
        Build a document from Firestore / wire data.

        Older generator revisions stored flat ``meanings``/``translations``/...
        arrays instead of varieties; those are folded into one variety.
        """
        types = list(data.get("types") or [])
        varieties = [WordVariety.from_dict(v) for v in data.get("varieties") or []]

        if not varieties and any(data.get(name) for name in _VARIETY_LISTS):
            varieties = [
                WordVariety.from_dict({"type": types[0] if types else "", **data})
            ]

        return cls(
            words=data.get("words", ""),
            plural=data.get("plural") or "",
            types=types,
            varieties=varieties,
            image_url=data.get("imageUrl") or "",
            combinations=list(data.get("combinations") or []),
        )


class SearchResult:
    """
    Documents found for a phrase, keyed by their ``words`` identity.

    Two fetched copies of the same stored document are different objects, so
    membership is decided by key, never by object identity or equality.
    """

    def __init__(self, exact_match: bool = False, failure: Failure | None = None):
        self._docs: dict[str, WordDocument] = {}
        self.exact_match = exact_match
        self.failure = failure

    def add(self, document: WordDocument) -> bool:
        """Add a document; returns False if its key was already present."""
        if document.words in self._docs:
            return False
        self._docs[document.words] = document
        return True

    def extend(self, documents) -> int:
        """Add many documents; returns how many were new."""
        return sum(1 for document in documents if self.add(document))

    @property
    def docs(self) -> list[WordDocument]:
        return list(self._docs.values())

    @property
    def keys(self) -> list[str]:
        return list(self._docs)

    def __len__(self) -> int:
        return len(self._docs)

    def __contains__(self, key: str) -> bool:
        return key in self._docs

    def copy(self) -> SearchResult:
        result = SearchResult(self.exact_match, self.failure)
        result.extend(self.docs)
        return result

    def to_response(self) -> dict[str, Any]:
        """Response body for the find_words function."""
        return {
            "docs": [document.to_dict() for document in self.docs],
            "error": self.failure.message if self.failure else "",
            "errorCode": self.failure.error_code if self.failure else SUCCESS_CODE,
            "exactMatch": self.exact_match,
        }
