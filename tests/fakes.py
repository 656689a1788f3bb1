"""In-memory stand-ins for Firestore, the generator endpoint and Gemini."""

from __future__ import annotations

import asyncio

from word_store import BatchQuery
from word_types import DictionaryError, ErrorKind, WordDocument
from combinations import unique_combinations


def make_document(words: str, **kwargs) -> WordDocument:
    """Stored-shape document with its combinations filled in."""
    kwargs.setdefault("types", ["noun"])
    return WordDocument(words=words, combinations=unique_combinations(words), **kwargs)


class FakeWordStore:
    """
    Word store over a dict, with Firestore's query semantics.

    Every read returns fresh copies, like separate Firestore fetches do.
    """

    def __init__(self, documents=()):
        self.documents: dict[str, WordDocument] = {}
        for document in documents:
            self.documents[document.words] = document
        self.gets: list[str] = []
        self.field_queries: list[tuple[str, str]] = []
        self.batches: list[BatchQuery] = []
        self.created: list[WordDocument] = []
        self.fail_on: set[str] = set()
        self.slow_on: set[str] = set()
        self.create_error: Exception | None = None
        self.get_error: Exception | None = None
        self.failing_fields: set[str] = set()
        # Like Firestore, which refuses not-in next to array-contains-any
        self.reject_narrowed = False

    @staticmethod
    def _copy(document: WordDocument) -> WordDocument:
        return WordDocument.from_dict(document.to_dict())

    async def get(self, phrase):
        self.gets.append(phrase)
        if self.get_error is not None:
            raise self.get_error
        document = self.documents.get(phrase)
        return self._copy(document) if document is not None else None

    async def find_by_field(self, field, value):
        self.field_queries.append((field, value))
        if field in self.failing_fields:
            raise RuntimeError(f"{field} query failed")
        return [
            self._copy(document)
            for document in self.documents.values()
            if document.to_dict().get(field) == value
        ]

    async def query_combinations(self, batch: BatchQuery):
        self.batches.append(batch)
        if self.reject_narrowed and batch.excluded_words:
            raise RuntimeError("400 'NOT_IN' cannot be used with 'ARRAY_CONTAINS_ANY'")
        if self.fail_on & set(batch.combinations):
            raise RuntimeError("query failed")
        if self.slow_on & set(batch.combinations):
            await asyncio.sleep(5)
        wanted = set(batch.combinations)
        return [
            self._copy(document)
            for document in self.documents.values()
            if wanted & set(document.combinations) and document.words not in batch.excluded_words
        ]

    async def create(self, document: WordDocument) -> bool:
        if self.create_error is not None:
            raise self.create_error
        if document.words in self.documents:
            return False
        self.documents[document.words] = self._copy(document)
        self.created.append(document)
        return True


class FakeGenerator:
    """
    Document generator returning scripted results in order.

    Each result is a WordDocument or an exception to raise. With ``gate``
    set, every call waits for the event first.
    """

    def __init__(self, *results, gate: asyncio.Event | None = None):
        self.results = list(results)
        self.calls: list[str] = []
        self.gate = gate

    async def generate(self, words):
        self.calls.append(words)
        if self.gate is not None:
            await self.gate.wait()
        if not self.results:
            raise DictionaryError(ErrorKind.CALL_FAILED, "no scripted result")
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class FakeTextGenerator:
    """
    Gemini stand-in.

    ask_yes_no answers "yes" when the prompt contains one of ``yes``;
    generate_text answers with the first ``answers`` entry whose key the
    prompt starts with.
    """

    def __init__(self, yes=(), answers=None, error: Exception | None = None):
        self.yes = list(yes)
        self.answers = dict(answers or {})
        self.error = error
        self.questions: list[str] = []
        self.prompts: list[tuple[str, dict]] = []

    async def ask_yes_no(self, prompt):
        self.questions.append(prompt)
        if self.error is not None:
            raise self.error
        return any(fragment in prompt for fragment in self.yes)

    async def generate_text(self, prompt, **options):
        self.prompts.append((prompt, options))
        if self.error is not None:
            raise self.error
        for start, answer in self.answers.items():
            if prompt.startswith(start):
                return answer
        return ""
