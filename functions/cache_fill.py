"""
Cache Fill Module

Generates and stores a word document when a search finds nothing:
- FillOutcome: Generated document and/or the failure that came with it
- CacheFillCoordinator: One shared generation per missing phrase, one retry

Concurrent lookups of the same missing phrase in this process await one
shared generation task. Across instances the store's create-if-absent keeps
the first stored copy and the duplicate generation is discarded.

Note: This module has no Cloud Function entry points - it's called by lookup.py.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, replace

from combinations import normalize_phrase, unique_combinations
from word_types import DictionaryError, ErrorKind, Failure, SearchResult, WordDocument


@dataclass(frozen=True)
class FillOutcome:
    document: WordDocument | None = None
    failure: Failure | None = None


class CacheFillCoordinator:
    """Fills the store on a search miss (see module docstring)."""

    def __init__(self, store, generator, max_attempts: int = 2):
        self._store = store
        self._generator = generator
        self._max_attempts = max_attempts
        self._in_flight: dict[str, asyncio.Task] = {}

    @property
    def in_flight(self) -> list[str]:
        return list(self._in_flight)

    async def ensure_result(self, phrase: str, prior: SearchResult) -> SearchResult:
        """
        Return prior as is, or a copy extended with a freshly generated document.

        Args:
            phrase: Phrase that was searched.
            prior: Result of the search for that phrase.

        Returns:
            SearchResult; on failure it has no documents and carries the
            generator's failure. A storage failure still returns the document
            together with a PERSIST_FAILED failure.
        """
        if prior.exact_match or len(prior):
            return prior

        key = normalize_phrase(phrase)
        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.create_task(self._fill(key))
            self._in_flight[key] = task
            task.add_done_callback(lambda done: self._forget(key, done))
        else:
            print(f"[CACHE-FILL] Joining in-flight generation for '{key}'")

        # Shielded so one cancelled caller doesn't cancel the shared generation
        outcome = await asyncio.shield(task)

        result = prior.copy()
        if outcome.document is not None:
            result.add(outcome.document)
        result.failure = outcome.failure
        return result

    def _forget(self, key: str, task: asyncio.Task) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]

    async def _fill(self, phrase: str) -> FillOutcome:
        document, failure = await self._generate(phrase)
        if document is None:
            return FillOutcome(failure=failure)

        canonical = normalize_phrase(document.words) or phrase
        document = replace(
            document,
            words=canonical,
            combinations=unique_combinations(canonical),
        )
        if canonical != phrase:
            print(f"[CACHE-FILL] Generator corrected '{phrase}' to '{canonical}'")

        try:
            created = await self._store.create(document)
        except Exception as e:
            print(f"[CACHE-FILL] Failed to store '{canonical}': {type(e).__name__}: {e}")
            return FillOutcome(
                document=document,
                failure=Failure(ErrorKind.PERSIST_FAILED, f"Failed to store document: {e}"),
            )

        if not created:
            # Generated elsewhere in the meantime: answer with the stored copy
            stored = await self._store.get(canonical)
            if stored is not None:
                return FillOutcome(document=stored)
        return FillOutcome(document=document)

    async def _generate(self, phrase: str) -> tuple[WordDocument | None, Failure | None]:
        """Up to max_attempts generations; any failure counts as a failed attempt."""
        failure = None
        for attempt in range(1, self._max_attempts + 1):
            try:
                document = await self._generator.generate(phrase)
                if not isinstance(document.words, str) or not normalize_phrase(document.words):
                    raise DictionaryError(
                        ErrorKind.CALL_FAILED, f"Generator returned an invalid phrase: {document.words!r}"
                    )
                print(f"[CACHE-FILL] Generated '{document.words}' on attempt {attempt}")
                return document, None
            except DictionaryError as e:
                failure = e.failure
            except Exception as e:
                failure = Failure(ErrorKind.CALL_FAILED, f"Generator call failed: {type(e).__name__}: {e}")
            print(
                f"[CACHE-FILL] Attempt {attempt}/{self._max_attempts} for '{phrase}' failed: "
                f"{failure.kind.name} ({failure.message})"
            )
        return None, failure
