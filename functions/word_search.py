"""
Word Search Module

Finds stored word documents for a phrase without a full-text index:
- narrow: Exclude already-found documents from a batch query
- WordSearch: Exact match lookup, single-word path, batched combination search

Combination search flow:
1. Split the phrase's two-word combinations into batches of 10
2. Wave 1: query the first third of the batches concurrently, no exclusions
3. Wave 2: query the rest concurrently, each narrowed with wave 1's documents
4. Merge both waves, deduplicated by phrase key

Every store query is guarded: a failed or timed-out query contributes no
documents instead of failing the lookup.

Note: This module has no Cloud Function entry points - it's called by lookup.py.
"""

from __future__ import annotations

import asyncio
import math
from dataclasses import replace
from typing import Awaitable, Iterable, TypeVar

from combinations import divide_into_batches, normalize_phrase, unique_combinations
from common import (
    ARRAY_QUERY_LIMIT,
    BATCH_TIMEOUT_SEC,
    NOT_IN_LIMIT,
    UNOPTIMIZED_SHARE,
)
from word_store import BatchQuery
from word_types import SearchResult, WordDocument

T = TypeVar("T")


def narrow(query: BatchQuery, already_found: Iterable[str]) -> BatchQuery:
    """
    Add a not-in filter for up to 10 already-found phrase keys.

    Only saves transfer; results are deduplicated regardless. Firestore
    rejects an empty not-in list, so with nothing found the query is
    returned unchanged.
    """
    excluded = tuple(list(dict.fromkeys(already_found))[:NOT_IN_LIMIT])
    if not excluded:
        return query
    return replace(query, excluded_words=excluded)


class WordSearch:
    """Search orchestrator over a word store (see module docstring)."""

    def __init__(
        self,
        store,
        batch_size: int = ARRAY_QUERY_LIMIT,
        unoptimized_share: float = UNOPTIMIZED_SHARE,
        batch_timeout: float | None = BATCH_TIMEOUT_SEC,
    ):
        self._store = store
        self._batch_size = batch_size
        self._unoptimized_share = unoptimized_share
        self._batch_timeout = batch_timeout

    async def search(self, phrase: str) -> SearchResult:
        """
        Search stored documents matching a phrase.

        Args:
            phrase: Raw request text (normalized here).

        Returns:
            SearchResult with exact_match set when the phrase key itself is stored.
        """
        phrase = normalize_phrase(phrase)
        result = SearchResult()
        if not phrase:
            return result

        # 1. Exact match short-circuit; a failed lookup counts as a miss
        exact = await self._guarded(f"Exact match lookup for '{phrase}'", self._store.get(phrase), None)
        if exact is not None:
            print(f"[SEARCH] Exact match for '{phrase}'")
            result.add(exact)
            result.exact_match = True
            return result

        combinations = unique_combinations(phrase)

        # 2. Single word: nothing to combine
        if not combinations:
            result.extend(await self._find_single_word(phrase))
            print(f"[SEARCH] Single word '{phrase}': {len(result)} documents")
            return result

        # 3. Batched combination search in two waves
        batches = [BatchQuery(tuple(batch)) for batch in divide_into_batches(combinations, self._batch_size)]
        split = self.wave_split(len(batches))

        first_wave = await self._run_wave(batches[:split])
        result.extend(first_wave)

        second_batches = [narrow(batch, result.keys) for batch in batches[split:]]
        if second_batches:
            second_wave = await self._run_wave(second_batches)
            result.extend(second_wave)

        print(
            f"[SEARCH] '{phrase}': {len(combinations)} combinations in {len(batches)} batches "
            f"(wave 1: {split}, wave 2: {len(second_batches)}) -> {len(result)} documents"
        )
        return result

    def wave_split(self, batch_count: int) -> int:
        """Number of batches in the unoptimized first wave (at least one)."""
        if batch_count == 0:
            return 0
        return min(batch_count, max(1, math.ceil(batch_count * self._unoptimized_share)))

    async def _find_single_word(self, word: str) -> list[WordDocument]:
        # A single word may also be the stored plural of another entry
        tasks = [
            asyncio.create_task(
                self._guarded(f"'{field}' query for '{word}'", self._store.find_by_field(field, word), [])
            )
            for field in ("words", "plural")
        ]
        found = await asyncio.gather(*tasks)
        return [document for documents in found for document in documents]

    async def _run_wave(self, batches: list[BatchQuery]) -> list[WordDocument]:
        tasks = [asyncio.create_task(self._query_batch(batch)) for batch in batches]
        found = await asyncio.gather(*tasks)
        return [document for documents in found for document in documents]

    async def _query_batch(self, batch: BatchQuery) -> list[WordDocument]:
        """
        Run one batch query; a failed or timed-out batch contributes nothing.

        A narrowed query the store rejects is run once more without its
        exclusions, since narrowing only saves transfer.
        """
        label = f"Batch {list(batch.combinations)}"
        if not batch.excluded_words:
            return await self._guarded(label, self._store.query_combinations(batch), [])

        try:
            return await asyncio.wait_for(
                self._store.query_combinations(batch), timeout=self._batch_timeout
            )
        except asyncio.TimeoutError:
            print(f"[SEARCH] {label} timed out after {self._batch_timeout}s")
            return []
        except Exception as e:
            print(f"[SEARCH] Narrowed query failed ({type(e).__name__}: {e}), retrying without exclusions")

        return await self._guarded(label, self._store.query_combinations(replace(batch, excluded_words=())), [])

    async def _guarded(self, label: str, query: Awaitable[T], default: T) -> T:
        """Await a store query; on failure or timeout log it and return default."""
        try:
            return await asyncio.wait_for(query, timeout=self._batch_timeout)
        except asyncio.TimeoutError:
            print(f"[SEARCH] {label} timed out after {self._batch_timeout}s")
        except Exception as e:
            print(f"[SEARCH] {label} failed: {type(e).__name__}: {e}")
        return default
