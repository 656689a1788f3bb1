"""
Dictionary Lookup Module

Combines search and cache fill behind one call:
- DictionaryLookup.lookup: Search stored words, generate on a miss
- create_lookup: Wire Firestore, search, generator client and cache fill

Note: The HTTP entry point lives in main.py (find_words).
"""

from __future__ import annotations

from cache_fill import CacheFillCoordinator
from common import get_async_db
from generator_client import HttpDocumentGenerator
from word_search import WordSearch
from word_store import FirestoreWordStore
from word_types import SearchResult


class DictionaryLookup:
    def __init__(self, search: WordSearch, cache_fill: CacheFillCoordinator):
        self.search = search
        self.cache_fill = cache_fill

    async def lookup(self, words: str) -> SearchResult:
        result = await self.search.search(words)
        if result.exact_match or len(result):
            print(f"[LOOKUP] '{words}': {len(result)} stored documents (exactMatch={result.exact_match})")
            return result

        print(f"[LOOKUP] '{words}': nothing stored, generating")
        return await self.cache_fill.ensure_result(words, result)


def create_lookup(db=None, generator=None) -> DictionaryLookup:
    """
    Build the lookup graph.

    Must run on the event loop that will serve lookups: the async Firestore
    client binds to it.
    """
    store = FirestoreWordStore(db if db is not None else get_async_db())
    generator = generator or HttpDocumentGenerator()
    return DictionaryLookup(
        search=WordSearch(store),
        cache_fill=CacheFillCoordinator(store, generator),
    )
