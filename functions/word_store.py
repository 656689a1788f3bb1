"""
Word Store Module

Async Firestore access for word documents:
- BatchQuery: One array_contains_any query over a batch of combinations
- FirestoreWordStore: Exact-key lookup, equality / combination queries, create

Documents live in WORDS_COLLECTION with the canonical phrase as document id.

Note: This module has no Cloud Function entry points.
"""

from __future__ import annotations

from dataclasses import dataclass

from google.api_core.exceptions import AlreadyExists
from google.cloud.firestore_v1 import FieldFilter

from common import WORDS_COLLECTION
from word_types import WordDocument


@dataclass(frozen=True)
class BatchQuery:
    """Combinations to match (<= 10) and phrase keys to leave out (<= 10)."""

    combinations: tuple[str, ...]
    excluded_words: tuple[str, ...] = ()


class FirestoreWordStore:
    """Word documents stored in Firestore, keyed by canonical phrase."""

    def __init__(self, db, collection: str = WORDS_COLLECTION):
        self._db = db
        self._collection_name = collection

    @property
    def _collection(self):
        return self._db.collection(self._collection_name)

    async def get(self, phrase: str) -> WordDocument | None:
        """Exact match on the document id."""
        snapshot = await self._collection.document(phrase).get()
        if not snapshot.exists:
            return None
        return WordDocument.from_dict(snapshot.to_dict() or {})

    async def find_by_field(self, field: str, value: str) -> list[WordDocument]:
        query = self._collection.where(filter=FieldFilter(field, "==", value))
        return [WordDocument.from_dict(doc.to_dict() or {}) for doc in await query.get()]

    async def query_combinations(self, batch: BatchQuery) -> list[WordDocument]:
        """
        Documents sharing any combination in the batch, minus excluded keys.

        Firestore rejects a `not-in` filter next to `array-contains-any`, so
        excluded keys are dropped from the fetched snapshots by document id
        before they are parsed.
        """
        query = self._collection.where(
            filter=FieldFilter("combinations", "array_contains_any", list(batch.combinations))
        )
        excluded = set(batch.excluded_words)
        return [
            WordDocument.from_dict(doc.to_dict() or {})
            for doc in await query.get()
            if doc.id not in excluded
        ]

    async def create(self, document: WordDocument) -> bool:
        """
        Store a new document under its phrase key.

        Returns False when a document with that key already exists; the
        stored copy is left untouched.
        """
        try:
            await self._collection.document(document.words).create(document.to_dict())
        except AlreadyExists:
            print(f"[STORE] '{document.words}' already stored, keeping existing copy")
            return False
        print(f"[STORE] Stored '{document.words}' with {len(document.combinations)} combinations")
        return True
