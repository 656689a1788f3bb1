"""
Document Generator Client

Calls the dictionary_generator Cloud Function over HTTP:
- HttpDocumentGenerator.generate: POST {"words": ...}, return the WordDocument
- parse_generator_response: Map a response body to a document or DictionaryError

Note: This module has no Cloud Function entry points - it's called by cache_fill.py.
"""

from __future__ import annotations

import asyncio
from typing import Any

import requests

from common import GENERATOR_TIMEOUT_SEC, get_generator_url
from word_types import SUCCESS_CODE, DictionaryError, ErrorKind, WordDocument


def parse_generator_response(body: Any) -> WordDocument:
    """
    Extract the generated document from a dictionary_generator response.

    The body may be bare or wrapped in "data" / "result" (callable functions).

    Raises:
        DictionaryError: With the generator's own kind when it reports an
            error, CALL_FAILED when the body is malformed.
    """
    if isinstance(body, dict):
        for wrapper in ("data", "result"):
            if isinstance(body.get(wrapper), dict):
                body = body[wrapper]
                break

    if not isinstance(body, dict):
        raise DictionaryError(ErrorKind.CALL_FAILED, "Malformed generator response")

    error_code = body.get("errorCode", SUCCESS_CODE)
    if error_code != SUCCESS_CODE:
        # Codes without a kind of their own are reported as sent
        raw_code = error_code if isinstance(error_code, int) and not isinstance(error_code, bool) else None
        raise DictionaryError(
            ErrorKind.from_code(error_code),
            body.get("error") or f"Generator failed with errorCode {error_code}",
            code=raw_code,
        )

    docs = body.get("docs") or []
    if not isinstance(docs, list) or not docs or not isinstance(docs[0], dict):
        raise DictionaryError(ErrorKind.CALL_FAILED, "Generator returned no document")

    words = docs[0].get("words")
    if not isinstance(words, str) or not words.strip():
        raise DictionaryError(ErrorKind.CALL_FAILED, f"Generator returned an invalid phrase: {words!r}")

    try:
        return WordDocument.from_dict(docs[0])
    except (AttributeError, TypeError, ValueError) as e:
        raise DictionaryError(ErrorKind.CALL_FAILED, f"Malformed generator document: {e}")


class HttpDocumentGenerator:
    """Document generator reached through its HTTP endpoint."""

    def __init__(self, url: str | None = None, timeout: float = GENERATOR_TIMEOUT_SEC, session=None):
        self.url = url or get_generator_url()
        self.timeout = timeout
        self._session = session or requests.Session()

    async def generate(self, words: str) -> WordDocument:
        # requests is blocking; keep the event loop free for other lookups
        body = await asyncio.to_thread(self._post, words)
        return parse_generator_response(body)

    def _post(self, words: str) -> Any:
        try:
            response = self._session.post(
                self.url,
                json={"words": words},
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise DictionaryError(ErrorKind.CALL_FAILED, f"Error calling generator: {e}")

        if response.status_code != 200:
            raise DictionaryError(
                ErrorKind.CALL_FAILED,
                f"Generator failed with status {response.status_code}: {response.text[:200]}",
            )

        try:
            return response.json()
        except ValueError as e:
            raise DictionaryError(ErrorKind.CALL_FAILED, f"Generator returned invalid JSON: {e}")
