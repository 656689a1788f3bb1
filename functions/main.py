"""
Cloud Functions for the Dictionary Lookup Service

Functions:
1. find_words - Look up a word or phrase, generating it on a miss
2. dictionary_generator - Generate a dictionary document with Gemini

Both are plain HTTP (POST) functions that always answer 200 and report
failures in the body through "error" / "errorCode" (-1 on success).
"""

from __future__ import annotations

import json
import traceback
from typing import Any

from firebase_functions import https_fn, options

from dictionary_generator import DictionaryGenerator, validate_request
from lookup import create_lookup
from runtime import AsyncRuntime
from text_generation import TextGenerator
from word_types import SUCCESS_CODE, DictionaryError, ErrorKind, Failure, SearchResult

# Owns the event loop, Firestore client and in-flight generations of this instance
runtime = AsyncRuntime()


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def read_words(body: Any) -> Any:
    """Get "words" from a request body, bare or wrapped in "data"."""
    if not isinstance(body, dict):
        return None
    if isinstance(body.get("data"), dict):
        body = body["data"]
    return body.get("words")


def json_response(payload: dict[str, Any]) -> https_fn.Response:
    return https_fn.Response(json.dumps(payload), status=200, content_type="application/json")


def failure_payload(kind: ErrorKind, message: str) -> dict[str, Any]:
    return SearchResult(failure=Failure(kind, message)).to_response()


async def find_words_payload(words: Any, lookup) -> dict[str, Any]:
    """
    Run a lookup and build the find_words response body.

    Returns:
    - docs: Matching documents (or the newly generated one)
    - error: Error message ("" on success)
    - errorCode: -1 on success, the failure's code otherwise
    - exactMatch: Whether the phrase itself is stored
    """
    try:
        phrase = validate_request(words)
    except DictionaryError as e:
        return failure_payload(e.kind, e.message)

    try:
        result = await lookup.lookup(phrase)
    except Exception as e:
        print(f"[LOOKUP] EXCEPTION for '{phrase}': {type(e).__name__}: {e}")
        print(f"[LOOKUP] TRACEBACK: {traceback.format_exc()}")
        return failure_payload(ErrorKind.INTERNAL, f"Lookup failed: {e}")

    return result.to_response()


async def generate_payload(words: Any, generator) -> dict[str, Any]:
    """
    Run the generator and build the dictionary_generator response body.

    Returns:
    - docs: [generated document], or [] on failure
    - error / errorCode: As for find_words
    """
    try:
        document = await generator.generate(words)
    except DictionaryError as e:
        return {"docs": [], **e.failure.to_dict()}
    except Exception as e:
        print(f"[GENERATOR] EXCEPTION: {type(e).__name__}: {e}")
        print(f"[GENERATOR] TRACEBACK: {traceback.format_exc()}")
        return {"docs": [], "error": f"Generation failed: {e}", "errorCode": ErrorKind.INTERNAL.code}

    return {"docs": [document.to_dict()], "error": "", "errorCode": SUCCESS_CODE}


async def _serve_find_words(words: Any) -> dict[str, Any]:
    lookup = await runtime.resource("lookup", create_lookup)
    return await find_words_payload(words, lookup)


async def _serve_generate(words: Any) -> dict[str, Any]:
    generator = await runtime.resource("generator", lambda: DictionaryGenerator(TextGenerator()))
    return await generate_payload(words, generator)


# =============================================================================
# ENTRY POINTS
# =============================================================================


@https_fn.on_request(
    memory=options.MemoryOption.MB_512,
    timeout_sec=300,
    cors=options.CorsOptions(cors_origins="*", cors_methods=["post"]),
)
def find_words(req: https_fn.Request) -> https_fn.Response:
    """
    Look up a word or phrase.

    Input (JSON body, optionally wrapped in "data"):
    - words: The word or phrase to look up

    Returns the find_words_payload body with status 200.
    """
    words = read_words(req.get_json(silent=True))
    print(f"[LOOKUP] Request: {words!r}")

    try:
        payload = runtime.run(_serve_find_words(words))
    except Exception as e:
        print(f"[LOOKUP] EXCEPTION: {type(e).__name__}: {e}")
        payload = failure_payload(ErrorKind.INTERNAL, f"Lookup failed: {e}")

    return json_response(payload)


@https_fn.on_request(
    memory=options.MemoryOption.MB_512,
    timeout_sec=300,
    secrets=["GEMINI_API_KEY"],
)
def dictionary_generator(req: https_fn.Request) -> https_fn.Response:
    """
    Generate a dictionary document for a word or phrase.

    Input (JSON body, optionally wrapped in "data"):
    - words: The word or phrase to generate

    Returns the generate_payload body with status 200.
    """
    words = read_words(req.get_json(silent=True))
    print(f"[GENERATOR] Request: {words!r}")

    try:
        payload = runtime.run(_serve_generate(words))
    except Exception as e:
        print(f"[GENERATOR] EXCEPTION: {type(e).__name__}: {e}")
        payload = {"docs": [], "error": f"Generation failed: {e}", "errorCode": ErrorKind.INTERNAL.code}

    return json_response(payload)
