"""Unit tests for CacheFillCoordinator: generate-on-miss, retries, sharing."""

import asyncio

import pytest

from cache_fill import CacheFillCoordinator
from word_types import DictionaryError, ErrorKind, SearchResult, WordDocument
from tests.fakes import FakeGenerator, FakeWordStore, make_document


def call_failed():
    return DictionaryError(ErrorKind.CALL_FAILED, "generator unavailable")


@pytest.mark.asyncio
async def test_found_results_are_returned_untouched(store, generator):
    prior = SearchResult()
    prior.add(make_document("dog"))

    result = await CacheFillCoordinator(store, generator).ensure_result("dog", prior)

    assert result is prior
    assert generator.calls == []


@pytest.mark.asyncio
async def test_exact_match_is_returned_untouched(store, generator):
    prior = SearchResult(exact_match=True)
    result = await CacheFillCoordinator(store, generator).ensure_result("dog", prior)
    assert result is prior
    assert generator.calls == []


@pytest.mark.asyncio
async def test_miss_generates_and_stores_with_combinations(store):
    generator = FakeGenerator(WordDocument(words="hot under the collar", types=["idiom"]))
    prior = SearchResult()

    result = await CacheFillCoordinator(store, generator).ensure_result("Hot under the collar", prior)

    assert generator.calls == ["hot under the collar"]
    assert result.keys == ["hot under the collar"]
    assert result.failure is None
    assert len(prior) == 0

    stored = store.documents["hot under the collar"]
    assert len(stored.combinations) == 6
    assert "hot collar" in stored.combinations


@pytest.mark.asyncio
async def test_single_word_is_stored_without_combinations(store):
    generator = FakeGenerator(WordDocument(words="dog", types=["noun"]))

    await CacheFillCoordinator(store, generator).ensure_result("dog", SearchResult())

    assert store.documents["dog"].combinations == []


@pytest.mark.asyncio
async def test_retries_once_after_a_failure(store):
    generator = FakeGenerator(call_failed(), WordDocument(words="dog", types=["noun"]))

    result = await CacheFillCoordinator(store, generator).ensure_result("dog", SearchResult())

    assert len(generator.calls) == 2
    assert result.keys == ["dog"]
    assert result.failure is None


@pytest.mark.asyncio
async def test_failure_after_retry_is_reported(store):
    generator = FakeGenerator(call_failed(), call_failed())

    result = await CacheFillCoordinator(store, generator).ensure_result("dog", SearchResult())

    assert len(generator.calls) == 2
    assert len(result) == 0
    assert result.failure.kind is ErrorKind.CALL_FAILED
    assert result.to_response()["errorCode"] == 7
    assert store.documents == {}


@pytest.mark.asyncio
async def test_generator_rejection_keeps_its_kind(store):
    invalid = DictionaryError(ErrorKind.INVALID_WORD, "Invalid word found.")
    generator = FakeGenerator(invalid, invalid)

    result = await CacheFillCoordinator(store, generator).ensure_result("dgo", SearchResult())

    assert result.failure.kind is ErrorKind.INVALID_WORD
    assert result.failure.message == "Invalid word found."


@pytest.mark.asyncio
async def test_storage_failure_still_returns_the_document(store):
    store.create_error = RuntimeError("firestore unavailable")
    generator = FakeGenerator(WordDocument(words="dog", types=["noun"]))

    result = await CacheFillCoordinator(store, generator).ensure_result("dog", SearchResult())

    assert result.keys == ["dog"]
    assert result.failure.kind is ErrorKind.PERSIST_FAILED
    assert result.to_response()["errorCode"] == 8


@pytest.mark.asyncio
async def test_existing_document_wins_over_the_new_generation():
    store = FakeWordStore([make_document("dog", plural="dogs")])
    generator = FakeGenerator(WordDocument(words="dog", types=["noun"]))

    result = await CacheFillCoordinator(store, generator).ensure_result("dog", SearchResult())

    assert result.docs[0].plural == "dogs"
    assert store.created == []


@pytest.mark.asyncio
async def test_corrected_phrase_is_stored_under_its_canonical_key(store):
    generator = FakeGenerator(WordDocument(words="Give  Up", types=["verb"]))

    result = await CacheFillCoordinator(store, generator).ensure_result("give upp", SearchResult())

    assert result.keys == ["give up"]
    assert store.documents["give up"].combinations == ["give up"]


@pytest.mark.asyncio
async def test_concurrent_misses_share_one_generation(store):
    gate = asyncio.Event()
    generator = FakeGenerator(WordDocument(words="dog", types=["noun"]), gate=gate)
    coordinator = CacheFillCoordinator(store, generator)

    first = asyncio.create_task(coordinator.ensure_result("dog", SearchResult()))
    second = asyncio.create_task(coordinator.ensure_result("Dog", SearchResult()))
    await asyncio.sleep(0)
    await asyncio.sleep(0)
    assert coordinator.in_flight == ["dog"]

    gate.set()
    results = await asyncio.gather(first, second)

    assert generator.calls == ["dog"]
    assert [result.keys for result in results] == [["dog"], ["dog"]]
    assert len(store.created) == 1

    await asyncio.sleep(0)
    assert coordinator.in_flight == []


@pytest.mark.asyncio
async def test_failed_generation_is_not_remembered(store):
    generator = FakeGenerator(call_failed(), call_failed(), WordDocument(words="dog", types=["noun"]))
    coordinator = CacheFillCoordinator(store, generator)

    failed = await coordinator.ensure_result("dog", SearchResult())
    await asyncio.sleep(0)
    retried = await coordinator.ensure_result("dog", SearchResult())

    assert failed.failure is not None
    assert retried.keys == ["dog"]
    assert len(generator.calls) == 3


@pytest.mark.asyncio
async def test_unexpected_generator_error_is_retried(store):
    generator = FakeGenerator(AttributeError("'str' object has no attribute 'get'"), WordDocument(words="dog"))

    result = await CacheFillCoordinator(store, generator).ensure_result("dog", SearchResult())

    assert len(generator.calls) == 2
    assert result.keys == ["dog"]
    assert result.failure is None


@pytest.mark.asyncio
async def test_document_without_a_phrase_is_a_failed_call(store):
    generator = FakeGenerator(WordDocument(words=5), WordDocument(words="  "))

    result = await CacheFillCoordinator(store, generator).ensure_result("dog", SearchResult())

    assert len(generator.calls) == 2
    assert len(result) == 0
    assert result.failure.kind is ErrorKind.CALL_FAILED
    assert store.documents == {}


@pytest.mark.asyncio
async def test_unknown_generator_code_reaches_the_response(store):
    error = DictionaryError(ErrorKind.CALL_FAILED, "Empty request", code=0)
    generator = FakeGenerator(error, error)

    result = await CacheFillCoordinator(store, generator).ensure_result("dog", SearchResult())

    assert result.to_response()["errorCode"] == 0
    assert result.to_response()["error"] == "Empty request"
