"""
Dictionary Generator Module

Builds a WordDocument for a word or phrase with Gemini:
- validate_request: Format, emptiness and size limits
- DictionaryGenerator.generate: Validate, type, populate
- DictionaryGenerator.find_types: Grammatical types via yes/no prompts
- DictionaryGenerator.populate: Meanings, translations, synonyms, antonyms,
  examples and plural, parsed into one variety per type

Generation flow:
1. Reject malformed, empty or oversized requests
2. Check every word is English (concurrently)
3. Phrases: check grammar, use the model's correction if needed
4. Detect grammatical types; a phrase without any type is rejected
5. Run the content prompts concurrently and parse the answers

Note: The HTTP entry point lives in main.py (dictionary_generator).
"""

from __future__ import annotations

import asyncio
import re
from typing import Any

from combinations import normalize_phrase
from common import MAX_CHARS, MAX_WORDS
from text_cleaning import parse_singular_plural, sort_by_type, split_by_types
from word_types import DictionaryError, ErrorKind, WordDocument, WordVariety

PRIMARY_TYPES = ("noun", "verb")
SINGLE_WORD_TYPES = ("adjective", "adverb", "pronoun", "preposition")
PHRASE_TYPES = ("idiom",)
FALLBACK_TYPES = ("conjunction", "interjection")

_PLURAL_TYPES = re.compile(r"(pro)?noun|verb|idiom")
_APOSTROPHE_SUFFIX = re.compile(r"'.*$")


def validate_request(words: Any) -> str:
    """
    Normalize a request and enforce the request limits.

    Returns:
        The normalized phrase.

    Raises:
        DictionaryError: INVALID_FORMAT, EMPTY_REQUEST or LIMIT_EXCEEDED.
    """
    if not isinstance(words, str):
        raise DictionaryError(ErrorKind.INVALID_FORMAT, "Invalid request format.")

    phrase = normalize_phrase(words)
    if not phrase:
        raise DictionaryError(ErrorKind.EMPTY_REQUEST, "Empty request.")

    if len(phrase.split()) > MAX_WORDS or len(phrase) > MAX_CHARS:
        raise DictionaryError(
            ErrorKind.LIMIT_EXCEEDED,
            f"Limit of {MAX_WORDS} words or {MAX_CHARS} characters exceeded",
        )
    return phrase


def type_question(words: str, type_name: str) -> str:
    """e.g. 'Is "dog" frequently used as a noun?' / 'Is to "give up" ... a verb?'"""
    to = "to " if type_name == "verb" and len(words.split()) > 1 else ""
    article = "an" if type_name[0] in "aeiou" else "a"
    return f'Is {to}"{words}" frequently used as {article} {type_name}?'


class DictionaryGenerator:
    """Generates dictionary documents with a TextGenerator."""

    def __init__(self, text_generator):
        self._text = text_generator

    async def generate(self, words: Any) -> WordDocument:
        """
        Generate a document for a request.

        Args:
            words: Requested word or phrase (raw request value).

        Returns:
            Populated WordDocument. Its ``words`` may differ from the request
            when the model corrected the phrase or gave a singular form.

        Raises:
            DictionaryError: Invalid requests (kinds 1-5) or CALL_FAILED when
                Gemini can't be reached.
        """
        phrase = validate_request(words)

        try:
            await self.check_words(phrase)

            if len(phrase.split()) > 1:
                phrase = await self.correct_phrase(phrase)

            types = await self.find_types(phrase)
            if len(phrase.split()) > 1 and not types:
                raise DictionaryError(
                    ErrorKind.INVALID_PHRASE,
                    "Invalid phrase combination: It is neither an idiom, verb, or noun.",
                )

            document = WordDocument(words=phrase, types=types)
            await self.populate(document)

        except DictionaryError:
            raise
        except Exception as e:
            print(f"[GENERATOR] Text generation failed for '{phrase}': {type(e).__name__}: {e}")
            raise DictionaryError(ErrorKind.CALL_FAILED, f"Text generation failed: {e}")

        print(f"[GENERATOR] Generated '{document.words}' with types {document.types}")
        return document

    async def check_words(self, phrase: str) -> None:
        """Raise INVALID_WORD unless every word of the phrase is English."""
        words = [_APOSTROPHE_SUFFIX.sub("", word) for word in phrase.split()]
        tasks = [
            asyncio.create_task(self._text.ask_yes_no(f'Is "{word}" an english word?'))
            for word in words
        ]
        results = await asyncio.gather(*tasks)

        for word, is_valid in zip(words, results):
            if not is_valid:
                print(f"[GENERATOR] Invalid word '{word}' in '{phrase}'")
                raise DictionaryError(ErrorKind.INVALID_WORD, "Invalid word found.")

    async def correct_phrase(self, phrase: str) -> str:
        """Return the phrase, or the model's grammatical correction of it."""
        if await self._text.ask_yes_no(f"Is the phrase '{phrase}' grammatically correct?"):
            return phrase

        answer = await self._text.generate_text(
            f"Correct '{phrase}' grammatically:\n(answer with just the phrase)",
            max_tokens=200,
        )
        corrected = normalize_phrase(answer)
        if not corrected or len(corrected.split()) > MAX_WORDS or len(corrected) > MAX_CHARS:
            return phrase
        return corrected

    async def find_types(self, words: str) -> list[str]:
        """
        Find the grammatical types of a word or phrase.

        Noun and verb are always checked; single words also as adjective,
        adverb, pronoun and preposition, phrases as idiom. Only when a single
        word has none of those are conjunction and interjection checked.
        """
        candidates = list(PRIMARY_TYPES)
        if len(words.split()) == 1:
            candidates += SINGLE_WORD_TYPES
        else:
            candidates += PHRASE_TYPES

        types = await self._check_types(words, candidates)
        if not types and len(words.split()) == 1:
            types = await self._check_types(words, list(FALLBACK_TYPES))
        return types

    async def _check_types(self, words: str, candidates: list[str]) -> list[str]:
        tasks = [
            asyncio.create_task(self._text.ask_yes_no(type_question(words, candidate)))
            for candidate in candidates
        ]
        answers = await asyncio.gather(*tasks)
        return [candidate for candidate, is_type in zip(candidates, answers) if is_type]

    async def populate(self, document: WordDocument) -> None:
        """Fill the document's varieties (and plural) from Gemini answers."""
        words = document.words
        types_txt = ", ".join(document.types)

        prompts: list[tuple[str, dict[str, Any]]] = [
            (
                f'Write the 2 most common definitions for "{words}", '
                f"for each of these grammatical types: {types_txt}\n"
                "(don't write examples, the definitions must be elaborate, use ';' as separator)",
                {"frequency_penalty": 1.7, "max_tokens": 350},
            ),
            (
                f'Translate "{words}" into Spanish, offer 3 translations '
                f"for each of these grammatical types: {types_txt}\n(use ';' as separator)",
                {"temperature": 0.3, "presence_penalty": 1.7, "max_tokens": 350},
            ),
            (
                f'Write 3 synonyms for "{words}", '
                f"for each of these grammatical types: {types_txt}\n(use ';' as separator)",
                {"presence_penalty": 1.9, "max_tokens": 350},
            ),
            (
                f'Write 3 antonyms for "{words}", '
                f"for each of these grammatical types: {types_txt}\n(use ';' as separator)",
                {"temperature": 0.9, "presence_penalty": 1.9, "max_tokens": 350},
            ),
            (
                f'Write 2 example phrases with "{words}" '
                f"for each of these grammatical types: {types_txt}\n(use ';' as separator)",
                {"frequency_penalty": 1.9, "max_tokens": 500},
            ),
        ]

        wants_plural = any(_PLURAL_TYPES.fullmatch(t) for t in document.types)
        if wants_plural:
            prompts.append((f'Write the singular and plural for "{words}"\nsingular: ', {"max_tokens": 100}))

        tasks = [
            asyncio.create_task(self._text.generate_text(prompt, **options))
            for prompt, options in prompts
        ]
        answers = await asyncio.gather(*tasks)

        meanings, translations, synonyms, antonyms, examples = (
            split_by_types(answer, document.types) for answer in answers[:5]
        )
        examples = [example[:1].upper() + example[1:] + "." for example in examples]

        if wants_plural:
            singular, plural = parse_singular_plural(answers[5])
            singular = normalize_phrase(singular)
            if singular:
                document.words = singular
            document.plural = normalize_phrase(plural)

        document.varieties = [
            WordVariety(
                type=t,
                meanings=sort_by_type(meanings, t),
                translations=sort_by_type(translations, t),
                synonyms=sort_by_type(synonyms, t),
                antonyms=sort_by_type(antonyms, t),
                examples=sort_by_type(examples, t),
            )
            for t in document.types
        ]
