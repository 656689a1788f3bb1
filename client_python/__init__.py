"""
Dictionary Lookup Python Client

A Python client library for the find_words and dictionary_generator
Cloud Functions.

Example:
    >>> from client_python import DictionaryClient
    >>>
    >>> client = DictionaryClient(project_id="my-project")
    >>>
    >>> response = client.lookup("give up")
    >>> for doc in response.docs:
    ...     print(doc.words, [v.type for v in doc.varieties])
"""

from .types import (
    # Document types
    WordVariety,
    WordDocument,
    # Response types
    LookupResponse,
    SUCCESS_CODE,
    # Conversion helpers
    word_variety_from_dict,
    word_document_from_dict,
    lookup_response_from_dict,
)

from .lookup_client import DictionaryClient

__all__ = [
    # Document types
    "WordVariety",
    "WordDocument",
    # Response types
    "LookupResponse",
    "SUCCESS_CODE",
    # Client
    "DictionaryClient",
    # Conversion helpers
    "word_variety_from_dict",
    "word_document_from_dict",
    "lookup_response_from_dict",
]

__version__ = "1.0.0"
