"""
Dictionary Lookup Client (Python)

This module provides a Python wrapper for the dictionary lookup Cloud
Functions, for scripts, notebooks and debugging deployed functions.

Example:
    >>> from client_python import DictionaryClient
    >>>
    >>> client = DictionaryClient(project_id="my-project", region="europe-west1")
    >>>
    >>> response = client.lookup("hot under the collar")
    >>> for doc in response.docs:
    ...     print(doc.words, doc.types)
"""

from __future__ import annotations

import os
from typing import Optional

import requests

from .types import LookupResponse, lookup_response_from_dict


# =============================================================================
# Dictionary Client
# =============================================================================

class DictionaryClient:
    """
    Client for the find_words and dictionary_generator functions.

    Attributes:
        base_url: Base URL the function names are appended to.
        timeout: Request timeout in seconds.

    Example:
        >>> client = DictionaryClient(base_url="http://127.0.0.1:5001/my-project/us-central1")
        >>> client.lookup("dog").exact_match
        True
    """

    def __init__(
        self,
        project_id: Optional[str] = None,
        region: str = "us-central1",
        base_url: Optional[str] = None,
        timeout: float = 300,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            project_id: Firebase project ID (ignored when base_url is given).
            region: Cloud Functions region.
            base_url: Explicit base URL, e.g. for the Functions emulator.
            timeout: Request timeout in seconds (generation can take a while).
            session: Optional requests session to reuse.
        """
        if not base_url:
            if not project_id:
                raise ValueError(
                    "project_id or base_url must be provided "
                    "(or set GOOGLE_CLOUD_PROJECT and use from_environment())"
                )
            base_url = f"https://{region}-{project_id}.cloudfunctions.net"

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def from_environment(cls, region: Optional[str] = None) -> "DictionaryClient":
        """
        Create client from environment variables.

        Expects:
        - DICTIONARY_FUNCTIONS_URL: Base URL (takes precedence), or
        - GOOGLE_CLOUD_PROJECT (+ optional FUNCTIONS_REGION)
        """
        return cls(
            project_id=os.environ.get("GOOGLE_CLOUD_PROJECT"),
            region=region or os.environ.get("FUNCTIONS_REGION", "us-central1"),
            base_url=os.environ.get("DICTIONARY_FUNCTIONS_URL"),
        )

    def _call_function(self, function_name: str, words: str) -> dict:
        """
        Call a function via HTTP.

        Raises:
            RuntimeError: If the function call fails.
        """
        url = f"{self.base_url}/{function_name}"

        response = self._session.post(
            url,
            json={"words": words},
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )

        if response.status_code != 200:
            raise RuntimeError(
                f"Function {function_name} failed with status {response.status_code}: "
                f"{response.text}"
            )

        return response.json()

    def lookup(self, words: str) -> LookupResponse:
        """
        Look up a word or phrase (generated and stored if unknown).

        Args:
            words: Word or phrase, up to 13 words / 130 characters.

        Returns:
            LookupResponse; check ``success`` / ``error_code`` for failures.
        """
        return lookup_response_from_dict(self._call_function("find_words", words))

    def generate(self, words: str) -> LookupResponse:
        """
        Call the generator directly (nothing is stored).

        Args:
            words: Word or phrase to generate.

        Returns:
            LookupResponse with at most one document.
        """
        return lookup_response_from_dict(self._call_function("dictionary_generator", words))
