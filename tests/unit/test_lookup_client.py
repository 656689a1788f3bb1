"""Unit tests for the Python client of the deployed functions."""

import pytest

from client_python import DictionaryClient, LookupResponse, lookup_response_from_dict


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self):
        return self._body


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.urls = []
        self.bodies = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.urls.append(url)
        self.bodies.append(json)
        return self.response


LOOKUP_BODY = {
    "docs": [{
        "words": "give up",
        "wordCount": 2,
        "plural": "",
        "types": ["verb"],
        "varieties": [{"type": "verb", "meanings": ["to quit"], "synonyms": ["quit"]}],
        "imageUrl": "",
        "combinations": ["give up"],
    }],
    "error": "",
    "errorCode": -1,
    "exactMatch": True,
}


def test_lookup_posts_to_find_words():
    session = FakeSession(FakeResponse(body=LOOKUP_BODY))
    client = DictionaryClient(base_url="http://127.0.0.1:5001/my-project/us-central1/", session=session)

    response = client.lookup("give up")

    assert session.urls == ["http://127.0.0.1:5001/my-project/us-central1/find_words"]
    assert session.bodies == [{"words": "give up"}]
    assert response.success
    assert response.exact_match is True
    assert response.docs[0].word_count == 2
    assert response.docs[0].variety("verb").meanings == ["to quit"]
    assert response.docs[0].variety("noun") is None


def test_generate_posts_to_dictionary_generator():
    session = FakeSession(FakeResponse(body={"docs": [], "error": "Invalid word found.", "errorCode": 1}))
    client = DictionaryClient(project_id="my-project", region="europe-west1", session=session)

    response = client.generate("qwzx")

    assert session.urls == ["https://europe-west1-my-project.cloudfunctions.net/dictionary_generator"]
    assert not response.success
    assert response.error_code == 1
    assert response.error == "Invalid word found."


def test_non_200_raises():
    session = FakeSession(FakeResponse(status_code=503, text="Service Unavailable"))
    client = DictionaryClient(project_id="my-project", session=session)

    with pytest.raises(RuntimeError, match="503"):
        client.lookup("dog")


def test_requires_project_or_base_url():
    with pytest.raises(ValueError):
        DictionaryClient()


def test_from_environment(monkeypatch):
    monkeypatch.delenv("DICTIONARY_FUNCTIONS_URL", raising=False)
    monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "env-project")
    monkeypatch.setenv("FUNCTIONS_REGION", "asia-east1")

    client = DictionaryClient.from_environment()

    assert client.base_url == "https://asia-east1-env-project.cloudfunctions.net"


def test_response_defaults():
    response = lookup_response_from_dict({})
    assert response == LookupResponse()
    assert response.success
