"""Unit tests for TextGenerator with a fake google-genai client."""

from types import SimpleNamespace

import pytest

from text_generation import TextGenerator


class FakeModels:
    def __init__(self, text):
        self.text = text
        self.calls = []

    async def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        return SimpleNamespace(text=self.text)


def fake_client(text):
    return SimpleNamespace(aio=SimpleNamespace(models=FakeModels(text)))


@pytest.mark.asyncio
async def test_generate_text_passes_prompt_and_options():
    client = fake_client("  Noun: a pet  ")
    generator = TextGenerator(client=client, model="gemini-test")

    answer = await generator.generate_text("Define dog", temperature=0.3, max_tokens=350, presence_penalty=1.7)

    assert answer == "Noun: a pet"
    call = client.aio.models.calls[0]
    assert call["model"] == "gemini-test"
    assert call["contents"][0].parts[0].text == "Define dog"
    assert call["config"].temperature == 0.3
    assert call["config"].max_output_tokens == 350
    assert call["config"].presence_penalty == 1.7


@pytest.mark.asyncio
async def test_missing_text_is_empty():
    assert await TextGenerator(client=fake_client(None)).generate_text("Define dog") == ""


@pytest.mark.asyncio
@pytest.mark.parametrize(("answer", "expected"), [("Yes.", True), ("no", False), ("", False)])
async def test_ask_yes_no(answer, expected):
    client = fake_client(answer)

    assert await TextGenerator(client=client).ask_yes_no('Is "dog" an english word?') is expected
    prompt = client.aio.models.calls[0]["contents"][0].parts[0].text
    assert prompt == 'Is "dog" an english word?\n(answer with yes/no)'
    assert client.aio.models.calls[0]["config"].max_output_tokens == 10


def test_requires_an_api_key_without_a_client(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with pytest.raises(ValueError, match="GEMINI_API_KEY"):
        TextGenerator()
