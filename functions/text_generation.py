"""
Text Generation Module

Thin async wrapper around Gemini text completion:
- TextGenerator.generate_text: One prompt in, answer text out
- TextGenerator.ask_yes_no: Prompt expecting a yes/no answer

Note: This module has no Cloud Function entry points - it's called by
dictionary_generator.py.
"""

from __future__ import annotations

import os

from common import GEMINI_MODEL


class TextGenerator:
    """Gemini client configured from GEMINI_API_KEY (Vertex AI mode)."""

    def __init__(self, client=None, model: str = GEMINI_MODEL):
        if client is None:
            from google import genai

            api_key = os.environ.get("GEMINI_API_KEY")
            if not api_key:
                raise ValueError("GEMINI_API_KEY not configured")
            client = genai.Client(vertexai=True, api_key=api_key)

        self._client = client
        self.model = model

    async def generate_text(
        self,
        prompt: str,
        temperature: float | None = None,
        max_tokens: int = 256,
        presence_penalty: float | None = None,
        frequency_penalty: float | None = None,
    ) -> str:
        """
        Complete a prompt.

        Args:
            prompt: Prompt text.
            temperature: Sampling temperature (model default when None).
            max_tokens: Max output tokens.
            presence_penalty / frequency_penalty: Repetition penalties.

        Returns:
            The answer text ("" when the model returns no text).
        """
        from google.genai import types

        config = types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_tokens,
            presence_penalty=presence_penalty,
            frequency_penalty=frequency_penalty,
        )

        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=[types.Content(role="user", parts=[types.Part(text=prompt)])],
            config=config,
        )
        return (response.text or "").strip()

    async def ask_yes_no(self, prompt: str) -> bool:
        answer = await self.generate_text(f"{prompt}\n(answer with yes/no)", max_tokens=10)
        return "yes" in answer.lower()
