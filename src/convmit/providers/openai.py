"""OpenAI API provider for commit message generation."""

from __future__ import annotations

from typing import Any

from .base import HTTPProvider


class OpenAICompatibleProvider(HTTPProvider):
    """Base class for OpenAI-compatible chat completions APIs."""

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def _endpoint(self) -> str:
        return "chat/completions"

    def _payload(self, prompt: str, system_prompt: str) -> dict[str, Any]:
        return {
            "model": self.model.api_id,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
        }

    def _extract_text(self, data: Any) -> str | None:
        return data["choices"][0]["message"]["content"]


class OpenAIProvider(OpenAICompatibleProvider):
    """OpenAI API provider.

    GPT-5 models only accept the default temperature, so none is sent.
    """

    BASE_URL = "https://api.openai.com/v1/"
    PROVIDER_NAME = "OpenAI"
    MAX_PROMPT_CHARS = 200_000
