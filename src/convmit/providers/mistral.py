"""Mistral API provider.

Mistral's chat completions API is OpenAI-compatible apart from the
sampling parameters it accepts.
"""

from __future__ import annotations

from typing import Any

from .openai import OpenAICompatibleProvider


class MistralProvider(OpenAICompatibleProvider):
    """Mistral chat completions provider."""

    BASE_URL = "https://api.mistral.ai/v1/"
    PROVIDER_NAME = "Mistral"
    MAX_PROMPT_CHARS = 100_000
    MAX_TOKENS = 1024
    TEMPERATURE = 0.3

    def _headers(self) -> dict[str, str]:
        return {**super()._headers(), "Accept": "application/json"}

    def _payload(self, prompt: str, system_prompt: str) -> dict[str, Any]:
        payload = super()._payload(prompt, system_prompt)
        payload["max_tokens"] = self.MAX_TOKENS
        payload["temperature"] = self.TEMPERATURE
        return payload
