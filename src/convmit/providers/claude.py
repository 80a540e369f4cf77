"""Anthropic Claude provider."""

from __future__ import annotations

from typing import Any

from .base import HTTPProvider


class ClaudeProvider(HTTPProvider):
    """Claude Messages API provider."""

    BASE_URL = "https://api.anthropic.com/v1/"
    PROVIDER_NAME = "Claude"
    MAX_PROMPT_CHARS = 400_000
    API_VERSION = "2023-06-01"
    MAX_TOKENS = 1024

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": self.API_VERSION,
        }

    def _endpoint(self) -> str:
        return "messages"

    def _payload(self, prompt: str, system_prompt: str) -> dict[str, Any]:
        return {
            "model": self.model.api_id,
            "max_tokens": self.MAX_TOKENS,
            "system": system_prompt,
            "messages": [{"role": "user", "content": prompt}],
        }

    def _extract_text(self, data: Any) -> str | None:
        for block in data["content"]:
            if block.get("type", "text") == "text":
                return block["text"]
        return None
