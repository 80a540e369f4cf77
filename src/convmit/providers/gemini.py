"""Google Gemini provider."""

from __future__ import annotations

from typing import Any

from .base import HTTPProvider


class GeminiProvider(HTTPProvider):
    """Gemini generateContent API provider."""

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta/"
    PROVIDER_NAME = "Google Gemini"
    MAX_PROMPT_CHARS = 400_000

    def _headers(self) -> dict[str, str]:
        return {"x-goog-api-key": self.api_key}

    def _endpoint(self) -> str:
        return f"models/{self.model.api_id}:generateContent"

    def _payload(self, prompt: str, system_prompt: str) -> dict[str, Any]:
        return {
            "system_instruction": {"parts": [{"text": system_prompt}]},
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        }

    def _extract_text(self, data: Any) -> str | None:
        candidates = data["candidates"]
        if not candidates:
            return None
        return candidates[0]["content"]["parts"][0]["text"]
