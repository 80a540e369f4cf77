"""AI Provider implementations for commit message generation."""

from __future__ import annotations

import httpx

from ..models import Model, Provider
from .base import AIProvider, HTTPProvider
from .claude import ClaudeProvider
from .gemini import GeminiProvider
from .mistral import MistralProvider
from .openai import OpenAIProvider

__all__ = [
    "AIProvider",
    "HTTPProvider",
    "ClaudeProvider",
    "OpenAIProvider",
    "GeminiProvider",
    "MistralProvider",
    "PROVIDER_CLASSES",
    "create_provider",
]

PROVIDER_CLASSES: dict[Provider, type[HTTPProvider]] = {
    Provider.CLAUDE: ClaudeProvider,
    Provider.OPENAI: OpenAIProvider,
    Provider.GEMINI: GeminiProvider,
    Provider.MISTRAL: MistralProvider,
}


def create_provider(
    model: Model,
    api_key: str,
    transport: httpx.BaseTransport | None = None,
) -> HTTPProvider:
    """Factory function to create an AI provider instance.

    Args:
        model: Model to generate with; its provider picks the class
        api_key: API key for the model's provider
        transport: Optional httpx transport passed through to the client

    Returns:
        An HTTPProvider instance
    """
    return PROVIDER_CLASSES[model.provider](api_key=api_key, model=model, transport=transport)
