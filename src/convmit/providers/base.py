"""Base protocol and shared HTTP plumbing for AI providers."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from ..errors import ProviderError
from ..models import Model

logger = logging.getLogger(__name__)


class AIProvider(ABC):
    """Abstract base class for AI providers."""

    @abstractmethod
    def generate_commit_message(
        self,
        prompt: str,
        system_prompt: str,
    ) -> str:
        """Generate a commit message from a prompt.

        Args:
            prompt: The user prompt containing staged files and diff
            system_prompt: The system prompt defining behavior

        Returns:
            The generated commit message
        """
        ...

    @abstractmethod
    def get_name(self) -> str:
        """Get the display name for this provider."""
        ...

    def close(self) -> None:
        """Release any resources held by the provider."""


class HTTPProvider(AIProvider):
    """Base class for providers reached with a single JSON POST.

    Subclasses define:
        - BASE_URL: The API base URL
        - PROVIDER_NAME: Display name used in errors
        - MAX_PROMPT_CHARS: Largest user prompt sent to the API
        - _headers(), _endpoint(), _payload(), _extract_text()
    """

    BASE_URL: str
    PROVIDER_NAME: str
    MAX_PROMPT_CHARS: int = 100_000
    TIMEOUT = 60.0

    def __init__(
        self,
        api_key: str,
        model: Model,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            api_key: API key for the provider
            model: Model to use
            transport: Optional httpx transport (used to stub the API in tests)

        Raises:
            ProviderError: If the key is empty or the model belongs elsewhere
        """
        if not api_key:
            raise ProviderError(f"{self.PROVIDER_NAME} API key is required")
        if model.provider.display_name != self.PROVIDER_NAME:
            raise ProviderError(f"Model {model.cli_name} is not a {self.PROVIDER_NAME} model")
        self.api_key = api_key
        self.model = model
        self._client = httpx.Client(
            base_url=self.BASE_URL,
            headers={"Content-Type": "application/json", **self._headers()},
            timeout=self.TIMEOUT,
            transport=transport,
        )

    @abstractmethod
    def _headers(self) -> dict[str, str]:
        """Authentication headers."""

    @abstractmethod
    def _endpoint(self) -> str:
        """Path of the generation endpoint relative to BASE_URL."""

    @abstractmethod
    def _payload(self, prompt: str, system_prompt: str) -> dict[str, Any]:
        """JSON request body."""

    @abstractmethod
    def _extract_text(self, data: Any) -> str | None:
        """Pull the message text out of a decoded response body."""

    def _error_message(self, data: Any) -> str | None:
        """Provider error message from a decoded error body, if present."""
        if isinstance(data, dict) and isinstance(data.get("error"), dict):
            message = data["error"].get("message")
            if isinstance(message, str):
                return message
        return None

    def generate_commit_message(
        self,
        prompt: str,
        system_prompt: str,
    ) -> str:
        """Generate a commit message with one request to the API.

        Raises:
            ProviderError: On transport failure, non-2xx status, or an
                unusable response body
        """
        logger.debug(
            "POST %s%s (model=%s, prompt=%d chars)",
            self.BASE_URL,
            self._endpoint(),
            self.model.api_id,
            len(prompt),
        )
        try:
            response = self._client.post(
                self._endpoint(),
                json=self._payload(prompt, system_prompt),
            )
        except httpx.HTTPError as e:
            raise ProviderError(f"Request to {self.PROVIDER_NAME} failed: {e}") from e

        logger.debug("%s responded with HTTP %d", self.PROVIDER_NAME, response.status_code)

        if not response.is_success:
            try:
                detail = self._error_message(response.json())
            except json.JSONDecodeError:
                detail = None
            if detail:
                raise ProviderError(f"{self.PROVIDER_NAME} API error: {detail}")
            raise ProviderError(f"HTTP error {response.status_code}: {response.text}")

        try:
            data = response.json()
        except json.JSONDecodeError as e:
            raise ProviderError(f"Malformed response from {self.PROVIDER_NAME}: {e}") from e

        try:
            text = self._extract_text(data)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise ProviderError(
                f"Malformed response from {self.PROVIDER_NAME}: missing {e}"
            ) from e

        if text is not None and not isinstance(text, str):
            raise ProviderError(
                f"Malformed response from {self.PROVIDER_NAME}: "
                f"expected text, got {type(text).__name__}"
            )

        if not text or not text.strip():
            raise ProviderError(f"No response from {self.PROVIDER_NAME}")

        return text.strip()

    def get_name(self) -> str:
        """Get the display name for this provider."""
        return f"{self.PROVIDER_NAME} ({self.model.cli_name})"

    def close(self) -> None:
        self._client.close()

    def __del__(self) -> None:
        """Clean up HTTP client on deletion."""
        if hasattr(self, "_client"):
            self._client.close()
