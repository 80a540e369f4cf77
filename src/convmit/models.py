"""Supported providers and models."""

from __future__ import annotations

from enum import Enum


class Provider(Enum):
    """A hosted LLM provider."""

    CLAUDE = ("Claude", "claude", ("CLAUDE_API_KEY", "ANTHROPIC_API_KEY"))
    OPENAI = ("OpenAI", "openai", ("OPENAI_API_KEY",))
    GEMINI = ("Google Gemini", "gemini", ("GEMINI_API_KEY",))
    MISTRAL = ("Mistral", "mistral", ("MISTRAL_API_KEY",))

    def __init__(self, display_name: str, key_name: str, env_vars: tuple[str, ...]) -> None:
        self.display_name = display_name
        self.key_name = key_name
        self.env_vars = env_vars

    @property
    def config_field(self) -> str:
        """Name of the config file field holding this provider's key."""
        return f"{self.key_name}_api_key"

    @property
    def set_key_flag(self) -> str:
        return f"--set-{self.key_name}-key"


class Model(Enum):
    """A model that can generate commit messages.

    The value is the name accepted on the command line.
    """

    OPUS_4_1 = ("opus-4-1", "claude-opus-4-1-20250805", Provider.CLAUDE)
    OPUS_4 = ("opus-4", "claude-opus-4-20250514", Provider.CLAUDE)
    SONNET_4 = ("sonnet-4", "claude-sonnet-4-20250514", Provider.CLAUDE)
    SONNET_3_7 = ("sonnet-3-7", "claude-3-7-sonnet-20250219", Provider.CLAUDE)
    HAIKU_3_5 = ("haiku-3-5", "claude-3-5-haiku-20241022", Provider.CLAUDE)
    HAIKU_3 = ("haiku-3", "claude-3-haiku-20240307", Provider.CLAUDE)
    GPT_5 = ("gpt-5", "gpt-5-2025-08-07", Provider.OPENAI)
    GPT_5_MINI = ("gpt-5-mini", "gpt-5-mini-2025-08-07", Provider.OPENAI)
    GPT_5_NANO = ("gpt-5-nano", "gpt-5-nano-2025-08-07", Provider.OPENAI)
    GEMINI_2_5_PRO = ("gemini-2.5-pro", "gemini-2.5-pro", Provider.GEMINI)
    GEMINI_2_5_FLASH = ("gemini-2.5-flash", "gemini-2.5-flash", Provider.GEMINI)
    GEMINI_2_5_FLASH_LITE = ("gemini-2.5-flash-lite", "gemini-2.5-flash-lite", Provider.GEMINI)
    MISTRAL_MEDIUM_3_1 = ("mistral-medium-31", "mistral-medium-2508", Provider.MISTRAL)
    MAGISTRAL_MEDIUM_1_1 = ("magistral-medium-11", "magistral-medium-2507", Provider.MISTRAL)
    CODESTRAL_2508 = ("codestral-2508", "codestral-2508", Provider.MISTRAL)
    MISTRAL_SMALL_3_2 = ("mistral-small-32", "mistral-small-3.2", Provider.MISTRAL)
    MINISTRAL_8B = ("ministral-8b", "ministral-8b-2410", Provider.MISTRAL)

    def __init__(self, cli_name: str, api_id: str, provider: Provider) -> None:
        self.cli_name = cli_name
        self.api_id = api_id
        self.provider = provider

    def __str__(self) -> str:
        return self.api_id

    @classmethod
    def from_cli_name(cls, name: str) -> Model:
        """Look up a model by its command-line name.

        Raises:
            ValueError: If no model has that name
        """
        for model in cls:
            if model.cli_name == name:
                return model
        raise ValueError(f"Unknown model: {name}")

    @classmethod
    def all_models(cls) -> list[Model]:
        return list(cls)

    @classmethod
    def cli_names(cls) -> list[str]:
        return [model.cli_name for model in cls]

    @property
    def is_claude(self) -> bool:
        return self.provider is Provider.CLAUDE

    @property
    def is_openai(self) -> bool:
        return self.provider is Provider.OPENAI

    @property
    def is_gemini(self) -> bool:
        return self.provider is Provider.GEMINI

    @property
    def is_mistral(self) -> bool:
        return self.provider is Provider.MISTRAL


DEFAULT_MODEL = Model.HAIKU_3_5
