"""Per-user configuration stored as TOML."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path

import click
import tomli_w

from .errors import ConfigError
from .models import DEFAULT_MODEL, Model, Provider

logger = logging.getLogger(__name__)

APP_NAME = "convmit"
CONFIG_ENV_VAR = "CONVMIT_CONFIG"


def config_path() -> Path:
    """Location of the config file.

    ``$CONVMIT_CONFIG`` wins, otherwise ``config.toml`` in the
    platform's per-user application directory.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path(click.get_app_dir(APP_NAME)) / "config.toml"


@dataclass
class Config:
    """API keys and the default model."""

    claude_api_key: str | None = None
    openai_api_key: str | None = None
    gemini_api_key: str | None = None
    mistral_api_key: str | None = None
    default_model: str | None = None
    path: Path | None = field(default=None, repr=False, compare=False)

    @classmethod
    def load(cls, path: Path | None = None) -> Config:
        """Read the config file; a missing file gives an empty config.

        Raises:
            ConfigError: If the file cannot be read or is not a valid config
        """
        path = path or config_path()
        if not path.exists():
            logger.debug("No config file at %s", path)
            return cls(path=path)

        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Could not read config file {path}: {e}") from e

        values: dict[str, str] = {}
        for name in cls._stored_fields():
            value = data.get(name)
            if value is None:
                continue
            if not isinstance(value, str):
                raise ConfigError(f"Invalid config file {path}: '{name}' must be a string")
            values[name] = value

        logger.debug("Loaded config from %s", path)
        return cls(path=path, **values)

    @staticmethod
    def _stored_fields() -> list[str]:
        return [f.name for f in fields(Config) if f.name != "path"]

    def to_dict(self) -> dict[str, str]:
        return {
            name: getattr(self, name)
            for name in self._stored_fields()
            if getattr(self, name) is not None
        }

    def save(self) -> Path:
        """Write the config file, creating its directory if needed."""
        path = self.path or config_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("wb") as f:
                tomli_w.dump(self.to_dict(), f)
        except OSError as e:
            raise ConfigError(f"Could not write config file {path}: {e}") from e
        self.path = path
        logger.debug("Saved config to %s", path)
        return path

    def set_api_key(self, provider: Provider, api_key: str) -> Path:
        api_key = api_key.strip()
        if not api_key:
            raise ConfigError(f"{provider.display_name} API key must not be empty")
        setattr(self, provider.config_field, api_key)
        return self.save()

    def set_default_model(self, model: Model) -> Path:
        self.default_model = model.cli_name
        return self.save()

    def get_api_key(self, provider: Provider) -> str | None:
        """Key from the config file, falling back to the environment."""
        value = getattr(self, provider.config_field)
        if value:
            return value
        for env_var in provider.env_vars:
            value = os.environ.get(env_var)
            if value:
                return value
        return None

    def get_api_key_for_model(self, model: Model) -> str | None:
        return self.get_api_key(model.provider)

    def validate_model_config(self, model: Model) -> str:
        """Return the API key for a model.

        Raises:
            ConfigError: If no key is configured for the model's provider
        """
        api_key = self.get_api_key_for_model(model)
        if not api_key:
            provider = model.provider
            raise ConfigError(
                f"{provider.display_name} API key required. "
                f"Set with {provider.set_key_flag} or {provider.env_vars[0]} env var"
            )
        return api_key

    def resolve_model(self, cli_model: str | None = None) -> Model:
        """Pick the model: CLI flag, then configured default, then built-in default."""
        if cli_model:
            return Model.from_cli_name(cli_model)
        if self.default_model:
            try:
                return Model.from_cli_name(self.default_model)
            except ValueError as e:
                raise ConfigError(f"Invalid default_model in config: {e}") from e
        return DEFAULT_MODEL
