import pytest

from convmit.config import Config, config_path
from convmit.errors import ConfigError
from convmit.models import DEFAULT_MODEL, Model, Provider


def test_config_path_honours_env(isolated_config):
    assert config_path() == isolated_config


def test_load_missing_file_does_not_write(isolated_config):
    config = Config.load()
    assert config.claude_api_key is None
    assert config.default_model is None
    assert not isolated_config.exists()


def test_set_api_key_persists(isolated_config):
    Config.load().set_api_key(Provider.CLAUDE, "claude-test-key")

    assert isolated_config.exists()
    assert Config.load().claude_api_key == "claude-test-key"
    assert 'claude_api_key = "claude-test-key"' in isolated_config.read_text()


def test_set_api_key_keeps_other_fields(isolated_config):
    config = Config.load()
    config.set_api_key(Provider.OPENAI, "openai-key")
    config.set_default_model(Model.GPT_5_MINI)

    reloaded = Config.load()
    assert reloaded.openai_api_key == "openai-key"
    assert reloaded.default_model == "gpt-5-mini"
    assert reloaded.claude_api_key is None


def test_set_empty_api_key_rejected():
    with pytest.raises(ConfigError):
        Config.load().set_api_key(Provider.MISTRAL, "   ")


def test_invalid_toml(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text("claude_api_key = ")
    with pytest.raises(ConfigError, match="Could not read config file"):
        Config.load()


def test_wrong_value_type(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text("openai_api_key = 42\n")
    with pytest.raises(ConfigError, match="'openai_api_key' must be a string"):
        Config.load()


def test_unknown_keys_ignored(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text('api_key = "old"\ngemini_api_key = "g"\n')
    config = Config.load()
    assert config.gemini_api_key == "g"


def test_env_var_fallback(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "from-anthropic-env")
    config = Config()
    assert config.get_api_key(Provider.CLAUDE) == "from-anthropic-env"

    monkeypatch.setenv("CLAUDE_API_KEY", "from-claude-env")
    assert config.get_api_key(Provider.CLAUDE) == "from-claude-env"


def test_config_value_wins_over_env(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "env-key")
    config = Config(openai_api_key="file-key")
    assert config.get_api_key_for_model(Model.GPT_5) == "file-key"


def test_validate_model_config():
    config = Config(claude_api_key="claude-test-key")
    assert config.validate_model_config(Model.SONNET_4) == "claude-test-key"
    assert config.get_api_key_for_model(Model.GPT_5) is None

    with pytest.raises(ConfigError) as excinfo:
        config.validate_model_config(Model.GPT_5)
    message = str(excinfo.value)
    assert "OpenAI API key required" in message
    assert "--set-openai-key" in message
    assert "OPENAI_API_KEY" in message


def test_resolve_model_precedence():
    assert Config().resolve_model() is DEFAULT_MODEL
    assert Config(default_model="gpt-5").resolve_model() is Model.GPT_5
    assert Config(default_model="gpt-5").resolve_model("sonnet-4") is Model.SONNET_4


def test_resolve_model_invalid_default():
    with pytest.raises(ConfigError, match="Invalid default_model"):
        Config(default_model="gpt-2").resolve_model()
