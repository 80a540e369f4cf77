"""Generate conventional commit messages for staged changes using Claude, OpenAI, Gemini or Mistral."""

__version__ = "1.0.0"

from .config import Config
from .errors import ConfigError, ConvmitError, ProviderError
from .generator import CommitGenerator, GeneratedCommit, GenerateOptions
from .git import GitError, StagedChange
from .message import CommitMessage
from .models import Model, Provider

__all__ = [
    "CommitGenerator",
    "CommitMessage",
    "Config",
    "ConfigError",
    "ConvmitError",
    "GenerateOptions",
    "GeneratedCommit",
    "GitError",
    "Model",
    "Provider",
    "ProviderError",
    "StagedChange",
    "__version__",
]
