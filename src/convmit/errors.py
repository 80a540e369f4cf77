"""Exceptions raised by convmit."""


class ConvmitError(Exception):
    """Base class for errors reported to the user."""


class ConfigError(ConvmitError):
    """Configuration is missing or invalid."""


class ProviderError(ConvmitError):
    """The remote AI provider failed or returned an unusable response."""
