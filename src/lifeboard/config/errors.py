"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid."""


class InvalidConfigurationValueError(ConfigurationError):
    """Raised when an environment variable is present but cannot be parsed."""

    def __init__(self, name: str, value: str, *, expected: str) -> None:
        super().__init__(f"Invalid {expected} for {name}: {value!r}")
        self.name = name
        self.value = value
