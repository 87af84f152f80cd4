"""Exceptions for the configuration module."""

from pathlib import Path
from typing import Optional


class ConfigurationError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigurationMissing(ConfigurationError):
    """Raised when the configuration file does not exist.

    A template has been written to ``path`` by the time this is raised;
    the operator must fill it in before re-running.
    """

    def __init__(self, path: Path):
        self.path = path
        super().__init__(
            f"Configuration file not found at {path}. "
            "A template has been written there; fill in the placeholder values and re-run."
        )


class ConfigurationInvalid(ConfigurationError):
    """Raised when a configuration document is unreadable or incomplete."""

    def __init__(
        self,
        key: str,
        reason: str = "missing or empty",
        missing_keys: Optional[list[str]] = None,
    ):
        self.key = key
        self.reason = reason
        self.missing_keys = missing_keys or [key]
        message = f"Invalid configuration: '{key}' is {reason}"
        if len(self.missing_keys) > 1:
            message += f" (all missing keys: {', '.join(self.missing_keys)})"
        super().__init__(message)
