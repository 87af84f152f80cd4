"""Configuration module for the setup orchestrator.

Loads the JSON document describing the target environment and which
optional steps are enabled.

Public API:
    ConfigurationStore: Loads, validates and seeds the configuration file.
    Configuration: Read-only view with dotted key access.
    ConfigurationError: Base exception for module errors.
    ConfigurationMissing: Raised when the file is absent (template written).
    ConfigurationInvalid: Raised when the document or a value in it is rejected.
"""

from .exceptions import ConfigurationError, ConfigurationInvalid, ConfigurationMissing
from .models import Configuration
from .store import REQUIRED_KEYS, ConfigurationStore

__all__ = [
    "ConfigurationStore",
    "Configuration",
    "REQUIRED_KEYS",
    "ConfigurationError",
    "ConfigurationMissing",
    "ConfigurationInvalid",
]
