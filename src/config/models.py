"""Configuration data model."""

import copy
import re
from typing import Any, Iterable

# Template values look like "<your-subscription-id>" and never count as real data
PLACEHOLDER_PATTERN = re.compile(r"^<[^<>]*>$")

# Keys shown in the configuration summary of every report, in display order
SUMMARY_KEYS = (
    ("Environment", "environment.name"),
    ("Subscription", "environment.subscriptionId"),
    ("Location", "environment.location"),
    ("Resource Group", "resources.resourceGroup"),
    ("Cluster", "resources.cluster.name"),
)


def is_empty_value(value: Any) -> bool:
    """Check whether a configuration value counts as absent.

    None, blank strings, template placeholders and empty containers are
    all empty. Booleans and numbers (including False and 0) are not.
    """
    if value is None:
        return True
    if isinstance(value, str):
        stripped = value.strip()
        return not stripped or bool(PLACEHOLDER_PATTERN.match(stripped))
    if isinstance(value, (dict, list)):
        return len(value) == 0
    return False


class Configuration:
    """Read-only view over a parsed configuration document.

    Values are addressed with dotted key paths such as
    ``"resources.cluster.name"``. Accessors hand out copies so the
    document cannot be changed during a run.

    Example:
        config = Configuration({"environment": {"name": "dev"}})
        config.get("environment.name")  # "dev"
    """

    def __init__(self, data: dict[str, Any]):
        self._data = copy.deepcopy(data)

    def get(self, key_path: str, default: Any = None) -> Any:
        """Look up a value by dotted key path.

        Args:
            key_path: Dotted path, e.g. "resources.cluster.name".
            default: Returned when any segment of the path is absent.

        Returns:
            A copy of the stored value, or ``default``.
        """
        node: Any = self._data
        for part in key_path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return copy.deepcopy(node)

    def is_missing(self, key_path: str) -> bool:
        """True if the key is absent or holds an empty value."""
        return is_empty_value(self.get(key_path))

    def missing_keys(self, key_paths: Iterable[str]) -> list[str]:
        """Return the subset of ``key_paths`` that are missing, in order."""
        return [key for key in key_paths if self.is_missing(key)]

    def feature_enabled(self, feature: str) -> bool:
        """Check a toggle under the ``features`` section.

        Absent toggles are disabled.
        """
        return self.get(f"features.{feature}") is True

    def summary(self) -> dict[str, str]:
        """Human-readable identity of the target environment."""
        summary = {}
        for label, key in SUMMARY_KEYS:
            value = self.get(key)
            summary[label] = "" if is_empty_value(value) else str(value)
        return summary

    def to_dict(self) -> dict[str, Any]:
        """Return a deep copy of the underlying document."""
        return copy.deepcopy(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Configuration):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"Configuration(sections={sorted(self._data)})"
