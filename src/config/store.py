"""ConfigurationStore - loads and validates the setup configuration file."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from .exceptions import ConfigurationInvalid, ConfigurationMissing
from .models import Configuration

logger = logging.getLogger(__name__)

# Keys that must be present and non-empty before any step runs
REQUIRED_KEYS = (
    "environment.name",
    "environment.subscriptionId",
    "environment.location",
    "resources.resourceGroup",
    "resources.cluster.name",
)

STEP_TIMEOUT_KEY = "execution.stepTimeoutSeconds"

TEMPLATE: dict[str, Any] = {
    "environment": {
        "name": "<environment-name>",
        "subscriptionId": "<azure-subscription-id>",
        "location": "<azure-region>",
    },
    "resources": {
        "resourceGroup": "<resource-group-name>",
        "containerRegistry": "",
        "cluster": {
            "name": "<aks-cluster-name>",
            "nodeCount": 3,
            "vmSize": "Standard_DS2_v2",
            "kubernetesVersion": "",
        },
    },
    "features": {
        "security": True,
        "monitoring": True,
        "sampleApp": True,
        "verification": True,
    },
    "monitoring": {
        "namespace": "monitoring",
        "grafanaAdminPassword": "",
    },
    "sampleApp": {
        "namespace": "helloworld",
        "image": "helloworld:latest",
    },
    "execution": {
        "scriptsDir": "scripts",
        "stepTimeoutSeconds": None,
    },
}


def check_step_timeout(config: Configuration) -> None:
    """Reject a step timeout that is not null or a positive number of seconds.

    Raises:
        ConfigurationInvalid: If the value has the wrong type or is not positive.
    """
    timeout = config.get(STEP_TIMEOUT_KEY)
    if timeout is None:
        return
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise ConfigurationInvalid(
            STEP_TIMEOUT_KEY, reason=f"not a number of seconds (got {timeout!r})"
        )
    if timeout <= 0:
        raise ConfigurationInvalid(
            STEP_TIMEOUT_KEY, reason=f"not positive (got {timeout!r}); use null for no timeout"
        )


class ConfigurationStore:
    """Loads the configuration document and enforces required keys.

    A missing file is replaced by a template and the load fails, so a
    run never proceeds on placeholder values.
    """

    def __init__(self, required_keys: Optional[tuple[str, ...]] = None):
        self._required_keys = REQUIRED_KEYS if required_keys is None else required_keys

    @property
    def required_keys(self) -> tuple[str, ...]:
        return self._required_keys

    def write_template(self, path: Path) -> None:
        """Write the template configuration to ``path``."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(TEMPLATE, f, indent=2)
            f.write("\n")

    def load(self, path: Path) -> Configuration:
        """Load and validate the configuration at ``path``.

        Args:
            path: Location of the JSON configuration document.

        Returns:
            The parsed Configuration.

        Raises:
            ConfigurationMissing: If the file does not exist. A template
                is written to ``path`` first.
            ConfigurationInvalid: If the file cannot be parsed or a
                required key is missing or empty, or
                execution.stepTimeoutSeconds is not a positive number.
        """
        path = Path(path)
        if not path.exists():
            try:
                self.write_template(path)
                logger.warning("Configuration not found, template written to %s", path)
            except OSError:
                logger.exception("Could not write configuration template to %s", path)
            raise ConfigurationMissing(path)

        try:
            with open(path, encoding="utf-8-sig") as f:
                data = json.load(f)
        except UnicodeDecodeError as e:
            raise ConfigurationInvalid(
                "<document>", reason=f"not valid UTF-8 (byte 0x{e.object[e.start]:02x} at offset {e.start})"
            ) from e
        except json.JSONDecodeError as e:
            raise ConfigurationInvalid(
                "<document>", reason=f"not valid JSON ({e.msg} at line {e.lineno})"
            ) from e
        except OSError as e:
            raise ConfigurationInvalid("<document>", reason=f"unreadable ({e})") from e

        if not isinstance(data, dict):
            raise ConfigurationInvalid("<document>", reason="not a JSON object")

        config = Configuration(data)
        missing = config.missing_keys(self._required_keys)
        if missing:
            raise ConfigurationInvalid(missing[0], missing_keys=missing)
        check_step_timeout(config)

        logger.info("Loaded configuration from %s", path)
        return config
