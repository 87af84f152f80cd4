"""Static pipeline manifest and step-list construction."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from src.config import Configuration, ConfigurationInvalid
from src.runner.collaborator import interpreter_for
from src.runner.models import ParameterBinding, StepDefinition

logger = logging.getLogger(__name__)

DEFAULT_SCRIPTS_DIR = "scripts"


@dataclass(frozen=True)
class ManifestEntry:
    """A step as declared in the manifest, before configuration is applied.

    Attributes:
        name: Unique step name.
        category: Category accepted by --skip / --only.
        script: Script file name, relative to the scripts directory.
        parameters: Flag bindings passed to the script.
        feature: Toggle under ``features`` that enables the step.
            None means the step is always enabled.
        tools: CLI tools the script calls.
    """

    name: str
    category: str
    script: str
    parameters: tuple[ParameterBinding, ...] = ()
    feature: Optional[str] = None
    tools: tuple[str, ...] = ()


_RESOURCE_GROUP = ParameterBinding("ResourceGroupName", "resources.resourceGroup", required=True)
_CLUSTER_NAME = ParameterBinding("ClusterName", "resources.cluster.name", required=True)

# Order matters: each step may rely on everything created before it
DEFAULT_MANIFEST: tuple[ManifestEntry, ...] = (
    ManifestEntry(
        name="create-aks-cluster",
        category="cluster",
        script="create-aks-cluster.ps1",
        parameters=(
            ParameterBinding("SubscriptionId", "environment.subscriptionId", required=True),
            _RESOURCE_GROUP,
            _CLUSTER_NAME,
            ParameterBinding("Location", "environment.location", required=True),
            ParameterBinding("NodeCount", "resources.cluster.nodeCount"),
            ParameterBinding("NodeVmSize", "resources.cluster.vmSize"),
            ParameterBinding("KubernetesVersion", "resources.cluster.kubernetesVersion"),
        ),
        tools=("az", "kubectl"),
    ),
    ManifestEntry(
        name="apply-security-hardening",
        category="security",
        script="apply-security.ps1",
        parameters=(_RESOURCE_GROUP, _CLUSTER_NAME),
        feature="security",
        tools=("az", "kubectl"),
    ),
    ManifestEntry(
        name="install-monitoring",
        category="monitoring",
        script="install-monitoring.ps1",
        parameters=(
            _RESOURCE_GROUP,
            _CLUSTER_NAME,
            ParameterBinding("Namespace", "monitoring.namespace", required=True),
            ParameterBinding("GrafanaAdminPassword", "monitoring.grafanaAdminPassword"),
        ),
        feature="monitoring",
        tools=("kubectl", "helm"),
    ),
    ManifestEntry(
        name="deploy-sample-app",
        category="sample-app",
        script="deploy-sample-app.ps1",
        parameters=(
            _RESOURCE_GROUP,
            _CLUSTER_NAME,
            ParameterBinding("Namespace", "sampleApp.namespace", required=True),
            ParameterBinding("Image", "sampleApp.image", required=True),
            ParameterBinding("ContainerRegistry", "resources.containerRegistry"),
        ),
        feature="sampleApp",
        tools=("kubectl",),
    ),
    ManifestEntry(
        name="verify-deployment",
        category="verification",
        script="verify-deployment.sh",
        parameters=(
            _CLUSTER_NAME,
            ParameterBinding("Namespace", "sampleApp.namespace", required=True),
        ),
        feature="verification",
        tools=("kubectl",),
    ),
)

STEP_CATEGORIES: tuple[str, ...] = tuple(entry.category for entry in DEFAULT_MANIFEST)


def _check_categories(categories: Iterable[str], manifest: tuple[ManifestEntry, ...]) -> None:
    known = {entry.category for entry in manifest}
    unknown = sorted(set(categories) - known)
    if unknown:
        raise ValueError(
            f"Unknown step categories: {', '.join(unknown)}. Known: {', '.join(sorted(known))}"
        )


def build_steps(
    config: Configuration,
    manifest: tuple[ManifestEntry, ...] = DEFAULT_MANIFEST,
    skip_categories: Iterable[str] = (),
    only_categories: Iterable[str] = (),
) -> list[StepDefinition]:
    """Merge the manifest with configuration toggles and per-run skip flags.

    Args:
        config: Loaded configuration.
        manifest: Ordered step declarations.
        skip_categories: Categories to skip for this run.
        only_categories: If non-empty, every other category is skipped.

    Returns:
        Ordered StepDefinitions, one per manifest entry.

    Raises:
        ValueError: For unknown categories or duplicate step names.
        ConfigurationInvalid: If a step that will run is missing a
            required parameter.
    """
    skip_categories = set(skip_categories)
    only_categories = set(only_categories)
    _check_categories(skip_categories | only_categories, manifest)

    names = [entry.name for entry in manifest]
    if len(names) != len(set(names)):
        raise ValueError(f"Duplicate step names in manifest: {names}")

    scripts_dir = Path(config.get("execution.scriptsDir") or DEFAULT_SCRIPTS_DIR)
    steps = []
    for entry in manifest:
        skip = entry.category in skip_categories
        if only_categories and entry.category not in only_categories:
            skip = True
        if entry.feature and not config.feature_enabled(entry.feature):
            logger.info("Step '%s' disabled by features.%s", entry.name, entry.feature)
            skip = True

        step = StepDefinition(
            name=entry.name,
            category=entry.category,
            invocation_target=str(scripts_dir / entry.script),
            parameters=entry.parameters,
            skip=skip,
            tools=entry.tools,
        )

        if not skip:
            missing = config.missing_keys(step.required_keys)
            if missing:
                raise ConfigurationInvalid(
                    missing[0],
                    reason=f"missing or empty (required by step '{entry.name}')",
                    missing_keys=missing,
                )
        steps.append(step)

    return steps


def required_tools(steps: list[StepDefinition]) -> list[str]:
    """Tools needed by the steps that will run, in first-use order.

    Includes the interpreter implied by each script's suffix, except
    for Python scripts which run under the current interpreter.
    """
    tools: list[str] = []
    for step in steps:
        if step.skip:
            continue
        interpreter = interpreter_for(step.invocation_target)
        needed = list(step.tools)
        if interpreter and Path(step.invocation_target).suffix.lower() != ".py":
            needed.append(interpreter[0])
        for tool in needed:
            if tool not in tools:
                tools.append(tool)
    return tools
