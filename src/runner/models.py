"""Data models for step definitions and results."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ParameterBinding:
    """Maps one collaborator flag to a configuration key.

    Attributes:
        flag: Argument name passed to the collaborator, without the dash.
        config_key: Dotted configuration path supplying the value.
        required: If True, the key must be set before the step may run.
    """

    flag: str
    config_key: str
    required: bool = False


@dataclass(frozen=True)
class StepDefinition:
    """A named unit of pipeline work delegated to an external collaborator.

    Attributes:
        name: Unique, human-readable step name.
        category: Step category used by --skip / --only.
        invocation_target: Path of the script to invoke.
        parameters: Ordered flag bindings resolved against the configuration.
        skip: If True, the step is recorded but not attempted.
        tools: External CLI tools the step needs on PATH.
    """

    name: str
    category: str
    invocation_target: str
    parameters: tuple[ParameterBinding, ...] = ()
    skip: bool = False
    tools: tuple[str, ...] = ()

    @property
    def required_keys(self) -> list[str]:
        return [p.config_key for p in self.parameters if p.required]


@dataclass(frozen=True)
class StepResult:
    """Outcome of a single step.

    Attributes:
        name: Step name.
        category: Step category, used to build re-run hints.
        attempted: Whether the collaborator was actually invoked.
        succeeded: Whether the step succeeded (or was simulated in a dry run).
        started_at: Wall-clock start time (UTC), None when not attempted.
        duration_seconds: Elapsed time, 0.0 when not attempted.
        error: Failure detail (message or exit code).
        exit_code: Collaborator exit code, if it ran to completion.
        arguments: Resolved arguments (recorded for attempted and dry-run steps).
    """

    name: str
    attempted: bool
    succeeded: bool
    category: Optional[str] = None
    started_at: Optional[datetime] = None
    duration_seconds: float = 0.0
    error: Optional[str] = None
    exit_code: Optional[int] = None
    arguments: tuple[str, ...] = ()

    @property
    def skipped(self) -> bool:
        return not self.attempted and not self.succeeded

    @property
    def simulated(self) -> bool:
        return not self.attempted and self.succeeded

    @property
    def failed(self) -> bool:
        return self.attempted and not self.succeeded

