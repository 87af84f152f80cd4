"""Data models for prerequisite checks."""

from dataclasses import dataclass, field
from typing import Callable


@dataclass(frozen=True)
class Prerequisite:
    """A named, opaque check that must pass before the pipeline starts.

    Attributes:
        name: Label shown when the check fails.
        probe: Zero-argument callable returning a truthy value on success.
    """

    name: str
    probe: Callable[[], bool]


@dataclass
class PrerequisiteReport:
    """Outcome of running every prerequisite probe.

    Attributes:
        failures: Names of failing prerequisites, in check order.
        checked: Number of probes that were run.
    """

    failures: list[str] = field(default_factory=list)
    checked: int = 0

    @property
    def all_satisfied(self) -> bool:
        return not self.failures
