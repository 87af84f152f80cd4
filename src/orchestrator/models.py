"""Data models for pipeline execution results."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from src.runner.models import StepResult


class RunStatus(Enum):
    """Overall outcome of a pipeline run."""

    ALL_SUCCEEDED = "AllSucceeded"
    PARTIAL_FAILURE = "PartialFailure"
    DRY_RUN = "DryRun"


@dataclass(frozen=True)
class ExecutionReport:
    """Aggregate result of a full pipeline run.

    Attributes:
        results: One StepResult per step, in execution order.
        started_at: When the run started.
        finished_at: When the last step finished.
        total_duration: Wall-clock seconds for the whole run.
        success_count: Results with succeeded=True.
        total_count: Results with attempted=True.
        overall_status: AllSucceeded, PartialFailure or DryRun.
        environment: Configuration summary shown in the report header.
    """

    results: tuple[StepResult, ...]
    started_at: datetime
    finished_at: datetime
    total_duration: float
    success_count: int
    total_count: int
    overall_status: RunStatus
    environment: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_results(
        cls,
        results: list[StepResult],
        started_at: datetime,
        finished_at: datetime,
        dry_run: bool,
        environment: Optional[dict[str, str]] = None,
    ) -> "ExecutionReport":
        """Derive counts and status from collected step results."""
        success_count = sum(1 for r in results if r.succeeded)
        total_count = sum(1 for r in results if r.attempted)

        if dry_run:
            status = RunStatus.DRY_RUN
        elif success_count == total_count:
            status = RunStatus.ALL_SUCCEEDED
        else:
            status = RunStatus.PARTIAL_FAILURE

        return cls(
            results=tuple(results),
            started_at=started_at,
            finished_at=finished_at,
            total_duration=round((finished_at - started_at).total_seconds(), 2),
            success_count=success_count,
            total_count=total_count,
            overall_status=status,
            environment=dict(environment or {}),
        )

    @property
    def failed_results(self) -> list[StepResult]:
        return [r for r in self.results if r.failed]

    @property
    def skipped_count(self) -> int:
        return sum(1 for r in self.results if r.skipped)

    @property
    def success(self) -> bool:
        return self.overall_status is not RunStatus.PARTIAL_FAILURE
