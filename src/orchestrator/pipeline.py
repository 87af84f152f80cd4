"""Pipeline - runs an ordered list of steps with per-step failure isolation."""

import logging
from datetime import datetime, timezone
from typing import Optional

from src.runner import StepDefinition, StepResult, StepRunner

from .models import ExecutionReport

logger = logging.getLogger(__name__)


class Pipeline:
    """Runs steps strictly in order, one at a time.

    A failed step is recorded and the next step is still attempted;
    nothing is retried.

    Example:
        report = Pipeline(StepRunner(config, session)).execute(steps)
        print(report.overall_status)
    """

    def __init__(self, runner: StepRunner, environment: Optional[dict[str, str]] = None):
        self._runner = runner
        self._environment = environment or {}

    def execute(self, steps: list[StepDefinition], dry_run: bool = False) -> ExecutionReport:
        """Execute the full pipeline.

        Args:
            steps: Ordered step definitions. Names must be unique.
            dry_run: If True, steps are simulated rather than invoked.

        Returns:
            ExecutionReport with one StepResult per step.

        Raises:
            ValueError: If two steps share a name.
        """
        seen: set[str] = set()
        for step in steps:
            if step.name in seen:
                raise ValueError(f"Duplicate step name: {step.name}")
            seen.add(step.name)

        started_at = datetime.now(timezone.utc)
        results: list[StepResult] = []

        for index, step in enumerate(steps, start=1):
            logger.info("Step %d/%d: %s", index, len(steps), step.name)
            result = self._runner.run(step, dry_run=dry_run)
            results.append(result)

        report = ExecutionReport.from_results(
            results,
            started_at=started_at,
            finished_at=datetime.now(timezone.utc),
            dry_run=dry_run,
            environment=self._environment,
        )
        logger.info(
            "Pipeline finished: %s (%d/%d succeeded, %d skipped)",
            report.overall_status.value,
            report.success_count,
            report.total_count,
            report.skipped_count,
        )
        return report
