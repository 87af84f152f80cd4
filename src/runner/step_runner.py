"""StepRunner - executes a single pipeline step."""

import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from src.config import Configuration
from src.config.models import is_empty_value

from .collaborator import ExternalCollaborator, ScriptCollaborator
from .models import StepDefinition, StepResult
from .session import Session

logger = logging.getLogger(__name__)

CollaboratorFactory = Callable[[StepDefinition], ExternalCollaborator]


def format_value(value) -> str:
    """Render a configuration value as a single command-line argument."""
    if is_empty_value(value):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class StepRunner:
    """Runs one StepDefinition against an external collaborator.

    Step failures of any kind are recorded in the returned StepResult,
    never raised.

    Example:
        runner = StepRunner(config, session)
        result = runner.run(step, dry_run=False)
    """

    def __init__(
        self,
        config: Configuration,
        session: Session,
        collaborator_factory: Optional[CollaboratorFactory] = None,
    ):
        self._config = config
        self._session = session
        self._collaborator_factory = collaborator_factory or self._default_factory

    def _default_factory(self, step: StepDefinition) -> ExternalCollaborator:
        timeout = self._config.get("execution.stepTimeoutSeconds")
        return ScriptCollaborator(
            step.invocation_target,
            env=self._session.environment(),
            timeout=float(timeout) if timeout is not None else None,
        )

    def resolve_arguments(self, step: StepDefinition) -> list[str]:
        """Build the flat ``-Flag value`` list for a step.

        Unset configuration values become empty strings so the
        collaborator always receives every flag it declares.
        """
        args: list[str] = []
        for binding in step.parameters:
            value = self._config.get(binding.config_key)
            if is_empty_value(value):
                logger.debug(
                    "Step '%s': %s is unset, passing empty -%s",
                    step.name,
                    binding.config_key,
                    binding.flag,
                )
            args.extend([f"-{binding.flag}", format_value(value)])
        return args

    def run(self, step: StepDefinition, dry_run: bool = False) -> StepResult:
        """Run ``step`` and classify its outcome.

        Args:
            step: The step to run.
            dry_run: If True, only log what would be executed.

        Returns:
            StepResult for the step.
        """
        if step.skip:
            logger.info("Skipping step '%s'", step.name)
            return StepResult(
                name=step.name, category=step.category, attempted=False, succeeded=False
            )

        args = self.resolve_arguments(step)

        if dry_run:
            logger.info(
                "[dry-run] Would execute step '%s': %s %s",
                step.name,
                Path(step.invocation_target).name,
                " ".join(args),
            )
            return StepResult(
                name=step.name,
                category=step.category,
                attempted=False,
                succeeded=True,
                arguments=tuple(args),
            )

        logger.info("Running step '%s'", step.name)
        started_at = datetime.now(timezone.utc)
        start = time.monotonic()
        try:
            collaborator = self._collaborator_factory(step)
            outcome = collaborator.invoke(args)
        except Exception as e:
            duration = time.monotonic() - start
            logger.exception("Step '%s' failed", step.name)
            return StepResult(
                name=step.name,
                category=step.category,
                attempted=True,
                succeeded=False,
                started_at=started_at,
                duration_seconds=round(duration, 2),
                error=str(e),
                arguments=tuple(args),
            )

        duration = time.monotonic() - start
        if outcome.succeeded:
            logger.info("Step '%s' succeeded in %.2fs", step.name, duration)
            error = None
        else:
            error = outcome.error or f"exit code {outcome.exit_code}"
            logger.error("Step '%s' failed: %s", step.name, error)

        return StepResult(
            name=step.name,
            category=step.category,
            attempted=True,
            succeeded=outcome.succeeded,
            started_at=started_at,
            duration_seconds=round(duration, 2),
            error=error,
            exit_code=outcome.exit_code,
            arguments=tuple(args),
        )
