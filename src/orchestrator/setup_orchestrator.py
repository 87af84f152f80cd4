"""SetupOrchestrator - configuration, prerequisites, pipeline, in that order."""

import logging
from pathlib import Path
from typing import Iterable, Optional

from src.config import Configuration, ConfigurationStore
from src.prerequisites import (
    Prerequisite,
    PrerequisiteChecker,
    PrerequisiteUnsatisfied,
    session_authenticated,
    tool_available,
)
from src.runner import AzureCliSession, Session, StepDefinition, StepRunner
from src.runner.step_runner import CollaboratorFactory

from .manifest import DEFAULT_MANIFEST, ManifestEntry, build_steps, required_tools
from .models import ExecutionReport
from .pipeline import Pipeline

logger = logging.getLogger(__name__)


class SetupOrchestrator:
    """Orchestrates a cluster bring-up run.

    Loads the configuration, checks prerequisites, then runs every
    manifest step through the Pipeline. Configuration and prerequisite
    errors are raised before any step starts.

    Example:
        report = SetupOrchestrator().run(Path("config/setup-config.json"))
        print(report.overall_status)
    """

    def __init__(
        self,
        config_store: Optional[ConfigurationStore] = None,
        checker: Optional[PrerequisiteChecker] = None,
        session: Optional[Session] = None,
        collaborator_factory: Optional[CollaboratorFactory] = None,
        manifest: tuple[ManifestEntry, ...] = DEFAULT_MANIFEST,
    ):
        self._config_store = config_store
        self._checker = checker
        self._session = session
        self._collaborator_factory = collaborator_factory
        self._manifest = manifest

    def _get_config_store(self) -> ConfigurationStore:
        if self._config_store is None:
            self._config_store = ConfigurationStore()
        return self._config_store

    def _get_checker(self) -> PrerequisiteChecker:
        if self._checker is None:
            self._checker = PrerequisiteChecker()
        return self._checker

    def _get_session(self, config: Configuration) -> Session:
        if self._session is None:
            self._session = AzureCliSession(
                subscription_id=config.get("environment.subscriptionId")
            )
        return self._session

    def prerequisites(
        self, steps: list[StepDefinition], session: Session
    ) -> list[Prerequisite]:
        """Prerequisites for the steps that will run: tools, then login."""
        requirements = [
            Prerequisite(name=f"tool '{tool}' on PATH", probe=tool_available(tool))
            for tool in required_tools(steps)
        ]
        requirements.append(
            Prerequisite(name="authenticated Azure session", probe=session_authenticated(session))
        )
        return requirements

    def run(
        self,
        config_path: Path,
        skip_categories: Iterable[str] = (),
        only_categories: Iterable[str] = (),
        dry_run: bool = False,
    ) -> ExecutionReport:
        """Run the setup pipeline.

        Args:
            config_path: Location of the configuration document.
            skip_categories: Step categories to skip.
            only_categories: If given, only these categories run.
            dry_run: If True, log what would run without invoking anything.

        Returns:
            ExecutionReport for the run.

        Raises:
            ConfigurationMissing: The configuration file was absent.
            ConfigurationInvalid: A required key is missing or empty.
            PrerequisiteUnsatisfied: One or more prerequisites failed.
            ValueError: An unknown step category was given.
        """
        config = self._get_config_store().load(Path(config_path))
        steps = build_steps(
            config,
            manifest=self._manifest,
            skip_categories=skip_categories,
            only_categories=only_categories,
        )
        session = self._get_session(config)

        check = self._get_checker().check_all(self.prerequisites(steps, session))
        if not check.all_satisfied:
            raise PrerequisiteUnsatisfied(check.failures)

        logger.info("Running setup as %s", session.describe())
        runner = StepRunner(config, session, collaborator_factory=self._collaborator_factory)
        return Pipeline(runner, environment=config.summary()).execute(steps, dry_run=dry_run)
