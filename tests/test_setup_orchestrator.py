"""Unit tests for the SetupOrchestrator."""

from unittest.mock import MagicMock, patch

import pytest

from src.config import ConfigurationInvalid, ConfigurationMissing
from src.orchestrator import RunStatus, SetupOrchestrator
from src.prerequisites import PrerequisiteChecker, PrerequisiteReport, PrerequisiteUnsatisfied
from tests.setup_test_helpers import (
    CollaboratorRegistry,
    FakeCollaborator,
    make_config_data,
    write_config,
)


def _session(authenticated=True):
    session = MagicMock()
    session.is_authenticated.return_value = authenticated
    session.describe.return_value = "operator@example.com (Dev)"
    session.environment.return_value = {}
    return session


@pytest.fixture
def tools_on_path():
    with patch("src.prerequisites.checker.shutil.which", return_value="/usr/bin/tool") as which:
        yield which


class TestSetupOrchestrator:
    def _make_orchestrator(self, registry=None, session=None, checker=None):
        return SetupOrchestrator(
            session=session or _session(),
            collaborator_factory=registry or CollaboratorRegistry(),
            checker=checker,
        )

    def test_full_run_success(self, tmp_path, tools_on_path):
        registry = CollaboratorRegistry()
        orchestrator = self._make_orchestrator(registry)

        report = orchestrator.run(write_config(tmp_path))

        assert report.overall_status is RunStatus.ALL_SUCCEEDED
        assert report.total_count == 5
        assert registry.invoked == [
            "create-aks-cluster",
            "apply-security-hardening",
            "install-monitoring",
            "deploy-sample-app",
            "verify-deployment",
        ]
        assert report.environment["Cluster"] == "aks-dev"

    def test_missing_config_aborts_before_any_step(self, tmp_path, tools_on_path):
        registry = CollaboratorRegistry()
        path = tmp_path / "setup-config.json"

        with pytest.raises(ConfigurationMissing):
            self._make_orchestrator(registry).run(path)

        assert path.exists()
        assert registry.invoked == []

    def test_invalid_config_aborts_before_any_step(self, tmp_path, tools_on_path):
        registry = CollaboratorRegistry()
        path = write_config(tmp_path, make_config_data(**{"environment.location": ""}))

        with pytest.raises(ConfigurationInvalid) as exc_info:
            self._make_orchestrator(registry).run(path)

        assert exc_info.value.key == "environment.location"
        assert registry.invoked == []

    def test_malformed_step_timeout_aborts_before_any_step(self, tmp_path, tools_on_path):
        registry = CollaboratorRegistry()
        path = write_config(tmp_path, make_config_data(**{"execution.stepTimeoutSeconds": "ten"}))

        with pytest.raises(ConfigurationInvalid) as exc_info:
            self._make_orchestrator(registry).run(path)

        assert exc_info.value.key == "execution.stepTimeoutSeconds"
        assert registry.invoked == []

    def test_prerequisites_fail_with_all_names(self, tmp_path):
        registry = CollaboratorRegistry()
        orchestrator = self._make_orchestrator(registry, session=_session(authenticated=False))

        def which(tool):
            return None if tool == "helm" else f"/usr/bin/{tool}"

        with patch("src.prerequisites.checker.shutil.which", side_effect=which):
            with pytest.raises(PrerequisiteUnsatisfied) as exc_info:
                orchestrator.run(write_config(tmp_path))

        assert exc_info.value.failures == [
            "tool 'helm' on PATH",
            "authenticated Azure session",
        ]
        assert registry.invoked == []

    def test_skipped_monitoring_does_not_require_helm(self, tmp_path):
        orchestrator = self._make_orchestrator()

        def which(tool):
            return None if tool == "helm" else f"/usr/bin/{tool}"

        with patch("src.prerequisites.checker.shutil.which", side_effect=which):
            report = orchestrator.run(write_config(tmp_path), skip_categories=["monitoring"])

        assert report.overall_status is RunStatus.ALL_SUCCEEDED
        assert report.total_count == 4

    def test_partial_failure(self, tmp_path, tools_on_path):
        registry = CollaboratorRegistry(**{"deploy-sample-app": FakeCollaborator(exit_code=1)})

        report = self._make_orchestrator(registry).run(
            write_config(tmp_path), skip_categories=["monitoring"]
        )

        assert report.total_count == 4
        assert report.success_count == 3
        assert report.overall_status is RunStatus.PARTIAL_FAILURE
        assert [r.name for r in report.failed_results] == ["deploy-sample-app"]

    def test_dry_run_invokes_nothing(self, tmp_path, tools_on_path):
        registry = CollaboratorRegistry()

        report = self._make_orchestrator(registry).run(write_config(tmp_path), dry_run=True)

        assert report.overall_status is RunStatus.DRY_RUN
        assert registry.invoked == []

    def test_only_runs_selected_category(self, tmp_path, tools_on_path):
        registry = CollaboratorRegistry()

        report = self._make_orchestrator(registry).run(
            write_config(tmp_path), only_categories=["sample-app"]
        )

        assert registry.invoked == ["deploy-sample-app"]
        assert report.total_count == 1

    def test_uses_injected_checker(self, tmp_path):
        checker = MagicMock(spec=PrerequisiteChecker)
        checker.check_all.return_value = PrerequisiteReport(failures=["az"])

        with pytest.raises(PrerequisiteUnsatisfied):
            self._make_orchestrator(checker=checker).run(write_config(tmp_path))

        checker.check_all.assert_called_once()

    def test_default_session_uses_configured_subscription(self, tmp_path, tools_on_path):
        orchestrator = SetupOrchestrator(collaborator_factory=CollaboratorRegistry())

        with patch("src.orchestrator.setup_orchestrator.AzureCliSession") as session_cls:
            session_cls.return_value = _session()
            orchestrator.run(write_config(tmp_path), dry_run=True)

        session_cls.assert_called_once_with(
            subscription_id="11111111-2222-3333-4444-555555555555"
        )
