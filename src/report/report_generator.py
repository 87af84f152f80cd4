"""ReportGenerator for rendering and saving execution reports."""

import itertools
import logging
from pathlib import Path
from typing import Optional

from src.orchestrator.models import ExecutionReport, RunStatus
from src.runner.models import StepResult

from .exceptions import ReportPersistenceError

logger = logging.getLogger(__name__)

REPORT_FILENAME_FORMAT = "setup-report-%Y%m%d-%H%M%S-%f.txt"


class ReportGenerator:
    """Renders an ExecutionReport as plain text and saves it to disk.

    Saving is best-effort: a failed write is logged and never changes
    the outcome of the run.
    """

    def _step_status(self, result: StepResult) -> str:
        if result.simulated:
            return "DRY-RUN"
        if result.skipped:
            return "SKIPPED"
        return "OK" if result.succeeded else "FAILED"

    def _format_step_line(self, result: StepResult) -> str:
        """Format a single step, e.g. "- install-monitoring: OK (12.5s)"."""
        status = self._step_status(result)
        line = f"- {result.name}: {status}"
        if result.attempted:
            line += f" ({result.duration_seconds}s)"
        return line

    # -------------------- Public API --------------------

    def render(self, report: ExecutionReport) -> str:
        """Format an execution report as plain text.

        Args:
            report: ExecutionReport to format.

        Returns:
            Formatted plain text string.
        """
        separator = "=" * 40
        lines = []

        # Header
        lines.append(separator)
        lines.append("  AKS Setup Report")
        lines.append(f"  Started: {report.started_at.strftime('%Y-%m-%d %H:%M:%S %Z').strip()}")
        lines.append(f"  Duration: {report.total_duration}s")
        lines.append(separator)
        lines.append("")

        if report.environment:
            lines.append("--- Configuration ---")
            for label, value in report.environment.items():
                lines.append(f"{label}: {value or '(not set)'}")
            lines.append("")

        lines.append(f"--- Steps ({len(report.results)}) ---")
        for result in report.results:
            lines.append(self._format_step_line(result))
            if result.simulated:
                lines.append(f"    would run with: {' '.join(result.arguments) or '(no arguments)'}")
        lines.append("")

        if report.overall_status is RunStatus.DRY_RUN:
            simulated = sum(1 for r in report.results if r.simulated)
            lines.append(
                f"Summary: {simulated} step(s) simulated, {report.skipped_count} skipped"
            )
        else:
            lines.append(
                f"Summary: {report.success_count}/{report.total_count} attempted step(s) succeeded,"
                f" {report.skipped_count} skipped"
            )
        lines.append(f"Status: {report.overall_status.value}")

        if report.overall_status is RunStatus.PARTIAL_FAILURE:
            failed = report.failed_results
            lines.append("")
            lines.append(f"--- Failed steps ({len(failed)}) ---")
            for result in failed:
                lines.append(f"- {result.name}: {result.error or 'unknown error'}")
            categories = []
            for result in failed:
                if result.category and result.category not in categories:
                    categories.append(result.category)
            if categories:
                hint = " ".join(f"--only {c}" for c in categories)
                lines.append("")
                lines.append(f"Re-run the failed steps with: {hint}")

        lines.append("")
        lines.append(separator)

        return "\n".join(lines)

    def report_path(self, report: ExecutionReport, reports_dir: Path) -> Path:
        """Timestamped file path for ``report`` under ``reports_dir``."""
        return Path(reports_dir) / report.started_at.strftime(REPORT_FILENAME_FORMAT)

    def write(self, report: ExecutionReport, reports_dir: Path) -> Path:
        """Write the rendered report.

        An existing file is never overwritten. If the timestamped name is
        taken, a numeric suffix is appended.

        Raises:
            ReportPersistenceError: If the file cannot be written.
        """
        path = self.report_path(report, reports_dir)
        content = self.render(report) + "\n"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ReportPersistenceError(path, str(e)) from e

        for attempt in itertools.count():
            candidate = path if attempt == 0 else path.with_name(f"{path.stem}-{attempt}{path.suffix}")
            try:
                with candidate.open("x", encoding="utf-8") as f:
                    f.write(content)
            except FileExistsError:
                continue
            except OSError as e:
                raise ReportPersistenceError(candidate, str(e)) from e
            return candidate

    def persist(self, report: ExecutionReport, reports_dir: Path) -> Optional[Path]:
        """Save the report, logging instead of raising on failure.

        Args:
            report: ExecutionReport to save.
            reports_dir: Directory for report files.

        Returns:
            Path of the written file, or None if writing failed.
        """
        try:
            path = self.write(report, reports_dir)
        except ReportPersistenceError as e:
            logger.error("Report not saved: %s", e)
            return None

        logger.info("Report written to %s", path)
        return path
