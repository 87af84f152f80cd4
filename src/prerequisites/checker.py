"""PrerequisiteChecker and the standard probes."""

import logging
import shutil
from typing import Callable

from src.runner.session import Session

from .models import Prerequisite, PrerequisiteReport

logger = logging.getLogger(__name__)


def tool_available(tool: str) -> Callable[[], bool]:
    """Probe that passes when ``tool`` is an executable on PATH."""

    def probe() -> bool:
        return shutil.which(tool) is not None

    return probe


def session_authenticated(session: Session) -> Callable[[], bool]:
    """Probe that passes when ``session`` holds a usable login."""

    def probe() -> bool:
        return session.is_authenticated()

    return probe


class PrerequisiteChecker:
    """Runs prerequisite probes and collects every failure.

    Probes are opaque; the checker only looks at their result. A probe
    that raises is treated as failed.
    """

    def check_all(self, requirements: list[Prerequisite]) -> PrerequisiteReport:
        """Run all probes without short-circuiting.

        Args:
            requirements: Prerequisites to check, in reporting order.

        Returns:
            PrerequisiteReport listing every failing prerequisite.
        """
        report = PrerequisiteReport()
        for requirement in requirements:
            report.checked += 1
            try:
                satisfied = bool(requirement.probe())
            except Exception:
                logger.exception("Prerequisite probe '%s' raised", requirement.name)
                satisfied = False

            if satisfied:
                logger.debug("Prerequisite satisfied: %s", requirement.name)
            else:
                logger.error("Prerequisite not satisfied: %s", requirement.name)
                report.failures.append(requirement.name)

        logger.info(
            "Checked %d prerequisites, %d failed",
            report.checked,
            len(report.failures),
        )
        return report
