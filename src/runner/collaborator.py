"""External collaborator interface and the script-based implementation."""

import logging
import os
import subprocess
import sys
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .exceptions import StepExecutionError

logger = logging.getLogger(__name__)

# Interpreter prefix chosen by script suffix; anything else is executed directly
INTERPRETERS: dict[str, list[str]] = {
    ".ps1": ["pwsh", "-NoProfile", "-File"],
    ".sh": ["bash"],
    ".py": [sys.executable],
}


def interpreter_for(target: str) -> list[str]:
    """Return the interpreter prefix used to run ``target``."""
    return list(INTERPRETERS.get(Path(target).suffix.lower(), []))


@dataclass(frozen=True)
class InvocationResult:
    """Exit status of a collaborator invocation."""

    exit_code: int
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


class ExternalCollaborator(ABC):
    """An external program that a step delegates to.

    The orchestrator only sees the exit status; output is left to the
    collaborator's own logging.
    """

    @abstractmethod
    def invoke(self, args: list[str]) -> InvocationResult:
        """Run the collaborator to completion.

        Args:
            args: Flat ``-Name value`` argument list.

        Returns:
            InvocationResult with the exit code.

        Raises:
            StepExecutionError: The collaborator could not be launched or
                did not finish.
        """
        pass


class ScriptCollaborator(ExternalCollaborator):
    """Runs a script as a subprocess and blocks until it exits.

    Stdout is passed through to the console. Stderr is read on a
    background thread and each line is logged as soon as the script
    writes it. The last stderr line is reported as the failure detail.
    """

    def __init__(
        self,
        target: str,
        env: Optional[dict[str, str]] = None,
        timeout: Optional[float] = None,
        cwd: Optional[Path] = None,
    ):
        """Initialize the collaborator.

        Args:
            target: Script path or executable name.
            env: Extra environment variables layered over the current process env.
            timeout: Seconds before the run is abandoned. None waits forever.
            cwd: Working directory for the script.
        """
        self._target = target
        self._env = env or {}
        self._timeout = timeout
        self._cwd = cwd

    @property
    def target(self) -> str:
        return self._target

    def command(self, args: list[str]) -> list[str]:
        return interpreter_for(self._target) + [self._target] + list(args)

    def _relay_stderr(self, stream, lines: list[str]) -> None:
        name = Path(self._target).name
        for raw in stream:
            line = raw.rstrip()
            if line.strip():
                logger.warning("[%s] %s", name, line)
                lines.append(line)

    def invoke(self, args: list[str]) -> InvocationResult:
        cmd = self.command(args)
        logger.debug("Running %s", cmd)

        try:
            proc = subprocess.Popen(
                cmd,
                stdout=None,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                env={**os.environ, **self._env},
                cwd=self._cwd,
            )
        except OSError as e:
            raise StepExecutionError(self._target, str(e)) from e

        stderr_lines: list[str] = []
        with proc:
            reader = threading.Thread(
                target=self._relay_stderr, args=(proc.stderr, stderr_lines), daemon=True
            )
            reader.start()
            try:
                returncode = proc.wait(timeout=self._timeout)
            except subprocess.TimeoutExpired as e:
                proc.kill()
                proc.wait()
                reader.join(timeout=5)
                raise StepExecutionError(
                    self._target, f"timed out after {self._timeout} seconds"
                ) from e
            reader.join()

        if returncode == 0:
            return InvocationResult(exit_code=0)

        detail = f"exit code {returncode}"
        if stderr_lines:
            detail += f": {stderr_lines[-1].strip()}"
        return InvocationResult(exit_code=returncode, error=detail)
