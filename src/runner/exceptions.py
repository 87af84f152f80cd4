"""Exceptions for the step runner module."""


class RunnerError(Exception):
    """Base exception for step runner errors."""

    pass


class StepExecutionError(RunnerError):
    """Raised when a step collaborator cannot be launched or does not finish.

    StepRunner absorbs this into a failed StepResult; it never reaches
    the pipeline.
    """

    def __init__(self, target: str, reason: str):
        self.target = target
        self.reason = reason
        super().__init__(f"Failed to execute {target}: {reason}")
