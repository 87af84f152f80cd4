"""Exceptions for the prerequisites module."""


class PrerequisiteError(Exception):
    """Base exception for prerequisite errors."""

    pass


class PrerequisiteUnsatisfied(PrerequisiteError):
    """Raised when one or more prerequisites are not met.

    Lists every failing prerequisite, not just the first.
    """

    def __init__(self, failures: list[str]):
        self.failures = list(failures)
        super().__init__(
            f"{len(self.failures)} prerequisite(s) not satisfied: {', '.join(self.failures)}"
        )
