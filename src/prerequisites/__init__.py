"""Prerequisite checks run before any pipeline step.

Public API:
    PrerequisiteChecker: Runs every probe and reports all failures.
    Prerequisite: A named probe.
    PrerequisiteReport: Outcome of a check pass.
    tool_available: Probe for an executable on PATH.
    session_authenticated: Probe for an authenticated cloud session.
    PrerequisiteError: Base exception for module errors.
    PrerequisiteUnsatisfied: Raised when any prerequisite fails.
"""

from .checker import PrerequisiteChecker, session_authenticated, tool_available
from .exceptions import PrerequisiteError, PrerequisiteUnsatisfied
from .models import Prerequisite, PrerequisiteReport

__all__ = [
    "PrerequisiteChecker",
    "Prerequisite",
    "PrerequisiteReport",
    "tool_available",
    "session_authenticated",
    "PrerequisiteError",
    "PrerequisiteUnsatisfied",
]
