"""Step runner module.

Executes one pipeline step at a time against an external collaborator
and records the outcome.

Public API:
    StepRunner: Runs a StepDefinition and returns a StepResult.
    StepDefinition: Immutable description of a step.
    ParameterBinding: Flag-to-configuration-key binding.
    StepResult: Outcome of a single step.
    ExternalCollaborator: Interface for invoked programs.
    ScriptCollaborator: subprocess-backed collaborator.
    InvocationResult: Exit status of an invocation.
    Session: Authenticated cloud session capability.
    AzureCliSession: Session backed by the Azure CLI login.
    RunnerError: Base exception for module errors.
    StepExecutionError: Raised when a collaborator cannot run.
"""

from .collaborator import ExternalCollaborator, InvocationResult, ScriptCollaborator
from .exceptions import RunnerError, StepExecutionError
from .models import ParameterBinding, StepDefinition, StepResult
from .session import AzureCliSession, Session
from .step_runner import StepRunner

__all__ = [
    "StepRunner",
    "StepDefinition",
    "ParameterBinding",
    "StepResult",
    "ExternalCollaborator",
    "ScriptCollaborator",
    "InvocationResult",
    "Session",
    "AzureCliSession",
    "RunnerError",
    "StepExecutionError",
]
