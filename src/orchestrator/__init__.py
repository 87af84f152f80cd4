"""Pipeline orchestrator for cluster bring-up.

Sequences the installation steps with per-step failure isolation and
builds a structured execution report.
"""

from .manifest import DEFAULT_MANIFEST, STEP_CATEGORIES, ManifestEntry, build_steps
from .models import ExecutionReport, RunStatus
from .pipeline import Pipeline
from .setup_orchestrator import SetupOrchestrator

__all__ = [
    "SetupOrchestrator",
    "Pipeline",
    "ExecutionReport",
    "RunStatus",
    "ManifestEntry",
    "DEFAULT_MANIFEST",
    "STEP_CATEGORIES",
    "build_steps",
]
