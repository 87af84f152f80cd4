"""Report module for summarising setup runs.

Renders an ExecutionReport as plain text and saves it as a timestamped
file under the reports directory.

Public API:
    ReportGenerator: Renders and persists execution reports.
    ReportError: Base exception for module errors.
    ReportPersistenceError: Raised when the report cannot be written.
"""

from .exceptions import ReportError, ReportPersistenceError
from .report_generator import ReportGenerator

__all__ = [
    "ReportGenerator",
    "ReportError",
    "ReportPersistenceError",
]
