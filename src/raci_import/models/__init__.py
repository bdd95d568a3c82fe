"""Domain models for the RACI import tool.

Row records, the reference snapshot, validation results and configuration
objects used throughout the application.
"""

from .config_models import DatabaseConfig, ImportConfig
from .rows import EmployeeRow, IssueRow, IssueType, ProjectRow
from .snapshot import ReferenceSnapshot
from .validation_result import CreationCounts, ImportOutcome, ImportSummary, ValidationResult

__all__ = [
    # Configuration models
    "DatabaseConfig",
    "ImportConfig",
    # Row models
    "EmployeeRow",
    "ProjectRow",
    "IssueRow",
    "IssueType",
    # Reference data
    "ReferenceSnapshot",
    # Results
    "CreationCounts",
    "ImportSummary",
    "ValidationResult",
    "ImportOutcome",
]
