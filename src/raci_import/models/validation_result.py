from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic

from .rows import IssueRow, RowT

"""Validation and commit result models.

ValidationResult is what the batch classifier returns for one decoded file;
ImportOutcome is what the commit layer reports after the create-plan has been
written. Neither is mutated after construction.
"""

__all__ = [
    "CreationCounts",
    "ImportSummary",
    "ValidationResult",
    "ImportOutcome",
]


@dataclass(frozen=True)
class CreationCounts:
    """Distinct new reference names the accepted rows would create."""
    departments: int = 0
    positions: int = 0
    managers: int = 0
    projects: int = 0


@dataclass(frozen=True)
class ImportSummary:
    valid_count: int
    warning_count: int
    error_count: int
    creations: CreationCounts = field(default_factory=CreationCounts)

    @property
    def total_rows(self) -> int:
        return self.valid_count + self.warning_count + self.error_count


@dataclass(frozen=True)
class ValidationResult(Generic[RowT]):
    """Classification of every row of one import file.

    Attributes:
        kind: "employees" or "projects"
        valid_rows: Rows with no message at all, in file order
        warning_rows: Rows with warnings only
        error_rows: Rows with at least one error
        warnings: Flat list of all warning messages (display order)
        errors: Flat list of all error messages
        summary: Row counts plus projected creation counts
        warnings_accepted: Pre-set by the auto-accept heuristic; the caller
            may still accept explicitly
    """
    kind: str
    valid_rows: list[RowT]
    warning_rows: list[IssueRow[RowT]]
    error_rows: list[IssueRow[RowT]]
    warnings: list[str]
    errors: list[str]
    summary: ImportSummary
    warnings_accepted: bool = False

    @property
    def accepted_rows(self) -> list[RowT]:
        """Valid rows followed by the data of warning rows."""
        return [*self.valid_rows, *(w.data for w in self.warning_rows)]


@dataclass(frozen=True)
class ImportOutcome:
    """Counts returned by the commit layer (employees or projects)."""
    departments_created: int = 0
    positions_created: int = 0
    managers_created: int = 0
    employees_created: int = 0
    projects_created: int = 0
