from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..models.rows import EmployeeRow, IssueRow, IssueType, ProjectRow
from ..models.snapshot import ReferenceSnapshot
from ..models.validation_result import ImportSummary, ValidationResult
from .creation_counts import project_employee_creations, project_project_creations
from .employee_validator import validate_employee_row
from .project_validator import validate_project_row
from .row_check import RowCheck

"""Batch classification of decoded rows.

validate_employee_rows() / validate_project_rows() walk the rows once in file
order, sort each into valid / warning / error buckets, keep the full message
lists and attach a summary with projected creation counts.

Acceptance of warnings is owned by the caller; the result only records
whether the auto-accept heuristic already accepted them. There is no partial
import: a single error row blocks the whole batch.
"""

__all__ = [
    "KIND_EMPLOYEES",
    "KIND_PROJECTS",
    "ImportBlockedError",
    "validate_employee_rows",
    "validate_project_rows",
    "can_import",
    "build_create_plan",
    "preview_messages",
]

logger = logging.getLogger(__name__)

KIND_EMPLOYEES = "employees"
KIND_PROJECTS = "projects"

PREVIEW_LIMIT = 3
ELLIPSIS = "…"

RowValidator = Callable[[Sequence[object], int, ReferenceSnapshot, set[str]], tuple[object, RowCheck]]


class ImportBlockedError(Exception):
    """Raised when a create-plan is requested for a batch that cannot import."""


def _classify(
    kind: str,
    rows: Sequence[Sequence[object]],
    snapshot: ReferenceSnapshot,
    validator: RowValidator,
) -> tuple[list, list[IssueRow], list[IssueRow], list[str], list[str], bool]:
    valid_rows: list = []
    warning_rows: list[IssueRow] = []
    error_rows: list[IssueRow] = []
    warnings: list[str] = []
    errors: list[str] = []
    only_creation_warnings = True
    seen_names: set[str] = set()

    for idx, raw in enumerate(rows):
        row_index = idx + 1
        data, check = validator(raw, row_index, snapshot, seen_names)
        if check.errors:
            errors.extend(check.errors)
            error_rows.append(
                IssueRow(row_index=row_index, data=data, messages=list(check.errors), type=IssueType.ERROR)
            )
        elif check.warnings:
            warnings.extend(check.warnings)
            if not check.creation_only:
                only_creation_warnings = False
            warning_rows.append(
                IssueRow(
                    row_index=row_index,
                    data=data,
                    messages=list(check.warnings),
                    type=IssueType.WARNING,
                    creation_only=check.creation_only,
                )
            )
        else:
            valid_rows.append(data)

    logger.debug(
        f"{kind}: classified rows={len(rows)} valid={len(valid_rows)} "
        f"warning={len(warning_rows)} error={len(error_rows)}"
    )
    return valid_rows, warning_rows, error_rows, warnings, errors, only_creation_warnings


def validate_employee_rows(
    rows: Sequence[Sequence[object]],
    snapshot: ReferenceSnapshot,
    *,
    auto_accept: bool = True,
) -> ValidationResult[EmployeeRow]:
    """Classify employee rows and project the entities they would create.

    Args:
        rows: Decoded rows (blank rows already removed), 4 columns each
        snapshot: Existing reference names
        auto_accept: Pre-accept warnings when every warning in the batch is a
            pure creation-intent warning

    Returns:
        ValidationResult for the employee import
    """
    valid_rows, warning_rows, error_rows, warnings, errors, only_creation = _classify(
        KIND_EMPLOYEES, rows, snapshot, validate_employee_row
    )
    accepted = [*valid_rows, *(w.data for w in warning_rows)]
    summary = ImportSummary(
        valid_count=len(valid_rows),
        warning_count=len(warning_rows),
        error_count=len(error_rows),
        creations=project_employee_creations(accepted, snapshot),
    )
    return ValidationResult(
        kind=KIND_EMPLOYEES,
        valid_rows=valid_rows,
        warning_rows=warning_rows,
        error_rows=error_rows,
        warnings=warnings,
        errors=errors,
        summary=summary,
        warnings_accepted=auto_accept and bool(warning_rows) and only_creation,
    )


def validate_project_rows(
    rows: Sequence[Sequence[object]],
    snapshot: ReferenceSnapshot,
) -> ValidationResult[ProjectRow]:
    """Classify project rows.

    Project imports are never auto-accepted: every row carries at least a
    creation or already-exists warning that the caller has to acknowledge.
    """
    valid_rows, warning_rows, error_rows, warnings, errors, _ = _classify(
        KIND_PROJECTS, rows, snapshot, validate_project_row
    )
    accepted = [*valid_rows, *(w.data for w in warning_rows)]
    summary = ImportSummary(
        valid_count=len(valid_rows),
        warning_count=len(warning_rows),
        error_count=len(error_rows),
        creations=project_project_creations(accepted, snapshot),
    )
    return ValidationResult(
        kind=KIND_PROJECTS,
        valid_rows=valid_rows,
        warning_rows=warning_rows,
        error_rows=error_rows,
        warnings=warnings,
        errors=errors,
        summary=summary,
    )


def can_import(result: ValidationResult, warnings_accepted: bool | None = None) -> bool:
    """Whether the batch may be committed.

    Args:
        result: Output of validate_*_rows()
        warnings_accepted: Explicit acceptance by the caller; None falls back
            to result.warnings_accepted
    """
    accepted = result.warnings_accepted if warnings_accepted is None else warnings_accepted
    return (
        not result.error_rows
        and len(result.valid_rows) + len(result.warning_rows) > 0
        and (not result.warning_rows or accepted)
    )


def build_create_plan(result: ValidationResult, warnings_accepted: bool | None = None) -> list:
    """Rows to send to the commit layer: valid rows then warning rows.

    Raises:
        ImportBlockedError: If can_import() is False
    """
    if not can_import(result, warnings_accepted):
        if result.error_rows:
            reason = f"{len(result.error_rows)} row(s) with errors"
        elif not result.valid_rows and not result.warning_rows:
            reason = "no rows to import"
        else:
            reason = f"{len(result.warning_rows)} row(s) with unaccepted warnings"
        raise ImportBlockedError(f"{result.kind} import blocked: {reason}")
    return result.accepted_rows


def preview_messages(messages: Sequence[str], limit: int = PREVIEW_LIMIT) -> list[str]:
    """First ``limit`` messages plus an ellipsis marker when truncated."""
    if len(messages) <= limit:
        return list(messages)
    return [*messages[:limit], ELLIPSIS]
