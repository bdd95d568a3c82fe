from __future__ import annotations

from ..models.validation_result import ImportOutcome, ValidationResult
from .classifier import KIND_EMPLOYEES

"""Summary line rendering for an import run.

Format (employees):
SUMMARY kind=employees rows={n} valid={v} warning={w} error={e}
new_departments={d} new_positions={p} new_managers={m}

Format (projects):
SUMMARY kind=projects rows={n} valid={v} warning={w} error={e} new_projects={p}
"""


def render_summary_line(result: ValidationResult) -> str:
    """Render a SUMMARY line from a ValidationResult.

    Examples:
        >>> from raci_import.models.validation_result import ImportSummary
        >>> result = ValidationResult(
        ...     kind="projects", valid_rows=[], warning_rows=[], error_rows=[],
        ...     warnings=[], errors=[],
        ...     summary=ImportSummary(valid_count=0, warning_count=0, error_count=0),
        ... )
        >>> render_summary_line(result)
        'SUMMARY kind=projects rows=0 valid=0 warning=0 error=0 new_projects=0'
    """
    s = result.summary
    line = (
        f"SUMMARY kind={result.kind} "
        f"rows={s.total_rows} "
        f"valid={s.valid_count} "
        f"warning={s.warning_count} "
        f"error={s.error_count}"
    )
    if result.kind == KIND_EMPLOYEES:
        return (
            f"{line} "
            f"new_departments={s.creations.departments} "
            f"new_positions={s.creations.positions} "
            f"new_managers={s.creations.managers}"
        )
    return f"{line} new_projects={s.creations.projects}"


def render_outcome_line(kind: str, outcome: ImportOutcome) -> str:
    """Human-readable commit result, e.g. ``imported employees=5 departments=1``.

    Zero counts other than the primary entity are omitted.
    """
    if kind == KIND_EMPLOYEES:
        parts = [f"employees={outcome.employees_created}"]
        if outcome.managers_created:
            parts.append(f"managers={outcome.managers_created}")
        if outcome.positions_created:
            parts.append(f"positions={outcome.positions_created}")
        if outcome.departments_created:
            parts.append(f"departments={outcome.departments_created}")
    else:
        parts = [f"projects={outcome.projects_created}"]
    return "imported " + " ".join(parts)
