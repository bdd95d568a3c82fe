from __future__ import annotations

from collections.abc import Sequence

from ..models.rows import EmployeeRow
from ..models.snapshot import ReferenceSnapshot
from .normalize import normalize_cell, normalize_key
from .row_check import RowCheck, cell_at

"""Employee-row validation.

Columns: name, department, position, manager (optional).

Checks run in a fixed order. Required-field errors are all reported; when any
fires, the row is an error row and no warning check runs. Otherwise every
warning that applies is kept, so one row may carry several.
"""

__all__ = [
    "EMPLOYEE_COLUMNS",
    "normalize_employee_row",
    "validate_employee_row",
]

EMPLOYEE_COLUMNS = ("name", "department", "position", "manager")


def normalize_employee_row(raw: Sequence[object]) -> EmployeeRow:
    manager = normalize_cell(cell_at(raw, 3))
    return EmployeeRow(
        name=normalize_cell(cell_at(raw, 0)),
        department=normalize_cell(cell_at(raw, 1)),
        position=normalize_cell(cell_at(raw, 2)),
        manager=manager or None,
    )


def validate_employee_row(
    raw: Sequence[object],
    row_index: int,
    snapshot: ReferenceSnapshot,
    seen_names: set[str],
) -> tuple[EmployeeRow, RowCheck]:
    """Validate one employee row.

    Args:
        raw: Positional cells as decoded from the file
        row_index: 1-based row number used in messages
        snapshot: Existing reference names
        seen_names: Name keys of earlier rows in the same file; the row's own
            key is added before returning

    Returns:
        The normalized row and its collected messages
    """
    row = normalize_employee_row(raw)
    check = RowCheck()
    prefix = f"row {row_index}:"

    if not row.name:
        check.error(f"{prefix} name must not be empty")
    if not row.department:
        check.error(f"{prefix} department must not be empty")
    if not row.position:
        check.error(f"{prefix} position must not be empty")

    name_key = normalize_key(row.name)
    if not check.errors:
        if normalize_key(row.department) not in snapshot.departments:
            check.creation_warning(f"{prefix} department will be created: '{row.department}'")
        if normalize_key(row.position) not in snapshot.positions:
            check.creation_warning(f"{prefix} position will be created: '{row.position}'")
        if row.manager:
            manager_key = normalize_key(row.manager)
            if manager_key in snapshot.positions:
                check.content_warning(
                    f"{prefix} manager '{row.manager}' is a position name, not an employee name; "
                    "the manager column must hold a person's name"
                )
            elif manager_key not in snapshot.employees:
                check.creation_warning(f"{prefix} manager will be created: '{row.manager}'")
        if name_key in seen_names:
            check.content_warning(f"{prefix} duplicate name in file")
        if name_key in snapshot.employees:
            check.content_warning(f"{prefix} name already exists in system")

    seen_names.add(name_key)
    return row, check
