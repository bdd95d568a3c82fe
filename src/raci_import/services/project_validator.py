from __future__ import annotations

from collections.abc import Sequence

from ..models.rows import ProjectRow
from ..models.snapshot import ReferenceSnapshot
from .normalize import normalize_cell, normalize_key
from .row_check import RowCheck, cell_at

"""Project-row validation.

Columns: name, client, manager (optional).

Unlike employee imports, a manager that matches no existing employee is an
error: a project's manager is a required relationship and is never created
implicitly. Every acceptable row also carries either an "already exists" or a
"will be created" warning, so a project row is never silently valid.
"""

__all__ = [
    "PROJECT_COLUMNS",
    "normalize_project_row",
    "validate_project_row",
]

PROJECT_COLUMNS = ("name", "client", "manager")


def normalize_project_row(raw: Sequence[object]) -> ProjectRow:
    manager = normalize_cell(cell_at(raw, 2))
    return ProjectRow(
        name=normalize_cell(cell_at(raw, 0)),
        client=normalize_cell(cell_at(raw, 1)),
        manager=manager or None,
    )


def validate_project_row(
    raw: Sequence[object],
    row_index: int,
    snapshot: ReferenceSnapshot,
    seen_names: set[str],
) -> tuple[ProjectRow, RowCheck]:
    row = normalize_project_row(raw)
    check = RowCheck()
    prefix = f"row {row_index}:"

    if not row.name:
        check.error(f"{prefix} name must not be empty")
    if row.manager and normalize_key(row.manager) not in snapshot.employees:
        check.error(f"{prefix} project manager '{row.manager}' does not exist")

    name_key = normalize_key(row.name)
    if not check.errors:
        if name_key in seen_names:
            check.content_warning(f"{prefix} duplicate name in file")
        if name_key in snapshot.projects:
            check.content_warning(f"{prefix} project already exists")
        else:
            check.creation_warning(f"{prefix} project will be created")

    seen_names.add(name_key)
    return row, check
