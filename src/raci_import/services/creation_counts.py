from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..models.rows import EmployeeRow, ProjectRow
from ..models.snapshot import ReferenceSnapshot
from ..models.validation_result import CreationCounts
from .normalize import normalize_key

"""Projection of how many reference entities an import would create.

Each counter walks the accepted rows in order against a private copy of the
existing key set, so a new name repeated on many rows counts once. This
matches the upsert-by-name behaviour of the commit layer. The snapshot itself
is never touched.
"""

__all__ = [
    "count_new_names",
    "project_employee_creations",
    "project_project_creations",
]


def count_new_names(values: Iterable[str | None], existing: frozenset[str]) -> int:
    """Count distinct non-empty names whose key is not in ``existing``."""
    working = set(existing)
    count = 0
    for value in values:
        if not value:
            continue
        key = normalize_key(value)
        if key not in working:
            working.add(key)
            count += 1
    return count


def project_employee_creations(
    rows: Sequence[EmployeeRow], snapshot: ReferenceSnapshot
) -> CreationCounts:
    return CreationCounts(
        departments=count_new_names((r.department for r in rows), snapshot.departments),
        positions=count_new_names((r.position for r in rows), snapshot.positions),
        managers=count_new_names((r.manager for r in rows), snapshot.employees),
    )


def project_project_creations(
    rows: Sequence[ProjectRow], snapshot: ReferenceSnapshot
) -> CreationCounts:
    return CreationCounts(
        projects=count_new_names((r.name for r in rows), snapshot.projects),
    )
