from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..models.config_models import DEFAULT_PROJECT_CLIENT
from ..models.rows import EmployeeRow, ProjectRow
from ..models.snapshot import ReferenceSnapshot
from .normalize import normalize_key

"""Create-plan mapping from accepted rows to commit records.

Employee rows map one to one; the position's can_manage flag is looked up in
the snapshot. Project rows are reduced to the names that do not exist yet,
first occurrence wins, with an empty client replaced by the default client.
"""

__all__ = [
    "ImportEmployeeRow",
    "NewProject",
    "to_employee_plan",
    "to_project_plan",
]


@dataclass(frozen=True)
class ImportEmployeeRow:
    name: str
    department_name: str
    position_name: str
    position_can_manage: bool = False
    manager_name: str | None = None


@dataclass(frozen=True)
class NewProject:
    name: str
    client: str
    manager_name: str | None = None


def to_employee_plan(rows: Sequence[EmployeeRow], snapshot: ReferenceSnapshot) -> list[ImportEmployeeRow]:
    return [
        ImportEmployeeRow(
            name=r.name,
            department_name=r.department,
            position_name=r.position,
            position_can_manage=normalize_key(r.position) in snapshot.managing_positions,
            manager_name=r.manager or None,
        )
        for r in rows
    ]


def to_project_plan(
    rows: Sequence[ProjectRow],
    snapshot: ReferenceSnapshot,
    default_client: str = DEFAULT_PROJECT_CLIENT,
) -> list[NewProject]:
    existing = set(snapshot.projects)
    plan: list[NewProject] = []
    for r in rows:
        key = normalize_key(r.name)
        if key in existing:
            continue
        existing.add(key)
        plan.append(NewProject(name=r.name, client=r.client or default_client, manager_name=r.manager))
    return plan
