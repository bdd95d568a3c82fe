from __future__ import annotations

from pathlib import Path
from typing import Any

from ..config.loader import REFERENCE_SCHEMA_PATH, load_yaml, validate_against_schema
from ..models.snapshot import ReferenceSnapshot

"""Reference snapshot sources.

- load_reference_snapshot(cursor): read the four name sets from PostgreSQL
- load_reference_file(path): read them from a YAML file (offline runs)

Departments and positions only count when active; employees and projects are
taken as a whole.
"""

__all__ = [
    "load_reference_snapshot",
    "load_reference_file",
]

DEPARTMENTS_SQL = "SELECT name FROM departments WHERE active"
POSITIONS_SQL = "SELECT name, can_manage FROM positions WHERE active"
EMPLOYEES_SQL = "SELECT name FROM employees"
PROJECTS_SQL = "SELECT name FROM projects"


def _fetch_names(cursor: Any, sql: str) -> list[str]:
    cursor.execute(sql)
    return [r[0] for r in cursor.fetchall()]


def load_reference_snapshot(cursor: Any) -> ReferenceSnapshot:
    departments = _fetch_names(cursor, DEPARTMENTS_SQL)
    cursor.execute(POSITIONS_SQL)
    position_rows = cursor.fetchall()
    employees = _fetch_names(cursor, EMPLOYEES_SQL)
    projects = _fetch_names(cursor, PROJECTS_SQL)
    return ReferenceSnapshot.from_names(
        departments=departments,
        positions=[r[0] for r in position_rows],
        employees=employees,
        projects=projects,
        managing_positions=[r[0] for r in position_rows if r[1]],
    )


def _entries(items: list[Any]) -> list[dict[str, Any]]:
    # plain strings are shorthand for {name: ..., active: true}
    return [{"name": i} if isinstance(i, str) else i for i in items]


def load_reference_file(path: Path) -> ReferenceSnapshot:
    """Load a snapshot from YAML.

    Example::

        departments: [IT, {name: Legacy, active: false}]
        positions: [Developer, {name: Head of IT, can_manage: true}]
        employees: [Alice]
        projects: [Apollo]

    Raises:
        ConfigError: missing file, invalid YAML or schema violation
    """
    data = load_yaml(path, what="reference")
    validate_against_schema(data, REFERENCE_SCHEMA_PATH, what="reference")

    departments = [e for e in _entries(data.get("departments", [])) if e.get("active", True)]
    positions = [e for e in _entries(data.get("positions", [])) if e.get("active", True)]
    return ReferenceSnapshot.from_names(
        departments=[e["name"] for e in departments],
        positions=[e["name"] for e in positions],
        employees=[e["name"] for e in _entries(data.get("employees", []))],
        projects=[e["name"] for e in _entries(data.get("projects", []))],
        managing_positions=[e["name"] for e in positions if e.get("can_manage", False)],
    )
