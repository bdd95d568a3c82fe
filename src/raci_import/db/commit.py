from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from psycopg2.extras import execute_values

from ..models.validation_result import ImportOutcome
from ..services.normalize import normalize_key
from ..services.plan import ImportEmployeeRow, NewProject
from ..services.progress import ProgressTracker

"""Create-plan commit (upsert by name).

Every reference is resolved by case-insensitive name before anything is
inserted, so running the same plan twice, or two imports racing on the same
new department, converges on one row per name. Each plan is written in a
single transaction; on failure it is rolled back and CommitError carries the
driver message unchanged.

Inactive departments / positions that match by name are reactivated and
counted as created, which is what the creation-count projection announced.
"""

__all__ = [
    "CommitError",
    "commit_bootstrap_manager",
    "commit_employees",
    "commit_projects",
]

logger = logging.getLogger(__name__)

PROJECT_INSERT_SQL = "INSERT INTO projects (name, customer, manager_id) VALUES %s ON CONFLICT DO NOTHING RETURNING id"
PROJECT_TEMPLATE = "(%s, %s, (SELECT id FROM employees WHERE lower(name) = %s LIMIT 1))"


class CommitError(Exception):
    pass


@dataclass
class _Resolver:
    """Per-run id cache keyed by normalized name."""
    cursor: Any
    departments: dict[str, Any] = field(default_factory=dict)
    positions: dict[str, Any] = field(default_factory=dict)
    employees: dict[str, Any] = field(default_factory=dict)

    def _upsert_reference(self, table: str, name: str, cache: dict[str, Any], extra: dict[str, Any]) -> tuple[Any, bool]:
        key = normalize_key(name)
        if key in cache:
            return cache[key], False
        self.cursor.execute(f"SELECT id, active FROM {table} WHERE lower(name) = %s LIMIT 1", (key,))
        row = self.cursor.fetchone()
        created = False
        if row is None:
            cols = ["name", "active", *extra.keys()]
            placeholders = ",".join(["%s"] * len(cols))
            self.cursor.execute(
                f"INSERT INTO {table} ({','.join(cols)}) VALUES ({placeholders}) RETURNING id",
                (name, True, *extra.values()),
            )
            ref_id = self.cursor.fetchone()[0]
            created = True
        else:
            ref_id, active = row
            if not active:
                self.cursor.execute(f"UPDATE {table} SET active = TRUE WHERE id = %s", (ref_id,))
                created = True
        cache[key] = ref_id
        return ref_id, created

    def department(self, name: str) -> tuple[Any, bool]:
        return self._upsert_reference("departments", name, self.departments, {})

    def position(self, name: str, can_manage: bool) -> tuple[Any, bool]:
        return self._upsert_reference("positions", name, self.positions, {"can_manage": can_manage})

    def find_employee(self, name: str) -> Any | None:
        key = normalize_key(name)
        if key in self.employees:
            return self.employees[key]
        self.cursor.execute("SELECT id FROM employees WHERE lower(name) = %s LIMIT 1", (key,))
        row = self.cursor.fetchone()
        if row is not None:
            self.employees[key] = row[0]
            return row[0]
        return None

    def create_employee(self, name: str, department_id: Any = None, position_id: Any = None, manager_id: Any = None) -> Any:
        self.cursor.execute(
            "INSERT INTO employees (name, department_id, position_id, manager_id) VALUES (%s, %s, %s, %s) RETURNING id",
            (name, department_id, position_id, manager_id),
        )
        emp_id = self.cursor.fetchone()[0]
        self.employees[normalize_key(name)] = emp_id
        return emp_id


def _in_transaction(cursor: Any, work) -> ImportOutcome:
    cursor.execute("BEGIN")
    try:
        outcome = work()
        cursor.execute("COMMIT")
        return outcome
    except Exception as e:
        try:
            cursor.execute("ROLLBACK")
        except Exception as rollback_e:
            # keep the original error; the failed rollback is only logged
            logger.error(f"rollback failed: {rollback_e}")
        raise CommitError(str(e)) from e


def commit_employees(cursor: Any, plan: Sequence[ImportEmployeeRow]) -> ImportOutcome:
    """Write an employee create-plan.

    Per row: department, position, manager (created by name only when
    unknown), then the employee itself (inserted, or updated when the name
    already exists).
    """
    def work() -> ImportOutcome:
        resolver = _Resolver(cursor)
        departments = positions = managers = employees = 0
        with ProgressTracker(len(plan), description="Committing employees") as progress:
            for row in plan:
                dept_id, created = resolver.department(row.department_name)
                departments += created
                pos_id, created = resolver.position(row.position_name, row.position_can_manage)
                positions += created

                manager_id = None
                if row.manager_name:
                    manager_id = resolver.find_employee(row.manager_name)
                    if manager_id is None:
                        manager_id = resolver.create_employee(row.manager_name)
                        managers += 1

                emp_id = resolver.find_employee(row.name)
                if emp_id is None:
                    resolver.create_employee(row.name, dept_id, pos_id, manager_id)
                    employees += 1
                else:
                    cursor.execute(
                        "UPDATE employees SET department_id = %s, position_id = %s, manager_id = %s WHERE id = %s",
                        (dept_id, pos_id, manager_id, emp_id),
                    )
                progress.advance(row.name)
        return ImportOutcome(
            departments_created=departments,
            positions_created=positions,
            managers_created=managers,
            employees_created=employees,
        )

    outcome = _in_transaction(cursor, work)
    logger.debug(f"employees committed: {outcome}")
    return outcome


def commit_projects(cursor: Any, plan: Sequence[NewProject]) -> ImportOutcome:
    """Insert new projects in one batch; existing names are left untouched."""
    if not plan:
        return ImportOutcome(projects_created=0)

    def work() -> ImportOutcome:
        values = [(p.name, p.client, normalize_key(p.manager_name)) for p in plan]
        returned = execute_values(cursor, PROJECT_INSERT_SQL, values, template=PROJECT_TEMPLATE, fetch=True)
        return ImportOutcome(projects_created=len(returned or []))

    outcome = _in_transaction(cursor, work)
    logger.debug(f"projects committed: {outcome}")
    return outcome


def commit_bootstrap_manager(cursor: Any, name: str, department_name: str, position_name: str) -> ImportOutcome:
    """Create the first manager in an existing department and managing position."""
    def work() -> ImportOutcome:
        resolver = _Resolver(cursor)
        dept_id, _ = resolver.department(department_name)
        pos_id, _ = resolver.position(position_name, True)
        resolver.create_employee(name, dept_id, pos_id)
        return ImportOutcome(managers_created=1)

    outcome = _in_transaction(cursor, work)
    logger.debug(f"bootstrap manager committed: {name}")
    return outcome
