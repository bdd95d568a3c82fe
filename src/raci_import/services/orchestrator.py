from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import psycopg2

from ..config.loader import ConfigError
from ..db.commit import commit_bootstrap_manager, commit_employees, commit_projects
from ..db.reference import load_reference_file, load_reference_snapshot
from ..excel.reader import ReadError, read_rows
from ..logging.error_export import ErrorCsvWriter
from ..models.config_models import ImportConfig
from ..models.snapshot import ReferenceSnapshot
from ..models.validation_result import ImportOutcome, ValidationResult
from .bootstrap import validate_bootstrap_manager
from .classifier import (
    KIND_EMPLOYEES,
    KIND_PROJECTS,
    build_create_plan,
    can_import,
    validate_employee_rows,
    validate_project_rows,
)
from .employee_validator import EMPLOYEE_COLUMNS
from .normalize import normalize_cell
from .plan import to_employee_plan, to_project_plan
from .project_validator import PROJECT_COLUMNS

"""Service orchestration for one import run.

take snapshot -> read file -> classify rows -> export error rows
-> commit the create-plan (only when allowed, not a dry run, and a database
cursor is available).

A fresh snapshot is taken at the start of every run. Between validation and
commit another import may create the same names; commit is upsert-by-name so
both runs converge on the same rows.

bootstrap_manager() is the one-off path for creating the first manager before
any employee exists.
"""

logger = logging.getLogger(__name__)

KINDS = (KIND_EMPLOYEES, KIND_PROJECTS)

_WIDTHS = {
    KIND_EMPLOYEES: len(EMPLOYEE_COLUMNS),
    KIND_PROJECTS: len(PROJECT_COLUMNS),
}


class ProcessingError(Exception):
    """Fatal error that prevents an import run from producing a result."""


@dataclass(frozen=True)
class ImportRun:
    """Result of run_import().

    Attributes:
        result: Row classification and summary
        importable: can_import() with the effective acceptance
        error_csv: Path of the exported error rows, if any
        outcome: Commit counts; None when nothing was committed
    """
    kind: str
    result: ValidationResult
    importable: bool
    error_csv: Path | None = None
    outcome: ImportOutcome | None = None

    @property
    def committed(self) -> bool:
        return self.outcome is not None


def take_snapshot(config: ImportConfig, cursor: Any = None) -> ReferenceSnapshot:
    """Snapshot from the database when connected, else the reference file.

    With neither available an empty snapshot is used, so every name is
    reported as new.
    """
    if cursor is not None:
        try:
            return load_reference_snapshot(cursor)
        except psycopg2.Error as e:
            raise ProcessingError(f"reference: {e}") from e
    if config.reference_file:
        try:
            return load_reference_file(Path(config.reference_file))
        except ConfigError as e:
            raise ProcessingError(f"reference: {e}") from e
    logger.info("no database and no reference_file -> empty reference snapshot")
    return ReferenceSnapshot.empty()


def validate_file(
    kind: str,
    path: Path,
    config: ImportConfig,
    snapshot: ReferenceSnapshot,
    *,
    skip_header: bool = False,
) -> ValidationResult:
    if kind not in KINDS:
        raise ProcessingError(f"unknown import kind: {kind}")
    try:
        rows = read_rows(path, _WIDTHS[kind], skip_header=skip_header)
    except ReadError as e:
        raise ProcessingError(str(e)) from e

    logger.info(f"{kind}: {len(rows)} data rows read from {path.name}")
    if kind == KIND_EMPLOYEES:
        return validate_employee_rows(rows, snapshot, auto_accept=config.auto_accept_creation_warnings)
    return validate_project_rows(rows, snapshot)


def run_import(
    kind: str,
    path: Path,
    config: ImportConfig,
    cursor: Any = None,
    *,
    accept_warnings: bool = False,
    dry_run: bool = False,
    skip_header: bool = False,
) -> ImportRun:
    """Validate one import file and commit it when allowed.

    Args:
        kind: "employees" or "projects"
        path: .csv / .xlsx file
        config: Loaded ImportConfig
        cursor: Database cursor (None = offline mode, never commits)
        accept_warnings: Caller's explicit acknowledgment of warnings
        dry_run: Validate and export only

    Returns:
        ImportRun with classification, export path and commit outcome

    Raises:
        ProcessingError: For unreadable files, unknown kinds, bad reference
            data or reference tables the database cannot read
        CommitError: When the database rejects the create-plan
    """
    snapshot = take_snapshot(config, cursor)
    result = validate_file(kind, path, config, snapshot, skip_header=skip_header)

    error_csv = None
    if result.error_rows:
        error_csv = ErrorCsvWriter(Path(config.export_directory), kind).write(result.error_rows)
        logger.info(f"error rows exported to {error_csv}")

    accepted = accept_warnings or result.warnings_accepted
    importable = can_import(result, accepted)
    if not importable or dry_run or cursor is None:
        if importable and cursor is None and not dry_run:
            logger.info("offline mode -> create-plan not committed")
        return ImportRun(kind=kind, result=result, importable=importable, error_csv=error_csv)

    rows = build_create_plan(result, accepted)
    if kind == KIND_EMPLOYEES:
        outcome = commit_employees(cursor, to_employee_plan(rows, snapshot))
    else:
        outcome = commit_projects(cursor, to_project_plan(rows, snapshot, config.default_project_client))
    return ImportRun(kind=kind, result=result, importable=True, error_csv=error_csv, outcome=outcome)


@dataclass(frozen=True)
class BootstrapRun:
    name: str
    errors: list[str]
    created: bool = False


def bootstrap_manager(
    name: str,
    department: str,
    position: str,
    config: ImportConfig,
    cursor: Any = None,
    *,
    dry_run: bool = False,
) -> BootstrapRun:
    """Validate and create the first manager; offline or dry runs only validate."""
    snapshot = take_snapshot(config, cursor)
    name, department, position = (normalize_cell(v) for v in (name, department, position))
    errors = validate_bootstrap_manager(name, department, position, snapshot)
    if errors or dry_run or cursor is None:
        if not errors and cursor is None and not dry_run:
            logger.info("offline mode -> manager not created")
        return BootstrapRun(name=name, errors=errors)

    commit_bootstrap_manager(cursor, name, department, position)
    return BootstrapRun(name=name, errors=[], created=True)
