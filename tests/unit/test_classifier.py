from __future__ import annotations

import pytest

from raci_import.models.rows import EmployeeRow, IssueType
from raci_import.models.snapshot import ReferenceSnapshot
from raci_import.services.classifier import (
    ImportBlockedError,
    build_create_plan,
    can_import,
    preview_messages,
    validate_employee_rows,
    validate_project_rows,
)

"""Unit tests for batch classification, acceptance and the create-plan."""

VALID_EMPLOYEES = [
    ["Carol", "IT", "Developer", "Alice Nguyen"],
    ["Dan", "IT", "Developer", ""],
    ["Erin", "Finance", "Developer", "Bob Tran"],
    ["Frank", "finance", "developer", None],
    ["Gina", "IT", "Sales Manager", "Alice Nguyen"],
]


def test_every_row_lands_in_exactly_one_bucket(snapshot: ReferenceSnapshot):
    rows = [
        ["Carol", "IT", "Developer"],
        ["", "IT", "Developer"],
        ["Dan", "Ops", "Developer"],
        ["carol", "IT", "Developer"],
        ["Eve", "", ""],
    ]
    result = validate_employee_rows(rows, snapshot)
    indexes = (
        [r.row_index for r in result.error_rows]
        + [r.row_index for r in result.warning_rows]
    )
    assert sorted(indexes) == [2, 3, 4, 5]
    assert result.valid_rows == [EmployeeRow("Carol", "IT", "Developer")]
    assert all(r.type is IssueType.ERROR for r in result.error_rows)
    assert all(r.type is IssueType.WARNING for r in result.warning_rows)
    s = result.summary
    assert (s.valid_count, s.warning_count, s.error_count) == (1, 2, 2)
    assert s.total_rows == len(rows)


def test_flat_message_lists_keep_everything(snapshot: ReferenceSnapshot):
    rows = [["", "", ""], ["", "", ""]]
    result = validate_employee_rows(rows, snapshot)
    assert len(result.errors) == 6
    assert result.errors[0] == "row 1: name must not be empty"
    assert result.errors[-1] == "row 2: position must not be empty"


def test_pure_creation_warnings_are_auto_accepted(snapshot: ReferenceSnapshot):
    rows = VALID_EMPLOYEES + [
        ["Hank", "Sales", "Developer"],
        ["Ivy", "Sales", "Intern", "New Boss"],
    ]
    result = validate_employee_rows(rows, snapshot)
    assert len(result.valid_rows) == 5
    assert len(result.warning_rows) == 2
    assert all(w.creation_only for w in result.warning_rows)
    assert result.warnings_accepted is True
    assert can_import(result)
    plan = build_create_plan(result)
    assert len(plan) == 7
    assert [r.name for r in plan] == ["Carol", "Dan", "Erin", "Frank", "Gina", "Hank", "Ivy"]


def test_content_warning_disables_auto_accept(snapshot: ReferenceSnapshot):
    rows = [
        ["Hank", "Sales", "Developer"],
        ["Ivy", "IT", "Developer", "Sales Manager"],
    ]
    result = validate_employee_rows(rows, snapshot)
    assert result.warnings_accepted is False
    assert not can_import(result)
    assert can_import(result, warnings_accepted=True)


def test_duplicate_warning_disables_auto_accept(snapshot: ReferenceSnapshot):
    result = validate_employee_rows([["Alice", "IT", "Dev"], ["alice", "IT", "Dev"]], snapshot)
    assert any("duplicate name in file" in m for m in result.warning_rows[1].messages)
    assert result.warnings_accepted is False


def test_auto_accept_can_be_disabled(snapshot: ReferenceSnapshot):
    result = validate_employee_rows([["Hank", "Sales", "Developer"]], snapshot, auto_accept=False)
    assert result.warnings_accepted is False
    assert not can_import(result)


def test_no_warnings_means_nothing_to_accept(snapshot: ReferenceSnapshot):
    result = validate_employee_rows(VALID_EMPLOYEES, snapshot)
    assert result.warning_rows == []
    assert result.warnings_accepted is False
    assert can_import(result)


def test_any_error_blocks_whole_batch(snapshot: ReferenceSnapshot):
    result = validate_employee_rows(VALID_EMPLOYEES + [["", "IT", "Developer"]], snapshot)
    assert not can_import(result, warnings_accepted=True)
    with pytest.raises(ImportBlockedError, match="1 row\\(s\\) with errors"):
        build_create_plan(result, warnings_accepted=True)


def test_empty_batch_cannot_import(snapshot: ReferenceSnapshot):
    result = validate_employee_rows([], snapshot)
    assert not can_import(result, warnings_accepted=True)
    with pytest.raises(ImportBlockedError, match="no rows to import"):
        build_create_plan(result, warnings_accepted=True)


def test_warning_only_batch_imports_once_accepted(snapshot: ReferenceSnapshot):
    result = validate_project_rows([["Hermes", "Acme"], ["Zeus", ""]], snapshot)
    assert result.valid_rows == []
    assert len(result.warning_rows) == 2
    with pytest.raises(ImportBlockedError, match="unaccepted warnings"):
        build_create_plan(result)
    assert [r.name for r in build_create_plan(result, warnings_accepted=True)] == ["Hermes", "Zeus"]


def test_project_imports_never_auto_accept(snapshot: ReferenceSnapshot):
    result = validate_project_rows([["Hermes", "Acme"]], snapshot)
    assert result.warning_rows[0].creation_only
    assert result.warnings_accepted is False


def test_project_unknown_manager_blocks(snapshot: ReferenceSnapshot):
    result = validate_project_rows([["ProjX", "ClientY", "NoSuchPerson"]], snapshot)
    assert len(result.error_rows) == 1
    assert result.warning_rows == []
    assert not can_import(result, warnings_accepted=True)


def test_summary_creation_counts(snapshot: ReferenceSnapshot):
    rows = [
        ["A1", "Sales", "Developer"],
        ["A2", "sales", "Developer"],
        ["A3", "SALES ", "Intern", "Boss"],
        ["A4", "", "Intern"],  # error row, not counted
    ]
    result = validate_employee_rows(rows, snapshot)
    c = result.summary.creations
    assert (c.departments, c.positions, c.managers) == (1, 1, 1)

    projects = validate_project_rows([["Hermes"], ["hermes"], ["Apollo"]], snapshot)
    assert projects.summary.creations.projects == 1


def test_preview_messages_truncates():
    assert preview_messages(["a", "b"]) == ["a", "b"]
    assert preview_messages(["a", "b", "c"]) == ["a", "b", "c"]
    assert preview_messages(["a", "b", "c", "d"]) == ["a", "b", "c", "…"]
