from __future__ import annotations

from raci_import.models.rows import EmployeeRow, ProjectRow
from raci_import.models.snapshot import ReferenceSnapshot
from raci_import.services.plan import ImportEmployeeRow, NewProject, to_employee_plan, to_project_plan


def test_employee_plan_maps_can_manage_from_snapshot(snapshot: ReferenceSnapshot):
    plan = to_employee_plan(
        [
            EmployeeRow("Carol", "IT", "sales manager", "Alice Nguyen"),
            EmployeeRow("Dan", "IT", "Developer", None),
            EmployeeRow("Erin", "Ops", "Brand New", None),
        ],
        snapshot,
    )
    assert plan == [
        ImportEmployeeRow("Carol", "IT", "sales manager", True, "Alice Nguyen"),
        ImportEmployeeRow("Dan", "IT", "Developer", False, None),
        ImportEmployeeRow("Erin", "Ops", "Brand New", False, None),
    ]


def test_project_plan_keeps_only_new_names(snapshot: ReferenceSnapshot):
    plan = to_project_plan(
        [
            ProjectRow("Apollo", "Acme"),
            ProjectRow("Hermes", "", "Alice Nguyen"),
            ProjectRow("hermes", "Other"),
            ProjectRow("Zeus", "Globex"),
        ],
        snapshot,
    )
    assert plan == [
        NewProject("Hermes", "Internal", "Alice Nguyen"),
        NewProject("Zeus", "Globex", None),
    ]


def test_project_plan_custom_default_client(snapshot: ReferenceSnapshot):
    plan = to_project_plan([ProjectRow("Hermes", "")], snapshot, default_client="In-house")
    assert plan[0].client == "In-house"
