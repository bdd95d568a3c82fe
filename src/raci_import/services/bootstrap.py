from __future__ import annotations

from ..models.snapshot import ReferenceSnapshot
from .normalize import normalize_cell, normalize_key

"""First-manager bootstrap.

Before any employee exists there is nobody to name in a manager column, so a
single manager can be created directly. The department must already exist and
the position must be active and allowed to manage; nothing else is created.
"""

__all__ = [
    "validate_bootstrap_manager",
]


def validate_bootstrap_manager(
    name: object,
    department: object,
    position: object,
    snapshot: ReferenceSnapshot,
) -> list[str]:
    """Return every reason the manager cannot be created (empty when allowed)."""
    errors: list[str] = []
    fields = {
        "name": normalize_cell(name),
        "department": normalize_cell(department),
        "position": normalize_cell(position),
    }
    for field_name, value in fields.items():
        if not value:
            errors.append(f"{field_name} must not be empty")
    if errors:
        return errors

    if snapshot.employees:
        errors.append("employees already exist; name the manager in an employee import instead")
    if normalize_key(fields["department"]) not in snapshot.departments:
        errors.append(f"department '{fields['department']}' does not exist")
    if normalize_key(fields["position"]) not in snapshot.managing_positions:
        errors.append(f"position '{fields['position']}' is not an active position that can manage")
    return errors
