from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from ..services.normalize import normalize_key

"""ReferenceSnapshot: names of entities that exist before an import runs.

All sets hold normalized, lower-cased keys (see services.normalize). A
snapshot is built once per import run and never mutated; take a new one when
the underlying data changes (e.g. after a previous batch committed).
"""

__all__ = [
    "ReferenceSnapshot",
]


@dataclass(frozen=True)
class ReferenceSnapshot:
    departments: frozenset[str] = field(default_factory=frozenset)  # active only
    positions: frozenset[str] = field(default_factory=frozenset)  # active only
    employees: frozenset[str] = field(default_factory=frozenset)
    projects: frozenset[str] = field(default_factory=frozenset)
    managing_positions: frozenset[str] = field(default_factory=frozenset)  # positions with can_manage

    @staticmethod
    def from_names(
        departments: Iterable[object] = (),
        positions: Iterable[object] = (),
        employees: Iterable[object] = (),
        projects: Iterable[object] = (),
        managing_positions: Iterable[object] = (),
    ) -> ReferenceSnapshot:
        """Build a snapshot from display names, normalizing each into a key.

        Blank names are ignored.
        """
        def keys(values: Iterable[object]) -> frozenset[str]:
            return frozenset(k for k in (normalize_key(v) for v in values) if k)

        return ReferenceSnapshot(
            departments=keys(departments),
            positions=keys(positions),
            employees=keys(employees),
            projects=keys(projects),
            managing_positions=keys(managing_positions),
        )

    @staticmethod
    def empty() -> ReferenceSnapshot:
        return ReferenceSnapshot()
