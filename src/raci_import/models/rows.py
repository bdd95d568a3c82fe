from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

"""Typed row records for employee and project imports.

Raw spreadsheet rows are positional lists; they are converted into one of the
record types below right after normalization so that nothing downstream has
to index into a list.
"""

__all__ = [
    "EmployeeRow",
    "ProjectRow",
    "IssueType",
    "IssueRow",
]


@dataclass(frozen=True)
class EmployeeRow:
    """One normalized employee line: name, department, position, manager?"""
    name: str
    department: str
    position: str
    manager: str | None = None  # None when the cell was empty


@dataclass(frozen=True)
class ProjectRow:
    """One normalized project line: name, client, manager?"""
    name: str
    client: str
    manager: str | None = None


class IssueType(Enum):
    """Classification of a row that is not plainly valid.

    - ERROR: blocks the row and the whole batch
    - WARNING: informational, must be accepted before import
    """
    ERROR = "error"
    WARNING = "warning"


RowT = TypeVar("RowT", EmployeeRow, ProjectRow)


@dataclass(frozen=True)
class IssueRow(Generic[RowT]):
    """A row carrying at least one error or warning message.

    Attributes:
        row_index: 1-based position of the row in the decoded file
        data: Normalized row record
        messages: Every message produced for the row, in evaluation order
        type: ERROR or WARNING (never both)
        creation_only: True when every message only announces that a
            referenced name will be created
    """
    row_index: int
    data: RowT
    messages: list[str] = field(default_factory=list)
    type: IssueType = IssueType.WARNING
    creation_only: bool = False
