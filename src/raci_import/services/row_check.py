from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

"""Per-row message accumulator shared by the employee and project validators."""

__all__ = [
    "RowCheck",
    "cell_at",
]


@dataclass
class RowCheck:
    """Errors and warnings collected for a single row.

    Warnings are tagged as creation-intent or not; only creation-intent
    warnings may be accepted automatically.
    """
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    content_warnings: int = 0

    def error(self, message: str) -> None:
        self.errors.append(message)

    def creation_warning(self, message: str) -> None:
        self.warnings.append(message)

    def content_warning(self, message: str) -> None:
        self.warnings.append(message)
        self.content_warnings += 1

    @property
    def creation_only(self) -> bool:
        return bool(self.warnings) and self.content_warnings == 0

    @property
    def is_valid(self) -> bool:
        return not self.errors and not self.warnings


def cell_at(row: Sequence[object], index: int) -> object:
    """Positional cell lookup; short rows yield None for missing columns."""
    return row[index] if index < len(row) else None
