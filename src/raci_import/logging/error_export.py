from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..models.rows import IssueRow

"""Error-row CSV export.

to_csv() is a pure formatter: header line ``row,messages`` followed by one
line per issue row, ``<row_index>,"<messages joined with '; '>"``. Lines are
joined with a bare newline.

ErrorCsvWriter persists that text once per run under the configured export
directory as ``import_errors_<kind>-YYYYMMDD-HHMMSS.csv`` (UTC).
"""

__all__ = [
    "CSV_HEADER",
    "to_csv",
    "ErrorCsvWriter",
]

CSV_HEADER = "row,messages"
MESSAGE_SEPARATOR = "; "
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def to_csv(rows: Sequence[IssueRow]) -> str:
    lines = [CSV_HEADER]
    for r in rows:
        lines.append(f"{r.row_index},{_quote(MESSAGE_SEPARATOR.join(r.messages))}")
    return "\n".join(lines)


class ErrorCsvWriter:
    """Writes the error CSV of one import run.

    The file path is fixed on first access; the directory is created lazily.
    """
    def __init__(self, directory: Path, kind: str) -> None:
        self.directory = directory
        self.kind = kind
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self.directory / f"import_errors_{self.kind}-{stamp}.csv"
        return self._file_path

    def write(self, rows: Sequence[IssueRow]) -> Path:
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        fp.write_text(to_csv(rows) + "\n", encoding="utf-8")
        return fp
