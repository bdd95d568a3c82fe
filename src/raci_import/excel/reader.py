from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

from ..services.normalize import is_row_empty

"""Decode an uploaded .csv / .xlsx file into raw positional rows.

Only the first ``width`` columns are kept (4 for employees, 3 for projects);
short rows are padded with None and empty cells read as None. Every cell is
read as an object with NA parsing off, so names such as "NA", "None" or "001"
survive untouched. Fully blank rows are dropped before validation, so row
numbers in messages count non-blank rows only.
"""

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "ReadError",
    "UnsupportedFileError",
    "EmptyFileError",
    "read_rows",
]

SUPPORTED_EXTENSIONS = (".csv", ".xlsx")


class ReadError(Exception):
    """Raised when an import file cannot be decoded."""


class UnsupportedFileError(ReadError):
    """Raised for extensions other than .csv / .xlsx."""


class EmptyFileError(ReadError):
    """Raised when the file holds no non-blank data row."""


def _read_frame(path: Path, width: int) -> pd.DataFrame:
    if path.suffix.lower() == ".csv":
        # rows longer than width are cut back to width instead of failing
        return pd.read_csv(
            path,
            header=None,
            names=list(range(width)),
            index_col=False,
            engine="python",
            on_bad_lines=lambda bad: bad[:width],
            dtype=object,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
        )
    # no NA sentinels: a cell reading "NA" or "None" is a name, not a blank
    return pd.read_excel(path, sheet_name=0, header=None, dtype=object, keep_default_na=False, na_values=[])


def read_rows(path: Path, width: int, *, skip_header: bool = False) -> list[list[Any]]:
    """Read the first sheet (or the CSV) as a list of raw rows.

    Parameters
    ----------
    path: import file (.csv or .xlsx)
    width: number of leading columns to keep
    skip_header: drop the first non-blank row (a column title line)

    Raises
    ------
    UnsupportedFileError: unknown extension
    ReadError: pandas could not parse the file
    EmptyFileError: no data rows
    """
    if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileError(f"unsupported file type '{path.suffix}': only .csv and .xlsx are accepted")
    if not path.exists():
        raise ReadError(f"file not found: {path}")

    try:
        df = _read_frame(path, width)
    except pd.errors.EmptyDataError as e:
        raise EmptyFileError(f"{path.name}: file has no data rows") from e
    except (ValueError, OSError, pd.errors.ParserError) as e:
        raise ReadError(f"cannot read {path.name}: {e}") from e

    df = df.iloc[:, :width]
    # NaN -> None so that downstream code only sees plain Python values
    df = df.astype(object).where(pd.notna(df), None)

    rows: list[list[Any]] = []
    for values in df.values.tolist():
        # empty cells come back as "" once NA parsing is off
        padded = [None if v == "" else v for v in values] + [None] * (width - len(values))
        if is_row_empty(padded):
            continue
        rows.append(padded)

    if skip_header and rows:
        rows = rows[1:]
    if not rows:
        raise EmptyFileError(f"{path.name}: file has no data rows")
    return rows
