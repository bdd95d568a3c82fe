from __future__ import annotations

import math
import re
from collections.abc import Sequence

"""Cell normalization shared by every validator.

normalize_cell() is total: it accepts anything a spreadsheet decoder may hand
over (None, NaN, numbers, dates, strings) and never raises. Applying it twice
gives the same result as applying it once.
"""

__all__ = [
    "normalize_cell",
    "normalize_key",
    "is_row_empty",
]

_WHITESPACE = re.compile(r"\s+")


def normalize_cell(value: object) -> str:
    """Stringify a cell, collapse whitespace runs to one space and strip.

    None and float NaN (pandas' missing marker) become "".
    """
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return _WHITESPACE.sub(" ", str(value)).strip()


def normalize_key(value: object) -> str:
    """Lower-cased normalize_cell(); used for all name comparisons."""
    return normalize_cell(value).lower()


def is_row_empty(row: Sequence[object]) -> bool:
    return all(normalize_cell(cell) == "" for cell in row)
