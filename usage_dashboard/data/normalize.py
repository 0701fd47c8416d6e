"""
Cell coercion and sentinel filtering shared by the usage and ledger normalizers.
"""
from __future__ import annotations

import math
import re
from typing import Iterable, Optional, Sequence

from usage_dashboard.config import (
    LEDGER_MIN_NAME_LENGTH,
    LEDGER_SKIP_NAME_TERMS,
    SERIES_EXCLUDE_MARKER,
    TOTAL_SENTINEL,
)
from usage_dashboard.data.schemas import MalformedCell


# ---------------------------------------------------------------------------
# Cell access
# ---------------------------------------------------------------------------

def cell_at(row: Sequence[str], index: int) -> str:
    """Raw cell at index, or "" past the row's physical length."""
    if index < 0 or index >= len(row):
        return ""
    value = row[index]
    return "" if value is None else str(value)


def clean_label(raw) -> str:
    """Label cells are only trimmed, never coerced."""
    return "" if raw is None else str(raw).strip()


def fold(raw) -> str:
    return clean_label(raw).casefold()


# ---------------------------------------------------------------------------
# Numeric coercion
# ---------------------------------------------------------------------------

_EMPTY_DASH_RE = re.compile(r"^(?:-\s*)?$")
# Longest leading decimal literal, e.g. "12 copies" → 12
_NUMBER_PREFIX_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(raw) -> Optional[float]:
    """Parse a value cell. Returns None when the cell is malformed.

    Blank, "-" and "- " mean "no data" and parse to 0. Thousands-separator
    commas are stripped before parsing.
    """
    text = clean_label(raw)
    if _EMPTY_DASH_RE.match(text):
        return 0.0
    m = _NUMBER_PREFIX_RE.match(text.replace(",", ""))
    if not m:
        return None
    value = float(m.group(0))
    # "1e999" overflows to inf
    return value if math.isfinite(value) else None


def coerce_number(
    raw,
    *,
    row: int = -1,
    column: str = "",
    warnings: Optional[list[MalformedCell]] = None,
) -> float:
    """Parse a value cell, degrading malformed input to 0.

    When ``warnings`` is a list (strict mode) each degraded cell is recorded.
    """
    value = parse_number(raw)
    if value is None:
        if warnings is not None:
            warnings.append(MalformedCell(row=row, column=column, value=clean_label(raw)))
        return 0.0
    return value


# ---------------------------------------------------------------------------
# Sentinel filters
# ---------------------------------------------------------------------------

def is_total_label(raw) -> bool:
    return fold(raw) == TOTAL_SENTINEL


def is_label_axis(header: str) -> bool:
    """A header that names the month axis can never be a data series."""
    return SERIES_EXCLUDE_MARKER in fold(header)


def series_columns(headers: Sequence[str], skip: Iterable[int] = ()) -> list[tuple[int, str]]:
    """(column index, series name) for every header that is a data series.

    Blank and label-axis headers are dropped; a repeated name keeps its first
    column so series stay unique.
    """
    skipped = set(skip)
    seen: set[str] = set()
    cols: list[tuple[int, str]] = []
    for idx, header in enumerate(headers):
        name = clean_label(header)
        if idx in skipped or not name or is_label_axis(name) or name in seen:
            continue
        seen.add(name)
        cols.append((idx, name))
    return cols


def is_ledger_noise(name: str) -> bool:
    """Section breaks and summary rows interleaved with newspaper rows."""
    text = clean_label(name)
    if len(text) < LEDGER_MIN_NAME_LENGTH:
        return True
    folded = text.casefold()
    return any(term in folded for term in LEDGER_SKIP_NAME_TERMS)
