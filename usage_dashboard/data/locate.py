"""
Header discovery for usage sheets.

Spreadsheet exports carry banner rows of unpredictable length above the real
header, so the header is found by content rather than by position. Two marker
families are tried in a fixed order: the grouping marker first (it selects the
transposed, school-wise layout), then the month-axis marker.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from usage_dashboard.config import GROUP_MARKER, MONTH_MARKER
from usage_dashboard.data.normalize import clean_label, fold
from usage_dashboard.data.schemas import Grid, HeaderMatch, Layout
from usage_dashboard.errors import HeaderNotFound

logger = logging.getLogger(__name__)

CellPredicate = Callable[[str], bool]


def is_group_marker(cell) -> bool:
    return fold(cell) == GROUP_MARKER


def is_month_marker(cell) -> bool:
    return MONTH_MARKER in fold(cell)


# Priority order matters: a grid carrying the grouping marker is transposed
# even if a month-like cell appears further down.
MARKER_FAMILIES: tuple[tuple[Layout, str, CellPredicate], ...] = (
    (Layout.TRANSPOSED, GROUP_MARKER, is_group_marker),
    (Layout.ROW_ORIENTED, MONTH_MARKER, is_month_marker),
)


def find_marker(grid: Grid, predicate: CellPredicate) -> Optional[tuple[int, int]]:
    """First (row, column) whose cell satisfies predicate, scanning top-down."""
    for row_idx, row in enumerate(grid):
        for col_idx, cell in enumerate(row):
            if cell is not None and predicate(cell):
                return row_idx, col_idx
    return None


def locate_header(grid: Grid, required: bool = False) -> Optional[HeaderMatch]:
    """Find the header row and its layout.

    Returns None when no marker family matches, or raises HeaderNotFound
    when ``required`` is set.
    """
    for layout, marker, predicate in MARKER_FAMILIES:
        hit = find_marker(grid, predicate)
        if hit is None:
            continue
        row_idx, col_idx = hit
        labels = tuple(clean_label(c) for c in grid[row_idx])
        logger.debug("Header row %d matched %r (%s)", row_idx, marker, layout.value)
        return HeaderMatch(index=row_idx, labels=labels, layout=layout, label_column=col_idx)

    if required:
        raise HeaderNotFound(tuple(marker for _, marker, _ in MARKER_FAMILIES))
    return None
