"""
Usage-table normalizer: multi-publisher monthly counts and the school-wise
transposed layout, both assembled into a NormalizedTable.
"""
from __future__ import annotations

import logging
from typing import Optional, Union

from usage_dashboard.config import LABEL_FIELD
from usage_dashboard.data.locate import locate_header
from usage_dashboard.data.normalize import (
    cell_at,
    clean_label,
    coerce_number,
    fold,
    is_total_label,
    series_columns,
)
from usage_dashboard.data.schemas import Grid, HeaderMatch, Layout, MalformedCell, NormalizedTable
from usage_dashboard.data.tokenize import as_grid, tokenize
from usage_dashboard.errors import HeaderNotFound

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def normalize_usage_grid(grid: Union[Grid, str, bytes, None], strict: bool = False) -> NormalizedTable:
    """Normalize one usage sheet.

    A grid without any recognised header yields an empty table rather than an
    error, so callers render the same empty state as for a sheet with no data.
    In strict mode, cells that degraded to 0 are listed in ``table.warnings``.
    """
    grid = as_grid(grid)
    if not grid:
        return NormalizedTable.empty()

    try:
        header = locate_header(grid, required=True)
    except HeaderNotFound as exc:
        logger.warning("%s; returning empty table", exc)
        return NormalizedTable.empty()

    warnings: Optional[list[MalformedCell]] = [] if strict else None
    if header.layout is Layout.TRANSPOSED:
        table = _assemble_transposed(grid, header, warnings)
    else:
        table = _assemble_row_oriented(grid, header, warnings)

    logger.info(
        "Normalized %d records x %d series (%s, header row %d)",
        len(table.records), len(table.series), header.layout.value, header.index,
    )
    return table


def normalize_usage_csv(text: str, strict: bool = False) -> NormalizedTable:
    return normalize_usage_grid(tokenize(text), strict=strict)


# ---------------------------------------------------------------------------
# Row-oriented: one header row, one record per following row
# ---------------------------------------------------------------------------

def _assemble_row_oriented(
    grid: Grid,
    header: HeaderMatch,
    warnings: Optional[list[MalformedCell]],
) -> NormalizedTable:
    columns = series_columns(header.labels, skip=(header.label_column,))
    records: list[dict] = []

    for row_idx in range(header.index + 1, len(grid)):
        row = grid[row_idx]
        label = clean_label(cell_at(row, header.label_column))
        if not label or is_total_label(label):
            continue
        record: dict = {LABEL_FIELD: label}
        for col_idx, name in columns:
            record[name] = coerce_number(cell_at(row, col_idx), row=row_idx, column=name, warnings=warnings)
        records.append(record)

    return NormalizedTable(
        records=records,
        series=[name for _, name in columns],
        layout=Layout.ROW_ORIENTED,
        warnings=warnings or [],
    )


# ---------------------------------------------------------------------------
# Transposed: grouping-column values become series, metric headers become rows
# ---------------------------------------------------------------------------

def _assemble_transposed(
    grid: Grid,
    header: HeaderMatch,
    warnings: Optional[list[MalformedCell]],
) -> NormalizedTable:
    group_col = header.label_column

    metrics: list[tuple[int, str]] = []
    seen_metrics: set[str] = set()
    for col_idx, name in enumerate(header.labels):
        if col_idx == group_col or not name or name in seen_metrics:
            continue
        seen_metrics.add(name)
        metrics.append((col_idx, name))

    # First source row for each group value, in first-seen order
    group_rows: dict[str, int] = {}
    for row_idx in range(header.index + 1, len(grid)):
        name = clean_label(cell_at(grid[row_idx], group_col))
        if not name or is_total_label(name) or fold(name) == LABEL_FIELD or name in group_rows:
            continue
        group_rows[name] = row_idx

    records: list[dict] = []
    for col_idx, metric in metrics:
        if is_total_label(metric):
            continue
        record: dict = {LABEL_FIELD: metric}
        for name, row_idx in group_rows.items():
            record[name] = coerce_number(
                cell_at(grid[row_idx], col_idx), row=row_idx, column=metric, warnings=warnings,
            )
        records.append(record)

    return NormalizedTable(
        records=records,
        series=list(group_rows),
        layout=Layout.TRANSPOSED,
        warnings=warnings or [],
    )


# ---------------------------------------------------------------------------
# Re-pivot
# ---------------------------------------------------------------------------

def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else repr(float(value))


def to_grid(table: NormalizedTable, group_label: str = "Group") -> list[list[str]]:
    """Pivot a table back into a grouping-layout grid (series as rows)."""
    if table.is_empty:
        return []
    header = [group_label] + table.labels
    rows = [
        [name] + [_format_number(r.get(name, 0.0)) for r in table.records]
        for name in table.series
    ]
    return [header] + rows
