"""
Newspaper-ledger normalizer: per-newspaper monthly copies and cost.

The ledger sheets have no stable layout from one month to the next, so the
header is searched with three progressively weaker heuristics and the columns
are resolved by keyword, falling back to position.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

from usage_dashboard.config import (
    LEDGER_COPIES_KEYWORDS,
    LEDGER_DATE_MARKER,
    LEDGER_DAYS_MARKER,
    LEDGER_FALLBACK_HEADER_ROW,
    LEDGER_HEADER_VOCABULARY,
    LEDGER_NAME_KEYWORDS,
    LEDGER_PRICE_KEYWORDS,
    LEDGER_PRICE_MARKER,
    LEDGER_RATE_KEYWORDS,
    LEDGER_SCAN_ROWS,
    LEDGER_SERIAL_LABELS,
)
from usage_dashboard.data.normalize import (
    cell_at,
    clean_label,
    coerce_number,
    fold,
    is_ledger_noise,
    parse_number,
)
from usage_dashboard.data.schemas import Grid, HeaderTier, LedgerRecord, LedgerResult, MalformedCell
from usage_dashboard.data.tokenize import as_grid, tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerColumns:
    name: int
    copies: Optional[int] = None
    price: Optional[int] = None
    rate: Optional[int] = None     # per-copy price, used when no total column exists


# ---------------------------------------------------------------------------
# Header discovery
# ---------------------------------------------------------------------------

def find_ledger_header(grid: Grid) -> Optional[tuple[int, HeaderTier]]:
    """Return (header row index, tier) or None for a grid too short to guess."""
    for idx, row in enumerate(grid[:LEDGER_SCAN_ROWS]):
        joined = " ".join(clean_label(c) for c in row).casefold()
        if LEDGER_PRICE_MARKER in joined and LEDGER_DAYS_MARKER in joined:
            return idx, HeaderTier.PRICE_DAYS

    for idx, row in enumerate(grid[:-1]):
        if row and fold(row[0]) == LEDGER_DATE_MARKER:
            return idx + 1, HeaderTier.DATE_MARKER

    if len(grid) > LEDGER_FALLBACK_HEADER_ROW:
        return LEDGER_FALLBACK_HEADER_ROW, HeaderTier.FIXED_ROW
    return None


def _is_header_continuation(row: Sequence[str]) -> bool:
    """A label-only row under the header (second line of a merged header)."""
    cells = [fold(c) for c in row if clean_label(c)]
    if not cells:
        return False
    if any(parse_number(c) is not None for c in cells):
        return False
    return any(word in c for c in cells for word in LEDGER_HEADER_VOCABULARY)


def merge_header_rows(grid: Grid, header_idx: int) -> tuple[list[str], int]:
    """Header labels (joined with a continuation row if any) and the first data row."""
    labels = [clean_label(c) for c in grid[header_idx]]
    next_idx = header_idx + 1
    if next_idx < len(grid) and _is_header_continuation(grid[next_idx]):
        extra = grid[next_idx]
        width = max(len(labels), len(extra))
        labels = [
            " ".join(p for p in (cell_at(labels, i), clean_label(cell_at(extra, i))) if p)
            for i in range(width)
        ]
        return labels, next_idx + 1
    return labels, next_idx


# ---------------------------------------------------------------------------
# Column resolution
# ---------------------------------------------------------------------------

def _find_column(
    labels: Sequence[str],
    keywords: Iterable[str],
    exclude: Iterable[Optional[int]] = (),
) -> Optional[int]:
    """First column matching the most specific keyword that matches at all."""
    skipped = {i for i in exclude if i is not None}
    folded = [fold(label) for label in labels]
    for keyword in keywords:
        for idx, label in enumerate(folded):
            if idx not in skipped and keyword in label:
                return idx
    return None


def _is_serial(label: str) -> bool:
    return fold(label).replace(" ", "").replace(".", "") in LEDGER_SERIAL_LABELS


def _positional_name(labels: Sequence[str], body: Grid) -> int:
    first = next((row for row in body if any(clean_label(c) for c in row)), [])
    if labels and _is_serial(labels[0]):
        return 1
    lead = clean_label(cell_at(first, 0))
    if lead and parse_number(lead) is not None and clean_label(cell_at(first, 1)):
        return 1
    return 0


def _last_filled_column(labels: Sequence[str], body: Grid) -> int:
    last = max((i for i, label in enumerate(labels) if label), default=-1)
    for row in body:
        last = max(last, max((i for i, c in enumerate(row) if clean_label(c)), default=-1))
    return last


def resolve_columns(labels: Sequence[str], body: Grid) -> LedgerColumns:
    """Map header labels to the name / copies / price columns."""
    name = _find_column(labels, LEDGER_NAME_KEYWORDS)
    if name is None:
        name = _positional_name(labels, body)

    rate = _find_column(labels, LEDGER_RATE_KEYWORDS, exclude=[name])
    days = _find_column(labels, (LEDGER_DAYS_MARKER,), exclude=[name, rate])
    copies = _find_column(labels, LEDGER_COPIES_KEYWORDS, exclude=[name, rate])
    # "Total Days" must not be read as a price column
    price = _find_column(labels, LEDGER_PRICE_KEYWORDS, exclude=[name, rate, copies, days])
    if copies is None:
        copies = days

    if price is None and rate is None:
        last = _last_filled_column(labels, body)
        if last > name and last not in (copies, days):
            price = last
    if copies is None and price is not None and price - 1 > name and price - 1 != rate:
        copies = price - 1

    return LedgerColumns(name=name, copies=copies, price=price, rate=rate)


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------

def _non_negative(value: float, raw: str, row: int, column: str,
                  warnings: Optional[list[MalformedCell]]) -> float:
    if value >= 0:
        return value
    if warnings is not None:
        warnings.append(MalformedCell(row=row, column=column, value=clean_label(raw)))
    return 0.0


def _read_value(row: Sequence[str], col: Optional[int], row_idx: int, column: str,
                warnings: Optional[list[MalformedCell]]) -> float:
    if col is None:
        return 0.0
    raw = cell_at(row, col)
    value = coerce_number(raw, row=row_idx, column=column, warnings=warnings)
    return _non_negative(value, raw, row_idx, column, warnings)


def normalize_ledger_grid(grid: Union[Grid, str, bytes, None], strict: bool = False) -> LedgerResult:
    """Normalize one month of a newspaper ledger.

    Rows that are section breaks or summaries are skipped. A newspaper listed
    twice has its copies and cost summed into the first occurrence.
    """
    grid = as_grid(grid)
    if not grid:
        return LedgerResult()

    found = find_ledger_header(grid)
    if found is None:
        logger.warning("Ledger has %d rows, too few to locate a header", len(grid))
        return LedgerResult()
    header_idx, tier = found
    if tier is not HeaderTier.PRICE_DAYS:
        logger.warning("Ledger header guessed at row %d by fallback tier %d", header_idx, tier.value)

    labels, data_start = merge_header_rows(grid, header_idx)
    body = grid[data_start:]
    cols = resolve_columns(labels, body)
    logger.debug("Ledger columns resolved: %s", cols)

    warnings: Optional[list[MalformedCell]] = [] if strict else None
    totals: dict[str, list[float]] = {}
    for offset, row in enumerate(body):
        row_idx = data_start + offset
        name = clean_label(cell_at(row, cols.name))
        if is_ledger_noise(name):
            continue
        copies = _read_value(row, cols.copies, row_idx, "totalCopies", warnings)
        if cols.price is not None:
            price = _read_value(row, cols.price, row_idx, "totalPrice", warnings)
        else:
            price = _read_value(row, cols.rate, row_idx, "totalPrice", warnings) * copies
        entry = totals.setdefault(name, [0.0, 0.0])
        entry[0] += copies
        entry[1] += price

    records = [LedgerRecord(name=n, total_copies=c, total_price=p) for n, (c, p) in totals.items()]
    return LedgerResult(
        records=records,
        header_index=header_idx,
        header_tier=tier,
        warnings=warnings or [],
    )


def normalize_ledger_csv(text: str, strict: bool = False) -> LedgerResult:
    return normalize_ledger_grid(tokenize(text), strict=strict)
