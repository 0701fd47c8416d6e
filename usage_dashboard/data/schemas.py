"""
Normalized table and ledger schemas produced by the CSV normalizers.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from usage_dashboard.config import LABEL_FIELD

Grid = Sequence[Sequence[str]]


class Layout(str, Enum):
    ROW_ORIENTED = "row_oriented"
    TRANSPOSED = "transposed"


class HeaderTier(int, Enum):
    """Which ledger header heuristic matched."""
    PRICE_DAYS = 1
    DATE_MARKER = 2
    FIXED_ROW = 3


@dataclass(frozen=True)
class HeaderMatch:
    """The grid row that defines column semantics."""
    index: int
    labels: tuple[str, ...]
    layout: Layout
    label_column: int          # month column (row-oriented) or grouping column (transposed)


@dataclass(frozen=True)
class MalformedCell:
    """A value cell that did not parse and was degraded to 0."""
    row: int                   # grid row index
    column: str
    value: str

    def to_dict(self) -> dict:
        return {"row": self.row, "column": self.column, "value": self.value}


@dataclass
class NormalizedTable:
    """Ordered period records plus the ordered series names.

    Every record carries ``LABEL_FIELD`` and one float per series, nothing else.
    ``warnings`` is only populated in strict mode.
    """
    records: list[dict] = field(default_factory=list)
    series: list[str] = field(default_factory=list)
    layout: Optional[Layout] = None
    warnings: list[MalformedCell] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "NormalizedTable":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.records and not self.series

    @property
    def labels(self) -> list[str]:
        return [r[LABEL_FIELD] for r in self.records]

    def to_dict(self) -> dict:
        return {
            "records": [dict(r) for r in self.records],
            "series": list(self.series),
        }


@dataclass(frozen=True)
class LedgerRecord:
    """One newspaper's line in a monthly ledger."""
    name: str
    total_copies: float = 0.0
    total_price: float = 0.0

    def to_dict(self) -> dict:
        return {"name": self.name, "totalCopies": self.total_copies, "totalPrice": self.total_price}


@dataclass
class LedgerResult:
    """Ledger records plus how the header was found."""
    records: list[LedgerRecord] = field(default_factory=list)
    header_index: Optional[int] = None
    header_tier: Optional[HeaderTier] = None
    warnings: list[MalformedCell] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.records

    def to_month(self, period: str) -> "LedgerMonth":
        return LedgerMonth.from_records(period, self.records)


@dataclass(frozen=True)
class LedgerMonth:
    """Ledger records grouped under one period with their totals."""
    period: str
    total_copies: float
    total_price: float
    records: tuple[LedgerRecord, ...] = ()

    @classmethod
    def from_records(cls, period: str, records: Sequence[LedgerRecord]) -> "LedgerMonth":
        return cls(
            period=period,
            total_copies=float(sum(r.total_copies for r in records)),
            total_price=float(sum(r.total_price for r in records)),
            records=tuple(records),
        )

    def to_dict(self) -> dict:
        return {
            "period": self.period,
            "totalCopies": self.total_copies,
            "totalPrice": self.total_price,
            "records": [r.to_dict() for r in self.records],
        }
