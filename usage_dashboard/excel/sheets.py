"""
Sheet writer shared by the usage and ledger workbooks.

A DashboardSheet is filled top to bottom: every block (banner, heading, KPI
cards, note, table) starts at the sheet's cursor row and moves it past itself.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Sequence

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from usage_dashboard.excel.styles import ALIGN, BORDERS, FILLS, FONTS, NUMBER_FORMATS

SHEET_TITLE_MAX = 31
_SHEET_TITLE_FORBIDDEN = re.compile(r"[\[\]:*?/\\]")

# (row position, row data) -> fill name such as "top" or "peak"
RowMark = Callable[[int, Mapping[str, Any]], Optional[str]]


@dataclass(frozen=True)
class Column:
    key: str
    header: str
    kind: str = "text"          # text, count, rupees, percent

    @property
    def summable(self) -> bool:
        return self.kind in ("count", "rupees")


@dataclass(frozen=True)
class Kpi:
    label: str
    value: Any
    kind: str = "count"         # "growth" is coloured by sign


def sheet_title(name: str) -> str:
    """Excel-safe sheet name: forbidden characters replaced, 31 chars max."""
    return _SHEET_TITLE_FORBIDDEN.sub("-", name).strip()[:SHEET_TITLE_MAX] or "Sheet"


def _cell_value(value):
    if value is None:
        return 0
    return value


class DashboardSheet:
    """One worksheet plus the next free row."""

    def __init__(self, ws: Worksheet, width: int = 8) -> None:
        self.ws = ws
        self.width = width
        self.row = 1

    def _put(self, row: int, col: int, value, kind: str = "text", role: str = "body",
             fill: Optional[str] = None):
        cell = self.ws.cell(row=row, column=col, value=_cell_value(value) if kind != "text" else value)
        cell.font = FONTS["total" if role == "total" else "body"]
        cell.border = BORDERS[role]
        if kind in NUMBER_FORMATS:
            cell.number_format = NUMBER_FORMATS[kind]
            cell.alignment = ALIGN["right"]
        else:
            cell.alignment = ALIGN["left"]
        if fill or role == "total":
            cell.fill = FILLS[fill or "total"]
        elif row % 2 == 0:
            cell.fill = FILLS["stripe"]
        return cell

    def _merged_line(self, text: str, font: str) -> None:
        cell = self.ws.cell(row=self.row, column=1, value=text)
        cell.font = FONTS[font]
        self.ws.merge_cells(start_row=self.row, start_column=1, end_row=self.row, end_column=self.width)
        self.row += 1

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def banner(self, title: str, subtitle: str) -> "DashboardSheet":
        self._merged_line(title, "title")
        self._merged_line(subtitle, "subtitle")
        self.row += 1
        return self

    def heading(self, text: str) -> "DashboardSheet":
        self.ws.cell(row=self.row, column=1, value=text).font = FONTS["heading"]
        self.row += 2
        return self

    def kpis(self, cards: Sequence[Kpi], spacing: int = 2) -> "DashboardSheet":
        """Large values with a small label underneath, side by side."""
        for i, card in enumerate(cards):
            col = 1 + i * spacing
            value = self.ws.cell(row=self.row, column=col, value=card.value)
            if card.kind == "growth":
                value.font = FONTS["gain" if card.value >= 0 else "loss"]
            else:
                value.font = FONTS["kpi"]
            if card.kind in NUMBER_FORMATS:
                value.number_format = NUMBER_FORMATS[card.kind]
            value.alignment = ALIGN["center"]

            label = self.ws.cell(row=self.row + 1, column=col, value=card.label)
            label.font = FONTS["kpi_label"]
            label.alignment = ALIGN["center"]
        self.row += 3
        return self

    def note(self, title: str, detail: str) -> "DashboardSheet":
        self.ws.cell(row=self.row, column=1, value=title).font = FONTS["note_title"]
        self.row += 1
        self._merged_line(detail, "note")
        self.row += 1
        return self

    def table(
        self,
        columns: Sequence[Column],
        rows: Sequence[Mapping[str, Any]],
        mark: Optional[RowMark] = None,
        totals: bool = False,
        freeze: bool = False,
    ) -> "DashboardSheet":
        """Header row, one row per mapping, and optionally a summed Total row."""
        top = self.row
        for col, column in enumerate(columns, 1):
            cell = self.ws.cell(row=top, column=col, value=column.header)
            cell.font = FONTS["header"]
            cell.fill = FILLS["header"]
            cell.border = BORDERS["header"]
            cell.alignment = ALIGN["center"]

        row = top + 1
        for pos, data in enumerate(rows):
            fill = mark(pos, data) if mark else None
            for col, column in enumerate(columns, 1):
                self._put(row, col, data.get(column.key), column.kind, fill=fill)
            row += 1

        if totals and rows:
            self._put(row, 1, "Total", role="total")
            for col, column in enumerate(columns[1:], 2):
                if column.summable:
                    self._put(row, col, float(sum(r.get(column.key) or 0 for r in rows)), column.kind, role="total")
                else:
                    self._put(row, col, "", role="total")
            row += 1

        if freeze:
            self.ws.freeze_panes = f"A{top + 1}"
        self.row = row + 1
        return self

    def fit_columns(self, min_width: int = 10, max_width: int = 55) -> None:
        """Size columns to their longest value, ignoring merged banner/note cells."""
        merged = self.ws.merged_cells
        for column in self.ws.iter_cols():
            lengths = [len(str(c.value)) for c in column if c.value is not None and c.coordinate not in merged]
            width = min(max(max(lengths, default=0) + 2, min_width), max_width)
            self.ws.column_dimensions[get_column_letter(column[0].column)].width = width


class DashboardWorkbook:
    """openpyxl workbook whose sheets are DashboardSheets."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self.sheets: list[DashboardSheet] = []

    def sheet(self, name: str) -> DashboardSheet:
        # The first sheet reuses the workbook's default one
        ws = self.wb.active if not self.sheets else self.wb.create_sheet()
        ws.title = sheet_title(name)
        sheet = DashboardSheet(ws)
        self.sheets.append(sheet)
        return sheet

    def save(self, path: str | Path) -> Path:
        for sheet in self.sheets:
            sheet.fit_columns()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path
