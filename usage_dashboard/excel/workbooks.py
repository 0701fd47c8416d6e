"""
The two exported workbooks: usage (one dataset) and newspaper ledgers (many months).
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from usage_dashboard.config import LABEL_FIELD
from usage_dashboard.excel.sheets import Column, DashboardWorkbook, Kpi

LEDGER_COLUMNS = [
    Column("name", "Newspaper Name"),
    Column("language", "Language"),
    Column("totalCopies", "Total Copies", "count"),
    Column("totalPrice", "Total Price (₹)", "rupees"),
]


def _stamped(text: str, generated: Optional[datetime]) -> str:
    if generated is None:
        return text
    return f"{text}  |  Generated {generated:%B %d, %Y}"


class UsageWorkbook(DashboardWorkbook):
    """Summary, the normalized table, and per-period totals for one usage sheet."""

    TITLE = "E-RESOURCES USAGE"

    def __init__(self, dataset: str, generated: Optional[datetime] = None) -> None:
        super().__init__()
        self.dataset = dataset
        self.generated = generated

    def add_summary(self, summary: dict, insights: list[dict]) -> "UsageWorkbook":
        sheet = self.sheet("Summary").banner(self.TITLE, _stamped(self.dataset, self.generated))

        top = summary["top_series"] or {"name": "-", "share": 0.0}
        peak = summary["peak_period"] or {"month": "-"}
        cards = [
            Kpi("TOTAL USAGE", summary["total_usage"]),
            Kpi("TOP RESOURCE", top["name"], "text"),
            Kpi("TOP SHARE", top["share"], "percent"),
            Kpi("PEAK PERIOD", peak["month"], "text"),
        ]
        if summary["growth_pct"] is not None:
            cards.append(Kpi("GROWTH (FIRST → LATEST)", summary["growth_pct"], "growth"))
        sheet.heading("OVERVIEW").kpis(cards)

        if insights:
            sheet.heading("INSIGHTS")
            for item in insights:
                sheet.note(item["title"], item["detail"])

        sheet.heading("TOP RESOURCES").table(
            [Column("name", "Resource"), Column("total", "Total", "count")],
            summary["ranking"],
            mark=lambda pos, _: "top" if pos == 0 else None,
        )
        return self

    def add_usage_table(self, table: dict, series: list[str]) -> "UsageWorkbook":
        columns = [Column(LABEL_FIELD, "Month")] + [Column(name, name, "count") for name in series]
        self.sheet("Usage Table").table(columns, table["records"], totals=True, freeze=True)
        return self

    def add_period_totals(self, summary: dict) -> "UsageWorkbook":
        peak = (summary["peak_period"] or {}).get("month")
        self.sheet("Period Totals").table(
            [Column("month", "Month"), Column("total", "Total", "count")],
            summary["period_totals"],
            mark=lambda _, row: "peak" if row["month"] == peak else None,
        )
        return self


class LedgerWorkbook(DashboardWorkbook):
    """Cross-month overview followed by one ledger sheet per month."""

    TITLE = "NEWSPAPER SUBSCRIPTIONS"

    def __init__(self, generated: Optional[datetime] = None) -> None:
        super().__init__()
        self.generated = generated

    def add_overview(self, overview: dict) -> "LedgerWorkbook":
        subtitle = _stamped(f"{len(overview['months'])} month(s)", self.generated)
        sheet = self.sheet("Overview").banner(self.TITLE, subtitle)
        sheet.heading("OVERVIEW").kpis([
            Kpi("TOTAL COST", overview["total_price"], "rupees"),
            Kpi("TOTAL COPIES", overview["total_copies"]),
            Kpi("DOMINANT LANGUAGE", overview["dominant_language"], "text"),
        ])

        peak = (overview["peak_month"] or {}).get("period")
        sheet.heading("MONTHLY TREND").table(
            [
                Column("period", "Month"),
                Column("newspapers", "Newspapers", "count"),
                Column("total_copies", "Copies", "count"),
                Column("total_price", "Cost", "rupees"),
            ],
            overview["months"],
            mark=lambda _, row: "peak" if row["period"] == peak else None,
            totals=True,
        )
        sheet.heading("LANGUAGE SPLIT").table(
            [Column("name", "Language"), Column("value", "Copies", "count")],
            overview["languages"],
        )
        return self

    def add_month(self, month: dict) -> "LedgerWorkbook":
        top = max(month["records"], key=lambda r: r["totalPrice"], default=None)
        self.sheet(month["period"]).table(
            LEDGER_COLUMNS,
            month["records"],
            mark=lambda _, row: "top" if row is top else None,
            totals=True,
            freeze=True,
        )
        return self
