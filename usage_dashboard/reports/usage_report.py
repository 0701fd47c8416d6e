"""
Usage Report — normalized usage table, KPIs, ranking, and insights.
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

from usage_dashboard.data.schemas import NormalizedTable
from usage_dashboard.analytics.usage import summarize_table
from usage_dashboard.excel.workbooks import UsageWorkbook


def insights(summary: dict) -> list[tuple[str, str]]:
    """(title, body) insight blocks derived from a usage summary."""
    out = []
    top = summary.get("top_series")
    if top:
        out.append((
            "Key Insight",
            f"{top['name']} dominates usage, accounting for {top['share']:.1f}% of all activity.",
        ))
    if summary["period_count"]:
        if summary["consistency"] == "fluctuating":
            msg = "Usage shows significant fluctuations month-to-month."
        else:
            msg = "Usage is relatively stable throughout the year."
        out.append(("Consistency", f"{msg} Standard deviation: {summary['std_dev']:,.0f}."))
    growth = summary.get("growth_pct")
    if growth is not None:
        direction = "increased" if growth > 0 else "decreased"
        out.append((
            "Positive Growth" if growth > 0 else "Usage Decline",
            f"Comparing the first period to the latest, overall usage has {direction} by {abs(growth):.1f}%.",
        ))
    return out


def generate_json(table: NormalizedTable, dataset: str) -> dict:
    summary = summarize_table(table)
    return {
        "dataset": dataset,
        "table": table.to_dict(),
        "summary": summary,
        "insights": [{"title": t, "detail": d} for t, d in insights(summary)],
        "warnings": [w.to_dict() for w in table.warnings],
    }


def generate_excel(
    table: NormalizedTable,
    output_path: str | Path,
    dataset: str,
    generated: Optional[datetime] = None,
) -> Path:
    data = generate_json(table, dataset)
    book = UsageWorkbook(dataset, generated)
    book.add_summary(data["summary"], data["insights"])
    book.add_usage_table(data["table"], table.series)
    book.add_period_totals(data["summary"])
    return book.save(output_path)
