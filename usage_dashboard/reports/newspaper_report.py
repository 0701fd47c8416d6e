"""
Newspaper Report — per-month ledgers plus the cross-month overview.
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Mapping, Optional

from usage_dashboard.data.schemas import LedgerMonth
from usage_dashboard.analytics.newspapers import newspaper_language, order_months, summarize_ledgers
from usage_dashboard.excel.workbooks import LedgerWorkbook


def month_json(month: LedgerMonth) -> dict:
    data = month.to_dict()
    data["newspapers"] = len(month.records)
    for rec in data["records"]:
        rec["language"] = newspaper_language(rec["name"])
    return data


def generate_json(months: Mapping[str, LedgerMonth]) -> dict:
    return {
        "overview": summarize_ledgers(months),
        "months": [month_json(months[p]) for p in order_months(months)],
    }


def generate_excel(
    months: Mapping[str, LedgerMonth],
    output_path: str | Path,
    generated: Optional[datetime] = None,
) -> Path:
    data = generate_json(months)
    book = LedgerWorkbook(generated).add_overview(data["overview"])
    for month in data["months"]:
        book.add_month(month)
    return book.save(output_path)
