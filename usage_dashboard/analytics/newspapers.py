"""
Newspaper overview — cross-month ledger totals, cost dispersion, and the
Hindi / English split of delivered copies.
"""
from __future__ import annotations

import re
from typing import Iterable, Mapping, Sequence, Union

import pandas as pd

from usage_dashboard.config import NEWSPAPER_LANGUAGE_RULES
from usage_dashboard.data.schemas import LedgerMonth, LedgerRecord
from usage_dashboard.analytics.common import dispersion, first_max, pct_of_total, sanitize_for_json

LANGUAGES = ("Hindi", "English", "Other")

_LANGUAGE_PATTERNS = [
    (re.compile(rf"\b{re.escape(keyword)}\b", re.IGNORECASE), language)
    for keyword, language in NEWSPAPER_LANGUAGE_RULES
]

MonthInput = Union[LedgerMonth, Sequence[LedgerRecord]]


def newspaper_language(name: str) -> str:
    """Hindi, English, or Other, by the first matching keyword rule."""
    for pattern, language in _LANGUAGE_PATTERNS:
        if pattern.search(name or ""):
            return language
    return "Other"


def order_months(periods: Iterable[str]) -> list[str]:
    """Calendar order for "March 2025"-style labels; unparseable labels go last."""
    periods = list(periods)
    parsed = pd.to_datetime(pd.Series(periods, dtype=object), format="%B %Y", errors="coerce")
    pairs = list(zip(periods, parsed))
    dated = sorted(((p, ts) for p, ts in pairs if not pd.isna(ts)), key=lambda pair: pair[1])
    undated = [p for p, ts in pairs if pd.isna(ts)]
    return [p for p, _ in dated] + undated


def _records(month: MonthInput) -> Sequence[LedgerRecord]:
    return month.records if isinstance(month, LedgerMonth) else month


def language_split(months: Mapping[str, MonthInput]) -> dict[str, float]:
    """Total copies per language across every month."""
    split = {language: 0.0 for language in LANGUAGES}
    for month in months.values():
        for rec in _records(month):
            split[newspaper_language(rec.name)] += rec.total_copies
    return split


def summarize_ledgers(months: Mapping[str, MonthInput]) -> dict:
    """Cross-month summary of newspaper ledgers keyed by period label."""
    ordered = order_months(months)
    monthly = []
    for period in ordered:
        grouped = LedgerMonth.from_records(period, _records(months[period]))
        monthly.append({
            "period": period,
            "label": period.split(" ")[0],
            "total_copies": grouped.total_copies,
            "total_price": grouped.total_price,
            "newspapers": len(grouped.records),
        })

    price_by_month = pd.Series([m["total_price"] for m in monthly], index=ordered, dtype=float)
    peak = first_max(price_by_month)
    stats = dispersion(price_by_month.tolist())

    rows = [
        {"name": rec.name, "copies": rec.total_copies, "price": rec.total_price}
        for period in ordered for rec in _records(months[period])
    ]
    top = None
    if rows:
        by_name = pd.DataFrame(rows).groupby("name", sort=False)["price"].sum()
        top = first_max(by_name)

    split = language_split(months)
    total_copies = float(sum(split.values()))
    total_price = float(price_by_month.sum())

    return sanitize_for_json({
        "months": monthly,
        "total_price": total_price,
        "total_copies": total_copies,
        "peak_month": {"period": peak[0], "total_price": peak[1]} if peak else None,
        "mean_monthly_price": stats["mean"],
        "std_dev": stats["std_dev"],
        "cv": stats["cv"],
        "top_newspaper": {
            "name": top[0],
            "total_price": top[1],
            "share": round(pct_of_total(top[1], total_price), 1),
        } if top else None,
        "languages": [
            {"name": language, "value": split[language]}
            for language in LANGUAGES
            if language != "Other" or split[language] > 0
        ],
        "dominant_language": "Hindi" if split["Hindi"] > split["English"] else "English",
    })
