"""
Usage summary — KPIs over one normalized table.

Totals per series and per period, the top series and peak period, ranking,
trend lines, and period-to-period dispersion.
"""
from __future__ import annotations

import pandas as pd

from usage_dashboard.config import FLUCTUATION_CV_THRESHOLD, LABEL_FIELD, RANKING_LIMIT
from usage_dashboard.data.schemas import NormalizedTable
from usage_dashboard.analytics.common import (
    dispersion,
    first_max,
    pct_change,
    pct_of_total,
    sanitize_for_json,
)

ALL_SERIES = "All"


def table_frame(table: NormalizedTable) -> pd.DataFrame:
    """Period x series float frame, indexed by record label in table order."""
    if not table.records:
        return pd.DataFrame(columns=table.series, dtype=float)
    df = pd.DataFrame(table.records, columns=[LABEL_FIELD] + table.series)
    values = df[table.series].astype(float)
    values.index = pd.Index(df[LABEL_FIELD], name=LABEL_FIELD)
    return values


def series_totals(table: NormalizedTable) -> pd.Series:
    return table_frame(table).sum(axis=0)


def period_totals(table: NormalizedTable) -> pd.Series:
    return table_frame(table).sum(axis=1)


def ranking(table: NormalizedTable, limit: int = RANKING_LIMIT) -> list[dict]:
    """Series ordered by total, largest first; equal totals keep table order."""
    totals = series_totals(table).sort_values(ascending=False, kind="stable")
    return [{"name": str(name), "total": float(total)} for name, total in totals.head(limit).items()]


def trend(table: NormalizedTable, series: str = ALL_SERIES) -> list[dict]:
    """Per-period values for one series, or the sum of all series."""
    frame = table_frame(table)
    if series == ALL_SERIES:
        values = frame.sum(axis=1)
    elif series in table.series:
        values = frame[series]
    else:
        raise KeyError(series)
    return [{"month": str(label), "value": float(v)} for label, v in values.items()]


def summarize_table(table: NormalizedTable, limit: int = RANKING_LIMIT) -> dict:
    """KPI summary of a normalized usage table.

    With zero periods the mean, standard deviation and CV are 0.0, and
    the top series / peak period are None.
    """
    by_series = series_totals(table)
    by_period = period_totals(table)
    grand_total = float(by_series.sum())

    top = first_max(by_series) if table.records else None
    peak = first_max(by_period)
    stats = dispersion(by_period.tolist())

    growth = None
    if len(by_period) >= 2:
        growth = pct_change(float(by_period.iloc[-1]), float(by_period.iloc[0]))

    return sanitize_for_json({
        "total_usage": grand_total,
        "series_count": len(table.series),
        "period_count": len(table.records),
        "series_totals": [{"name": str(n), "total": float(t)} for n, t in by_series.items()],
        "period_totals": [{"month": str(m), "total": float(t)} for m, t in by_period.items()],
        "top_series": {
            "name": top[0],
            "total": top[1],
            "share": round(pct_of_total(top[1], grand_total), 1),
        } if top else None,
        "peak_period": {"month": peak[0], "total": peak[1]} if peak else None,
        "mean": stats["mean"],
        "std_dev": stats["std_dev"],
        "cv": stats["cv"],
        "consistency": "fluctuating" if stats["cv"] > FLUCTUATION_CV_THRESHOLD else "stable",
        "growth_pct": growth,
        "ranking": ranking(table, limit),
    })
