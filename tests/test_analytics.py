"""Usage KPIs and the newspaper overview."""
import pytest

from usage_dashboard.analytics.common import dispersion, first_max, pct_change, safe_divide, sanitize_for_json
from usage_dashboard.analytics.newspapers import (
    language_split,
    newspaper_language,
    order_months,
    summarize_ledgers,
)
from usage_dashboard.analytics.usage import ranking, summarize_table, trend
from usage_dashboard.data.schemas import NormalizedTable

import numpy as np
import pandas as pd


class TestCommon:
    def test_safe_divide(self):
        assert safe_divide(1, 0) == 0.0
        assert safe_divide(1, float("nan"), default=-1) == -1
        assert safe_divide(6, 3) == 2.0

    def test_pct_change(self):
        assert pct_change(150, 100) == 50.0
        assert pct_change(5, 0) is None

    def test_dispersion_population(self):
        stats = dispersion([44, 56])
        assert stats == {"mean": 50.0, "std_dev": 6.0, "cv": 0.12}

    def test_dispersion_empty(self):
        assert dispersion([]) == {"mean": 0.0, "std_dev": 0.0, "cv": 0.0}

    def test_first_max_tie_goes_to_first(self):
        assert first_max(pd.Series([5.0, 9.0, 9.0], index=["a", "b", "c"])) == ("b", 9.0)
        assert first_max(pd.Series([], dtype=float)) is None

    def test_sanitize(self):
        out = sanitize_for_json({"a": np.float64("nan"), "b": [np.int64(3)], "c": np.bool_(True)})
        assert out == {"a": 0.0, "b": [3], "c": True}


class TestUsageSummary:
    def test_top_series_share(self, usage_table):
        s = summarize_table(usage_table)
        assert s["top_series"] == {"name": "B", "total": 90.0, "share": 90.0}
        assert s["total_usage"] == 100.0
        assert s["series_totals"] == [{"name": "A", "total": 10.0}, {"name": "B", "total": 90.0}]

    def test_peak_and_dispersion(self, usage_table):
        s = summarize_table(usage_table)
        assert s["period_totals"] == [{"month": "Jan", "total": 44.0}, {"month": "Feb", "total": 56.0}]
        assert s["peak_period"] == {"month": "Feb", "total": 56.0}
        assert s["mean"] == 50.0
        assert s["std_dev"] == 6.0
        assert s["consistency"] == "stable"
        assert s["growth_pct"] == pytest.approx(27.2727, rel=1e-4)

    def test_fluctuating(self):
        table = NormalizedTable(
            records=[{"month": "Jan", "A": 1.0}, {"month": "Feb", "A": 100.0}],
            series=["A"],
        )
        assert summarize_table(table)["consistency"] == "fluctuating"

    def test_zero_periods(self):
        s = summarize_table(NormalizedTable(records=[], series=["A"]))
        assert s["mean"] == 0.0
        assert s["std_dev"] == 0.0
        assert s["cv"] == 0.0
        assert s["top_series"] is None
        assert s["peak_period"] is None
        assert s["growth_pct"] is None
        assert s["ranking"] == [{"name": "A", "total": 0.0}]

    def test_empty_table(self):
        s = summarize_table(NormalizedTable.empty())
        assert s["total_usage"] == 0.0
        assert s["ranking"] == []

    def test_tie_goes_to_first_series(self):
        table = NormalizedTable(records=[{"month": "Jan", "A": 5.0, "B": 5.0}], series=["A", "B"])
        assert summarize_table(table)["top_series"]["name"] == "A"

    def test_ranking_limit_and_order(self):
        table = NormalizedTable(
            records=[{"month": "Jan", "A": 1.0, "B": 3.0, "C": 3.0, "D": 2.0}],
            series=["A", "B", "C", "D"],
        )
        assert [r["name"] for r in ranking(table, limit=3)] == ["B", "C", "D"]

    def test_trend(self, usage_table):
        assert trend(usage_table) == [{"month": "Jan", "value": 44.0}, {"month": "Feb", "value": 56.0}]
        assert trend(usage_table, "A") == [{"month": "Jan", "value": 4.0}, {"month": "Feb", "value": 6.0}]
        with pytest.raises(KeyError):
            trend(usage_table, "Z")


class TestNewspapers:
    @pytest.mark.parametrize("name,language", [
        ("Navbharat Times", "Hindi"),
        ("Hindustan Times", "English"),
        ("Hindustan", "Hindi"),
        ("Dainik Jagran", "Hindi"),
        ("The Hindu", "English"),
        ("Economic Times", "English"),
        ("Le Monde", "Other"),
        ("", "Other"),
    ])
    def test_language(self, name, language):
        assert newspaper_language(name) == language

    def test_order_months(self):
        assert order_months(["May 2025", "March 2025", "Bogus", "April 2025"]) == [
            "March 2025", "April 2025", "May 2025", "Bogus",
        ]
        assert order_months([]) == []

    def test_language_split(self, ledger_months):
        assert language_split(ledger_months) == {"Hindi": 31.0, "English": 61.0, "Other": 0.0}

    def test_overview(self, ledger_months):
        o = summarize_ledgers(ledger_months)
        assert [m["period"] for m in o["months"]] == ["March 2025", "April 2025"]
        assert o["months"][0] == {
            "period": "March 2025", "label": "March",
            "total_copies": 62.0, "total_price": 279.0, "newspapers": 2,
        }
        assert o["total_price"] == 429.0
        assert o["total_copies"] == 92.0
        assert o["peak_month"] == {"period": "March 2025", "total_price": 279.0}
        assert o["top_newspaper"] == {"name": "Times of India", "total_price": 305.0, "share": 71.1}
        assert o["languages"] == [{"name": "Hindi", "value": 31.0}, {"name": "English", "value": 61.0}]
        assert o["dominant_language"] == "English"

    def test_overview_of_nothing(self):
        o = summarize_ledgers({})
        assert o["months"] == []
        assert o["peak_month"] is None
        assert o["top_newspaper"] is None
        assert o["std_dev"] == 0.0
