"""Shared grids and tables."""
import pytest

from usage_dashboard.data.schemas import LedgerMonth, LedgerRecord, NormalizedTable


@pytest.fixture
def row_oriented_grid():
    return [["Banner"], ["Months", "A", "B"], ["Jan", "10", "-"], ["Total", "10", "0"]]


@pytest.fixture
def transposed_grid():
    return [["Group", "Q1", "Q2"], ["Eng", "100", "200"], ["Law", "50,000", "10"]]


@pytest.fixture
def usage_csv():
    return (
        "E-Resources Usage 2025,,,\n"
        ",,,\n"
        "Months,IEEE Xplore,ScienceDirect,Manupatra\n"
        "January 2025,120,340,15\n"
        "February 2025,\"1,050\",310,-\n"
        "March 2025,90,n/a,22\n"
        "Total,\"1,260\",650,37\n"
    )


@pytest.fixture
def usage_table():
    return NormalizedTable(
        records=[
            {"month": "Jan", "A": 4.0, "B": 40.0},
            {"month": "Feb", "A": 6.0, "B": 50.0},
        ],
        series=["A", "B"],
    )


@pytest.fixture
def ledger_csv():
    return (
        "Newspaper Bill for March 2025,,,,\n"
        "S.No,Newspaper Name,Days,Rate,Total Price\n"
        "1,Times of India,31,5,155\n"
        "2,Dainik Jagran,31,4,124\n"
        ",Total,,,279\n"
    )


@pytest.fixture
def ledger_months():
    return {
        "April 2025": [LedgerRecord("Times of India", 30, 150)],
        "March 2025": LedgerMonth.from_records("March 2025", [
            LedgerRecord("Dainik Jagran", 31, 124),
            LedgerRecord("Times of India", 31, 155),
        ]),
    }
