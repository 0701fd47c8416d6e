"""Newspaper-ledger normalization."""
from usage_dashboard.data.ledger import (
    find_ledger_header,
    merge_header_rows,
    normalize_ledger_csv,
    normalize_ledger_grid,
    resolve_columns,
)
from usage_dashboard.data.schemas import HeaderTier, LedgerMonth, LedgerRecord


def _records(result):
    return [r.to_dict() for r in result.records]


class TestHeaderTiers:
    def test_price_and_days_row(self, ledger_csv):
        result = normalize_ledger_csv(ledger_csv)
        assert result.header_tier is HeaderTier.PRICE_DAYS
        assert result.header_index == 1
        assert _records(result) == [
            {"name": "Times of India", "totalCopies": 31.0, "totalPrice": 155.0},
            {"name": "Dainik Jagran", "totalCopies": 31.0, "totalPrice": 124.0},
        ]

    def test_row_after_date_marker(self):
        grid = [
            ["Date", "01-03-2025"],
            ["Name", "Copies", "Amount"],
            ["Hindustan Times", "30", "150"],
            ["Amar Ujala", "28", "112"],
        ]
        result = normalize_ledger_grid(grid)
        assert result.header_tier is HeaderTier.DATE_MARKER
        assert result.header_index == 1
        assert _records(result) == [
            {"name": "Hindustan Times", "totalCopies": 30.0, "totalPrice": 150.0},
            {"name": "Amar Ujala", "totalCopies": 28.0, "totalPrice": 112.0},
        ]

    def test_fixed_row_fallback(self):
        grid = [
            ["Ledger"],
            ["Printed on Monday"],
            ["Paper", "Copies", "Amount"],
            ["The Hindu", "30", "210"],
        ]
        result = normalize_ledger_grid(grid)
        assert result.header_tier is HeaderTier.FIXED_ROW
        assert result.header_index == 2
        assert _records(result) == [{"name": "The Hindu", "totalCopies": 30.0, "totalPrice": 210.0}]

    def test_price_days_only_searched_in_first_rows(self):
        grid = [["x"]] * 10 + [["Name", "Days", "Price"], ["The Hindu", "30", "210"]]
        assert find_ledger_header(grid) == (2, HeaderTier.FIXED_ROW)

    def test_too_short_to_guess(self):
        assert find_ledger_header([["a"], ["b"]]) is None
        assert normalize_ledger_grid([["a"], ["b"]]).is_empty


class TestColumns:
    def test_merged_header(self):
        grid = [
            ["Newspaper", "Days", "Total Price"],
            ["Name", "Supplied", "(Rs)"],
            ["Times of India", "30", "150"],
            ["Navbharat Times", "31", "93"],
        ]
        labels, data_start = merge_header_rows(grid, 0)
        assert labels == ["Newspaper Name", "Days Supplied", "Total Price (Rs)"]
        assert data_start == 2

        result = normalize_ledger_grid(grid)
        assert _records(result) == [
            {"name": "Times of India", "totalCopies": 30.0, "totalPrice": 150.0},
            {"name": "Navbharat Times", "totalCopies": 31.0, "totalPrice": 93.0},
        ]

    def test_total_days_is_not_the_price_column(self):
        grid = [["Newspaper Name", "Total Days", "Price"], ["The Hindu", "30", "210"]]
        result = normalize_ledger_grid(grid)
        assert _records(result) == [{"name": "The Hindu", "totalCopies": 30.0, "totalPrice": 210.0}]

    def test_data_row_is_not_a_continuation(self):
        grid = [["Name", "Days", "Price"], ["The Hindu", "30", "210"]]
        assert merge_header_rows(grid, 0) == (["Name", "Days", "Price"], 1)

    def test_price_from_rate_when_no_total_column(self):
        grid = [["Newspaper", "Days", "Rate (price per day)"], ["Mint", "20", "12.5"]]
        result = normalize_ledger_grid(grid)
        assert _records(result) == [{"name": "Mint", "totalCopies": 20.0, "totalPrice": 250.0}]

    def test_positional_fallback_skips_serial_column(self):
        labels = ["S. No.", "", "", ""]
        body = [["1", "The Tribune", "30", "180"]]
        cols = resolve_columns(labels, body)
        assert cols.name == 1
        assert cols.price == 3
        assert cols.copies == 2


class TestRows:
    def test_noise_rows_skipped(self):
        grid = [
            ["Newspaper Name", "Days", "Price"],
            ["ab", "1", "1"],
            ["Month: March", "", ""],
            ["Grand TOTAL", "61", "279"],
            ["", "", ""],
            ["Deccan Herald", "31", "186"],
        ]
        result = normalize_ledger_grid(grid)
        assert [r.name for r in result.records] == ["Deccan Herald"]

    def test_duplicates_summed(self):
        grid = [
            ["Newspaper Name", "Days", "Price"],
            ["The Hindu", "15", "105"],
            ["Mint", "31", "310"],
            ["The Hindu", "16", "112"],
        ]
        result = normalize_ledger_grid(grid)
        assert _records(result) == [
            {"name": "The Hindu", "totalCopies": 31.0, "totalPrice": 217.0},
            {"name": "Mint", "totalCopies": 31.0, "totalPrice": 310.0},
        ]

    def test_negative_values_clamped_and_reported(self):
        grid = [["Newspaper Name", "Days", "Price"], ["The Hindu", "-5", "x"]]
        result = normalize_ledger_grid(grid, strict=True)
        assert _records(result) == [{"name": "The Hindu", "totalCopies": 0.0, "totalPrice": 0.0}]
        assert [w.to_dict() for w in result.warnings] == [
            {"row": 1, "column": "totalCopies", "value": "-5"},
            {"row": 1, "column": "totalPrice", "value": "x"},
        ]

    def test_empty(self):
        assert normalize_ledger_csv("").records == []


class TestLedgerMonth:
    def test_totals(self, ledger_csv):
        month = normalize_ledger_csv(ledger_csv).to_month("March 2025")
        assert month.period == "March 2025"
        assert month.total_copies == 62.0
        assert month.total_price == 279.0
        assert month.to_dict()["totalPrice"] == 279.0

    def test_empty_month(self):
        month = LedgerMonth.from_records("May 2025", [])
        assert month.to_dict() == {"period": "May 2025", "totalCopies": 0.0, "totalPrice": 0.0, "records": []}

    def test_record_defaults(self):
        assert LedgerRecord("Mint").to_dict() == {"name": "Mint", "totalCopies": 0.0, "totalPrice": 0.0}
