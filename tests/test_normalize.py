"""Cell coercion, sentinel filters, header location and tokenizing."""
import pytest

from usage_dashboard.data.locate import locate_header
from usage_dashboard.data.normalize import (
    cell_at,
    coerce_number,
    is_ledger_noise,
    parse_number,
    series_columns,
)
from usage_dashboard.data.schemas import Layout
from usage_dashboard.data.tokenize import as_grid, decode_csv_bytes, tokenize
from usage_dashboard.errors import DashboardError, HeaderNotFound


class TestCoerceNumber:
    @pytest.mark.parametrize("raw", ["", "-", "- ", "  ", None])
    def test_no_data_is_zero(self, raw):
        assert coerce_number(raw) == 0.0

    def test_thousands_separator(self):
        assert coerce_number("1,234") == 1234.0
        assert coerce_number("50,000") == 50000.0

    def test_garbage_is_zero(self):
        assert coerce_number("abc") == 0.0

    def test_leading_number_prefix(self):
        assert coerce_number("12 copies") == 12.0
        assert coerce_number(" 7.5 ") == 7.5

    def test_negative_kept(self):
        assert coerce_number("-4") == -4.0

    def test_malformed_distinguished_from_zero(self):
        assert parse_number("abc") is None
        assert parse_number("0") == 0.0

    def test_overflow_is_malformed(self):
        warnings = []
        assert coerce_number("1e999", row=2, column="A", warnings=warnings) == 0.0
        assert parse_number("-1e999") is None
        assert [w.value for w in warnings] == ["1e999"]

    def test_warning_recorded_only_for_malformed(self):
        warnings = []
        coerce_number("-", row=3, column="A", warnings=warnings)
        coerce_number("n/a", row=4, column="B", warnings=warnings)
        assert [w.to_dict() for w in warnings] == [{"row": 4, "column": "B", "value": "n/a"}]


class TestFilters:
    def test_cell_at_past_row_end(self):
        assert cell_at(["a"], 3) == ""

    def test_series_columns_skip_month_blank_and_duplicates(self):
        headers = ["Months", "A", "", "Month Total", "B", "A"]
        assert series_columns(headers, skip=(0,)) == [(1, "A"), (4, "B")]

    @pytest.mark.parametrize("name", ["", "ab", "Grand Total", "MONTH OF MARCH"])
    def test_ledger_noise(self, name):
        assert is_ledger_noise(name)

    def test_ledger_name_kept(self):
        assert not is_ledger_noise("The Hindu")


class TestLocateHeader:
    def test_month_marker_by_containment(self):
        match = locate_header([["Banner"], ["  MONTHS of 2025", "A"]])
        assert match.index == 1
        assert match.layout is Layout.ROW_ORIENTED
        assert match.label_column == 0

    def test_group_marker_must_be_exact(self):
        match = locate_header([["Grouping", "x"], ["Months", "A"]])
        assert match.layout is Layout.ROW_ORIENTED

    def test_group_marker_wins_over_earlier_month_marker(self):
        grid = [["Months", "A"], ["Jan", "1"], ["", " group ", "Q1"]]
        match = locate_header(grid)
        assert match.index == 2
        assert match.layout is Layout.TRANSPOSED
        assert match.label_column == 1

    def test_not_found(self):
        assert locate_header([["a", "b"], ["1", "2"]]) is None
        with pytest.raises(HeaderNotFound) as exc:
            locate_header([["a", "b"]], required=True)
        assert isinstance(exc.value, DashboardError)


class TestTokenize:
    def test_quoted_fields_and_blank_lines(self):
        text = 'Months,A\n\nJan,"1,050"\n'
        assert tokenize(text) == [["Months", "A"], ["Jan", "1,050"]]

    def test_comma_only_rows_are_kept(self):
        assert tokenize("a,b\n,\n") == [["a", "b"], ["", ""]]

    def test_empty(self):
        assert tokenize("") == []
        assert as_grid(None) == []

    def test_bom_stripped(self):
        raw = "\ufeffMonths,A\nJan,1\n".encode("utf-8")
        assert decode_csv_bytes(raw).startswith("Months")
        assert as_grid(raw)[0] == ["Months", "A"]

    def test_grid_passthrough(self):
        grid = [["Months", "A"]]
        assert as_grid(grid) is grid
