"""Dataset resolution and retrieval."""
import pytest
import requests

from usage_dashboard.data.loader import (
    fetch_csv_text,
    load_all_newspaper_months,
    load_newspaper_month,
    load_usage_dataset,
    resolve_locator,
)
from usage_dashboard.errors import DashboardError, RetrievalError


@pytest.fixture
def usage_file(tmp_path, usage_csv):
    path = tmp_path / "usage.csv"
    path.write_text(usage_csv, encoding="utf-8")
    return path


@pytest.fixture
def ledger_file(tmp_path, ledger_csv):
    path = tmp_path / "March 2025.csv"
    path.write_text(ledger_csv, encoding="utf-8")
    return path


class TestResolve:
    def test_catalog_id(self):
        assert resolve_locator("x", {"x": "http://example.com/x.csv"}) == "http://example.com/x.csv"

    def test_existing_path_needs_opt_in(self, usage_file):
        assert resolve_locator(str(usage_file), {}, allow_paths=True) == str(usage_file)
        with pytest.raises(KeyError):
            resolve_locator(str(usage_file), {})

    def test_unknown(self, tmp_path):
        with pytest.raises(KeyError):
            resolve_locator(str(tmp_path / "missing.csv"), {}, allow_paths=True)


class TestFetch:
    def test_local_file(self, usage_file):
        assert fetch_csv_text(str(usage_file)).startswith("E-Resources Usage 2025")

    def test_missing_file(self, tmp_path):
        with pytest.raises(RetrievalError) as exc:
            fetch_csv_text(str(tmp_path / "missing.csv"))
        assert isinstance(exc.value, DashboardError)
        assert exc.value.locator.endswith("missing.csv")

    def test_network_error(self, monkeypatch):
        def boom(self, url, **kwargs):
            raise requests.ConnectionError("connection refused")

        monkeypatch.setattr(requests.Session, "get", boom)
        with pytest.raises(RetrievalError, match="connection refused"):
            fetch_csv_text("https://example.com/sheet.csv")

    def test_http_status_error(self, monkeypatch):
        class FakeResponse:
            content = b""

            def raise_for_status(self):
                raise requests.HTTPError("404 Client Error")

        monkeypatch.setattr(requests.Session, "get", lambda self, url, **kw: FakeResponse())
        with pytest.raises(RetrievalError, match="404"):
            fetch_csv_text("https://example.com/sheet.csv")

    def test_url_body_decoded(self, monkeypatch):
        class FakeResponse:
            content = "Months,A\nJan,1\n".encode("utf-8")

            def raise_for_status(self):
                pass

        monkeypatch.setattr(requests.Session, "get", lambda self, url, **kw: FakeResponse())
        assert fetch_csv_text("https://example.com/sheet.csv") == "Months,A\nJan,1\n"


class TestLoad:
    def test_usage_from_catalog(self, usage_file):
        table = load_usage_dataset("2025", catalog={"2025": str(usage_file)})
        assert table.series == ["IEEE Xplore", "ScienceDirect", "Manupatra"]

    def test_usage_from_path_strict(self, usage_file):
        table = load_usage_dataset(str(usage_file), strict=True, catalog={}, allow_paths=True)
        assert len(table.warnings) == 1

    def test_unknown_dataset(self):
        with pytest.raises(KeyError):
            load_usage_dataset("nope", catalog={})

    def test_newspaper_month(self, ledger_file):
        month = load_newspaper_month("March 2025", catalog={"March 2025": str(ledger_file)})
        assert month.period == "March 2025"
        assert month.total_price == 279.0

    def test_all_months_skips_unavailable(self, ledger_file, tmp_path):
        catalog = {
            "March 2025": str(ledger_file),
            "April 2025": str(tmp_path / "April 2025.csv"),
        }
        months = load_all_newspaper_months(catalog)
        assert list(months) == ["March 2025"]
