"""
Newspaper endpoints — monthly ledgers and the cross-month overview.
"""
from __future__ import annotations

from fastapi import APIRouter, File, Form, Query, UploadFile

from usage_dashboard.api.dependencies import dataset_errors, read_csv_upload
from usage_dashboard.api.response_models import LedgerMonthResponse
from usage_dashboard.analytics.newspapers import summarize_ledgers
from usage_dashboard.data.ledger import normalize_ledger_csv
from usage_dashboard.data.loader import load_all_newspaper_months, load_newspaper_month
from usage_dashboard.reports.newspaper_report import month_json

router = APIRouter(prefix="/api/newspapers", tags=["newspapers"])


@router.post("/normalize", response_model=LedgerMonthResponse)
async def normalize_upload(
    file: UploadFile = File(...),
    period: str = Form(""),
    strict: bool = Query(False, description="List cells that degraded to 0"),
):
    """Normalize an uploaded newspaper ledger for one month."""
    name, text = await read_csv_upload(file)
    result = normalize_ledger_csv(text, strict=strict)
    data = month_json(result.to_month(period or name))
    data["header_tier"] = int(result.header_tier) if result.header_tier is not None else None
    data["warnings"] = [w.to_dict() for w in result.warnings]
    return data


@router.get("/overview")
def overview():
    """Totals, trend, and language split across every available month."""
    return summarize_ledgers(load_all_newspaper_months())


@router.get("/{period}", response_model=LedgerMonthResponse)
def newspaper_month(period: str):
    """One month's ledger with totals."""
    with dataset_errors(period):
        month = load_newspaper_month(period)
    return month_json(month)
