"""
Usage endpoints — normalize an uploaded sheet or a catalogued dataset.
"""
from __future__ import annotations

from fastapi import APIRouter, File, HTTPException, Query, UploadFile

from usage_dashboard.api.dependencies import dataset_errors, read_csv_upload
from usage_dashboard.api.response_models import UsageResponse
from usage_dashboard.analytics.usage import ALL_SERIES, trend
from usage_dashboard.data.loader import load_usage_dataset
from usage_dashboard.data.usage import normalize_usage_csv
from usage_dashboard.reports import usage_report

router = APIRouter(prefix="/api/usage", tags=["usage"])


@router.post("/normalize", response_model=UsageResponse)
async def normalize_upload(
    file: UploadFile = File(...),
    strict: bool = Query(False, description="List cells that degraded to 0"),
):
    """Normalize an uploaded usage CSV and summarize it."""
    name, text = await read_csv_upload(file)
    table = normalize_usage_csv(text, strict=strict)
    return usage_report.generate_json(table, name)


@router.get("/{dataset_id}", response_model=UsageResponse)
def usage_dataset(
    dataset_id: str,
    strict: bool = Query(False, description="List cells that degraded to 0"),
):
    """Fetch a catalogued usage sheet, normalize it, and summarize it."""
    with dataset_errors(dataset_id):
        table = load_usage_dataset(dataset_id, strict=strict)
    return usage_report.generate_json(table, dataset_id)


@router.get("/{dataset_id}/trend")
def usage_trend(
    dataset_id: str,
    series: str = Query(ALL_SERIES, description="Series name, or 'All' for the sum"),
):
    """Per-period values for one series (or all series combined)."""
    with dataset_errors(dataset_id):
        table = load_usage_dataset(dataset_id)
    try:
        points = trend(table, series)
    except KeyError:
        raise HTTPException(404, f"Unknown series: {series}")
    return {"dataset": dataset_id, "series": series, "points": points}
