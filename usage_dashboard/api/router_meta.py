"""
Meta endpoints: health, dataset catalogs, school resource mapping.
"""
from __future__ import annotations

from fastapi import APIRouter

from usage_dashboard.config import (
    DEFAULT_NEWSPAPER_MONTH,
    DEFAULT_USAGE_DATASET,
    NEWSPAPER_DATASETS,
    SCHOOL_RESOURCES,
    USAGE_DATASETS,
)
from usage_dashboard.api.response_models import (
    DatasetsResponse, HealthResponse, SchoolResourcesResponse,
)

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(
        status="ok",
        usage_datasets=len(USAGE_DATASETS),
        newspaper_months=len(NEWSPAPER_DATASETS),
    )


@router.get("/datasets", response_model=DatasetsResponse)
def list_datasets():
    return DatasetsResponse(
        usage=list(USAGE_DATASETS),
        newspapers=list(NEWSPAPER_DATASETS),
        default_usage=DEFAULT_USAGE_DATASET,
        default_newspaper=DEFAULT_NEWSPAPER_MONTH,
    )


@router.get("/schools/resources", response_model=SchoolResourcesResponse)
def school_resources():
    """Static school → resource mapping (not derived from any sheet)."""
    return SchoolResourcesResponse(schools=SCHOOL_RESOURCES)
