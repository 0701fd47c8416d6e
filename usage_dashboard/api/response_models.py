"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    usage_datasets: int
    newspaper_months: int


class DatasetsResponse(BaseModel):
    usage: list[str]
    newspapers: list[str]
    default_usage: str
    default_newspaper: str


class SchoolResources(BaseModel):
    school: str
    resources: list[str]


class SchoolResourcesResponse(BaseModel):
    schools: list[SchoolResources]


class CellWarning(BaseModel):
    row: int
    column: str
    value: str


class UsageResponse(BaseModel):
    """Normalized usage table plus its summary."""
    dataset: str
    table: dict[str, Any]
    summary: dict[str, Any]
    insights: list[dict[str, str]]
    warnings: list[CellWarning] = []


class LedgerRecordModel(BaseModel):
    name: str
    totalCopies: float
    totalPrice: float
    language: Optional[str] = None


class LedgerMonthResponse(BaseModel):
    period: str
    totalCopies: float
    totalPrice: float
    newspapers: int
    records: list[LedgerRecordModel]
    header_tier: Optional[int] = None
    warnings: list[CellWarning] = []
