"""
Dataset retrieval: resolve a dataset id to its CSV source, fetch it, and hand
the text to the normalizers. Failures surface as RetrievalError; nothing here
retries.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional

import requests

from usage_dashboard.config import FETCH_TIMEOUT, NEWSPAPER_DATASETS, USAGE_DATASETS, USER_AGENT
from usage_dashboard.data.ledger import normalize_ledger_csv
from usage_dashboard.data.schemas import LedgerMonth, NormalizedTable
from usage_dashboard.data.tokenize import decode_csv_bytes
from usage_dashboard.data.usage import normalize_usage_csv
from usage_dashboard.errors import RetrievalError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Fetching
# ---------------------------------------------------------------------------

def _is_url(locator: str) -> bool:
    return locator.lower().startswith(("http://", "https://"))


def fetch_csv_text(locator: str, timeout: float = FETCH_TIMEOUT) -> str:
    """Fetch raw CSV text from a URL or a local file path."""
    if _is_url(locator):
        with requests.Session() as session:
            session.headers.update({"User-Agent": USER_AGENT})
            try:
                resp = session.get(locator, timeout=timeout)
                resp.raise_for_status()
            except requests.RequestException as exc:
                raise RetrievalError(locator, str(exc)) from exc
        return decode_csv_bytes(resp.content)

    try:
        raw = Path(locator).read_bytes()
    except OSError as exc:
        raise RetrievalError(locator, str(exc)) from exc
    return decode_csv_bytes(raw)


def resolve_locator(dataset: str, catalog: Mapping[str, str], allow_paths: bool = False) -> str:
    """Catalog id → locator.

    With ``allow_paths`` an existing local file is also accepted as-is. Only
    the CLI sets it; HTTP callers are limited to the catalog.
    """
    if dataset in catalog:
        return catalog[dataset]
    if allow_paths and Path(dataset).is_file():
        return dataset
    raise KeyError(dataset)


# ---------------------------------------------------------------------------
# Usage datasets
# ---------------------------------------------------------------------------

def load_usage_dataset(
    dataset: str,
    strict: bool = False,
    catalog: Optional[Mapping[str, str]] = None,
    allow_paths: bool = False,
) -> NormalizedTable:
    locator = resolve_locator(dataset, USAGE_DATASETS if catalog is None else catalog, allow_paths)
    logger.info("Loading usage dataset %r from %s", dataset, locator)
    return normalize_usage_csv(fetch_csv_text(locator), strict=strict)


# ---------------------------------------------------------------------------
# Newspaper ledgers
# ---------------------------------------------------------------------------

def load_newspaper_month(
    period: str,
    strict: bool = False,
    catalog: Optional[Mapping[str, str]] = None,
    allow_paths: bool = False,
) -> LedgerMonth:
    locator = resolve_locator(period, NEWSPAPER_DATASETS if catalog is None else catalog, allow_paths)
    logger.info("Loading newspaper ledger %r from %s", period, locator)
    result = normalize_ledger_csv(fetch_csv_text(locator), strict=strict)
    return result.to_month(period)


def load_all_newspaper_months(catalog: Optional[Mapping[str, str]] = None) -> dict[str, LedgerMonth]:
    """Every catalogued month that could be fetched, keyed by period.

    A month whose sheet cannot be retrieved is skipped so the overview still
    renders with the months that are available.
    """
    catalog = NEWSPAPER_DATASETS if catalog is None else catalog
    months: dict[str, LedgerMonth] = {}
    for period in catalog:
        try:
            months[period] = load_newspaper_month(period, catalog=catalog)
        except RetrievalError as exc:
            logger.warning("Skipping %s: %s", period, exc)
    return months
