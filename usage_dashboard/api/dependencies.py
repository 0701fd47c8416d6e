"""
FastAPI helpers shared by the routers — upload decoding, error mapping.
"""
from __future__ import annotations

import gzip
from contextlib import contextmanager

from fastapi import HTTPException, UploadFile

from usage_dashboard.data.tokenize import decode_csv_bytes
from usage_dashboard.errors import RetrievalError


async def read_csv_upload(file: UploadFile) -> tuple[str, str]:
    """Return (dataset name, CSV text) for an uploaded .csv or .csv.gz file."""
    if not file.filename:
        raise HTTPException(400, "Missing filename")

    filename = file.filename
    is_gzipped = filename.lower().endswith(".csv.gz")
    if is_gzipped:
        filename = filename[:-3]
    if not filename.lower().endswith(".csv"):
        raise HTTPException(400, f"Only .csv files are accepted (got '{file.filename}')")

    content = await file.read()
    if is_gzipped:
        try:
            content = gzip.decompress(content)
        except OSError as exc:
            raise HTTPException(400, f"Could not decompress '{file.filename}': {exc}")
    return filename[:-4], decode_csv_bytes(content)


@contextmanager
def dataset_errors(dataset: str):
    """Map loader failures onto HTTP errors."""
    try:
        yield
    except KeyError:
        raise HTTPException(404, f"Unknown dataset: {dataset}")
    except RetrievalError as exc:
        raise HTTPException(502, str(exc))
