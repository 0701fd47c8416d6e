"""
CSV text → grid of raw string cells. No type inference happens here.
"""
from __future__ import annotations

import csv
import io
from typing import Union

from charset_normalizer import from_bytes

from usage_dashboard.data.schemas import Grid

_BOM = "\ufeff"


def decode_csv_bytes(raw: bytes) -> str:
    """Decode uploaded CSV bytes to text.

    Uses charset-normalizer's best guess, falls back to UTF-8 with
    replacement characters so a bad byte never aborts the upload.
    """
    if raw.startswith(b"\xef\xbb\xbf"):
        return raw[3:].decode("utf-8", errors="replace")

    match = from_bytes(raw).best()
    encoding = match.encoding if match is not None else "utf-8"
    try:
        text = raw.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        text = raw.decode("utf-8", errors="replace")
    return text.lstrip(_BOM)


def tokenize(text: str) -> list[list[str]]:
    """Split CSV text into rows of raw cells; blank lines are dropped."""
    if not text:
        return []
    reader = csv.reader(io.StringIO(text.lstrip(_BOM), newline=""))
    return [row for row in reader if row]


def as_grid(source: Union[str, bytes, Grid, None]) -> Grid:
    """Accept CSV text, CSV bytes, or an already tokenized grid."""
    if source is None:
        return []
    if isinstance(source, bytes):
        return tokenize(decode_csv_bytes(source))
    if isinstance(source, str):
        return tokenize(source)
    return source
