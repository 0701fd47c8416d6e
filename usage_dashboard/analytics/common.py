"""
Safe math helpers used across the summary modules.
"""
from __future__ import annotations

import math
from typing import Iterable

import numpy as np
import pandas as pd


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide safely, returning default if denominator is zero or NaN."""
    if denominator == 0 or pd.isna(denominator):
        return default
    result = numerator / denominator
    return default if pd.isna(result) else result


def pct_of_total(part: float, total: float) -> float:
    """Percentage of total."""
    return safe_divide(part, total) * 100


def pct_change(current: float, previous: float) -> float | None:
    """Percentage change from previous to current. Returns None if previous is 0."""
    if previous == 0 or pd.isna(previous):
        return None
    return (current - previous) / abs(previous) * 100


def dispersion(values: Iterable[float]) -> dict:
    """Mean, population standard deviation, and coefficient of variation.

    With no values (or a zero mean for the CV) the statistics are 0.0
    instead of NaN.
    """
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        return {"mean": 0.0, "std_dev": 0.0, "cv": 0.0}
    mean = float(arr.mean())
    std = float(arr.std(ddof=0))
    return {"mean": mean, "std_dev": std, "cv": safe_divide(std, mean)}


def first_max(totals: pd.Series) -> tuple[str, float] | None:
    """(label, value) of the largest entry; ties go to the earliest label."""
    if totals.empty:
        return None
    pos = int(np.argmax(totals.to_numpy(dtype=float)))
    return str(totals.index[pos]), float(totals.iloc[pos])


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas types to native Python for JSON serialization."""
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items() if k is not None}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, (np.integer,)):
        return int(obj)
    if isinstance(obj, (np.floating,)):
        v = float(obj)
        return 0.0 if (math.isnan(v) or math.isinf(v)) else v
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    if isinstance(obj, float):
        return 0.0 if (math.isnan(obj) or math.isinf(obj)) else obj
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj
