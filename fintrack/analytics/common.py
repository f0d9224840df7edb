"""
Number helpers shared by the report payloads.
"""
from __future__ import annotations

import math
from decimal import Decimal

import numpy as np
import pandas as pd


def pct_of_total(part: float, total: float) -> float:
    """part as a percentage of total; 0.0 when total is zero or NaN."""
    if not total or pd.isna(total):
        return 0.0
    return part / total * 100


def money(value) -> float:
    """Cents-rounded float for chart payloads (Decimal stays exact in the store)."""
    return round(float(value), 2)


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def sanitize_for_json(obj):
    """Turn Decimal and numpy scalars into plain JSON types; NaN/Inf become 0.0, NA becomes None."""
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, Decimal):
        return money(obj)
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, (float, np.floating)):
        return _finite(float(obj))
    if obj is pd.NaT or obj is pd.NA:
        return None
    return obj
