"""Rounding and tabular views of simulation output."""

from __future__ import annotations

import math
from dataclasses import asdict
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from .simulator import PeriodRecord


def round_money(value: float, places: int = 0) -> float:
    """Round half away from zero to ``places`` decimals.

    Python's ``round`` uses banker's rounding, which would report 0.5 as 0.
    """
    factor = 10 ** places
    rounded = math.floor(abs(value) * factor + 0.5) / factor
    rounded = math.copysign(rounded, value)
    return int(rounded) if places == 0 else rounded + 0.0  # no negative zero


def round_percent(fraction: float, places: int = 1) -> float:
    """Express a fraction as a percentage rounded to ``places`` decimals."""
    return round_money(fraction * 100.0, places)


def timeline_rows(timeline: Sequence[PeriodRecord], money_places: int = 0) -> List[Dict]:
    """Plain dict rows with the money fields rounded."""
    rows = []
    for rec in timeline:
        row = asdict(rec)
        for key, value in row.items():
            if key in ("index", "year"):
                continue
            row[key] = round_money(value, money_places)
        rows.append(row)
    return rows


def timeline_frame(timeline: Sequence[PeriodRecord], money_places: int = 0) -> pd.DataFrame:
    """Timeline as a DataFrame, one row per record, for display and CSV export."""
    columns = [
        "index", "year", "balance", "flow", "interest", "fees", "tax", "principal",
        "cumulative_flow", "cumulative_interest", "cumulative_principal",
    ]
    return pd.DataFrame(timeline_rows(timeline, money_places), columns=columns)


def timeline_series(timeline: Sequence[PeriodRecord], field: str = "balance") -> np.ndarray:
    """Unrounded values of one record field as a numpy array."""
    return np.array([getattr(rec, field) for rec in timeline], dtype=float)


__all__ = [
    "round_money",
    "round_percent",
    "timeline_rows",
    "timeline_frame",
    "timeline_series",
]
