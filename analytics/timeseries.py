"""
analytics/timeseries.py
-----------------------

Synthetic daily series for the field detail chart.

The digital twin has no historical archive, so the chart is fed by a
plausible series built around each field's current values:

    value(day) = current + drift(days_ago) + jitter,  clamped to [0, 1]

- jitter is uniform in [-0.04, +0.04]
- NDVI drifts linearly, the oldest point of a 31-day window sits 0.5 lower
- temperature (22–30 °C) and rainfall (0–20 mm) are drawn independently

The output is decorative and not reproducible unless a seeded
`numpy.random.Generator` is passed (or TIMESERIES_SEED is configured).
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from analytics.fixtures import Field, FixtureRepository

DEFAULT_WINDOW = 31
JITTER_SCALE = 0.08  # full width; jitter spans +/- half of this

# Per-day drift (index units), subtracted for each day into the past
DRIFT_PER_DAY: Dict[str, float] = {
    "ndvi": 1.0 / 60.0,
    "risk_score": 0.0,
    "water_stress_idx": 0.0,
    "flood_risk_idx": 0.0,
}

SERIES_COLUMNS = (
    "date", "ndvi", "risk_score", "water_stress_idx", "flood_risk_idx", "temp_c", "rainfall_mm",
)


def _clamp01(value: float) -> float:
    return float(min(1.0, max(0.0, value)))


def default_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(seed)


def generate_time_series(
    field: Field,
    window: int = DEFAULT_WINDOW,
    today: Optional[date] = None,
    rng: Optional[np.random.Generator] = None,
) -> List[Dict[str, object]]:
    """
    Build `window` daily points ending today, oldest first.

    Parameters
    ----------
    field : Field
        Source of the current metric values.
    window : int
        Number of daily points (default 31).
    today : date, optional
        Last day of the series (defaults to today's date).
    rng : numpy.random.Generator, optional
        Random source; a fresh unseeded generator if omitted.

    Returns
    -------
    list of dict
        Keys: date (ISO string), ndvi, risk_score, water_stress_idx,
        flood_risk_idx (all in [0, 1]), temp_c, rainfall_mm.
    """
    if window < 1:
        raise ValueError("window must be at least 1 day.")

    rng = rng if rng is not None else default_rng()
    today = today or date.today()

    current = {
        "ndvi": field.latest_ndvi,
        "risk_score": field.risk_score / 100.0,
        "water_stress_idx": field.water_stress_idx,
        "flood_risk_idx": field.flood_risk_idx,
    }

    series: List[Dict[str, object]] = []
    for days_ago in range(window - 1, -1, -1):
        point: Dict[str, object] = {"date": (today - timedelta(days=days_ago)).isoformat()}
        for metric, value in current.items():
            jitter = (rng.random() - 0.5) * JITTER_SCALE
            drift = -DRIFT_PER_DAY[metric] * days_ago
            point[metric] = _clamp01(value + drift + jitter)
        point["temp_c"] = float(22 + rng.random() * 8)
        point["rainfall_mm"] = float(rng.random() * 20)
        series.append(point)

    return series


def series_for_field(
    repo: FixtureRepository,
    field_id: str,
    window: int = DEFAULT_WINDOW,
    today: Optional[date] = None,
    rng: Optional[np.random.Generator] = None,
) -> List[Dict[str, object]]:
    """Series for a field id; empty list when the field does not exist."""
    field = repo.field_by_id(field_id)
    if field is None:
        return []
    return generate_time_series(field, window=window, today=today, rng=rng)


def series_frame(series: List[Dict[str, object]]) -> pd.DataFrame:
    """DataFrame indexed by date, ready for Plotly."""
    if not series:
        return pd.DataFrame(columns=list(SERIES_COLUMNS)).set_index("date")
    df = pd.DataFrame(series)
    df["date"] = pd.to_datetime(df["date"])
    return df.set_index("date")
