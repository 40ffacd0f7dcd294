"""
analytics/aggregation.py
------------------------

Summary metrics over filtered fixture sets.

Design Principles
-----------------
- Pure functions, no network calls.
- Empty input is a valid state: averages, sums and counts return 0,
  never NaN and never raise.
- Outputs are JSON-serializable (plain floats / ints / dicts).
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict, Iterable, List, Sequence

import numpy as np

from analytics.classification import severity_score
from analytics.fixtures import EMISSION_SOURCES, GHG_CATEGORIES, Actor, Alert, Field, Transaction

__all__ = [
    "mean_of",
    "round_half_up",
    "count_where",
    "distinct_count",
    "field_kpis",
    "scope_stats",
    "alert_intensity_series",
    "emission_summary",
    "ghg_totals",
    "emission_unit",
    "transaction_volume",
    "CALCULATION_TYPES",
]

CALCULATION_TYPES: Dict[str, str] = {
    "AVERAGE PER FARMER": "kgCO2eq/Farmer",
    "AVERAGE PER HECTARE": "kgCO2eq/Hectare",
    "AVERAGE PER TON CROP": "kgCO2eq/Ton Crop",
    "SUM OF ALL FARMERS": "kgCO2eq",
}


# --------------------------------------------------------------------------- #
# Generic Reducers
# --------------------------------------------------------------------------- #

def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives (64.5 -> 65)."""
    return int(math.floor(value + 0.5))


def mean_of(records: Iterable[Any], attr: str) -> float:
    """Arithmetic mean of `attr` across records; 0.0 for an empty set."""
    values = [float(getattr(r, attr)) for r in records]
    if not values:
        return 0.0
    return float(np.mean(values))


def count_where(records: Iterable[Any], predicate: Callable[[Any], bool]) -> int:
    return sum(1 for r in records if predicate(r))


def distinct_count(records: Iterable[Any], attr: str) -> int:
    return len({getattr(r, attr) for r in records})


# --------------------------------------------------------------------------- #
# Digital Twin
# --------------------------------------------------------------------------- #

def field_kpis(fields: Sequence[Field]) -> Dict[str, float]:
    """
    Headline KPIs for the visible fields.

    Returns
    -------
    dict
        crop_health : round(mean NDVI * 100)
        risk_index  : round(mean risk score)
        water_stress: mean water stress index * 100
        flood_watch : fields with flood risk index > 0.5
    """
    if not fields:
        return {"crop_health": 0, "risk_index": 0, "water_stress": 0.0, "flood_watch": 0}
    return {
        "crop_health": round_half_up(mean_of(fields, "latest_ndvi") * 100),
        "risk_index": round_half_up(mean_of(fields, "risk_score")),
        "water_stress": mean_of(fields, "water_stress_idx") * 100,
        "flood_watch": count_where(fields, lambda f: f.flood_risk_idx > 0.5),
    }


def scope_stats(fields: Sequence[Field]) -> Dict[str, int]:
    return {
        "fields": len(fields),
        "regions": distinct_count(fields, "region_id"),
        "stressed_fields": count_where(fields, lambda f: f.water_stress_idx > 0.5),
        "high_risk": count_where(fields, lambda f: f.risk_score > 70),
    }


def alert_intensity_series(alerts: Iterable[Alert]) -> List[Dict[str, int]]:
    """Severity score per alert, 1-based index, in the given order."""
    return [{"i": n, "severity": severity_score(a.severity)} for n, a in enumerate(alerts, start=1)]


# --------------------------------------------------------------------------- #
# Supply Chain Emission
# --------------------------------------------------------------------------- #

def emission_summary(
    actors: Iterable[Actor],
    sources: Sequence[str] = EMISSION_SOURCES,
) -> Dict[str, Any]:
    """
    Total CO2-eq and per-source totals across actors.

    Actors without an emission breakdown contribute nothing. Every source
    in `sources` appears in the output, 0 when no actor reports it.

    Returns
    -------
    dict
        total     : float
        by_source : list of {"source", "value"} (value rounded to 2 dp)
    """
    total = 0.0
    by_source: Dict[str, float] = {s: 0.0 for s in sources}
    for actor in actors:
        if actor.emission is None:
            continue
        total += actor.emission.total_co2eq
        for contrib in actor.emission.sources:
            by_source[contrib.source] = by_source.get(contrib.source, 0.0) + contrib.value

    return {
        "total": total,
        "by_source": [{"source": s, "value": round(by_source[s], 2)} for s in sources],
    }


def ghg_totals(actors: Iterable[Actor], categories: Sequence[str] = GHG_CATEGORIES) -> Dict[str, float]:
    totals: Dict[str, float] = {c: 0.0 for c in categories}
    for actor in actors:
        if actor.emission is None:
            continue
        for contrib in actor.emission.ghg:
            totals[contrib.category] = totals.get(contrib.category, 0.0) + contrib.value
    return {c: round(v, 2) for c, v in totals.items()}


def emission_unit(calculation: str) -> str:
    """Unit label for an emission calculation type."""
    try:
        return CALCULATION_TYPES[calculation]
    except KeyError:
        raise ValueError(f"Unknown calculation type: {calculation}") from None


def transaction_volume(transactions: Iterable[Transaction]) -> Dict[str, float]:
    """Gross kilograms traded per commodity."""
    volume: Dict[str, float] = {}
    for t in transactions:
        volume[t.commodity] = volume.get(t.commodity, 0.0) + t.gross_kg
    return volume
