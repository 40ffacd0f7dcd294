"""
analytics/classification.py
---------------------------

Severity scoring and tier classification for the showcase dashboards.

Pure helpers, no I/O:
- Severity -> fixed numeric score (low=20, medium=45, high=75, critical=100).
- Continuous metric -> named tier via ordered thresholds.
- Tier -> colour lookup tables consumed by the view-binding layer.

Tier boundaries are lower-exclusive: with thresholds (t1, t2),
`value < t1` is the first tier, `t1 <= value < t2` the second, else the last.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

__all__ = [
    "SEVERITY_ORDER",
    "SEVERITY_SCORES",
    "severity_score",
    "severity_rank",
    "severity_at_least",
    "classify",
    "TierTable",
    "METRIC_TIERS",
    "classify_metric",
    "metric_color",
    "field_fill_color",
    "NEUTRAL_FILL",
]

# --------------------------------------------------------------------------- #
# Severity
# --------------------------------------------------------------------------- #

SEVERITY_ORDER: Dict[str, int] = {"low": 0, "medium": 1, "high": 2, "critical": 3}

SEVERITY_SCORES: Dict[str, int] = {"low": 20, "medium": 45, "high": 75, "critical": 100}


def severity_score(severity: str) -> int:
    """Chart score for a severity tag. Unknown tags score as "low"."""
    return SEVERITY_SCORES.get(severity, SEVERITY_SCORES["low"])


def severity_rank(severity: str) -> int:
    return SEVERITY_ORDER.get(severity, SEVERITY_ORDER["low"])


def severity_at_least(severity: str, minimum: str) -> bool:
    return severity_rank(severity) >= severity_rank(minimum)


# --------------------------------------------------------------------------- #
# Tier Classification
# --------------------------------------------------------------------------- #

def classify(value: float, thresholds: Sequence[float], tiers: Sequence[str]) -> str:
    """
    Map a continuous value to one of `len(thresholds) + 1` tiers.

    Parameters
    ----------
    value : float
        Metric value.
    thresholds : sequence of float
        Strictly increasing tier boundaries.
    tiers : sequence of str
        Tier names, lowest first.

    Returns
    -------
    str
        The tier for `value`. A value equal to a threshold belongs to the
        tier above it.
    """
    if len(tiers) != len(thresholds) + 1:
        raise ValueError("tiers must have exactly one more entry than thresholds.")
    return tiers[bisect_right(list(thresholds), value)]


@dataclass(frozen=True)
class TierTable:
    """Thresholds, tier names and colours for one metric."""
    thresholds: Tuple[float, ...]
    tiers: Tuple[str, ...]
    colors: Dict[str, str]

    def classify(self, value: float) -> str:
        return classify(value, self.thresholds, self.tiers)

    def color(self, value: float) -> str:
        return self.colors[self.classify(value)]

    def stops(self) -> list[tuple[float, str]]:
        """(lower bound, colour) pairs, first bound is -inf."""
        bounds = (float("-inf"),) + self.thresholds
        return [(b, self.colors[t]) for b, t in zip(bounds, self.tiers)]


NEUTRAL_FILL = "rgba(255,255,255,0.08)"

METRIC_TIERS: Dict[str, TierTable] = {
    # vegetation health: low NDVI is bad
    "ndvi": TierTable(
        thresholds=(0.3, 0.6),
        tiers=("red", "amber", "green"),
        colors={
            "red": "rgba(239,68,68,0.5)",
            "amber": "rgba(245,158,11,0.45)",
            "green": "rgba(16,185,129,0.4)",
        },
    ),
    "water_stress": TierTable(
        thresholds=(0.5, 0.75),
        tiers=("blue", "amber", "red"),
        colors={
            "blue": "rgba(56,189,248,0.35)",
            "amber": "rgba(245,158,11,0.4)",
            "red": "rgba(239,68,68,0.45)",
        },
    ),
    "flood_risk": TierTable(
        thresholds=(0.35, 0.6),
        tiers=("cyan", "amber", "red"),
        colors={
            "cyan": "rgba(34,211,238,0.3)",
            "amber": "rgba(245,158,11,0.4)",
            "red": "rgba(239,68,68,0.45)",
        },
    ),
    # kgCO2eq per actor
    "emission": TierTable(
        thresholds=(300.0, 500.0, 800.0),
        tiers=("low", "moderate", "elevated", "high"),
        colors={
            "low": "#2bbe72",
            "moderate": "#f5e653",
            "elevated": "#f5a623",
            "high": "#d0021b",
        },
    ),
}

# Field attribute read for each map layer
_LAYER_ATTRS: Dict[str, str] = {
    "ndvi": "latest_ndvi",
    "water_stress": "water_stress_idx",
    "flood_risk": "flood_risk_idx",
}


def classify_metric(metric: str, value: float) -> str:
    try:
        table = METRIC_TIERS[metric]
    except KeyError:
        raise ValueError(f"No tier table for metric '{metric}'.") from None
    return table.classify(value)


def metric_color(metric: str, value: float) -> str:
    return METRIC_TIERS[metric].color(value)


def field_fill_color(field, layer: str) -> str:
    """
    Fill colour for a field on the given map layer.

    Layers without a tier table (rainfall / temperature anomaly) get the
    neutral fill.
    """
    attr = _LAYER_ATTRS.get(layer)
    if attr is None:
        return NEUTRAL_FILL
    return metric_color(layer, getattr(field, attr))
