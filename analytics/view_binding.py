"""
analytics/view_binding.py
-------------------------

Turns filtered fixtures into plain GeoJSON and colour tables.

No Streamlit or mapping-library imports here: pages hand these dicts to
whatever renderer they use. Colours come from analytics.classification.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from analytics.classification import METRIC_TIERS, field_fill_color
from analytics.fixtures import Actor, Coordinate, Field, Transaction

ACTOR_COLORS: Dict[str, str] = {
    "producer": "#2BBE72",
    "trader": "#E28D00",
    "warehouse": "#5C0E16",
}

ACTOR_RADIUS: Dict[str, int] = {"producer": 6, "trader": 8, "warehouse": 10}

LINE_COLORS: Dict[str, str] = {
    "producer-trader": "#2BBE72",
    "trader-warehouse": "#E28D00",
}

GHG_COLORS: Tuple[str, ...] = ("#ff6384", "#36a2eb", "#ffce56")

SELECTED_LINE = "rgba(16,185,129,0.95)"
DEFAULT_LINE = "rgba(148,163,184,0.45)"
FALLBACK_LEG_COLOR = "#999"


def _collection(features: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"type": "FeatureCollection", "features": features}


def fields_feature_collection(
    fields: Iterable[Field],
    layer: str,
    selected_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Field polygons coloured for the active layer."""
    features = []
    for f in fields:
        selected = f.id == selected_id
        features.append({
            "type": "Feature",
            "geometry": {"type": "Polygon", "coordinates": [[list(p) for p in f.polygon]]},
            "properties": {
                "id": f.id,
                "name": f.name,
                "color": field_fill_color(f, layer),
                "selected": 1 if selected else 0,
                "line_color": SELECTED_LINE if selected else DEFAULT_LINE,
            },
        })
    return _collection(features)


def actors_feature_collection(actors: Iterable[Actor], heatmap: bool = False) -> Dict[str, Any]:
    """
    Actor points. With `heatmap` the colour follows the emission tier,
    otherwise the actor type.
    """
    emission_tiers = METRIC_TIERS["emission"]
    features = []
    for a in actors:
        emission = a.emission.total_co2eq if a.emission else 0.0
        color = emission_tiers.color(emission) if heatmap else ACTOR_COLORS[a.type]
        features.append({
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [a.lng, a.lat]},
            "properties": {
                "id": a.id,
                "name": a.name,
                "type": a.type,
                "color": color,
                "radius": ACTOR_RADIUS[a.type],
                "emission": emission,
            },
        })
    return _collection(features)


def transactions_feature_collection(
    transactions: Iterable[Transaction],
    actors: Iterable[Actor] | Mapping[str, Actor],
) -> Dict[str, Any]:
    """Transaction legs as LineStrings; legs with an unknown endpoint are skipped."""
    index = dict(actors) if isinstance(actors, Mapping) else {a.id: a for a in actors}
    features = []
    for t in transactions:
        src, dst = index.get(t.from_id), index.get(t.to_id)
        if src is None or dst is None:
            continue
        leg = f"{src.type}-{dst.type}"
        features.append({
            "type": "Feature",
            "geometry": {"type": "LineString", "coordinates": [[src.lng, src.lat], [dst.lng, dst.lat]]},
            "properties": {
                "id": t.id,
                "commodity": t.commodity,
                "gross_kg": t.gross_kg,
                "leg": leg,
                "color": LINE_COLORS.get(leg, FALLBACK_LEG_COLOR),
            },
        })
    return _collection(features)


def emission_color_stops() -> List[Tuple[float, str]]:
    """(kgCO2eq threshold, colour) pairs for a linear emission ramp."""
    table = METRIC_TIERS["emission"]
    return [(0.0, table.colors[table.tiers[0]])] + [
        (t, table.colors[tier]) for t, tier in zip(table.thresholds, table.tiers[1:])
    ]


def farm_polygon(lat: float, lng: float, size_km: float) -> Tuple[Coordinate, ...]:
    """Closed square ring of half-width `size_km` around a point."""
    d = size_km / 111.0  # rough km -> degree conversion
    return (
        (lng - d, lat - d),
        (lng + d, lat - d),
        (lng + d, lat + d),
        (lng - d, lat + d),
        (lng - d, lat - d),
    )


def farm_polygons_collection(actors: Iterable[Actor], size_km: float = 0.8) -> Dict[str, Any]:
    features = [
        {
            "type": "Feature",
            "geometry": {"type": "Polygon", "coordinates": [[list(p) for p in farm_polygon(a.lat, a.lng, size_km)]]},
            "properties": {"id": a.id, "name": a.name},
        }
        for a in actors
        if a.type == "producer"
    ]
    return _collection(features)
