"""
Showcase Router
===============

Read-only analytics over the in-memory demo fixtures.

Endpoints (prefix /api/showcase):
---------------------------------
Digital twin
- GET /digital-twin/options                  → region / commodity dropdowns
- GET /digital-twin/fields                   → filtered fields
- GET /digital-twin/alerts                   → filtered alerts (orphans dropped)
- GET /digital-twin/kpis                     → headline KPIs + scope stats
- GET /digital-twin/analytics                → alert intensity series
- GET /digital-twin/map                      → GeoJSON for the active layer
- GET /digital-twin/fields/{id}/timeseries   → synthetic daily series ([] if unknown)

Supply chain
- GET /supply-chain/actors                   → filtered actors
- GET /supply-chain/actors/{id}/transactions → incoming + outgoing legs
- GET /supply-chain/emissions                → emission summary for a calculation type
- GET /supply-chain/map                      → actor points, transaction lines, farm polygons

Flood & disaster
- GET /flood/layers, /flood/locations        → static catalogues

Design:
-------
• Every query parameter maps onto an analytics.filters.FilterSpec.
• Handlers only wire parameters to pure analytics functions.
• Missing references are filtered out, never reported as 404.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

import numpy as np
from fastapi import APIRouter, Depends, HTTPException, Query

from analytics.aggregation import (
    CALCULATION_TYPES,
    alert_intensity_series,
    emission_summary,
    emission_unit,
    field_kpis,
    ghg_totals,
    scope_stats,
    transaction_volume,
)
from analytics.filters import (
    ALL,
    FilterSpec,
    filter_actors,
    filter_alerts,
    filter_fields,
    filter_options,
    transactions_for_actor,
)
from analytics.fixtures import Actor, Alert, Field, FixtureRepository, Transaction
from analytics.timeseries import DEFAULT_WINDOW, series_for_field
from analytics.view_binding import (
    actors_feature_collection,
    emission_color_stops,
    farm_polygons_collection,
    fields_feature_collection,
    transactions_feature_collection,
)
from backend.dependencies import get_fixtures, get_rng
from core import gee_client

router = APIRouter(prefix="/api/showcase", tags=["showcase"])

SEVERITY_PATTERN = "^(low|medium|high|critical)$"
ACTOR_TYPES = ("producer", "trader", "warehouse")
MAP_LAYERS = ("ndvi", "water_stress", "flood_risk", "rainfall", "temperature_anomaly")


# --------------------------------------------------------------------------- #
# Serialization helpers
# --------------------------------------------------------------------------- #

def _field_dict(f: Field) -> Dict[str, Any]:
    d = asdict(f)
    d["polygon"] = [list(p) for p in f.polygon]
    return d


def _alert_dict(a: Alert) -> Dict[str, Any]:
    d = asdict(a)
    d["occurred_at"] = a.occurred_at.isoformat()
    return d


def _actor_dict(a: Actor) -> Dict[str, Any]:
    d = asdict(a)
    d["details"] = dict(a.details)
    return d


def _transaction_dict(t: Transaction) -> Dict[str, Any]:
    d = asdict(t)
    d["date"] = t.date.isoformat()
    return d


# --------------------------------------------------------------------------- #
# Digital Twin
# --------------------------------------------------------------------------- #

@router.get("/digital-twin/options")
def digital_twin_options(repo: FixtureRepository = Depends(get_fixtures)):
    return filter_options(repo.fields)


@router.get("/digital-twin/fields")
def digital_twin_fields(
    region: str = Query(ALL),
    commodity: str = Query(ALL),
    min_risk: Optional[float] = Query(None, ge=0, le=100),
    repo: FixtureRepository = Depends(get_fixtures),
):
    spec = FilterSpec(region=region, commodity=commodity, min_risk=min_risk)
    return [_field_dict(f) for f in filter_fields(repo.fields, spec)]


@router.get("/digital-twin/alerts")
def digital_twin_alerts(
    region: str = Query(ALL),
    commodity: str = Query(ALL),
    threshold: Optional[float] = Query(None, ge=0, le=100, description="Minimum field risk score"),
    min_severity: Optional[str] = Query(None, pattern=SEVERITY_PATTERN),
    repo: FixtureRepository = Depends(get_fixtures),
):
    spec = FilterSpec(region=region, commodity=commodity, min_risk=threshold, min_severity=min_severity)
    return [_alert_dict(a) for a in filter_alerts(repo.alerts, repo.fields_index(), spec)]


@router.get("/digital-twin/kpis")
def digital_twin_kpis(
    region: str = Query(ALL),
    commodity: str = Query(ALL),
    min_risk: Optional[float] = Query(None, ge=0, le=100),
    repo: FixtureRepository = Depends(get_fixtures),
):
    fields = filter_fields(repo.fields, FilterSpec(region=region, commodity=commodity, min_risk=min_risk))
    return {"kpis": field_kpis(fields), "scope": scope_stats(fields)}


@router.get("/digital-twin/analytics")
def digital_twin_analytics(
    region: str = Query(ALL),
    commodity: str = Query(ALL),
    threshold: Optional[float] = Query(None, ge=0, le=100),
    repo: FixtureRepository = Depends(get_fixtures),
):
    spec = FilterSpec(region=region, commodity=commodity, min_risk=threshold)
    return alert_intensity_series(filter_alerts(repo.alerts, repo.fields_index(), spec))


@router.get("/digital-twin/map")
def digital_twin_map(
    layer: str = Query("ndvi"),
    region: str = Query(ALL),
    commodity: str = Query(ALL),
    selected_id: Optional[str] = Query(None),
    repo: FixtureRepository = Depends(get_fixtures),
):
    if layer not in MAP_LAYERS:
        raise HTTPException(status_code=400, detail=f"Unknown layer '{layer}'.")
    fields = filter_fields(repo.fields, FilterSpec(region=region, commodity=commodity))
    return fields_feature_collection(fields, layer, selected_id)


@router.get("/digital-twin/fields/{field_id}/timeseries")
def digital_twin_timeseries(
    field_id: str,
    window: int = Query(DEFAULT_WINDOW, ge=1, le=366),
    repo: FixtureRepository = Depends(get_fixtures),
    rng: np.random.Generator = Depends(get_rng),
):
    return series_for_field(repo, field_id, window=window, rng=rng)


# --------------------------------------------------------------------------- #
# Supply Chain
# --------------------------------------------------------------------------- #

def _actor_spec(types: Optional[List[str]], district: str, commodity: str) -> FilterSpec:
    if types:
        unknown = sorted(set(types) - set(ACTOR_TYPES))
        if unknown:
            raise HTTPException(status_code=400, detail=f"Unknown actor type(s): {', '.join(unknown)}")
    return FilterSpec(
        region=district,
        commodity=commodity,
        actor_types=frozenset(types) if types else None,
    )


@router.get("/supply-chain/actors")
def supply_chain_actors(
    types: Optional[List[str]] = Query(None),
    district: str = Query(ALL),
    commodity: str = Query(ALL),
    repo: FixtureRepository = Depends(get_fixtures),
):
    return [_actor_dict(a) for a in filter_actors(repo.actors, _actor_spec(types, district, commodity))]


@router.get("/supply-chain/actors/{actor_id}/transactions")
def supply_chain_transactions(actor_id: str, repo: FixtureRepository = Depends(get_fixtures)):
    return [_transaction_dict(t) for t in transactions_for_actor(repo.transactions, actor_id)]


@router.get("/supply-chain/emissions")
def supply_chain_emissions(
    calculation: str = Query("SUM OF ALL FARMERS"),
    types: Optional[List[str]] = Query(None),
    district: str = Query(ALL),
    commodity: str = Query(ALL),
    repo: FixtureRepository = Depends(get_fixtures),
):
    try:
        unit = emission_unit(calculation)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    actors = filter_actors(repo.actors, _actor_spec(types, district, commodity))
    summary = emission_summary(actors)
    return {
        "calculation": calculation,
        "calculation_types": list(CALCULATION_TYPES),
        "unit": unit,
        "total": round(summary["total"], 2),
        "by_source": summary["by_source"],
        "ghg": ghg_totals(actors),
        "volume_kg": transaction_volume(repo.transactions),
        "color_stops": [list(s) for s in emission_color_stops()],
    }


@router.get("/supply-chain/map")
def supply_chain_map(
    types: Optional[List[str]] = Query(None),
    district: str = Query(ALL),
    commodity: str = Query(ALL),
    heatmap: bool = Query(False),
    repo: FixtureRepository = Depends(get_fixtures),
):
    actors = filter_actors(repo.actors, _actor_spec(types, district, commodity))
    visible = {a.id for a in actors}
    legs = [t for t in repo.transactions if t.from_id in visible and t.to_id in visible]
    return {
        "actors": actors_feature_collection(actors, heatmap=heatmap),
        "transactions": transactions_feature_collection(legs, actors),
        "farms": farm_polygons_collection(actors),
    }


# --------------------------------------------------------------------------- #
# Flood & Disaster
# --------------------------------------------------------------------------- #

@router.get("/flood/layers")
def flood_layers():
    return gee_client.catalogue()


@router.get("/flood/locations")
def flood_locations():
    return gee_client.locations()
