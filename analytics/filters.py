"""
analytics/filters.py
--------------------

Filter engine for the showcase dashboards.

Every function is a single linear pass that keeps input order, never
mutates its input and only returns records it was given. Predicates are
conjunctive; the "all" sentinel (or None) leaves a dimension unconstrained.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional

from analytics.classification import severity_at_least
from analytics.fixtures import Actor, Alert, Field, Transaction

ALL = "all"

__all__ = [
    "ALL",
    "FilterSpec",
    "filter_fields",
    "filter_alerts",
    "filter_actors",
    "transactions_for_actor",
    "filter_options",
]


@dataclass(frozen=True)
class FilterSpec:
    """
    User-selected filter criteria.

    region       : region id (fields) or district (actors), or "all"
    commodity    : commodity label, or "all"
    min_risk     : inclusive lower bound on a field's risk score
    min_severity : inclusive lower bound on alert severity
    actor_types  : allowed actor types (None = any)
    """
    region: str = ALL
    commodity: str = ALL
    min_risk: Optional[float] = None
    min_severity: Optional[str] = None
    actor_types: Optional[FrozenSet[str]] = None


def _matches(value: Optional[str], wanted: str) -> bool:
    return wanted == ALL or value == wanted


def _field_passes(field: Field, spec: FilterSpec) -> bool:
    if not _matches(field.region_id, spec.region):
        return False
    if not _matches(field.commodity, spec.commodity):
        return False
    if spec.min_risk is not None and field.risk_score < spec.min_risk:
        return False
    return True


def filter_fields(fields: Iterable[Field], spec: FilterSpec) -> List[Field]:
    """Fields satisfying region, commodity and minimum risk."""
    return [f for f in fields if _field_passes(f, spec)]


def filter_alerts(
    alerts: Iterable[Alert],
    fields: Iterable[Field] | Mapping[str, Field],
    spec: FilterSpec,
) -> List[Alert]:
    """
    Alerts whose field passes the field predicates and whose severity
    meets `min_severity`.

    Alerts referencing an unknown field are dropped.
    """
    index: Dict[str, Field] = (
        dict(fields) if isinstance(fields, Mapping) else {f.id: f for f in fields}
    )
    out: List[Alert] = []
    for alert in alerts:
        field = index.get(alert.field_id)
        if field is None:
            continue
        if not _field_passes(field, spec):
            continue
        if spec.min_severity is not None and not severity_at_least(alert.severity, spec.min_severity):
            continue
        out.append(alert)
    return out


def filter_actors(actors: Iterable[Actor], spec: FilterSpec) -> List[Actor]:
    """Actors by district (spec.region), commodity and type."""
    out: List[Actor] = []
    for actor in actors:
        if not _matches(actor.district, spec.region):
            continue
        if not _matches(actor.commodity, spec.commodity):
            continue
        if spec.actor_types is not None and actor.type not in spec.actor_types:
            continue
        out.append(actor)
    return out


def transactions_for_actor(transactions: Iterable[Transaction], actor_id: str) -> List[Transaction]:
    """Incoming and outgoing transactions of one actor."""
    return [t for t in transactions if t.from_id == actor_id or t.to_id == actor_id]


def filter_options(fields: Iterable[Field]) -> Dict[str, List[Dict[str, str]]]:
    """
    Dropdown options for the digital twin filters.

    Returns
    -------
    dict
        {"regions": [...], "commodities": [...]}, each a list of
        {"value", "label"} led by the "all" option.
    """
    fields = list(fields)
    regions = sorted({f.region_id for f in fields})
    commodities = sorted({f.commodity for f in fields})
    return {
        "regions": [{"value": ALL, "label": "All regions"}]
        + [{"value": r, "label": r[:1].upper() + r[1:]} for r in regions],
        "commodities": [{"value": ALL, "label": "All commodities"}]
        + [{"value": c, "label": c} for c in commodities],
    }
