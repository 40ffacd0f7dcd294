"""
GeoPortfolio — Climate Digital Twin
-----------------------------------
Field monitoring showcase: filter fields by region, commodity and risk,
colour them by the active layer, follow alerts and inspect a field's
30-day trend.

Runs in-process on the demo FixtureRepository (st.cache_resource); the
same computations are exposed by /api/showcase/digital-twin/*.
"""

from __future__ import annotations

import streamlit as st

from analytics.aggregation import alert_intensity_series, field_kpis, scope_stats
from analytics.classification import METRIC_TIERS, severity_score
from analytics.filters import FilterSpec, filter_alerts, filter_fields, filter_options
from analytics.fixtures import build_fixture_repository
from analytics.timeseries import default_rng, generate_time_series
from analytics.view_binding import fields_feature_collection
from core.config import TIMESERIES_SEED
from ui.components.visualizer import build_fields_map, build_intensity_figure, build_timeseries_figure

st.set_page_config(page_title="Digital Twin — GeoPortfolio", layout="wide")

LAYERS = {
    "ndvi": "Vegetation (NDVI)",
    "water_stress": "Water stress",
    "flood_risk": "Flood risk",
    "rainfall": "Rainfall",
    "temperature_anomaly": "Temperature anomaly",
}
MAP_CENTER = {"lat": 44.98, "lon": -93.25}


@st.cache_resource
def fixtures():
    return build_fixture_repository()


repo = fixtures()

st.title("Climate Digital Twin")
st.caption("Six monitored fields, Minnesota. Demo data.")

# ----------------------------------------------------------------------------
# 1. Filters
# ----------------------------------------------------------------------------
options = filter_options(repo.fields)
with st.sidebar:
    st.header("Filters")
    region = st.selectbox(
        "Region", [o["value"] for o in options["regions"]],
        format_func=lambda v: next(o["label"] for o in options["regions"] if o["value"] == v),
    )
    commodity = st.selectbox(
        "Commodity", [o["value"] for o in options["commodities"]],
        format_func=lambda v: next(o["label"] for o in options["commodities"] if o["value"] == v),
    )
    threshold = st.slider("Minimum risk score", 0, 100, 0)
    layer = st.radio("Map layer", list(LAYERS), format_func=LAYERS.get)

spec = FilterSpec(region=region, commodity=commodity, min_risk=threshold or None)
fields = filter_fields(repo.fields, spec)
alerts = filter_alerts(repo.alerts, repo.fields_index(), spec)

# ----------------------------------------------------------------------------
# 2. KPIs
# ----------------------------------------------------------------------------
kpis = field_kpis(fields)
scope = scope_stats(fields)
c1, c2, c3, c4 = st.columns(4)
c1.metric("Crop health", f"{kpis['crop_health']}%")
c2.metric("Risk index", kpis["risk_index"])
c3.metric("Water stress", f"{kpis['water_stress']:.0f}%")
c4.metric("Flood watch", kpis["flood_watch"])
st.caption(
    f"{scope['fields']} fields in {scope['regions']} regions · "
    f"{scope['stressed_fields']} water-stressed · {scope['high_risk']} high risk"
)

# ----------------------------------------------------------------------------
# 3. Map & Alerts
# ----------------------------------------------------------------------------
map_col, alert_col = st.columns([3, 2])

with map_col:
    selected = st.selectbox(
        "Inspect field", [None] + [f.id for f in fields],
        format_func=lambda fid: "—" if fid is None else repo.field_by_id(fid).name,
    )
    if fields:
        st.plotly_chart(
            build_fields_map(fields_feature_collection(fields, layer, selected), MAP_CENTER),
            use_container_width=True,
        )
    else:
        st.info("No fields match the current filters.")
    table = METRIC_TIERS.get(layer)
    if table is not None:
        st.caption("Tiers: " + " · ".join(
            f"{tier} ≥ {bound:g}" if bound != float("-inf") else tier
            for (bound, _), tier in zip(table.stops(), table.tiers)
        ))

with alert_col:
    st.subheader(f"Alerts ({len(alerts)})")
    for a in alerts:
        st.markdown(f"**{a.type}** · `{a.severity}` ({severity_score(a.severity)})")
        st.caption(a.message)
    st.plotly_chart(build_intensity_figure(alert_intensity_series(alerts)), use_container_width=True)

# ----------------------------------------------------------------------------
# 4. Field trend
# ----------------------------------------------------------------------------
if selected is not None:
    field = repo.field_by_id(selected)
    series = generate_time_series(field, rng=default_rng(TIMESERIES_SEED))
    st.plotly_chart(build_timeseries_figure(series, title=f"{field.name}: 30-day trend"),
                    use_container_width=True)
