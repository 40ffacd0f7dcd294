"""
GeoPortfolio — Flood & Disaster
-------------------------------
Sentinel-derived flood, landslide and commodity exposure layers for
districts in Aceh, served as XYZ tiles by the Earth Engine tile service.
"""

from __future__ import annotations

import plotly.graph_objects as go
import streamlit as st

from core import gee_client
from core.errors import TransientFetchError

st.set_page_config(page_title="Flood & Disaster — GeoPortfolio", layout="wide")

st.title("Flood & Disaster Analysis")
st.caption("Sentinel-1 SAR / Sentinel-2 products via Google Earth Engine.")

with st.sidebar:
    st.header("Area & layers")
    loc_key = st.selectbox("District", list(gee_client.LOCATIONS),
                           format_func=lambda k: gee_client.LOCATIONS[k].label)
    flood = st.selectbox("Flood layer", list(gee_client.FLOOD_LAYERS),
                         format_func=lambda k: gee_client.FLOOD_LAYERS[k]["label"])
    landslide = st.selectbox("Landslide layer", [None] + list(gee_client.LANDSLIDE_LAYERS),
                             format_func=lambda k: "—" if k is None else gee_client.LANDSLIDE_LAYERS[k]["label"])
    commodity = st.selectbox("Commodity", [None] + list(gee_client.COMMODITY_LAYERS),
                             format_func=lambda k: "—" if k is None else gee_client.COMMODITY_LAYERS[k]["label"])
    intersection = None
    if commodity:
        intersection = st.selectbox("Exposure", [None] + list(gee_client.INTERSECTION_TYPES),
                                    format_func=lambda k: "—" if k is None
                                    else gee_client.INTERSECTION_TYPES[k]["label"])

loc = gee_client.LOCATIONS[loc_key]

tiles = [gee_client.flood_tile_url(flood, loc.province, loc.district)]
if landslide:
    tiles.append(gee_client.landslide_tile_url(landslide, loc.province, loc.district))
if commodity:
    tiles.append(gee_client.commodity_tile_url(commodity, loc.province, loc.district))
if intersection:
    tiles.append(gee_client.intersection_tile_url(intersection, commodity, loc.province, loc.district))

# ----------------------------------------------------------------------------
# 1. Map
# ----------------------------------------------------------------------------
fig = go.Figure(go.Scattermap(lat=[loc.center[1]], lon=[loc.center[0]], mode="markers",
                              marker={"size": 1}, hoverinfo="skip"))
fig.update_layout(
    map={
        "style": "carto-darkmatter",
        "center": {"lat": loc.center[1], "lon": loc.center[0]},
        "zoom": loc.zoom,
        "layers": [{"sourcetype": "raster", "source": [url], "below": "traces", "opacity": 0.8}
                   for url in tiles],
    },
    margin=dict(l=0, r=0, t=0, b=0),
    height=560,
)
st.plotly_chart(fig, use_container_width=True)

layer = gee_client.FLOOD_LAYERS[flood]
st.caption(f"{layer['label']}: {layer['description']}")

# ----------------------------------------------------------------------------
# 2. Area statistics
# ----------------------------------------------------------------------------
if st.button("Compute area statistics"):
    requests_to_run = [("Flood", lambda: gee_client.fetch_flood_stats(flood, loc.province, loc.district))]
    if landslide:
        requests_to_run.append(
            ("Landslide", lambda: gee_client.fetch_landslide_stats(landslide, loc.province, loc.district)))
    if commodity:
        requests_to_run.append(
            ("Commodity", lambda: gee_client.fetch_commodity_stats(commodity, loc.province, loc.district)))
    if intersection:
        requests_to_run.append(
            ("Exposure", lambda: gee_client.fetch_intersection_stats(
                intersection, commodity, loc.province, loc.district)))

    cols = st.columns(len(requests_to_run))
    for col, (label, run) in zip(cols, requests_to_run):
        with col:
            try:
                stats = run()
            except TransientFetchError as e:
                st.error(f"{label}: {e.reason}")
                continue
            st.metric(f"{label} area", f"{stats.get('area_ha', 0):,.1f} ha")
