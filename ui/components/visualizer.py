"""
GeoPortfolio — Showcase Chart & Map Components
----------------------------------------------
Plotly figure builders for the showcase pages.

Design
------
- Pure functions, no Streamlit imports (pages call these).
- No network calls: inputs are fixtures, analytics outputs or decoded API payloads.
- Colours come from analytics.classification / analytics.view_binding so
  charts and maps agree with the API.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from analytics.timeseries import series_frame
from analytics.view_binding import ACTOR_COLORS, GHG_COLORS

MAP_STYLE = "carto-darkmatter"

SERIES_LABELS: Dict[str, str] = {
    "ndvi": "NDVI",
    "risk_score": "Risk score (/100)",
    "water_stress_idx": "Water stress",
    "flood_risk_idx": "Flood risk",
}


# --------------------------------------------------------------------------- #
# Digital Twin
# --------------------------------------------------------------------------- #
def build_timeseries_figure(series: List[Dict[str, Any]], title: str = "30-day field trend") -> go.Figure:
    """
    Line chart of the index-type metrics of a synthetic field series.

    Raises
    ------
    ValueError
        If the series is empty (unknown field).
    """
    if not series:
        raise ValueError("Series is empty; nothing to plot.")

    df = series_frame(series)[list(SERIES_LABELS)].rename(columns=SERIES_LABELS)
    fig = px.line(df, x=df.index, y=list(df.columns), title=title)
    fig.update_layout(legend_title_text="Metric", xaxis_title="Date", yaxis_title="Index (0–1)")
    fig.update_yaxes(range=[0, 1])
    return fig


def build_intensity_figure(series: Sequence[Mapping[str, int]], title: str = "Alert intensity") -> go.Figure:
    """Bar chart of alert severity scores (empty series gives an empty chart)."""
    df = pd.DataFrame(list(series), columns=["i", "severity"])
    fig = px.bar(df, x="i", y="severity", title=title, range_y=[0, 100])
    fig.update_layout(xaxis_title="Alert #", yaxis_title="Severity score")
    return fig


def build_fields_map(collection: Dict[str, Any], center: Mapping[str, float], zoom: float = 10) -> go.Figure:
    """
    Choropleth of field polygons, one colour per feature.

    `collection` is the output of view_binding.fields_feature_collection.
    """
    features = collection.get("features", [])
    df = pd.DataFrame(
        [{"id": f["properties"]["id"], "name": f["properties"]["name"], "color": f["properties"]["color"]}
         for f in features],
        columns=["id", "name", "color"],
    )
    fig = px.choropleth_map(
        df,
        geojson=collection,
        locations="id",
        featureidkey="properties.id",
        color="id",
        color_discrete_map=dict(zip(df["id"], df["color"])),
        hover_name="name",
        center=dict(center),
        zoom=zoom,
        map_style=MAP_STYLE,
    )
    fig.update_layout(showlegend=False, margin=dict(l=0, r=0, t=0, b=0))
    return fig


# --------------------------------------------------------------------------- #
# Supply Chain
# --------------------------------------------------------------------------- #
def build_actors_map(collection: Dict[str, Any], zoom: float = 7.5) -> go.Figure:
    """Scatter map of actor points (output of view_binding.actors_feature_collection)."""
    rows = [
        {
            "lng": f["geometry"]["coordinates"][0],
            "lat": f["geometry"]["coordinates"][1],
            "name": f["properties"]["name"],
            "type": f["properties"]["type"],
            "color": f["properties"]["color"],
            "radius": f["properties"]["radius"],
            "emission": f["properties"]["emission"],
        }
        for f in collection.get("features", [])
    ]
    df = pd.DataFrame(rows, columns=["lng", "lat", "name", "type", "color", "radius", "emission"])
    fig = px.scatter_map(
        df,
        lat="lat",
        lon="lng",
        color="color",
        color_discrete_map="identity",
        size="radius",
        hover_name="name",
        hover_data={"type": True, "emission": ":.2f", "color": False, "radius": False},
        zoom=zoom,
        map_style=MAP_STYLE,
    )
    fig.update_layout(showlegend=False, margin=dict(l=0, r=0, t=0, b=0))
    return fig


def build_emission_bar(by_source: Sequence[Mapping[str, Any]], unit: str) -> go.Figure:
    """Horizontal bar chart of per-source emissions (signed; sinks plot left)."""
    df = pd.DataFrame(list(by_source), columns=["source", "value"])
    fig = px.bar(df, x="value", y="source", orientation="h", title="Emission by source")
    fig.update_layout(xaxis_title=unit, yaxis_title="")
    return fig


def build_ghg_pie(ghg: Mapping[str, float]) -> go.Figure:
    df = pd.DataFrame({"category": list(ghg), "value": list(ghg.values())})
    fig = px.pie(
        df,
        names="category",
        values="value",
        title="GHG composition",
        color="category",
        color_discrete_sequence=list(GHG_COLORS),
    )
    return fig


def actor_legend() -> Dict[str, str]:
    """Actor type -> colour, for the page legend."""
    return dict(ACTOR_COLORS)
