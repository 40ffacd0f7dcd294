# tests/test_visualizer.py
from __future__ import annotations

from datetime import date

import numpy as np
import pytest

from analytics.aggregation import alert_intensity_series, emission_summary, ghg_totals
from analytics.timeseries import generate_time_series
from analytics.view_binding import actors_feature_collection, fields_feature_collection
from ui.components.visualizer import (
    build_actors_map,
    build_emission_bar,
    build_fields_map,
    build_ghg_pie,
    build_intensity_figure,
    build_timeseries_figure,
)


def test_timeseries_figure_has_one_trace_per_index(demo_repo):
    series = generate_time_series(demo_repo.fields[0], today=date(2025, 6, 1), rng=np.random.default_rng(0))
    fig = build_timeseries_figure(series)
    assert len(fig.data) == 4


def test_timeseries_figure_rejects_empty():
    with pytest.raises(ValueError):
        build_timeseries_figure([])


def test_intensity_figure_handles_empty():
    fig = build_intensity_figure([])
    assert fig.layout.title.text == "Alert intensity"


def test_intensity_figure(demo_repo):
    fig = build_intensity_figure(alert_intensity_series(demo_repo.alerts))
    assert list(fig.data[0].y) == [100, 75, 75, 45, 45, 20]


def test_maps_build(demo_repo):
    fields_fig = build_fields_map(fields_feature_collection(demo_repo.fields, "ndvi"), {"lat": 45, "lon": -93})
    assert len(fields_fig.data) == 6
    actors_fig = build_actors_map(actors_feature_collection(demo_repo.actors, heatmap=True))
    assert len(actors_fig.data) >= 1


def test_emission_charts(demo_repo):
    summary = emission_summary(demo_repo.actors)
    bar = build_emission_bar(summary["by_source"], "kgCO2eq")
    assert len(bar.data[0].y) == 10
    pie = build_ghg_pie(ghg_totals(demo_repo.actors))
    assert list(pie.data[0].labels) == ["CO2", "N2O", "CH4"]
