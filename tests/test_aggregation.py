# tests/test_aggregation.py
from __future__ import annotations

import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from analytics.aggregation import (
    alert_intensity_series,
    count_where,
    distinct_count,
    emission_summary,
    emission_unit,
    field_kpis,
    ghg_totals,
    mean_of,
    scope_stats,
    transaction_volume,
)
from analytics.fixtures import EMISSION_SOURCES
from tests.conftest import make_alert


def test_empty_inputs_give_zero_not_nan():
    assert mean_of([], "risk_score") == 0.0
    assert count_where([], lambda r: True) == 0
    assert distinct_count([], "region_id") == 0
    assert field_kpis([]) == {"crop_health": 0, "risk_index": 0, "water_stress": 0.0, "flood_watch": 0}
    assert scope_stats([]) == {"fields": 0, "regions": 0, "stressed_fields": 0, "high_risk": 0}
    assert alert_intensity_series([]) == []
    summary = emission_summary([])
    assert summary["total"] == 0
    assert [row["value"] for row in summary["by_source"]] == [0] * len(EMISSION_SOURCES)


@given(st.lists(st.floats(min_value=-1e6, max_value=1e6, allow_nan=False), max_size=20))
def test_mean_is_finite(values):
    records = [type("R", (), {"v": v})() for v in values]
    assert math.isfinite(mean_of(records, "v"))


def test_field_kpis(small_repo):
    kpis = field_kpis(small_repo.fields)
    # ndvi (0.8, 0.3, 0.2) -> 43.33 ; risk (25, 74, 91) -> 63.33
    assert kpis["crop_health"] == 43
    assert kpis["risk_index"] == 63
    assert kpis["water_stress"] == pytest.approx(60.0)
    assert kpis["flood_watch"] == 2


def test_scope_stats(small_repo):
    assert scope_stats(small_repo.fields) == {
        "fields": 3, "regions": 2, "stressed_fields": 2, "high_risk": 2,
    }


def test_alert_intensity_series_uses_severity_scores():
    alerts = [make_alert("a", "f", "critical"), make_alert("b", "f", "low"), make_alert("c", "f", "bogus")]
    assert alert_intensity_series(alerts) == [
        {"i": 1, "severity": 100},
        {"i": 2, "severity": 20},
        {"i": 3, "severity": 20},
    ]


def test_emission_summary_skips_actors_without_breakdown(small_repo):
    summary = emission_summary(small_repo.actors)
    assert summary["total"] == pytest.approx(200.0)
    by_source = {row["source"]: row["value"] for row in summary["by_source"]}
    assert by_source["Seed production"] == 20
    assert by_source["Residue management"] == -10
    assert by_source["Off-farm transport"] == 190
    assert by_source["Waste water"] == 0


def test_emission_summary_on_demo_data(demo_repo):
    summary = emission_summary(demo_repo.actors)
    expected = sum(a.emission.total_co2eq for a in demo_repo.actors)
    assert summary["total"] == pytest.approx(expected)
    assert len(summary["by_source"]) == 10


def test_ghg_totals(small_repo):
    assert ghg_totals(small_repo.actors) == {"CO2": 160.0, "N2O": 30.0, "CH4": 10.0}


def test_emission_unit():
    assert emission_unit("AVERAGE PER HECTARE") == "kgCO2eq/Hectare"
    assert emission_unit("SUM OF ALL FARMERS") == "kgCO2eq"
    with pytest.raises(ValueError):
        emission_unit("PER GOAT")


def test_transaction_volume(small_repo):
    assert transaction_volume(small_repo.transactions) == {"Cocoa": 1200.0, "Coffee": 200.0}
