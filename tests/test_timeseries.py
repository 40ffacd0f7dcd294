# tests/test_timeseries.py
from __future__ import annotations

from datetime import date

import numpy as np
import pandas as pd
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from analytics.timeseries import generate_time_series, series_for_field, series_frame
from tests.conftest import make_field

INDEX_KEYS = ("ndvi", "risk_score", "water_stress_idx", "flood_risk_idx")
TODAY = date(2025, 6, 1)


def test_default_window_is_31_days_oldest_first(demo_repo):
    series = generate_time_series(demo_repo.fields[0], today=TODAY, rng=np.random.default_rng(1))
    assert len(series) == 31
    assert series[0]["date"] == "2025-05-02"
    assert series[-1]["date"] == "2025-06-01"


@settings(max_examples=50)
@given(
    ndvi=st.floats(min_value=0, max_value=1),
    water=st.floats(min_value=0, max_value=1),
    flood=st.floats(min_value=0, max_value=1),
    risk=st.floats(min_value=0, max_value=100),
    window=st.integers(min_value=1, max_value=60),
    seed=st.integers(min_value=0, max_value=2**32 - 1),
)
def test_index_values_stay_in_unit_interval(ndvi, water, flood, risk, window, seed):
    field = make_field("f", risk, ndvi=ndvi, water=water, flood=flood)
    series = generate_time_series(field, window=window, today=TODAY, rng=np.random.default_rng(seed))
    assert len(series) == window
    for point in series:
        for key in INDEX_KEYS:
            assert 0.0 <= point[key] <= 1.0
        assert 22 <= point["temp_c"] <= 30
        assert 0 <= point["rainfall_mm"] <= 20


def test_seeded_generator_is_reproducible(demo_repo):
    field = demo_repo.fields[1]
    a = generate_time_series(field, today=TODAY, rng=np.random.default_rng(42))
    b = generate_time_series(field, today=TODAY, rng=np.random.default_rng(42))
    assert a == b


def test_ndvi_drifts_lower_in_the_past():
    field = make_field("f", 50, ndvi=0.9)
    series = generate_time_series(field, today=TODAY, rng=np.random.default_rng(3))
    # oldest point: 0.9 - 0.5 +/- 0.04
    assert series[0]["ndvi"] == pytest.approx(0.4, abs=0.04)
    assert series[-1]["ndvi"] == pytest.approx(0.9, abs=0.04)


def test_window_must_be_positive(demo_repo):
    with pytest.raises(ValueError):
        generate_time_series(demo_repo.fields[0], window=0)


def test_unknown_field_gives_empty_series(demo_repo):
    assert series_for_field(demo_repo, "f-999") == []


def test_series_frame(demo_repo):
    df = series_frame(series_for_field(demo_repo, "f-001", window=5, today=TODAY,
                                       rng=np.random.default_rng(0)))
    assert len(df) == 5
    assert isinstance(df.index, pd.DatetimeIndex)
    assert "ndvi" in df.columns
    assert series_frame([]).empty
