# tests/test_fixtures.py
from __future__ import annotations

import dataclasses

import pytest

from analytics.fixtures import EMISSION_SOURCES, build_fixture_repository
from tests.conftest import NOW


def test_demo_fields(demo_repo):
    assert [f.risk_score for f in demo_repo.fields] == [25, 74, 48, 91, 55, 12]
    for f in demo_repo.fields:
        assert f.polygon[0] == f.polygon[-1]
        for value in (f.latest_ndvi, f.water_stress_idx, f.flood_risk_idx):
            assert 0.0 <= value <= 1.0


def test_demo_alerts_reference_known_fields(demo_repo):
    index = demo_repo.fields_index()
    assert all(a.field_id in index for a in demo_repo.alerts)
    assert demo_repo.alerts[0].occurred_at < NOW


def test_demo_supply_chain(demo_repo):
    types = [a.type for a in demo_repo.actors]
    assert types.count("producer") == 8
    assert types.count("trader") == 2
    assert types.count("warehouse") == 1
    assert demo_repo.actor_by_id("P007").commodity == "Coffee"
    assert demo_repo.actor_by_id("T001").commodity is None
    for a in demo_repo.actors:
        assert [s.source for s in a.emission.sources] == list(EMISSION_SOURCES)
    ids = set(demo_repo.actors_index())
    assert all(t.from_id in ids and t.to_id in ids for t in demo_repo.transactions)


def test_lookups(demo_repo):
    assert demo_repo.field_by_id("f-004").name == "West Creek D"
    assert demo_repo.field_by_id("nope") is None
    assert demo_repo.actor_by_id("nope") is None


def test_records_are_frozen(demo_repo):
    with pytest.raises(dataclasses.FrozenInstanceError):
        demo_repo.fields[0].risk_score = 0


def test_repository_is_rebuilt_identically():
    assert build_fixture_repository(now=NOW) == build_fixture_repository(now=NOW)
