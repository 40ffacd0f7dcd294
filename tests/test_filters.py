# tests/test_filters.py
from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from analytics.filters import (
    ALL,
    FilterSpec,
    filter_actors,
    filter_alerts,
    filter_fields,
    filter_options,
    transactions_for_actor,
)
from tests.conftest import make_alert, make_field

REGIONS = ["north", "south", "east"]
COMMODITIES = ["Corn", "Wheat"]
SEVERITIES = ["low", "medium", "high", "critical"]

fields_strategy = st.lists(
    st.builds(
        make_field,
        fid=st.text(alphabet="abcdef0123", min_size=1, max_size=4),
        risk=st.floats(min_value=0, max_value=100, allow_nan=False),
        region=st.sampled_from(REGIONS),
        commodity=st.sampled_from(COMMODITIES),
    ),
    max_size=12,
    unique_by=lambda f: f.id,
)

spec_strategy = st.builds(
    FilterSpec,
    region=st.sampled_from([ALL] + REGIONS),
    commodity=st.sampled_from([ALL] + COMMODITIES),
    min_risk=st.one_of(st.none(), st.floats(min_value=0, max_value=100, allow_nan=False)),
    min_severity=st.one_of(st.none(), st.sampled_from(SEVERITIES)),
)


class TestFilterFieldsProperties:
    @given(fields=fields_strategy, spec=spec_strategy)
    def test_idempotent(self, fields, spec):
        once = filter_fields(fields, spec)
        assert filter_fields(once, spec) == once

    @given(fields=fields_strategy, spec=spec_strategy)
    def test_result_is_ordered_subset(self, fields, spec):
        out = filter_fields(fields, spec)
        assert all(f in fields for f in out)
        positions = [fields.index(f) for f in out]
        assert positions == sorted(positions)

    @given(fields=fields_strategy)
    def test_unconstrained_spec_keeps_everything(self, fields):
        assert filter_fields(fields, FilterSpec()) == fields


class TestFilterAlertsProperties:
    @given(
        fields=fields_strategy,
        field_ids=st.lists(st.text(alphabet="abcdef0123xyz", min_size=1, max_size=4), max_size=10),
        severities=st.lists(st.sampled_from(SEVERITIES), min_size=10, max_size=10),
        spec=spec_strategy,
    )
    def test_idempotent_subset_and_no_orphans(self, fields, field_ids, severities, spec):
        alerts = [make_alert(f"a{i}", fid, sev) for i, (fid, sev) in enumerate(zip(field_ids, severities))]
        once = filter_alerts(alerts, fields, spec)
        assert filter_alerts(once, fields, spec) == once
        assert all(a in alerts for a in once)
        known = {f.id for f in fields}
        assert all(a.field_id in known for a in once)


def test_risk_threshold_scenario_is_inclusive():
    fields = [make_field(f"u{i}", r) for i, r in enumerate([25, 74, 48, 91, 55, 12])]
    out = filter_fields(fields, FilterSpec(min_risk=60))
    assert [f.risk_score for f in out] == [74, 91]


def test_threshold_equal_to_risk_passes():
    fields = [make_field("x", 60)]
    assert filter_fields(fields, FilterSpec(min_risk=60)) == fields


def test_region_and_commodity_are_conjunctive(small_repo):
    out = filter_fields(small_repo.fields, FilterSpec(region="north", commodity="Wheat"))
    assert [f.id for f in out] == ["f3"]


def test_filter_alerts_drops_orphans(small_repo):
    out = filter_alerts(small_repo.alerts, small_repo.fields, FilterSpec())
    assert [a.id for a in out] == ["a1", "a2", "a4"]


def test_filter_alerts_accepts_index_mapping(small_repo):
    out = filter_alerts(small_repo.alerts, small_repo.fields_index(), FilterSpec(region="south"))
    assert [a.id for a in out] == ["a2"]


def test_filter_alerts_by_threshold_and_severity(small_repo):
    by_risk = filter_alerts(small_repo.alerts, small_repo.fields, FilterSpec(min_risk=80))
    assert [a.id for a in by_risk] == ["a1"]
    by_severity = filter_alerts(small_repo.alerts, small_repo.fields, FilterSpec(min_severity="high"))
    assert [a.id for a in by_severity] == ["a1", "a2"]


def test_filter_alerts_applies_commodity(small_repo):
    out = filter_alerts(small_repo.alerts, small_repo.fields, FilterSpec(commodity="Corn"))
    assert [a.id for a in out] == ["a4"]


def test_filter_actors(small_repo):
    assert [a.id for a in filter_actors(small_repo.actors, FilterSpec(region="Donggala"))] == ["P1", "T1"]
    assert [a.id for a in filter_actors(small_repo.actors, FilterSpec(commodity="Coffee"))] == ["P2"]
    producers = filter_actors(small_repo.actors, FilterSpec(actor_types=frozenset({"producer"})))
    assert [a.id for a in producers] == ["P1", "P2"]
    assert filter_actors(small_repo.actors, FilterSpec(actor_types=frozenset())) == []


def test_transactions_for_actor(small_repo):
    assert [t.id for t in transactions_for_actor(small_repo.transactions, "T1")] == ["TX1", "TX2", "TX3"]
    assert [t.id for t in transactions_for_actor(small_repo.transactions, "P2")] == ["TX2"]
    assert transactions_for_actor(small_repo.transactions, "nobody") == []


def test_filter_options(small_repo):
    opts = filter_options(small_repo.fields)
    assert opts["regions"][0] == {"value": "all", "label": "All regions"}
    assert [o["value"] for o in opts["regions"][1:]] == ["north", "south"]
    assert opts["regions"][1]["label"] == "North"
    assert [o["value"] for o in opts["commodities"]] == ["all", "Corn", "Wheat"]


def test_filters_do_not_mutate_input(small_repo):
    fields = list(small_repo.fields)
    filter_fields(fields, FilterSpec(region="south"))
    assert fields == list(small_repo.fields)
