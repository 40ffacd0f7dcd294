# tests/conftest.py
from __future__ import annotations

from datetime import date, datetime, timezone

import pytest
from fastapi.testclient import TestClient

from analytics.fixtures import (
    Actor,
    Alert,
    Field,
    FixtureRepository,
    Transaction,
    _emission,
    build_fixture_repository,
)
from backend.main import create_app
from database.db_setup import get_engine, get_session_factory, init_db

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)

SQUARE = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0), (0.0, 0.0))


def make_field(fid: str, risk: float, region: str = "north", commodity: str = "Corn",
               ndvi: float = 0.5, water: float = 0.4, flood: float = 0.2) -> Field:
    return Field(fid, f"Field {fid}", region, commodity, 10.0, SQUARE,
                 latest_ndvi=ndvi, water_stress_idx=water, flood_risk_idx=flood, risk_score=risk)


def make_alert(aid: str, field_id: str, severity: str = "medium") -> Alert:
    return Alert(aid, field_id, "Test alert", severity, "message", NOW)


@pytest.fixture
def small_repo() -> FixtureRepository:
    """Three fields, four alerts (one orphan), a tiny supply chain."""
    fields = (
        make_field("f1", 25, region="north", commodity="Corn", ndvi=0.8, water=0.2, flood=0.1),
        make_field("f2", 74, region="south", commodity="Wheat", ndvi=0.3, water=0.7, flood=0.6),
        make_field("f3", 91, region="north", commodity="Wheat", ndvi=0.2, water=0.9, flood=0.7),
    )
    alerts = (
        make_alert("a1", "f3", "critical"),
        make_alert("a2", "f2", "high"),
        make_alert("a3", "missing", "critical"),
        make_alert("a4", "f1", "low"),
    )
    emission = _emission(100.0, (10, -5, 0, 0, 0, 0, 0, 0, 0, 95), (80.0, 15.0, 5.0))
    actors = (
        Actor("P1", "FARM-1", "Farmer One", "producer", -1.0, 120.0, "Donggala", "Cocoa", emission=emission),
        Actor("P2", "FARM-2", "Farmer Two", "producer", -1.1, 120.1, "Poso", "Coffee"),
        Actor("T1", "TRAD-1", "Trader", "trader", -1.2, 120.2, "Donggala", emission=emission),
    )
    transactions = (
        Transaction("TX1", "P1", "T1", "Cocoa", 500.0, date(2025, 1, 1)),
        Transaction("TX2", "P2", "T1", "Coffee", 200.0, date(2025, 1, 2)),
        Transaction("TX3", "T1", "W404", "Cocoa", 700.0, date(2025, 1, 3)),
    )
    return FixtureRepository(fields=fields, alerts=alerts, actors=actors, transactions=transactions)


@pytest.fixture
def demo_repo() -> FixtureRepository:
    return build_fixture_repository(now=NOW)


@pytest.fixture
def engine():
    eng = get_engine("sqlite:///:memory:")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine):
    factory = get_session_factory(engine)
    with factory() as s:
        yield s


@pytest.fixture
def client(engine, demo_repo):
    """TestClient on an in-memory database, seeded with the CV content."""
    app = create_app(engine=engine, fixtures=demo_repo, seed=True, timeseries_seed=7)
    with TestClient(app) as c:
        yield c
