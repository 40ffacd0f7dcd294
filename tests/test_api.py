# tests/test_api.py
from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from backend.main import create_app
from database import queries


# --------------------------------------------------------------------------- #
# Service endpoints
# --------------------------------------------------------------------------- #

def test_root_and_health(client):
    root = client.get("/").json()
    assert root["status"] == "ok"
    assert root["project"] == "GeoPortfolio"

    health = client.get("/health").json()
    assert health["status"] == "ok"
    assert health["database_connected"] is True
    assert "uptime_sec" in health


# --------------------------------------------------------------------------- #
# Portfolio
# --------------------------------------------------------------------------- #

def test_lists_are_seeded_and_ordered(client):
    experiences = client.get("/api/experiences").json()
    assert [e["company"] for e in experiences][:2] == ["Koltiva AG", "World Resources Institute (WRI)"]
    assert [e["order"] for e in experiences] == [1, 2, 3, 4, 5, 6]

    educations = client.get("/api/educations").json()
    assert [e["degree"] for e in educations] == [
        "Master of Engineering, Geomatics Engineering",
        "Bachelor Degree, Soil Science",
    ]

    skills = client.get("/api/skills").json()
    assert len(skills) == 10
    assert skills[0] == {"id": 1, "name": "ArcGIS Pro", "category": "GIS Software",
                         "proficiency": None, "icon": None}

    assert client.get("/api/testimonies").json() == []


def test_projects_use_camel_case(client):
    projects = client.get("/api/projects").json()
    assert len(projects) == 3
    first = projects[0]
    assert first["techStack"] == ["Remote Sensing", "GIS", "Python"]
    assert "imageUrl" in first and "tech_stack" not in first


def test_testimonies_serialize_avatar_url(client, engine):
    from database.db_setup import get_session_factory

    with get_session_factory(engine)() as s:
        queries.create_testimony(s, name="Rina", content="Great work", avatar_url="https://x/a.png")
    body = client.get("/api/testimonies").json()
    assert body[0]["avatarUrl"] == "https://x/a.png"


def test_seed_is_not_repeated(engine, demo_repo):
    app = create_app(engine=engine, fixtures=demo_repo, seed=True)
    with TestClient(app) as c:
        assert len(c.get("/api/experiences").json()) == 6
    with TestClient(app) as c:
        assert len(c.get("/api/experiences").json()) == 6


def test_database_failure_is_500(client):
    with patch.object(queries, "list_skills", side_effect=OperationalError("SELECT", {}, Exception("down"))):
        res = client.get("/api/skills")
    assert res.status_code == 500
    assert res.json() == {"message": "Internal server error"}


# --------------------------------------------------------------------------- #
# Contact
# --------------------------------------------------------------------------- #

VALID = {"name": "Ada", "email": "ada@example.com", "message": "Hello there"}


def test_contact_success(client):
    with patch("backend.routes.portfolio.mirror_contact_message") as mirror:
        res = client.post("/api/contact", json=VALID)
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "Message received"}
    mirror.assert_called_once()
    assert mirror.call_args.args[0]["email"] == "ada@example.com"


def test_contact_invalid_email(client):
    res = client.post("/api/contact", json={**VALID, "email": "not-an-email"})
    assert res.status_code == 400
    assert res.json() == {"message": "Invalid input", "field": "email"}


@pytest.mark.parametrize("missing", ["name", "message"])
def test_contact_empty_fields(client, missing):
    res = client.post("/api/contact", json={**VALID, missing: ""})
    assert res.status_code == 400
    assert res.json()["field"] == missing


def test_contact_reports_first_failing_field_only(client):
    res = client.post("/api/contact", json={"name": "", "email": "nope", "message": ""})
    assert res.status_code == 400
    assert res.json() == {"message": "Invalid input", "field": "name"}


def test_contact_mirror_is_deferred_to_background(session):
    from fastapi import BackgroundTasks

    from backend.routes.portfolio import submit_contact
    from backend.schemas import ContactRequest

    tasks = BackgroundTasks()
    with patch("backend.routes.portfolio.mirror_contact_message") as mirror:
        res = submit_contact(ContactRequest(**VALID), tasks, session)
        mirror.assert_not_called()
        assert res == {"success": True, "message": "Message received"}
        assert len(tasks.tasks) == 1
        assert tasks.tasks[0].func is mirror
        assert tasks.tasks[0].args[0]["email"] == "ada@example.com"


def test_contact_truncated_json_reports_body(client):
    res = client.post(
        "/api/contact",
        content=b'{"name": "a", ',
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json() == {"message": "Invalid input", "field": "body"}


def test_contact_mirror_failure_does_not_fail_request(client):
    with patch("supabase_client.helpers.supabase_configured", return_value=True), \
            patch("supabase_client.helpers.get_supabase_client", side_effect=RuntimeError("boom")):
        res = client.post("/api/contact", json=VALID)
    assert res.status_code == 200


# --------------------------------------------------------------------------- #
# Showcase
# --------------------------------------------------------------------------- #

def test_digital_twin_options(client):
    body = client.get("/api/showcase/digital-twin/options").json()
    assert [o["value"] for o in body["regions"]] == ["all", "dakota", "hennepin", "scott"]
    assert [o["value"] for o in body["commodities"]] == ["all", "Corn", "Soybeans", "Wheat"]


def test_digital_twin_fields_threshold(client):
    body = client.get("/api/showcase/digital-twin/fields", params={"min_risk": 60}).json()
    assert sorted(f["risk_score"] for f in body) == [74, 91]


def test_digital_twin_alerts(client):
    body = client.get("/api/showcase/digital-twin/alerts", params={"threshold": 60}).json()
    assert [a["id"] for a in body] == ["a-01", "a-02", "a-03"]
    body = client.get("/api/showcase/digital-twin/alerts", params={"min_severity": "critical"}).json()
    assert [a["id"] for a in body] == ["a-01"]
    res = client.get("/api/showcase/digital-twin/alerts", params={"min_severity": "extreme"})
    assert res.status_code == 400
    assert res.json()["field"] == "min_severity"


def test_digital_twin_kpis(client):
    body = client.get("/api/showcase/digital-twin/kpis", params={"region": "dakota"}).json()
    assert body["scope"] == {"fields": 2, "regions": 1, "stressed_fields": 2, "high_risk": 1}
    assert body["kpis"]["risk_index"] == 65  # (74 + 55) / 2 = 64.5

    empty = client.get("/api/showcase/digital-twin/kpis", params={"region": "nowhere"}).json()
    assert empty["kpis"] == {"crop_health": 0, "risk_index": 0, "water_stress": 0.0, "flood_watch": 0}


def test_digital_twin_analytics(client):
    body = client.get("/api/showcase/digital-twin/analytics", params={"threshold": 60}).json()
    assert body == [{"i": 1, "severity": 100}, {"i": 2, "severity": 75}, {"i": 3, "severity": 75}]


def test_digital_twin_map(client):
    body = client.get("/api/showcase/digital-twin/map", params={"layer": "water_stress"}).json()
    assert len(body["features"]) == 6
    assert client.get("/api/showcase/digital-twin/map", params={"layer": "nope"}).status_code == 400


def test_timeseries(client):
    body = client.get("/api/showcase/digital-twin/fields/f-002/timeseries").json()
    assert len(body) == 31
    assert all(0 <= p["ndvi"] <= 1 for p in body)
    assert client.get("/api/showcase/digital-twin/fields/f-404/timeseries").json() == []
    assert client.get("/api/showcase/digital-twin/fields/f-002/timeseries",
                      params={"window": 0}).status_code == 400


def test_supply_chain_actors(client):
    producers = client.get("/api/showcase/supply-chain/actors", params={"types": "producer"}).json()
    assert len(producers) == 8
    mixed = client.get("/api/showcase/supply-chain/actors",
                       params=[("types", "trader"), ("types", "warehouse")]).json()
    assert [a["id"] for a in mixed] == ["T001", "T002", "W001"]
    coffee = client.get("/api/showcase/supply-chain/actors", params={"commodity": "Coffee"}).json()
    assert [a["id"] for a in coffee] == ["P007"]
    assert client.get("/api/showcase/supply-chain/actors", params={"types": "farm"}).status_code == 400


def test_supply_chain_transactions(client):
    body = client.get("/api/showcase/supply-chain/actors/T001/transactions").json()
    assert [t["id"] for t in body] == ["TX001", "TX002", "TX003", "TX004", "TX009"]
    assert client.get("/api/showcase/supply-chain/actors/ZZZ/transactions").json() == []


def test_supply_chain_emissions(client):
    body = client.get("/api/showcase/supply-chain/emissions",
                      params={"calculation": "AVERAGE PER FARMER"}).json()
    assert body["unit"] == "kgCO2eq/Farmer"
    assert len(body["by_source"]) == 10
    assert body["total"] == pytest.approx(7909.75)
    res = client.get("/api/showcase/supply-chain/emissions", params={"calculation": "bogus"})
    assert res.status_code == 400
    assert "Unknown calculation type" in res.json()["message"]


def test_supply_chain_map(client):
    body = client.get("/api/showcase/supply-chain/map", params={"types": "producer"}).json()
    assert len(body["actors"]["features"]) == 8
    assert body["transactions"]["features"] == []
    assert len(body["farms"]["features"]) == 8


def test_flood_catalogues(client):
    layers = client.get("/api/showcase/flood/layers").json()
    assert set(layers) == {"flood", "landslide", "commodity", "intersection"}
    locations = client.get("/api/showcase/flood/locations").json()
    assert locations["pidie"]["district"] == "Pidie"
