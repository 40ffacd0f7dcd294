"""
analytics/fixtures.py
---------------------

Demo fixture store for the showcase dashboards.

Records are frozen dataclasses built once per process by
`build_fixture_repository()` and passed explicitly to the filter,
aggregation and time-series helpers. Nothing here is mutated after
construction; tests build their own small repositories from literals.

Two scenarios are shipped:
- Climate digital twin: six monitored fields (Minnesota) and their alerts.
- Supply-chain emission: cocoa/coffee actors in Central Sulawesi,
  their CoolFarmTool emission breakdowns and commodity transactions.
"""

from __future__ import annotations

from dataclasses import dataclass, field as dc_field
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Mapping, Optional, Tuple, Union

Severity = str  # "low" | "medium" | "high" | "critical"
ActorType = str  # "producer" | "trader" | "warehouse"
Coordinate = Tuple[float, float]  # (lng, lat)

# 10 emission sources (CoolFarmTool), in chart order
EMISSION_SOURCES: Tuple[str, ...] = (
    "Seed production",
    "Residue management",
    "Fertiliser production",
    "Soil / fertiliser",
    "Crop protection",
    "Carbon stock changes",
    "Energy use (field)",
    "Energy use (processing)",
    "Waste water",
    "Off-farm transport",
)

GHG_CATEGORIES: Tuple[str, ...] = ("CO2", "N2O", "CH4")


# --------------------------------------------------------------------------- #
# Record Types
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class Field:
    """A monitored agricultural field (digital twin scenario)."""
    id: str
    name: str
    region_id: str
    commodity: str
    area_ha: float
    polygon: Tuple[Coordinate, ...]
    latest_ndvi: float
    water_stress_idx: float
    flood_risk_idx: float
    risk_score: float  # 0–100


@dataclass(frozen=True)
class Alert:
    """An event raised against a Field."""
    id: str
    field_id: str
    type: str
    severity: Severity
    message: str
    occurred_at: datetime


@dataclass(frozen=True)
class SourceContribution:
    source: str
    value: float


@dataclass(frozen=True)
class GhgContribution:
    category: str
    value: float


@dataclass(frozen=True)
class EmissionBreakdown:
    total_co2eq: float
    sources: Tuple[SourceContribution, ...]
    ghg: Tuple[GhgContribution, ...]


@dataclass(frozen=True)
class Actor:
    """A supply-chain participant (producer, trader or warehouse)."""
    id: str
    display_id: str
    name: str
    type: ActorType
    lat: float
    lng: float
    district: str
    commodity: Optional[str] = None
    details: Mapping[str, Union[str, int]] = dc_field(default_factory=dict)
    emission: Optional[EmissionBreakdown] = None


@dataclass(frozen=True)
class Transaction:
    id: str
    from_id: str
    to_id: str
    commodity: str
    gross_kg: float
    date: date


@dataclass(frozen=True)
class FixtureRepository:
    """
    Immutable container for every showcase fixture.

    Constructed once at process start and injected into the API
    (app.state) and the Streamlit pages (st.cache_resource).
    """
    fields: Tuple[Field, ...] = ()
    alerts: Tuple[Alert, ...] = ()
    actors: Tuple[Actor, ...] = ()
    transactions: Tuple[Transaction, ...] = ()

    def field_by_id(self, field_id: str) -> Optional[Field]:
        return next((f for f in self.fields if f.id == field_id), None)

    def actor_by_id(self, actor_id: str) -> Optional[Actor]:
        return next((a for a in self.actors if a.id == actor_id), None)

    def fields_index(self) -> Dict[str, Field]:
        return {f.id: f for f in self.fields}

    def actors_index(self) -> Dict[str, Actor]:
        return {a.id: a for a in self.actors}


# --------------------------------------------------------------------------- #
# Builders
# --------------------------------------------------------------------------- #

def _ring(*points: Coordinate) -> Tuple[Coordinate, ...]:
    return tuple(points)


def _emission(total: float, sources: Tuple[float, ...], ghg: Tuple[float, float, float]) -> EmissionBreakdown:
    """Pair positional values with EMISSION_SOURCES / GHG_CATEGORIES."""
    if len(sources) != len(EMISSION_SOURCES):
        raise ValueError("Emission breakdown must list every emission source.")
    return EmissionBreakdown(
        total_co2eq=total,
        sources=tuple(SourceContribution(s, v) for s, v in zip(EMISSION_SOURCES, sources)),
        ghg=tuple(GhgContribution(c, v) for c, v in zip(GHG_CATEGORIES, ghg)),
    )


def _trader_emission(total: float, processing: float, waste: float, transport: float,
                     ghg: Tuple[float, float, float]) -> EmissionBreakdown:
    # Traders and warehouses only emit from post-farm sources
    return _emission(total, (0, 0, 0, 0, 0, 0, 0, processing, waste, transport), ghg)


def demo_fields() -> Tuple[Field, ...]:
    return (
        Field("f-001", "North Prairie A", "hennepin", "Corn", 45.2,
              _ring((-93.35, 45.08), (-93.31, 45.08), (-93.31, 45.05), (-93.35, 45.05), (-93.35, 45.08)),
              latest_ndvi=0.74, water_stress_idx=0.32, flood_risk_idx=0.12, risk_score=25),
        Field("f-002", "South Valley B", "dakota", "Soybeans", 38.7,
              _ring((-93.22, 44.92), (-93.18, 44.92), (-93.18, 44.89), (-93.22, 44.89), (-93.22, 44.92)),
              latest_ndvi=0.41, water_stress_idx=0.71, flood_risk_idx=0.24, risk_score=74),
        Field("f-003", "East Ridge C", "hennepin", "Wheat", 52.1,
              _ring((-93.10, 44.99), (-93.06, 44.99), (-93.06, 44.96), (-93.10, 44.96), (-93.10, 44.99)),
              latest_ndvi=0.67, water_stress_idx=0.45, flood_risk_idx=0.41, risk_score=48),
        Field("f-004", "West Creek D", "scott", "Corn", 41.3,
              _ring((-93.42, 45.02), (-93.38, 45.02), (-93.38, 44.99), (-93.42, 44.99), (-93.42, 45.02)),
              latest_ndvi=0.26, water_stress_idx=0.85, flood_risk_idx=0.68, risk_score=91),
        Field("f-005", "Central Basin E", "dakota", "Soybeans", 47.8,
              _ring((-93.24, 44.97), (-93.20, 44.97), (-93.20, 44.94), (-93.24, 44.94), (-93.24, 44.97)),
              latest_ndvi=0.55, water_stress_idx=0.52, flood_risk_idx=0.31, risk_score=55),
        Field("f-006", "Hilltop F", "hennepin", "Wheat", 33.9,
              _ring((-93.28, 45.04), (-93.24, 45.04), (-93.24, 45.01), (-93.28, 45.01), (-93.28, 45.04)),
              latest_ndvi=0.81, water_stress_idx=0.18, flood_risk_idx=0.08, risk_score=12),
    )


def demo_alerts(now: Optional[datetime] = None) -> Tuple[Alert, ...]:
    """Alerts timestamped relative to `now` (process start by default)."""
    now = now or datetime.now(timezone.utc)

    def ago(seconds: int) -> datetime:
        return now - timedelta(seconds=seconds)

    return (
        Alert("a-01", "f-004", "Severe water stress", "critical",
              "Water stress index exceeded 0.85, immediate irrigation recommended for West Creek D.",
              ago(1800)),
        Alert("a-02", "f-002", "High temperature anomaly", "high",
              "Surface temperature 3.2 °C above 30-day mean in South Valley B.",
              ago(5400)),
        Alert("a-03", "f-004", "Flood risk elevated", "high",
              "Flood risk index 0.68, upstream precipitation may affect drainage in next 48 h.",
              ago(9000)),
        Alert("a-04", "f-003", "NDVI decline", "medium",
              "NDVI dropped 12 % over last 7 days in East Ridge C, possible pest or disease.",
              ago(14400)),
        Alert("a-05", "f-005", "Water stress rising", "medium",
              "Water stress index trending up for Central Basin E, monitor soil moisture.",
              ago(21600)),
        Alert("a-06", "f-001", "Low rainfall", "low",
              "Rainfall 40 % below normal for North Prairie A this period.",
              ago(28800)),
    )


def _producer(pid: str, num: str, name: str, lat: float, lng: float, district: str,
              gender: str, age: int, farm_area: str, commodity: str, tx_count: int,
              gross_mt: str, emission: EmissionBreakdown) -> Actor:
    return Actor(
        id=pid, display_id=f"FARM-{num}", name=name, type="producer",
        lat=lat, lng=lng, district=district, commodity=commodity,
        details={
            "Gender": gender, "Age": age, "FarmArea": farm_area, "Commodity": commodity,
            "Transactions": tx_count, "Gross (MT)": gross_mt,
        },
        emission=emission,
    )


def demo_actors() -> Tuple[Actor, ...]:
    producers = (
        _producer("P001", "001", "Ahmad Suleiman", -1.435, 120.780, "Parigi Moutong",
                  "Male", 48, "2.5 ha", "Cocoa", 12, "1.840",
                  _emission(312.45, (18.2, -45.6, 52.3, 89.7, 12.4, -28.9, 35.8, 78.2, 22.1, 78.25),
                            (198.5, 85.3, 28.65))),
        _producer("P002", "002", "Budi Hartono", -1.520, 120.850, "Parigi Moutong",
                  "Male", 55, "3.1 ha", "Cocoa", 8, "2.150",
                  _emission(445.80, (22.1, -38.2, 68.5, 112.3, 18.9, -15.4, 48.2, 92.1, 31.5, 105.8),
                            (285.2, 112.4, 48.2))),
        _producer("P003", "003", "Siti Aminah", -1.380, 120.720, "Donggala",
                  "Female", 42, "1.8 ha", "Cocoa", 15, "1.320",
                  _emission(198.30, (12.5, -52.8, 35.2, 62.1, 8.7, -42.3, 28.4, 55.6, 18.9, 72.0),
                            (125.8, 52.1, 20.4))),
        _producer("P004", "004", "Muhammad Rizki", -1.600, 120.900, "Sigi",
                  "Male", 38, "4.2 ha", "Cocoa", 10, "3.450",
                  _emission(578.20, (28.4, -32.1, 85.6, 145.2, 24.8, -18.6, 58.9, 112.4, 38.2, 135.3),
                            (378.4, 142.8, 57.0))),
        _producer("P005", "005", "Dewi Lestari", -1.420, 121.000, "Poso",
                  "Female", 35, "2.0 ha", "Cocoa", 6, "1.580",
                  _emission(265.40, (15.8, -48.2, 42.1, 78.9, 10.5, -35.7, 32.6, 68.3, 24.8, 76.3),
                            (168.5, 68.2, 28.7))),
        _producer("P006", "006", "Hasan Basri", -1.550, 120.700, "Donggala",
                  "Male", 52, "3.5 ha", "Cocoa", 9, "2.780",
                  _emission(485.60, (25.1, -35.8, 72.4, 128.6, 20.2, -22.4, 52.8, 98.5, 35.6, 110.6),
                            (312.8, 118.5, 54.3))),
        _producer("P007", "007", "Nurul Hidayah", -1.350, 120.950, "Poso",
                  "Female", 29, "1.5 ha", "Coffee", 7, "0.950",
                  _emission(152.80, (9.8, -58.4, 28.5, 48.2, 6.8, -48.6, 22.1, 45.8, 15.2, 83.3),
                            (95.2, 38.8, 18.8))),
        _producer("P008", "008", "Andi Prasetyo", -1.480, 120.650, "Donggala",
                  "Male", 44, "2.8 ha", "Cocoa", 11, "2.220",
                  _emission(395.10, (20.5, -40.2, 58.8, 102.4, 16.2, -25.8, 42.5, 85.2, 28.4, 107.1),
                            (252.4, 98.5, 44.2))),
    )

    traders = (
        Actor(
            id="T001", display_id="TRAD-001", name="CV. Sulawesi Cocoa Trade", type="trader",
            lat=-1.400, lng=120.800, district="Parigi Moutong",
            details={
                "Company": "CV. Sulawesi Cocoa Trade", "Phone": "+62 812-XXXX-XXX",
                "Type": "Collector/Trader", "Address": "Jl. Raya Parigi No. 45",
                "Transactions": 35, "Volume (MT)": "8.120",
            },
            emission=_trader_emission(1245.30, 485.2, 128.4, 631.7, (892.5, 245.8, 107.0)),
        ),
        Actor(
            id="T002", display_id="TRAD-002", name="PT. Agro Palu Sejahtera", type="trader",
            lat=-1.500, lng=120.750, district="Donggala",
            details={
                "Company": "PT. Agro Palu Sejahtera", "Phone": "+62 813-XXXX-XXX",
                "Type": "Collector/Trader", "Address": "Jl. Trans Sulawesi Km. 12",
                "Transactions": 28, "Volume (MT)": "6.850",
            },
            emission=_trader_emission(985.60, 382.1, 95.8, 507.7, (712.8, 185.2, 87.6)),
        ),
    )

    warehouse = Actor(
        id="W001", display_id="WH-001", name="Palu Export Warehouse", type="warehouse",
        lat=-0.900, lng=119.870, district="Palu",
        details={
            "Company": "PT. Cargill Indonesia", "Phone": "+62 451-XXXX-XXX",
            "Type": "Warehouse / Export", "Address": "Pelabuhan Pantoloan, Palu",
            "Transactions": 63, "Volume (MT)": "14.970", "Capacity": "5,000 MT",
        },
        emission=_trader_emission(2845.20, 1285.4, 342.8, 1217.0, (1985.2, 582.4, 277.6)),
    )

    return producers + traders + (warehouse,)


def demo_transactions() -> Tuple[Transaction, ...]:
    # producers -> traders -> warehouse
    rows = [
        ("TX001", "P001", "T001", "Cocoa", 500, "2025-01-15"),
        ("TX002", "P002", "T001", "Cocoa", 620, "2025-01-18"),
        ("TX003", "P004", "T001", "Cocoa", 850, "2025-01-20"),
        ("TX004", "P005", "T001", "Cocoa", 380, "2025-01-22"),
        ("TX005", "P003", "T002", "Cocoa", 440, "2025-01-16"),
        ("TX006", "P006", "T002", "Cocoa", 720, "2025-01-19"),
        ("TX007", "P007", "T002", "Coffee", 280, "2025-01-21"),
        ("TX008", "P008", "T002", "Cocoa", 580, "2025-01-23"),
        ("TX009", "T001", "W001", "Cocoa", 2350, "2025-01-28"),
        ("TX010", "T002", "W001", "Cocoa", 2020, "2025-01-30"),
    ]
    return tuple(
        Transaction(tid, src, dst, commodity, float(kg), date.fromisoformat(day))
        for tid, src, dst, commodity, kg, day in rows
    )


def build_fixture_repository(now: Optional[datetime] = None) -> FixtureRepository:
    """Build the full demo repository. Call once at process start."""
    return FixtureRepository(
        fields=demo_fields(),
        alerts=demo_alerts(now),
        actors=demo_actors(),
        transactions=demo_transactions(),
    )
