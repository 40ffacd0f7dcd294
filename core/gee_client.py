"""
core/gee_client.py
------------------
Flood & disaster layer catalogue backed by a Google Earth Engine tile
service (Sentinel-1 SAR / Sentinel-2 derived products).

- Static catalogues of flood, landslide, commodity and intersection layers.
- District presets (Aceh province).
- XYZ tile URL builders for each layer family.
- Area statistics fetchers (requests, no retry; failures raise
  TransientFetchError).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlencode

import requests

from core.config import GEE_API_BASE, HTTP_TIMEOUT
from core.errors import TransientFetchError
from core.logging_setup import get_logger

log = get_logger(__name__)

COUNTRY = "Indonesia"

# --------------------------------------------------------------------------- #
# Layer Catalogues
# --------------------------------------------------------------------------- #

FLOOD_LAYERS: Dict[str, Dict[str, Any]] = {
    "flood_hazard": {
        "label": "Flood Hazard Index",
        "description": "Composite flood susceptibility (0–1) from Sentinel-1 SAR",
        "legend_colors": ["#FEE5D9", "#FCBBA1", "#FC9272", "#FB6A4A", "#DE2D26", "#A50F15"],
        "legend_labels": ["Very Low", "High"],
    },
    "permanent_water": {
        "label": "Permanent Water",
        "description": "Detected permanent water bodies",
        "legend_colors": ["#c6dbef", "#6baed6", "#2171b5", "#084594"],
        "legend_labels": ["Shallow", "Deep"],
    },
    "flood_nov_dec_2025": {
        "label": "Flood Nov–Dec 2025",
        "description": "Flood detection vs baseline Aug–Oct 2025",
        "legend_colors": ["#bdd7e7", "#6baed6", "#2171b5"],
        "legend_labels": ["Low", "High"],
    },
    "flood_2024": {
        "label": "Flood Extent 2024",
        "description": "Historical flood extent for 2024",
        "legend_colors": ["#bdd7e7", "#6baed6", "#3182bd", "#08519c"],
        "legend_labels": ["Low", "High"],
    },
    "flood_2023": {
        "label": "Flood Extent 2023",
        "description": "Historical flood extent for 2023",
        "legend_colors": ["#bdd7e7", "#6baed6", "#3182bd", "#08519c"],
        "legend_labels": ["Low", "High"],
    },
}

LANDSLIDE_LAYERS: Dict[str, Dict[str, Any]] = {
    "landslide_nov_dec_2025": {
        "label": "Landslide SAR",
        "description": "SAR backscatter-based detection Nov–Dec 2025",
        "color": "#e66101",
    },
    "landslide_ndvi_nov_dec_2025": {
        "label": "Landslide NDVI",
        "description": "NDVI-based detection Nov–Dec 2025",
        "color": "#d8b365",
    },
}

COMMODITY_LAYERS: Dict[str, Dict[str, Any]] = {
    "cocoa": {"label": "Cocoa", "color": "#018571", "description": "Cocoa plantation probability"},
    "coffee": {"label": "Coffee", "color": "#a6611a", "description": "Coffee plantation probability"},
    "rubber": {"label": "Rubber", "color": "#2c7bb6", "description": "Rubber plantation probability"},
    "palm": {"label": "Oil Palm", "color": "#abdda4", "description": "Palm oil plantation probability"},
}

INTERSECTION_TYPES: Dict[str, Dict[str, Any]] = {
    "commodity_flood": {
        "label": "Commodity × Flood",
        "color": "#7b3294",
        "description": "Commodity area exposed to flood hazard",
    },
    "commodity_landslide": {
        "label": "Commodity × Landslide",
        "color": "#c51b7d",
        "description": "Commodity area exposed to landslide",
    },
}


@dataclass(frozen=True)
class LocationPreset:
    label: str
    province: str
    district: str
    center: Tuple[float, float]  # (lng, lat)
    zoom: float


LOCATIONS: Dict[str, LocationPreset] = {
    "aceh_barat": LocationPreset("Aceh Barat", "Aceh", "Aceh Barat", (96.15, 4.45), 10),
    "aceh_selatan": LocationPreset("Aceh Selatan", "Aceh", "Aceh Selatan", (97.30, 3.18), 10),
    "pidie": LocationPreset("Pidie", "Aceh", "Pidie", (96.10, 5.30), 10),
    "aceh_besar": LocationPreset("Aceh Besar", "Aceh", "Aceh Besar", (95.52, 5.38), 10),
    "aceh_utara": LocationPreset("Aceh Utara", "Aceh", "Aceh Utara", (97.09, 5.05), 10),
}


def catalogue() -> Dict[str, Any]:
    """JSON-ready view of every layer family."""
    return {
        "flood": FLOOD_LAYERS,
        "landslide": LANDSLIDE_LAYERS,
        "commodity": COMMODITY_LAYERS,
        "intersection": INTERSECTION_TYPES,
    }


def locations() -> Dict[str, Dict[str, Any]]:
    return {key: asdict(loc) for key, loc in LOCATIONS.items()}


# --------------------------------------------------------------------------- #
# Tile URLs
# --------------------------------------------------------------------------- #

def _check(key: str, table: Dict[str, Any], kind: str) -> None:
    if key not in table:
        raise ValueError(f"Unknown {kind} '{key}'. Options: {', '.join(table)}")


def _query(province: str, district: Optional[str], **extra: str) -> str:
    params = {"country": COUNTRY, "province": province}
    if district:
        params["district"] = district
    params.update(extra)
    return urlencode(params)


def flood_tile_url(dataset: str, province: str, district: Optional[str] = None, base: str = GEE_API_BASE) -> str:
    _check(dataset, FLOOD_LAYERS, "flood dataset")
    return f"{base}/flood/tiles/{dataset}/{{z}}/{{x}}/{{y}}?{_query(province, district)}"


def landslide_tile_url(dataset: str, province: str, district: Optional[str] = None, base: str = GEE_API_BASE) -> str:
    _check(dataset, LANDSLIDE_LAYERS, "landslide dataset")
    return f"{base}/landslide/tiles/{dataset}/{{z}}/{{x}}/{{y}}?{_query(province, district)}"


def commodity_tile_url(commodity: str, province: str, district: Optional[str] = None, base: str = GEE_API_BASE) -> str:
    _check(commodity, COMMODITY_LAYERS, "commodity")
    return f"{base}/commodity/tiles/{commodity}/{{z}}/{{x}}/{{y}}?{_query(province, district)}"


def intersection_tile_url(
    kind: str,
    commodity: str,
    province: str,
    district: Optional[str] = None,
    base: str = GEE_API_BASE,
) -> str:
    _check(kind, INTERSECTION_TYPES, "intersection type")
    _check(commodity, COMMODITY_LAYERS, "commodity")
    return f"{base}/intersection/tiles/{kind}/{commodity}/{{z}}/{{x}}/{{y}}?{_query(province, district)}"


# --------------------------------------------------------------------------- #
# Area Statistics
# --------------------------------------------------------------------------- #

def _fetch_stats(path: str, province: str, district: Optional[str], timeout: float, base: str,
                 **extra: str) -> Dict[str, Any]:
    """
    GET {base}/{path}/stats and return the decoded body.

    Body shape: {dataset|commodity|analysis_type, location, scale_used,
    area_sqm, area_ha}.
    """
    url = f"{base}/{path}/stats?{_query(province, district, **extra)}"
    try:
        resp = requests.get(url, timeout=timeout)
    except requests.exceptions.RequestException as e:
        log.warning("[GEE] %s stats unreachable: %s", path, e.__class__.__name__)
        raise TransientFetchError(url, e.__class__.__name__) from e
    if not resp.ok:
        log.warning("[GEE] %s stats -> HTTP %s", path, resp.status_code)
        raise TransientFetchError(url, f"{path.capitalize()} stats failed: HTTP {resp.status_code}",
                                  resp.status_code)
    return resp.json()


def fetch_flood_stats(dataset: str, province: str, district: Optional[str] = None,
                      timeout: float = HTTP_TIMEOUT, base: str = GEE_API_BASE) -> Dict[str, Any]:
    _check(dataset, FLOOD_LAYERS, "flood dataset")
    return _fetch_stats("flood", province, district, timeout, base, dataset=dataset)


def fetch_landslide_stats(dataset: str, province: str, district: Optional[str] = None,
                          timeout: float = HTTP_TIMEOUT, base: str = GEE_API_BASE) -> Dict[str, Any]:
    _check(dataset, LANDSLIDE_LAYERS, "landslide dataset")
    return _fetch_stats("landslide", province, district, timeout, base, dataset=dataset)


def fetch_commodity_stats(commodity: str, province: str, district: Optional[str] = None,
                          timeout: float = HTTP_TIMEOUT, base: str = GEE_API_BASE) -> Dict[str, Any]:
    _check(commodity, COMMODITY_LAYERS, "commodity")
    return _fetch_stats("commodity", province, district, timeout, base, commodity=commodity)


def fetch_intersection_stats(kind: str, commodity: str, province: str, district: Optional[str] = None,
                             timeout: float = HTTP_TIMEOUT, base: str = GEE_API_BASE) -> Dict[str, Any]:
    _check(kind, INTERSECTION_TYPES, "intersection type")
    _check(commodity, COMMODITY_LAYERS, "commodity")
    return _fetch_stats("intersection", province, district, timeout, base, type=kind, commodity=commodity)
